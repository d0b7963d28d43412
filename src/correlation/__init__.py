"""Request Correlator — одноразовая корреляция decrypt-запросов с записями."""

from .correlator import RequestCorrelator

__all__ = [
    "RequestCorrelator",
]
