"""Infrastructure — logging setup."""

from .observability import JSONFormatter, setup_logging

__all__ = [
    "JSONFormatter",
    "setup_logging",
]
