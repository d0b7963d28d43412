"""Lifecycle — управление записями Computed → Verified → Disclosed.

- request-correlation state machine
- event sink
- read model
"""

from .controller import LifecycleConfig, LifecycleController
from .events import EventSink, InMemoryEventSink
from .queries import PricingSummary, pricing_summary

__all__ = [
    "LifecycleController",
    "LifecycleConfig",
    "EventSink",
    "InMemoryEventSink",
    "PricingSummary",
    "pricing_summary",
]
