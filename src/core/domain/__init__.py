"""
Domain models and value objects.

Contains opaque handles, demand/supply/pricing records, correlation entries
and domain events.
"""

from src.core.domain.correlation import (
    CLEARTEXT_ARITY,
    CallbackSelector,
    CorrelationEntry,
)
from src.core.domain.events import Disclosure, DomainEvent, EventType
from src.core.domain.handles import CiphertextHandle, RequestHandle
from src.core.domain.records import (
    PRICING_STATE_ORDER,
    DemandRecord,
    PricingRecord,
    PricingState,
    SupplyRecord,
)

__all__ = [
    # Handles
    "CiphertextHandle",
    "RequestHandle",
    # Records
    "DemandRecord",
    "SupplyRecord",
    "PricingRecord",
    "PricingState",
    "PRICING_STATE_ORDER",
    # Correlation
    "CallbackSelector",
    "CorrelationEntry",
    "CLEARTEXT_ARITY",
    # Events
    "DomainEvent",
    "EventType",
    "Disclosure",
]
