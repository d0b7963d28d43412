"""
Contract Validation Module

Валидация JSON контрактов, публикуемых для presentation layer.
"""

from .validators import (
    ContractValidator,
    DemandRecordValidator,
    DomainEventValidator,
    PricingRecordValidator,
    SchemaLoader,
    SupplyRecordValidator,
    validate_demand_record,
    validate_domain_event,
    validate_pricing_record,
    validate_supply_record,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "DemandRecordValidator",
    "SupplyRecordValidator",
    "PricingRecordValidator",
    "DomainEventValidator",
    # Functions
    "validate_demand_record",
    "validate_supply_record",
    "validate_pricing_record",
    "validate_domain_event",
]
