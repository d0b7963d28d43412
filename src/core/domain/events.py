"""
Domain Events — внешне наблюдаемые сигналы прогресса

Четыре события — единственные сигналы прогресса для presentation layer.
Негативных событий нет: отклонённая верификация ничего не эмитит.
"""

from enum import Enum

from pydantic import BaseModel, Field


class EventType(str, Enum):
    """Тип доменного события"""

    DEMAND_RECORDED = "DemandRecorded"
    SUPPLY_RECORDED = "SupplyRecorded"
    PRICING_COMPUTED = "PricingComputed"
    PRICING_VERIFIED = "PricingVerified"


class DomainEvent(BaseModel):
    """
    Доменное событие.

    record_id ссылается на запись соответствующего вида
    (demand для DemandRecorded, pricing для PricingComputed и т.д.).
    """

    event_type: EventType = Field(..., description="Тип события")
    record_id: int = Field(..., ge=1, description="Id записи")
    ts_utc_ms: int = Field(..., ge=0, description="Timestamp эмиссии (UTC, миллисекунды)")

    model_config = {"frozen": True}


class Disclosure(BaseModel):
    """Результат disclosure: plaintext multiplier верифицированной записи."""

    pricing_id: int = Field(..., ge=1)
    multiplier: int = Field(..., ge=0, description="Multiplier (×100, 100 = 1.00x)")

    model_config = {"frozen": True}
