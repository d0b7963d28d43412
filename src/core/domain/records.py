"""
Records — Demand, Supply и Pricing записи

Immutable Pydantic модели. Demand/Supply создаются один раз и никогда не
изменяются (append-only audit trail). PricingRecord обновляется только
заменой экземпляра через RecordStore; verified — монотонный флаг.
"""

from enum import Enum

from pydantic import BaseModel, Field

from .handles import CiphertextHandle


# =============================================================================
# ENUMS
# =============================================================================


class PricingState(str, Enum):
    """
    Состояние PricingRecord.

    COMPUTED → VERIFIED → (optional) DISCLOSED. Откатов нет.
    """

    COMPUTED = "COMPUTED"
    VERIFIED = "VERIFIED"
    DISCLOSED = "DISCLOSED"


# Порядок состояний для проверки отсутствия регресса
PRICING_STATE_ORDER = {
    PricingState.COMPUTED: 0,
    PricingState.VERIFIED: 1,
    PricingState.DISCLOSED: 2,
}


# =============================================================================
# RECORDS
# =============================================================================


class DemandRecord(BaseModel):
    """Агрегированный спрос по зоне (зашифрованный)."""

    id: int = Field(..., ge=1, description="Монотонный идентификатор записи спроса")
    zone_id: CiphertextHandle = Field(..., description="Зашифрованная зона")
    request_count: CiphertextHandle = Field(
        ..., description="Зашифрованное количество запросов"
    )
    ts_utc_ms: int = Field(..., ge=0, description="Timestamp создания (UTC, миллисекунды)")

    model_config = {"frozen": True}


class SupplyRecord(BaseModel):
    """Агрегированное предложение по зоне (зашифрованное)."""

    id: int = Field(..., ge=1, description="Монотонный идентификатор записи предложения")
    zone_id: CiphertextHandle = Field(..., description="Зашифрованная зона")
    available_drivers: CiphertextHandle = Field(
        ..., description="Зашифрованное количество свободных водителей"
    )
    ts_utc_ms: int = Field(..., ge=0, description="Timestamp создания (UTC, миллисекунды)")

    model_config = {"frozen": True}


class PricingRecord(BaseModel):
    """
    Вычисленный surge multiplier для пары Demand/Supply.

    Создаётся только успешным pairing callback. Поле verified
    переключается false → true ровно один раз и необратимо.
    """

    id: int = Field(..., ge=1, description="Монотонный идентификатор pricing записи")
    zone_id: CiphertextHandle = Field(..., description="Зашифрованная зона")
    multiplier: CiphertextHandle = Field(
        ..., description="Зашифрованный multiplier (×100)"
    )
    base_price: CiphertextHandle = Field(..., description="Зашифрованная базовая цена")
    demand_id: int = Field(..., ge=1, description="Исходная запись спроса")
    supply_id: int = Field(..., ge=1, description="Исходная запись предложения")
    verified: bool = Field(default=False, description="Multiplier прошёл admissibility")
    state: PricingState = Field(
        default=PricingState.COMPUTED, description="Состояние lifecycle"
    )
    ts_utc_ms: int = Field(..., ge=0, description="Timestamp создания (UTC, миллисекунды)")

    model_config = {"frozen": True}

    def with_verified(self) -> "PricingRecord":
        """Копия записи с verified=True (DISCLOSED не понижается)."""
        state = self.state
        if state == PricingState.COMPUTED:
            state = PricingState.VERIFIED
        return self.model_copy(update={"verified": True, "state": state})

    def with_disclosed(self) -> "PricingRecord":
        """Копия записи в состоянии DISCLOSED."""
        return self.model_copy(update={"state": PricingState.DISCLOSED})
