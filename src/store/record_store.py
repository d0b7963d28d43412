"""Record Store — append-only хранилище записей.

Инварианты:
- Id плотные, начинаются с 1, никогда не переиспользуются, отдельный счётчик
  для каждого вида записей
- Demand/Supply никогда не изменяются и не удаляются
- PricingRecord обновляется только через replace_pricing, который запрещает
  сброс verified и регресс состояния
- Lookup несуществующего id — определённая ошибка (RecordNotFound)
"""

from typing import Callable, Dict, Iterator

from src.core.domain.handles import CiphertextHandle
from src.core.domain.records import (
    PRICING_STATE_ORDER,
    DemandRecord,
    PricingRecord,
    SupplyRecord,
)
from src.core.errors import RecordNotFound, StateRegression


class RecordStore:
    """In-memory append-only хранилище.

    Принадлежит исключительно LifecycleController; timestamps назначает
    переданный clock (миллисекунды UTC).
    """

    def __init__(self, clock: Callable[[], int]):
        self._clock = clock
        self._demand: Dict[int, DemandRecord] = {}
        self._supply: Dict[int, SupplyRecord] = {}
        self._pricing: Dict[int, PricingRecord] = {}

    # -------------------------------------------------------------------------
    # Создание
    # -------------------------------------------------------------------------

    def create_demand(self, zone_id: CiphertextHandle, request_count: CiphertextHandle) -> int:
        record_id = len(self._demand) + 1
        self._demand[record_id] = DemandRecord(
            id=record_id,
            zone_id=zone_id,
            request_count=request_count,
            ts_utc_ms=self._clock(),
        )
        return record_id

    def create_supply(self, zone_id: CiphertextHandle, available_drivers: CiphertextHandle) -> int:
        record_id = len(self._supply) + 1
        self._supply[record_id] = SupplyRecord(
            id=record_id,
            zone_id=zone_id,
            available_drivers=available_drivers,
            ts_utc_ms=self._clock(),
        )
        return record_id

    def create_pricing(
        self,
        zone_id: CiphertextHandle,
        multiplier: CiphertextHandle,
        base_price: CiphertextHandle,
        demand_id: int,
        supply_id: int,
    ) -> int:
        record_id = len(self._pricing) + 1
        self._pricing[record_id] = PricingRecord(
            id=record_id,
            zone_id=zone_id,
            multiplier=multiplier,
            base_price=base_price,
            demand_id=demand_id,
            supply_id=supply_id,
            ts_utc_ms=self._clock(),
        )
        return record_id

    # -------------------------------------------------------------------------
    # Обновление pricing
    # -------------------------------------------------------------------------

    def replace_pricing(self, record: PricingRecord) -> None:
        """Замена pricing записи с проверкой монотонности.

        Raises:
            RecordNotFound: если записи с таким id нет
            StateRegression: если verified сбрасывается или состояние понижается
        """
        current = self.get_pricing(record.id)
        if current.verified and not record.verified:
            raise StateRegression(f"Pricing record {record.id}: verified cannot be reset")
        if PRICING_STATE_ORDER[record.state] < PRICING_STATE_ORDER[current.state]:
            raise StateRegression(
                f"Pricing record {record.id}: {current.state.value} → {record.state.value} is a regression"
            )
        self._pricing[record.id] = record

    # -------------------------------------------------------------------------
    # Чтение
    # -------------------------------------------------------------------------

    def get_demand(self, record_id: int) -> DemandRecord:
        try:
            return self._demand[record_id]
        except KeyError:
            raise RecordNotFound("demand", record_id) from None

    def get_supply(self, record_id: int) -> SupplyRecord:
        try:
            return self._supply[record_id]
        except KeyError:
            raise RecordNotFound("supply", record_id) from None

    def get_pricing(self, record_id: int) -> PricingRecord:
        try:
            return self._pricing[record_id]
        except KeyError:
            raise RecordNotFound("pricing", record_id) from None

    def has_demand(self, record_id: int) -> bool:
        return record_id in self._demand

    def has_supply(self, record_id: int) -> bool:
        return record_id in self._supply

    def has_pricing(self, record_id: int) -> bool:
        return record_id in self._pricing

    @property
    def demand_count(self) -> int:
        return len(self._demand)

    @property
    def supply_count(self) -> int:
        return len(self._supply)

    @property
    def pricing_count(self) -> int:
        return len(self._pricing)

    def iter_pricing(self) -> Iterator[PricingRecord]:
        """Pricing записи в порядке создания."""
        return iter(list(self._pricing.values()))
