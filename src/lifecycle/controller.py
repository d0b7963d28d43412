"""Lifecycle Controller — оркестрация confidential surge pricing.

Поток управления:
- submit_demand / submit_supply создают записи (корреляция не нужна)
- request_* выдают decrypt-запрос oracle и открывают correlation entry
- on_*_resolved — единственные точки, изменяющие состояние в ответ на
  внешний ввод; все следуют последовательности
  authenticate → decode → resolve handle → validate subject → act
  и fail closed (отказ без изменений) при любой неудаче проверки

Состояния PricingRecord: COMPUTED → VERIFIED → (optional) DISCLOSED.
Других переходов нет, отката нет.

Каждая публичная операция — атомарная транзакция под одним lock.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from src.core.domain.correlation import CLEARTEXT_ARITY, CallbackSelector, CorrelationEntry
from src.core.domain.events import Disclosure, DomainEvent, EventType
from src.core.domain.handles import CiphertextHandle, RequestHandle
from src.core.domain.records import DemandRecord, PricingRecord, SupplyRecord
from src.core.errors import BadProof, InvalidIds, NotVerified, ZoneMismatch
from src.core.math.admissibility import is_admissible, recompute_matches
from src.core.math.surge_pricing import surge_multiplier, validate_uint32
from src.correlation.correlator import RequestCorrelator
from src.lifecycle.events import EventSink, InMemoryEventSink
from src.oracle.codec import decode_cleartext
from src.oracle.protocol import DecryptOracle
from src.store.record_store import RecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LifecycleConfig:
    """Конфигурация lifecycle.

    - placeholder_base_price: фиксированная базовая цена новой pricing записи
      (политика, внешняя по отношению к calculator)
    - recompute_on_verify: сохранять pairing inputs и при верификации
      пересчитывать multiplier вместо одного range check
    - correlation_ttl_ms: TTL для брошенных correlation entries
      (None — entries не истекают)
    """
    placeholder_base_price: int = 1000
    recompute_on_verify: bool = False
    correlation_ttl_ms: Optional[int] = None

    def __post_init__(self):
        validate_uint32(self.placeholder_base_price, "placeholder_base_price")


def _utc_now_ms() -> int:
    return int(time.time() * 1000)


class LifecycleController:
    """Владелец record store, correlation map и счётчиков.

    Никакого module-level состояния: независимые экземпляры полностью
    изолированы друг от друга.
    """

    def __init__(
        self,
        oracle: DecryptOracle,
        event_sink: Optional[EventSink] = None,
        config: Optional[LifecycleConfig] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        """
        Args:
            oracle: confidential compute & decrypt oracle
            event_sink: получатель доменных событий (default: InMemoryEventSink)
            config: конфигурация lifecycle
            clock: источник времени, UTC миллисекунды
        """
        self.oracle = oracle
        self.event_sink = event_sink if event_sink is not None else InMemoryEventSink()
        self.config = config or LifecycleConfig()
        self._clock = clock or _utc_now_ms
        self._store = RecordStore(self._clock)
        self._correlator = RequestCorrelator(ttl_ms=self.config.correlation_ttl_ms)
        self._lock = threading.RLock()

        # pricing_id → (request_count, available_drivers), только при recompute_on_verify
        self._pairing_inputs: Dict[int, Tuple[int, int]] = {}

    # =========================================================================
    # SUBMISSIONS
    # =========================================================================

    def submit_demand(self, zone_id: CiphertextHandle, request_count: CiphertextHandle) -> int:
        with self._lock:
            demand_id = self._store.create_demand(zone_id, request_count)
            self._emit(EventType.DEMAND_RECORDED, demand_id)
        logger.info(f"Demand recorded: id={demand_id}", extra={"record_id": demand_id})
        return demand_id

    def submit_supply(self, zone_id: CiphertextHandle, available_drivers: CiphertextHandle) -> int:
        with self._lock:
            supply_id = self._store.create_supply(zone_id, available_drivers)
            self._emit(EventType.SUPPLY_RECORDED, supply_id)
        logger.info(f"Supply recorded: id={supply_id}", extra={"record_id": supply_id})
        return supply_id

    # =========================================================================
    # PAIRING
    # =========================================================================

    def request_pairing(self, demand_id: int, supply_id: int) -> RequestHandle:
        """Decrypt-запрос для пары demand/supply.

        Raises:
            InvalidIds: если любой id вне выделенного диапазона
        """
        with self._lock:
            if not (self._valid_id(demand_id) and self._store.has_demand(demand_id)):
                raise InvalidIds(f"Demand id {demand_id!r} is out of range")
            if not (self._valid_id(supply_id) and self._store.has_supply(supply_id)):
                raise InvalidIds(f"Supply id {supply_id!r} is out of range")

            demand = self._store.get_demand(demand_id)
            supply = self._store.get_supply(supply_id)
            handles = [
                demand.zone_id,
                demand.request_count,
                supply.zone_id,
                supply.available_drivers,
            ]
            return self._open_request(handles, CallbackSelector.PAIRING, (demand_id, supply_id))

    def on_pairing_resolved(self, handle: RequestHandle, cleartext: bytes, proof: bytes) -> PricingRecord:
        """Callback pairing: создание PricingRecord в состоянии COMPUTED.

        Raises:
            BadProof: proof не прошёл проверку (entry поглощается)
            MalformedCleartext: cleartext не 4 uint32 words
            UnknownHandle / ReplayedHandle: handle не живой
            InvalidIds: subject записи отсутствуют
            ZoneMismatch: зоны различаются, pairing отброшен
        """
        with self._lock:
            self._authenticate(handle, cleartext, proof)
            demand_zone, request_count, supply_zone, available_drivers = self._decode(
                cleartext, CallbackSelector.PAIRING
            )
            entry = self._correlator.resolve(handle, CallbackSelector.PAIRING)
            demand_id, supply_id = entry.subject_ids
            demand = self._store.get_demand(demand_id)
            self._store.get_supply(supply_id)

            if demand_zone != supply_zone:
                logger.warning(
                    f"Pairing dropped: demand {demand_id} and supply {supply_id} zones differ",
                    extra={"request_handle": handle.value, "error_code": ZoneMismatch.code},
                )
                raise ZoneMismatch(demand_id, supply_id)

            multiplier = surge_multiplier(request_count, available_drivers)
            pricing_id = self._store.create_pricing(
                zone_id=demand.zone_id,
                multiplier=self.oracle.encrypt_uint32(multiplier),
                base_price=self.oracle.encrypt_uint32(self.config.placeholder_base_price),
                demand_id=demand_id,
                supply_id=supply_id,
            )
            if self.config.recompute_on_verify:
                self._pairing_inputs[pricing_id] = (request_count, available_drivers)

            self._emit(EventType.PRICING_COMPUTED, pricing_id)
            logger.info(
                f"Pricing computed: id={pricing_id} from demand={demand_id} supply={supply_id}",
                extra={"request_handle": handle.value, "record_id": pricing_id},
            )
            return self._store.get_pricing(pricing_id)

    # =========================================================================
    # VERIFICATION
    # =========================================================================

    def request_verification(self, pricing_id: int) -> RequestHandle:
        """Decrypt-запрос для zone, multiplier и base_price.

        Raises:
            InvalidIds: если pricing записи нет
        """
        with self._lock:
            record = self._require_pricing(pricing_id)
            handles = [record.zone_id, record.multiplier, record.base_price]
            return self._open_request(handles, CallbackSelector.VERIFICATION, (pricing_id,))

    def on_verification_resolved(self, handle: RequestHandle, cleartext: bytes, proof: bytes) -> bool:
        """Callback верификации.

        Повторная верификация уже verified записи легальна и просто
        подтверждает её заново. Отказ admissibility молчалив: состояние не
        меняется, событие не эмитится.

        Returns:
            True если multiplier допустим и запись verified
        """
        with self._lock:
            self._authenticate(handle, cleartext, proof)
            _zone, multiplier, base_price = self._decode(cleartext, CallbackSelector.VERIFICATION)
            entry = self._correlator.resolve(handle, CallbackSelector.VERIFICATION)
            pricing_id = entry.subject_ids[0]
            record = self._store.get_pricing(pricing_id)

            admissible = is_admissible(multiplier, base_price)
            if admissible and self.config.recompute_on_verify:
                inputs = self._pairing_inputs.get(pricing_id)
                admissible = inputs is not None and recompute_matches(multiplier, *inputs)

            if not admissible:
                logger.warning(
                    f"Verification rejected for pricing {pricing_id}",
                    extra={"request_handle": handle.value, "record_id": pricing_id},
                )
                return False

            self._store.replace_pricing(record.with_verified())
            self._emit(EventType.PRICING_VERIFIED, pricing_id)
            logger.info(
                f"Pricing verified: id={pricing_id}",
                extra={"request_handle": handle.value, "record_id": pricing_id},
            )
            return True

    # =========================================================================
    # DISCLOSURE
    # =========================================================================

    def request_disclosure(self, pricing_id: int) -> RequestHandle:
        """Decrypt-запрос только для multiplier.

        Raises:
            InvalidIds: если pricing записи нет
            NotVerified: если запись не verified (entry не открывается)
        """
        with self._lock:
            record = self._require_pricing(pricing_id)
            if not record.verified:
                raise NotVerified(pricing_id)
            return self._open_request([record.multiplier], CallbackSelector.DISCLOSURE, (pricing_id,))

    def on_disclosure_resolved(self, handle: RequestHandle, cleartext: bytes, proof: bytes) -> Disclosure:
        """Callback disclosure: plaintext multiplier для наблюдателя.

        Терминальная операция: запись лишь переходит в DISCLOSED.
        """
        with self._lock:
            self._authenticate(handle, cleartext, proof)
            (multiplier,) = self._decode(cleartext, CallbackSelector.DISCLOSURE)
            entry = self._correlator.resolve(handle, CallbackSelector.DISCLOSURE)
            pricing_id = entry.subject_ids[0]
            record = self._store.get_pricing(pricing_id)
            if not record.verified:
                raise NotVerified(pricing_id)

            self._store.replace_pricing(record.with_disclosed())
            logger.info(
                f"Multiplier disclosed for pricing {pricing_id}",
                extra={"request_handle": handle.value, "record_id": pricing_id},
            )
            return Disclosure(pricing_id=pricing_id, multiplier=multiplier)

    # =========================================================================
    # READ ACCESSORS
    # =========================================================================

    def get_demand(self, demand_id: int) -> DemandRecord:
        return self._store.get_demand(demand_id)

    def get_supply(self, supply_id: int) -> SupplyRecord:
        return self._store.get_supply(supply_id)

    def get_pricing(self, pricing_id: int) -> PricingRecord:
        return self._store.get_pricing(pricing_id)

    def pricing_records(self) -> List[PricingRecord]:
        with self._lock:
            return list(self._store.iter_pricing())

    def pending_requests(self) -> List[CorrelationEntry]:
        return self._correlator.pending()

    def is_available(self) -> bool:
        return self.oracle.is_available()

    def sweep_expired_requests(self, now_ms: Optional[int] = None) -> List[CorrelationEntry]:
        """Истечение брошенных decrypt-запросов (только при correlation_ttl_ms)."""
        with self._lock:
            return self._correlator.sweep_expired(self._clock() if now_ms is None else now_ms)

    # =========================================================================
    # INTERNALS
    # =========================================================================

    @staticmethod
    def _valid_id(record_id: int) -> bool:
        return isinstance(record_id, int) and not isinstance(record_id, bool) and record_id >= 1

    def _require_pricing(self, pricing_id: int) -> PricingRecord:
        if not (self._valid_id(pricing_id) and self._store.has_pricing(pricing_id)):
            raise InvalidIds(f"Pricing id {pricing_id!r} is out of range")
        return self._store.get_pricing(pricing_id)

    def _open_request(
        self,
        handles: List[CiphertextHandle],
        selector: CallbackSelector,
        subject_ids: Tuple[int, ...],
    ) -> RequestHandle:
        request = self.oracle.request_decryption(handles, selector)
        self._correlator.open(request, selector, subject_ids, self._clock())
        logger.info(
            f"Decrypt request opened for {selector.value} subject={subject_ids}",
            extra={"request_handle": request.value, "selector": selector.value},
        )
        return request

    def _authenticate(self, handle: RequestHandle, cleartext: bytes, proof: bytes) -> None:
        if self.oracle.verify_proof(handle, cleartext, proof):
            return
        # entry поглощается, чтобы исключить подбор proof повторными попытками
        self._correlator.discard(handle)
        logger.warning(
            "Authenticity proof rejected",
            extra={"request_handle": handle.value, "error_code": BadProof.code},
        )
        raise BadProof(handle.value)

    @staticmethod
    def _decode(cleartext: bytes, selector: CallbackSelector) -> Tuple[int, ...]:
        return decode_cleartext(cleartext, CLEARTEXT_ARITY[selector])

    def _emit(self, event_type: EventType, record_id: int) -> None:
        self.event_sink.emit(
            DomainEvent(event_type=event_type, record_id=record_id, ts_utc_ms=self._clock())
        )
