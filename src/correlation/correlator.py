"""Request Correlator — single-shot correlation map.

Инварианты:
- Ровно одна живая entry на handle; handle никогда не переиспользуется
- resolve() атомарно находит и инвалидирует entry: handle вызывает
  изменение состояния не более одного раза, сколько бы раз oracle
  (злонамеренно или при retry) его ни доставлял
- Повторный resolve → ReplayedHandle, неизвестный handle → UnknownHandle
- Handle другого selector → HandleKindMismatch, entry НЕ поглощается

TTL:
- ttl_ms=None — entries живут бесконечно (брошенный запрос навсегда
  занимает свой handle)
- иначе sweep_expired() удаляет entries старше ttl_ms и помечает их
  поглощёнными
"""

import logging
import threading
from typing import Dict, List, Optional, Set

from src.core.domain.correlation import CallbackSelector, CorrelationEntry
from src.core.domain.handles import RequestHandle
from src.core.errors import (
    DuplicateHandle,
    HandleKindMismatch,
    ReplayedHandle,
    UnknownHandle,
)

logger = logging.getLogger(__name__)


class RequestCorrelator:
    """Отображение request handle → CorrelationEntry."""

    def __init__(self, ttl_ms: Optional[int] = None):
        if ttl_ms is not None and ttl_ms <= 0:
            raise ValueError(f"ttl_ms must be positive, got {ttl_ms}")
        self.ttl_ms = ttl_ms
        self._live: Dict[str, CorrelationEntry] = {}
        self._consumed: Set[str] = set()
        self._lock = threading.Lock()

    def open(
        self,
        handle: RequestHandle,
        kind: CallbackSelector,
        subject_ids: tuple[int, ...],
        now_ms: int,
    ) -> CorrelationEntry:
        """Регистрация новой живой entry.

        Raises:
            DuplicateHandle: если handle жив или когда-либо был использован
        """
        key = handle.value
        with self._lock:
            if key in self._live or key in self._consumed:
                raise DuplicateHandle(key)
            entry = CorrelationEntry(
                request_handle=handle,
                kind=kind,
                subject_ids=subject_ids,
                opened_ts_utc_ms=now_ms,
            )
            self._live[key] = entry
        logger.debug(
            "Correlation opened",
            extra={"request_handle": key, "selector": kind.value},
        )
        return entry

    def resolve(self, handle: RequestHandle, kind: CallbackSelector) -> CorrelationEntry:
        """Атомарный lookup + инвалидация.

        Raises:
            ReplayedHandle: handle уже поглощён
            HandleKindMismatch: handle жив, но другого selector
            UnknownHandle: handle никогда не регистрировался
        """
        key = handle.value
        with self._lock:
            entry = self._live.get(key)
            if entry is None:
                if key in self._consumed:
                    raise ReplayedHandle(key)
                raise UnknownHandle(key)
            if entry.kind != kind:
                raise HandleKindMismatch(key, kind.value, entry.kind.value)
            del self._live[key]
            self._consumed.add(key)
        return entry

    def discard(self, handle: RequestHandle) -> bool:
        """Поглощение entry без возврата (например, после BadProof).

        Returns:
            True если живая entry была поглощена
        """
        key = handle.value
        with self._lock:
            if self._live.pop(key, None) is None:
                return False
            self._consumed.add(key)
        return True

    def sweep_expired(self, now_ms: int) -> List[CorrelationEntry]:
        """Удаление entries старше ttl_ms. Без TTL ничего не делает."""
        if self.ttl_ms is None:
            return []
        cutoff_ms = now_ms - self.ttl_ms
        with self._lock:
            expired = [e for e in self._live.values() if e.opened_ts_utc_ms < cutoff_ms]
            for entry in expired:
                key = entry.request_handle.value
                del self._live[key]
                self._consumed.add(key)
        if expired:
            logger.info(f"Expired {len(expired)} stale correlation entries")
        return expired

    def is_live(self, handle: RequestHandle) -> bool:
        with self._lock:
            return handle.value in self._live

    def pending(self) -> List[CorrelationEntry]:
        """Живые entries в порядке открытия."""
        with self._lock:
            return list(self._live.values())
