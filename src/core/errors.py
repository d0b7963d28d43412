"""
Error Hierarchy — типизированные исключения lifecycle

Инварианты:
- Каждая ошибка имеет стабильный code (str) для логов и presentation layer
- Все отказы локальны для одной операции и не изменяют состояние
  (исключение: BadProof поглощает correlation entry)
- UnknownHandle — общий предок всех промахов корреляции, поэтому
  проигравший в гонке за handle всегда наблюдает UnknownHandle
"""

from typing import Optional


class SurgePricingError(Exception):
    """Базовое исключение для всех отказов lifecycle."""

    code: str = "SURGE_PRICING_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# =============================================================================
# RECORD ERRORS
# =============================================================================


class InvalidIds(SurgePricingError):
    """Id записи вне выделенного диапазона."""

    code = "INVALID_IDS"


class RecordNotFound(InvalidIds):
    """Lookup несуществующего id в RecordStore."""

    code = "RECORD_NOT_FOUND"

    def __init__(self, kind: str, record_id: int):
        super().__init__(f"{kind} record {record_id} not found")
        self.kind = kind
        self.record_id = record_id


class StateRegression(SurgePricingError):
    """Попытка понизить состояние или сбросить verified."""

    code = "STATE_REGRESSION"


# =============================================================================
# CORRELATION ERRORS
# =============================================================================


class DuplicateHandle(SurgePricingError):
    """Request handle уже зарегистрирован (или был когда-либо использован)."""

    code = "DUPLICATE_HANDLE"

    def __init__(self, handle: str):
        super().__init__(f"Request handle {handle!r} is already registered")
        self.handle = handle


class UnknownHandle(SurgePricingError):
    """Correlation miss: handle не зарегистрирован (forgery)."""

    code = "UNKNOWN_HANDLE"

    def __init__(self, handle: str, message: Optional[str] = None):
        super().__init__(message or f"Request handle {handle!r} is unknown")
        self.handle = handle


class ReplayedHandle(UnknownHandle):
    """Handle уже был разрешён ранее (replay или повторная доставка)."""

    code = "REPLAYED_HANDLE"

    def __init__(self, handle: str):
        super().__init__(handle, f"Request handle {handle!r} was already consumed")


class HandleKindMismatch(UnknownHandle):
    """Handle жив, но принадлежит другому callback selector."""

    code = "HANDLE_KIND_MISMATCH"

    def __init__(self, handle: str, expected: str, actual: str):
        super().__init__(
            handle,
            f"Request handle {handle!r} belongs to {actual}, not {expected}",
        )
        self.expected = expected
        self.actual = actual


# =============================================================================
# CALLBACK ERRORS
# =============================================================================


class BadProof(SurgePricingError):
    """Authenticity proof не подтверждает cleartext для handle."""

    code = "BAD_PROOF"

    def __init__(self, handle: str):
        super().__init__(f"Authenticity proof rejected for request {handle!r}")
        self.handle = handle


class MalformedCleartext(SurgePricingError):
    """Cleartext не декодируется в ожидаемый tuple uint32."""

    code = "MALFORMED_CLEARTEXT"


# =============================================================================
# BUSINESS RULE ERRORS
# =============================================================================


class ZoneMismatch(SurgePricingError):
    """Demand и supply относятся к разным зонам; pairing отброшен."""

    code = "ZONE_MISMATCH"

    def __init__(self, demand_id: int, supply_id: int):
        super().__init__(
            f"Demand {demand_id} and supply {supply_id} refer to different zones"
        )
        self.demand_id = demand_id
        self.supply_id = supply_id


class NotVerified(SurgePricingError):
    """Disclosure запрошен до верификации."""

    code = "NOT_VERIFIED"

    def __init__(self, pricing_id: int):
        super().__init__(f"Pricing record {pricing_id} is not verified")
        self.pricing_id = pricing_id
