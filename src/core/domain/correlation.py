"""
CorrelationEntry — связь decrypt-запроса с доменными записями

Одноразовое отображение request handle → записи, которых касается запрос.
Используется для безопасного продолжения обработки, когда plaintext
приходит асинхронно.
"""

from enum import Enum

from pydantic import BaseModel, Field

from .handles import RequestHandle


class CallbackSelector(str, Enum):
    """
    Callback selector, передаваемый oracle вместе с batch handles.

    Одновременно определяет вид subject в correlation entry.
    """

    PAIRING = "PAIRING"
    VERIFICATION = "VERIFICATION"
    DISCLOSURE = "DISCLOSURE"


# Ожидаемая арность cleartext для каждого selector
CLEARTEXT_ARITY = {
    CallbackSelector.PAIRING: 4,  # demand.zone, demand.count, supply.zone, supply.drivers
    CallbackSelector.VERIFICATION: 3,  # zone, multiplier, base_price
    CallbackSelector.DISCLOSURE: 1,  # multiplier
}


class CorrelationEntry(BaseModel):
    """
    Живая correlation entry.

    PAIRING: subject_ids = (demand_id, supply_id)
    VERIFICATION / DISCLOSURE: subject_ids = (pricing_id,)
    """

    request_handle: RequestHandle = Field(..., description="Handle decrypt-запроса")
    kind: CallbackSelector = Field(..., description="Вид subject")
    subject_ids: tuple[int, ...] = Field(..., min_length=1, description="Id записей")
    opened_ts_utc_ms: int = Field(..., ge=0, description="Timestamp открытия")

    model_config = {"frozen": True}
