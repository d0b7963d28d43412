"""Read model для presentation layer.

Агрегаты без plaintext: количество pricing записей по состояниям и число
ожидающих decrypt-запросов.
"""

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from src.core.domain.records import PricingState

if TYPE_CHECKING:
    from src.lifecycle.controller import LifecycleController


class PricingSummary(BaseModel):
    """Сводка по pricing записям."""

    total: int = Field(..., ge=0, description="Всего pricing записей")
    verified: int = Field(..., ge=0, description="Записей с verified=True")
    disclosed: int = Field(..., ge=0, description="Записей в состоянии DISCLOSED")
    pending_requests: int = Field(..., ge=0, description="Живых correlation entries")

    model_config = {"frozen": True}


def pricing_summary(controller: "LifecycleController") -> PricingSummary:
    records = controller.pricing_records()
    return PricingSummary(
        total=len(records),
        verified=sum(1 for r in records if r.verified),
        disclosed=sum(1 for r in records if r.state == PricingState.DISCLOSED),
        pending_requests=len(controller.pending_requests()),
    )
