"""CallbackRouter — доставка сообщений oracle в entry points контроллера.

Явная диспетчеризация по selector вместо неявного reentrancy: oracle
никогда не вызывает контроллер напрямую.
"""

from typing import TYPE_CHECKING, Union

from src.core.domain.correlation import CallbackSelector
from src.core.domain.events import Disclosure
from src.core.domain.records import PricingRecord
from src.oracle.protocol import OracleDelivery

if TYPE_CHECKING:
    from src.lifecycle.controller import LifecycleController


class CallbackRouter:
    """Маршрутизация OracleDelivery по callback selector."""

    def __init__(self, controller: "LifecycleController"):
        self.controller = controller

    def deliver(self, delivery: OracleDelivery) -> Union[PricingRecord, bool, Disclosure]:
        if delivery.selector == CallbackSelector.PAIRING:
            return self.controller.on_pairing_resolved(
                delivery.request_handle, delivery.cleartext, delivery.proof
            )
        if delivery.selector == CallbackSelector.VERIFICATION:
            return self.controller.on_verification_resolved(
                delivery.request_handle, delivery.cleartext, delivery.proof
            )
        return self.controller.on_disclosure_resolved(
            delivery.request_handle, delivery.cleartext, delivery.proof
        )
