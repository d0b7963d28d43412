"""Протокол decrypt oracle.

Oracle принимает batch opaque ciphertext handles и callback selector,
возвращает request handle и позже (out-of-band) доставляет
(request_handle, cleartext, proof) в указанный selector.
"""

from typing import Protocol, Sequence

from pydantic import BaseModel, Field

from src.core.domain.correlation import CallbackSelector
from src.core.domain.handles import CiphertextHandle, RequestHandle


class OracleDelivery(BaseModel):
    """Сообщение oracle для callback selector."""

    selector: CallbackSelector = Field(..., description="Целевой callback")
    request_handle: RequestHandle = Field(..., description="Handle decrypt-запроса")
    cleartext: bytes = Field(..., description="Tuple uint words (big-endian)")
    proof: bytes = Field(..., description="Authenticity proof")

    model_config = {"frozen": True}


class DecryptOracle(Protocol):
    """Контракт, который ядро требует от confidential compute & decrypt oracle."""

    def request_decryption(
        self, handles: Sequence[CiphertextHandle], selector: CallbackSelector
    ) -> RequestHandle:
        """Запрос расшифровки batch handles; ответ приходит асинхронно."""
        ...

    def verify_proof(self, request_handle: RequestHandle, cleartext: bytes, proof: bytes) -> bool:
        """Проверка, что proof аутентифицирует cleartext для request_handle."""
        ...

    def encrypt_uint32(self, value: int) -> CiphertextHandle:
        """Тривиальное шифрование публичного uint32 (multiplier, base price)."""
        ...

    def is_available(self) -> bool:
        """Доступность oracle."""
        ...
