"""LocalDecryptOracle — in-process reference oracle.

Не реализует FHE: plaintext хранится в реестре под случайным token, а
proof — HMAC-SHA256 над (request_handle, cleartext) секретным ключом
oracle. Достаточно для тестов и локальной отработки протокола: ядро видит
только opaque handles и проверяет proof через verify_proof.
"""

import hashlib
import hmac
import logging
import os
import uuid
from typing import Dict, List, Optional, Sequence, Tuple

from src.core.domain.correlation import CallbackSelector
from src.core.domain.handles import CiphertextHandle, RequestHandle
from src.core.math.surge_pricing import validate_uint32
from src.oracle.codec import encode_cleartext
from src.oracle.protocol import OracleDelivery

logger = logging.getLogger(__name__)


class LocalDecryptOracle:
    """Reference oracle с HMAC proofs."""

    def __init__(self, secret_key: Optional[bytes] = None, available: bool = True):
        self._key = secret_key or os.urandom(32)
        self._plaintexts: Dict[str, int] = {}
        self._pending: Dict[str, Tuple[CallbackSelector, Tuple[CiphertextHandle, ...]]] = {}
        self.available = available

    # -------------------------------------------------------------------------
    # DecryptOracle protocol
    # -------------------------------------------------------------------------

    def encrypt_uint32(self, value: int) -> CiphertextHandle:
        validate_uint32(value)
        token = f"ct-{uuid.uuid4().hex}"
        self._plaintexts[token] = value
        return CiphertextHandle(token=token)

    def request_decryption(
        self, handles: Sequence[CiphertextHandle], selector: CallbackSelector
    ) -> RequestHandle:
        for handle in handles:
            if handle.token not in self._plaintexts:
                raise KeyError(f"Unknown ciphertext handle {handle.token!r}")
        request = RequestHandle(value=f"req-{uuid.uuid4().hex}")
        self._pending[request.value] = (selector, tuple(handles))
        logger.debug(
            f"Decrypt request queued: {len(handles)} handles",
            extra={"request_handle": request.value, "selector": selector.value},
        )
        return request

    def verify_proof(self, request_handle: RequestHandle, cleartext: bytes, proof: bytes) -> bool:
        expected = self.sign(request_handle, cleartext)
        return hmac.compare_digest(expected, proof)

    def is_available(self) -> bool:
        return self.available

    # -------------------------------------------------------------------------
    # Доставка
    # -------------------------------------------------------------------------

    def sign(self, request_handle: RequestHandle, cleartext: bytes) -> bytes:
        """HMAC-SHA256 proof для (request_handle, cleartext)."""
        message = request_handle.value.encode("utf-8") + b"|" + cleartext
        return hmac.new(self._key, message, hashlib.sha256).digest()

    def fulfill(self, request_handle: RequestHandle) -> OracleDelivery:
        """Расшифровка pending запроса и подготовка подписанного callback.

        Raises:
            KeyError: если запроса нет среди pending
        """
        selector, handles = self._pending.pop(request_handle.value)
        cleartext = encode_cleartext([self._plaintexts[h.token] for h in handles])
        return OracleDelivery(
            selector=selector,
            request_handle=request_handle,
            cleartext=cleartext,
            proof=self.sign(request_handle, cleartext),
        )

    def pending_requests(self) -> List[RequestHandle]:
        return [RequestHandle(value=key) for key in self._pending]
