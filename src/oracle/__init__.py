"""Decrypt oracle — контракт внешнего confidential compute & decrypt collaborator.

- DecryptOracle: протокол, который ядро требует от oracle
- cleartext codec: fixed-width uint words
- LocalDecryptOracle: in-process reference oracle (тесты, локальный запуск)
- CallbackRouter: доставка callback в entry points контроллера
"""

from .codec import WORD_BYTES, decode_cleartext, encode_cleartext
from .local import LocalDecryptOracle
from .protocol import DecryptOracle, OracleDelivery
from .router import CallbackRouter

__all__ = [
    "WORD_BYTES",
    "encode_cleartext",
    "decode_cleartext",
    "DecryptOracle",
    "OracleDelivery",
    "LocalDecryptOracle",
    "CallbackRouter",
]
