"""
Handles — Opaque ciphertext и request handles

Ciphertext handle — непрозрачная ссылка на зашифрованное значение.
Ядро никогда не ветвится по содержимому handle: только callback от oracle
производит plaintext целые числа.

Request handle — идентификатор decrypt-запроса, выданный внешним oracle.
"""

from pydantic import BaseModel, Field


class CiphertextHandle(BaseModel):
    """
    Непрозрачный ciphertext handle.

    Immutable модель (frozen=True). Token — opaque строка, её формат
    определяется oracle и для ядра не имеет смысла.
    """

    token: str = Field(..., min_length=1, description="Opaque ciphertext token")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return self.token


class RequestHandle(BaseModel):
    """
    Идентификатор decrypt-запроса.

    Выдаётся oracle при request_decryption, никогда не переиспользуется.
    """

    value: str = Field(..., min_length=1, description="Oracle request id")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return self.value
