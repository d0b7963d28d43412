"""Cleartext codec — упорядоченный tuple fixed-width unsigned integers.

Каждое значение — 32-byte big-endian word (ABI layout). Ядро доверяет
декодированным значениям только после проверки proof.
"""

from typing import Final, Sequence

from src.core.errors import MalformedCleartext
from src.core.math.surge_pricing import UINT32_MAX, validate_uint32

WORD_BYTES: Final[int] = 32


def encode_cleartext(values: Sequence[int]) -> bytes:
    """Кодирование uint32 значений в words.

    Raises:
        ValueError: если значение вне uint32
    """
    out = bytearray()
    for value in values:
        validate_uint32(value)
        out += value.to_bytes(WORD_BYTES, "big")
    return bytes(out)


def decode_cleartext(data: bytes, arity: int) -> tuple[int, ...]:
    """Декодирование cleartext в tuple ровно arity uint32 значений.

    Raises:
        MalformedCleartext: длина не равна arity * WORD_BYTES или значение > uint32
    """
    if not isinstance(data, (bytes, bytearray)):
        raise MalformedCleartext(f"cleartext must be bytes, got {type(data).__name__}")
    expected_len = arity * WORD_BYTES
    if len(data) != expected_len:
        raise MalformedCleartext(
            f"cleartext length {len(data)} does not match arity {arity} ({expected_len} bytes)"
        )
    values = tuple(
        int.from_bytes(data[i:i + WORD_BYTES], "big")
        for i in range(0, expected_len, WORD_BYTES)
    )
    for value in values:
        if value > UINT32_MAX:
            raise MalformedCleartext(f"cleartext word {value} does not fit uint32")
    return values
