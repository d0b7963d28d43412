"""
Surge Pricing — детерминированный расчёт multiplier

Чистая функция (request_count, available_drivers) → multiplier (×100).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Тотальная функция: любая пара неотрицательных uint32 даёт ровно одно
   из пяти значений {100, 150, 200, 250, 300}
2. Никакого floating point: все сравнения на масштабированном целом ratio,
   результат воспроизводим бит-в-бит независимыми verifiers
3. Деление на ноль невозможно (available_drivers == 0 → максимальный surge)
"""

from decimal import Decimal
from typing import Final

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Масштаб multiplier: 100 = 1.00x
MULTIPLIER_SCALE: Final[int] = 100

# Без surge
MULTIPLIER_NO_SURGE: Final[int] = 100

# Насыщение (нет свободных водителей)
MULTIPLIER_SATURATED: Final[int] = 300

# Верхняя граница uint32
UINT32_MAX: Final[int] = 2**32 - 1

# Пороги ratio (×100) → multiplier, проверяются сверху вниз
SURGE_BUCKETS: Final[tuple[tuple[int, int], ...]] = (
    (200, 250),
    (150, 200),
    (100, 150),
)


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_uint32(value: int, name: str = "value") -> None:
    """
    Проверка, что значение — целое в диапазоне [0, UINT32_MAX].

    Raises:
        ValueError: Если значение не int, bool, отрицательное или > UINT32_MAX
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    if value > UINT32_MAX:
        raise ValueError(f"{name} must fit uint32, got {value}")


# =============================================================================
# SURGE MULTIPLIER
# =============================================================================


def demand_ratio(request_count: int, available_drivers: int) -> int:
    """
    Масштабированное отношение спроса к предложению.

    ratio = request_count * 100 // available_drivers (усечение)

    Raises:
        ValueError: Если available_drivers == 0 (ratio не определён)
    """
    validate_uint32(request_count, "request_count")
    validate_uint32(available_drivers, "available_drivers")
    if available_drivers == 0:
        raise ValueError("demand ratio is undefined for zero available_drivers")
    return request_count * MULTIPLIER_SCALE // available_drivers


def surge_multiplier(request_count: int, available_drivers: int) -> int:
    """
    Surge multiplier (×100) по фиксированной публичной формуле.

    Формула:
    - available_drivers == 0 → 300
    - ratio > 200 → 250
    - ratio > 150 → 200
    - ratio > 100 → 150
    - иначе → 100

    Args:
        request_count: Количество запросов в зоне (uint32)
        available_drivers: Количество свободных водителей (uint32)

    Returns:
        Multiplier в масштабе ×100

    Raises:
        ValueError: Если аргументы вне uint32

    Examples:
        >>> surge_multiplier(250, 100)
        250
        >>> surge_multiplier(160, 100)
        200
        >>> surge_multiplier(7, 0)
        300
    """
    validate_uint32(request_count, "request_count")
    validate_uint32(available_drivers, "available_drivers")

    if available_drivers == 0:
        return MULTIPLIER_SATURATED

    ratio = demand_ratio(request_count, available_drivers)
    for threshold, multiplier in SURGE_BUCKETS:
        if ratio > threshold:
            return multiplier
    return MULTIPLIER_NO_SURGE


# =============================================================================
# DISPLAY HELPERS
# =============================================================================


def multiplier_to_factor(multiplier: int) -> Decimal:
    """
    Multiplier ×100 → точный десятичный множитель.

    Examples:
        >>> multiplier_to_factor(200)
        Decimal('2.00')
    """
    return (Decimal(multiplier) / MULTIPLIER_SCALE).quantize(Decimal("0.01"))


def format_multiplier(multiplier: int) -> str:
    """Строковое представление для presentation layer, например '2.00x'."""
    return f"{multiplier_to_factor(multiplier)}x"
