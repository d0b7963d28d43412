"""
Admissibility — проверка допустимости вычисленного multiplier

Базовая проверка — range check: multiplier лежит в легальной полосе
[100, 300] и базовая цена задана. Verifier не видит исходный plaintext
спроса/предложения, поэтому не пересчитывает multiplier.

Усиленная проверка (recompute_matches) доступна, только если контроллер
сохранил pairing inputs (LifecycleConfig.recompute_on_verify).
"""

from typing import Final

from src.core.math.surge_pricing import (
    MULTIPLIER_NO_SURGE,
    MULTIPLIER_SATURATED,
    surge_multiplier,
)

MULTIPLIER_MIN: Final[int] = MULTIPLIER_NO_SURGE
MULTIPLIER_MAX: Final[int] = MULTIPLIER_SATURATED


def is_admissible(multiplier: int, base_price: int) -> bool:
    """
    Range check multiplier и базовой цены.

    Returns:
        True если MULTIPLIER_MIN <= multiplier <= MULTIPLIER_MAX и base_price > 0
    """
    return MULTIPLIER_MIN <= multiplier <= MULTIPLIER_MAX and base_price > 0


def recompute_matches(multiplier: int, request_count: int, available_drivers: int) -> bool:
    """Пересчёт multiplier из исходных inputs и сравнение с раскрытым значением."""
    return surge_multiplier(request_count, available_drivers) == multiplier
