"""
Tests for Surge Pricing

Coverage:
- Все пять bucket значений
- Границы порогов (строгое сравнение >)
- Насыщение при available_drivers == 0
- Валидация uint32
- Display helpers
"""

from decimal import Decimal

import pytest

from src.core.math import (
    UINT32_MAX,
    demand_ratio,
    format_multiplier,
    multiplier_to_factor,
    surge_multiplier,
    validate_uint32,
)


class TestSurgeMultiplier:
    """Тесты формулы surge multiplier."""

    @pytest.mark.parametrize(
        "request_count, available_drivers, expected",
        [
            (250, 100, 250),
            (160, 100, 200),
            (120, 100, 150),
            (50, 100, 100),
            (180, 100, 200),
        ],
    )
    def test_reference_points(self, request_count, available_drivers, expected):
        assert surge_multiplier(request_count, available_drivers) == expected

    @pytest.mark.parametrize("request_count", [0, 1, 1000, UINT32_MAX])
    def test_zero_drivers_saturates(self, request_count):
        """available_drivers == 0 → 300 при любом спросе."""
        assert surge_multiplier(request_count, 0) == 300

    def test_thresholds_are_strict(self):
        """ratio ровно на пороге попадает в нижний bucket."""
        assert surge_multiplier(200, 100) == 200
        assert surge_multiplier(150, 100) == 150
        assert surge_multiplier(100, 100) == 100

    def test_just_above_thresholds(self):
        assert surge_multiplier(201, 100) == 250
        assert surge_multiplier(151, 100) == 200
        assert surge_multiplier(101, 100) == 150

    def test_ratio_truncates(self):
        """2 * 100 // 3 = 66 → без surge; 301 * 100 // 200 = 150 → 150 (не > 150)."""
        assert demand_ratio(2, 3) == 66
        assert surge_multiplier(2, 3) == 100
        assert demand_ratio(301, 200) == 150
        assert surge_multiplier(301, 200) == 150

    def test_zero_demand(self):
        assert surge_multiplier(0, 10) == 100

    def test_large_values_do_not_overflow(self):
        assert surge_multiplier(UINT32_MAX, 1) == 250
        assert surge_multiplier(1, UINT32_MAX) == 100

    def test_result_is_always_a_bucket(self):
        buckets = {100, 150, 200, 250, 300}
        for count in range(0, 400, 7):
            for drivers in range(0, 200, 13):
                assert surge_multiplier(count, drivers) in buckets

    def test_result_is_int(self):
        assert isinstance(surge_multiplier(160, 100), int)


class TestValidation:
    """Тесты валидации входов."""

    def test_negative_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            surge_multiplier(-1, 10)

    def test_above_uint32_rejected(self):
        with pytest.raises(ValueError, match="uint32"):
            surge_multiplier(10, UINT32_MAX + 1)

    def test_float_rejected(self):
        with pytest.raises(ValueError, match="integer"):
            surge_multiplier(1.5, 10)

    def test_bool_rejected(self):
        with pytest.raises(ValueError, match="integer"):
            validate_uint32(True)

    def test_demand_ratio_zero_drivers(self):
        with pytest.raises(ValueError, match="undefined"):
            demand_ratio(10, 0)


class TestDisplayHelpers:
    """Тесты display helpers."""

    def test_multiplier_to_factor(self):
        assert multiplier_to_factor(200) == Decimal("2.00")
        assert multiplier_to_factor(150) == Decimal("1.50")

    def test_format_multiplier(self):
        assert format_multiplier(200) == "2.00x"
        assert format_multiplier(100) == "1.00x"
