"""Тесты admissibility verifier."""

import pytest

from src.core.math import MULTIPLIER_MAX, MULTIPLIER_MIN, is_admissible, recompute_matches


class TestIsAdmissible:
    """Range check multiplier и base price."""

    @pytest.mark.parametrize("multiplier", [100, 150, 200, 250, 300])
    def test_legal_band(self, multiplier):
        assert is_admissible(multiplier, 1000)

    def test_band_edges(self):
        assert MULTIPLIER_MIN == 100
        assert MULTIPLIER_MAX == 300
        assert is_admissible(100, 1)
        assert is_admissible(300, 1)

    @pytest.mark.parametrize("multiplier", [0, 99, 301, 1000])
    def test_outside_band(self, multiplier):
        assert not is_admissible(multiplier, 1000)

    def test_zero_base_price(self):
        assert not is_admissible(200, 0)

    def test_in_range_but_not_a_bucket_passes(self):
        """Range check не требует значения из bucket."""
        assert is_admissible(175, 1000)


class TestRecomputeMatches:
    """Усиленная проверка пересчётом."""

    def test_matches(self):
        assert recompute_matches(200, 180, 100)

    def test_in_range_but_wrong(self):
        assert not recompute_matches(250, 180, 100)
