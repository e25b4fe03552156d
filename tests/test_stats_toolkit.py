"""
Tests for the statistics toolkit.

Covers: mean/deviation empty policy, Pearson edge cases, half-split trend,
volatility, consistency, significance and confidence tiers.
"""

import math

import pytest

from analytics.stats_toolkit import (
    confidence_for,
    consistency_score,
    correlation_significance,
    linear_trend,
    mean,
    pearson_correlation,
    round_half_up,
    standard_deviation,
    volatility,
)


# ─── mean / standard_deviation ────────────────────────────────


class TestCentralTendency:

    def test_mean_empty_is_zero(self):
        assert mean([]) == 0.0

    def test_mean(self):
        assert mean([1, 2, 3, 4]) == 2.5

    def test_population_std(self):
        # Classic example: population sd is exactly 2
        assert standard_deviation([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.0)

    def test_std_empty_and_single(self):
        assert standard_deviation([]) == 0.0
        assert standard_deviation([7]) == 0.0


# ─── pearson_correlation ──────────────────────────────────────


class TestPearson:

    def test_perfect_positive(self):
        assert pearson_correlation([1, 2, 3], [2, 4, 6]) == pytest.approx(1.0)

    def test_perfect_negative(self):
        assert pearson_correlation([1, 2, 3], [6, 4, 2]) == pytest.approx(-1.0)

    def test_constant_series_is_zero(self):
        assert pearson_correlation([3, 3, 3], [1, 2, 3]) == 0.0

    def test_too_short_is_zero(self):
        assert pearson_correlation([], []) == 0.0
        assert pearson_correlation([1], [5]) == 0.0

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError):
            pearson_correlation([1, 2, 3], [1, 2])

    def test_symmetric(self):
        xs, ys = [1, 5, 2, 8, 3], [2, 9, 1, 7, 4]
        assert pearson_correlation(xs, ys) == pytest.approx(pearson_correlation(ys, xs))

    def test_self_correlation_is_one(self):
        xs = [72, 65, 80, 91, 58]
        assert pearson_correlation(xs, xs) == pytest.approx(1.0)

    def test_stays_in_range(self):
        r = pearson_correlation([1, 5, 2, 8, 3], [2, 9, 1, 7, 4])
        assert -1.0 <= r <= 1.0


class TestSignificance:

    def test_correlated_series(self):
        r, p = correlation_significance([1, 2, 3, 4, 5, 6], [2, 4, 5, 4, 6, 7])
        assert r > 0.8
        assert 0.0 < p < 0.05

    def test_short_series_not_meaningful(self):
        assert correlation_significance([1, 2], [3, 4]) == (0.0, 1.0)

    def test_constant_series_not_meaningful(self):
        assert correlation_significance([4, 4, 4, 4], [1, 2, 3, 4]) == (0.0, 1.0)


# ─── trend / volatility / consistency ─────────────────────────


class TestTrend:

    def test_even_split(self):
        assert linear_trend([1, 2, 3, 4]) == pytest.approx(2.0)

    def test_odd_length_floor_split(self):
        # first half [1], second half [2, 3]
        assert linear_trend([1, 2, 3]) == pytest.approx(1.5)

    def test_short_series(self):
        assert linear_trend([]) == 0.0
        assert linear_trend([9]) == 0.0

    def test_declining(self):
        assert linear_trend([80, 80, 70, 70]) == pytest.approx(-10.0)


class TestVolatility:

    def test_mean_absolute_change(self):
        assert volatility([1, 3, 2]) == pytest.approx(1.5)

    def test_flat_and_short(self):
        assert volatility([5, 5, 5]) == 0.0
        assert volatility([5]) == 0.0


class TestConsistency:

    def test_constant_series_is_fully_consistent(self):
        assert consistency_score([10, 10, 10]) == pytest.approx(1.0)

    def test_floored_at_zero(self):
        # mean 5, sd 5
        assert consistency_score([0, 10]) == 0.0

    def test_zero_mean_and_short(self):
        assert consistency_score([0, 0, 0]) == 0.0
        assert consistency_score([42]) == 0.0
        assert consistency_score([]) == 0.0

    def test_stable_energy_scores(self):
        assert consistency_score([80, 82, 81]) > 0.95

    def test_uses_population_deviation(self):
        xs = [58, 66, 74, 84, 86, 79, 88]
        assert consistency_score(xs) == pytest.approx(1 - standard_deviation(xs) / mean(xs))

    def test_accepts_generators(self):
        assert consistency_score(x for x in [10, 10]) == pytest.approx(1.0)


# ─── rounding / confidence ────────────────────────────────────


class TestRoundHalfUp:

    def test_halves_round_up(self):
        assert round_half_up(12.5) == 13
        assert round_half_up(0.5) == 1
        assert round(12.5) == 12  # what we are avoiding

    def test_decimals(self):
        assert round_half_up(2.25, 1) == pytest.approx(2.3)
        assert round_half_up(3.14159, 2) == pytest.approx(3.14)

    def test_negative_values(self):
        assert round_half_up(-1.4) == -1
        assert round_half_up(-1.6) == -2


class TestConfidence:

    @pytest.mark.parametrize("n, expected", [
        (0, 0.0), (1, 0.3), (2, 0.3), (3, 0.6), (6, 0.6),
        (7, 0.8), (13, 0.8), (14, 0.95), (90, 0.95),
    ])
    def test_tiers(self, n, expected):
        assert confidence_for(n) == expected

    def test_never_above_one(self):
        assert all(0.0 <= confidence_for(n) <= 1.0 for n in range(200))
        assert not math.isnan(confidence_for(5))
