"""
Tests for volatility classification.
"""

import math

import pytest

from propsim.models import CalibrationInputs, Volatility
from propsim.volatility import assess_volatility, classify_cv, coefficient_of_variation


class TestClassifyCV:

    @pytest.mark.parametrize("cv,expected", [
        (0.0, Volatility.LOW),
        (0.149, Volatility.LOW),
        (0.15, Volatility.MEDIUM),
        (0.30, Volatility.MEDIUM),
        (0.301, Volatility.HIGH),
        (math.inf, Volatility.HIGH),
        (-math.inf, Volatility.LOW),
        (math.nan, Volatility.MEDIUM),
    ])
    def test_thresholds(self, cv, expected):
        assert classify_cv(cv) == expected

    def test_zero_mean(self):
        assert coefficient_of_variation(5, 0) == math.inf
        assert math.isnan(coefficient_of_variation(0, 0))


class TestAssessVolatility:

    def test_calibration_low(self, make_prop):
        prop = make_prop(calibration=CalibrationInputs(player_recent_avg=25, player_recent_std=2))
        assessment = assess_volatility(prop)
        assert assessment.volatility == Volatility.LOW
        assert assessment.reasoning == "Stat variance: low (CV: 8%)"

    def test_calibration_high(self, make_prop):
        prop = make_prop(calibration=CalibrationInputs(player_recent_avg=25, player_recent_std=10))
        assessment = assess_volatility(prop)
        assert assessment.volatility == Volatility.HIGH
        assert assessment.reasoning == "Stat variance: high (CV: 40%)"

    def test_calibration_needs_both_fields(self, make_prop):
        prop = make_prop(calibration=CalibrationInputs(player_recent_avg=25))
        assessment = assess_volatility(prop)
        assert assessment.volatility == Volatility.MEDIUM
        assert assessment.reasoning is None

    def test_zero_average_with_spread(self, make_prop):
        prop = make_prop(calibration=CalibrationInputs(player_recent_avg=0, player_recent_std=5))
        assessment = assess_volatility(prop)
        assert assessment.volatility == Volatility.HIGH
        assert assessment.reasoning == "Stat variance: high (CV: Infinity%)"

    def test_zero_average_without_spread(self, make_prop):
        prop = make_prop(calibration=CalibrationInputs(player_recent_avg=0, player_recent_std=0))
        assessment = assess_volatility(prop)
        assert assessment.volatility == Volatility.MEDIUM
        assert assessment.reasoning == "Stat variance: medium (CV: NaN%)"

    def test_recent_games_population_std(self, game_log_prop):
        # mean 10.8, population std ~2.48 -> CV ~0.23
        assessment = assess_volatility(game_log_prop)
        assert assessment.volatility == Volatility.MEDIUM
        assert assessment.reasoning == "Stat variance: medium"

    def test_constant_games_are_low(self, make_prop):
        assert assess_volatility(make_prop(recent_games=[20, 20, 20])).volatility == Volatility.LOW

    def test_too_few_games(self, make_prop):
        assessment = assess_volatility(make_prop(recent_games=[5, 30]))
        assert assessment.volatility == Volatility.MEDIUM
        assert assessment.reasoning is None

    def test_calibration_wins_over_games(self, make_prop):
        prop = make_prop(
            recent_games=[5, 30, 1],
            calibration=CalibrationInputs(player_recent_avg=25, player_recent_std=2),
        )
        assert assess_volatility(prop).volatility == Volatility.LOW
