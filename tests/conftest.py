"""
Pytest configuration and fixtures for prop simulation tests.
"""

import sys
from pathlib import Path

import pytest

# Add the repository root to Python path
REPO_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT))

from propsim.models import (
    CalibrationInputs,
    DefenseTier,
    Direction,
    MinutesTrend,
    PaceTier,
    PlayerPropInput,
    Recommendation,
    SimulatedProp,
    SimulationResult,
    Volatility,
)


@pytest.fixture
def make_prop():
    """Factory for props with sportsbook defaults."""
    def _make(**overrides) -> PlayerPropInput:
        values = dict(
            player_name="Jayson Tatum",
            stat_type="points",
            line_value=20,
            over_under=Direction.OVER,
            platform="DraftKings",
            odds_or_payout=-110,
        )
        values.update(overrides)
        return PlayerPropInput(**values)
    return _make


@pytest.fixture
def full_calibration() -> CalibrationInputs:
    """Every calibration field present, all favouring the over."""
    return CalibrationInputs(
        player_recent_avg=25,
        player_recent_std=5,
        player_season_avg=22,
        home_game=True,
        opponent_def_tier=DefenseTier.LOW,
        pace_tier=PaceTier.FAST,
        minutes_trend=MinutesTrend.UP,
    )


@pytest.fixture
def calibrated_over_prop(make_prop, full_calibration) -> PlayerPropInput:
    """Sportsbook over with rich, favourable calibration data."""
    return make_prop(player_name="X", calibration=full_calibration)


@pytest.fixture
def bare_pickem_prop(make_prop) -> PlayerPropInput:
    """PrizePicks prop with no context at all."""
    return make_prop(platform="PrizePicks", calibration=CalibrationInputs())


@pytest.fixture
def game_log_prop(make_prop) -> PlayerPropInput:
    """Legacy prop driven only by a five-game log."""
    return make_prop(line_value=10, recent_games=[10, 12, 8, 15, 9])


@pytest.fixture
def make_result():
    """Factory for pre-built simulation results (aggregator inputs)."""
    def _make(
        estimated_probability: float = 0.6,
        edge: float = 0.0,
        confidence_score: int = 50,
        simulated_roi: float = 0.0,
        recommendation: Recommendation = Recommendation.PASS,
    ) -> SimulationResult:
        return SimulationResult(
            estimated_probability=estimated_probability,
            confidence_score=confidence_score,
            volatility_score=Volatility.MEDIUM,
            simulated_roi=simulated_roi,
            break_even_probability=0.5,
            edge=edge,
            recommendation=recommendation,
        )
    return _make


@pytest.fixture
def make_simulated(make_prop, make_result):
    """Factory for (input, result) pairs used by the batch summary."""
    def _make(edge: float, platform: str = "DraftKings", stat_type: str = "points", **result_kw) -> SimulatedProp:
        return SimulatedProp(
            input=make_prop(platform=platform, stat_type=stat_type, player_name=f"P{edge}"),
            result=make_result(edge=edge, **result_kw),
        )
    return _make
