"""
Base probability estimation.

Two mutually exclusive sources, chosen by calibration.player_recent_avg:

1. Statistical model (calibration present): blend recent and season
   averages 70/30, z-score the line against the blend, and map it through
   a logistic approximation of the normal CDF with scale 1.7.
2. Hit rate (legacy fallback): share of recent_games that cleared the line.

Neither available -> 0.5. A legacy season_average then nudges the result
by +/-0.05 and clamps it to [0.20, 0.80], unless the calibration block
already supplied a season average.
"""

import math
from dataclasses import dataclass, field
from typing import Optional

from .models import CalibrationFactor, Direction, FactorDirection, PlayerPropInput
from .numeric import format_fixed, format_number, round_int

DEFAULT_BASE_PROBABILITY = 0.5

# Blend weights for recent vs season average
RECENT_WEIGHT = 0.7
SEASON_WEIGHT = 0.3

# Std estimate when none is supplied: 20% of the recent average
FALLBACK_STD_RATIO = 0.2

# Logistic approximation of the normal CDF: 1 / (1 + e^(-1.7 z))
LOGISTIC_SCALE = 1.7

SEASON_NUDGE = 0.05
SEASON_NUDGE_MIN = 0.20
SEASON_NUDGE_MAX = 0.80

# |delta| below this is reported as a neutral statistical factor
NEUTRAL_BAND = 0.01


@dataclass(frozen=True)
class StatsProbability:
    probability: float
    reasoning: str


@dataclass
class BaseEstimate:
    """Base probability plus the reasoning/factors emitted while computing it."""
    probability: float = DEFAULT_BASE_PROBABILITY
    reasoning: list[str] = field(default_factory=list)
    factors: list[CalibrationFactor] = field(default_factory=list)


def logistic(x: float) -> float:
    """1 / (1 + e^-x), evaluated without overflow for large |x|."""
    if x >= 0:
        return 1 / (1 + math.exp(-x))
    e = math.exp(x)
    return e / (1 + e)


def calculate_base_prob_from_stats(
    recent_avg: float,
    recent_std: Optional[float],
    season_avg: Optional[float],
    line_value: float,
    over_under: Direction,
) -> StatsProbability:
    """Probability of the chosen side from player averages vs the line."""
    blended_avg = recent_avg
    if season_avg is not None:
        blended_avg = recent_avg * RECENT_WEIGHT + season_avg * SEASON_WEIGHT

    std = recent_std if recent_std is not None else recent_avg * FALLBACK_STD_RATIO

    z_score = (line_value - blended_avg) / (std or 1)

    prob_under = logistic(LOGISTIC_SCALE * z_score)
    probability = prob_under if over_under == Direction.UNDER else 1 - prob_under

    line = format_number(line_value)
    if season_avg is not None:
        reasoning = (
            f"Blended avg {format_fixed(blended_avg, 1)} "
            f"(recent {format_fixed(recent_avg, 1)}, season {format_fixed(season_avg, 1)}) "
            f"vs line {line}"
        )
    else:
        reasoning = f"Recent avg {format_fixed(recent_avg, 1)} (std {format_fixed(std, 1)}) vs line {line}"

    return StatsProbability(probability=probability, reasoning=reasoning)


def calculate_hit_rate(games: tuple[float, ...], line_value: float, over_under: Direction) -> float:
    """Fraction of games strictly beyond the line on the chosen side."""
    if over_under == Direction.OVER:
        hits = sum(1 for g in games if g > line_value)
    else:
        hits = sum(1 for g in games if g < line_value)
    return hits / len(games)


def season_nudge(season_average: float, line_value: float, over_under: Direction) -> float:
    """+0.05 when the season average sits on the bet's side of the line, else -0.05."""
    difference = season_average - line_value
    if over_under == Direction.OVER:
        return SEASON_NUDGE if difference > 0 else -SEASON_NUDGE
    return SEASON_NUDGE if difference < 0 else -SEASON_NUDGE


def _factor_direction(delta: float) -> FactorDirection:
    if delta > NEUTRAL_BAND:
        return FactorDirection.UP
    if delta < -NEUTRAL_BAND:
        return FactorDirection.DOWN
    return FactorDirection.NEUTRAL


def estimate_base_probability(prop: PlayerPropInput) -> BaseEstimate:
    """Resolve the base probability before calibration adjustments."""
    estimate = BaseEstimate()
    cal = prop.calibration
    over_under = Direction(prop.over_under)

    if cal is not None and cal.player_recent_avg is not None:
        stats = calculate_base_prob_from_stats(
            cal.player_recent_avg,
            cal.player_recent_std,
            cal.player_season_avg,
            prop.line_value,
            over_under,
        )
        estimate.probability = stats.probability
        estimate.reasoning.append(stats.reasoning)

        diff = stats.probability - DEFAULT_BASE_PROBABILITY
        estimate.factors.append(CalibrationFactor(
            factor="Statistical Model",
            adjustment=round_int(diff * 100),
            direction=_factor_direction(diff),
        ))
    elif prop.recent_games:
        hit_rate = calculate_hit_rate(prop.recent_games, prop.line_value, over_under)
        estimate.probability = hit_rate
        estimate.reasoning.append(
            f"Recent hit rate: {round_int(hit_rate * 100)}% (last {len(prop.recent_games)} games)"
        )

    calibrated_season = cal is not None and cal.player_season_avg is not None
    if prop.season_average is not None and not calibrated_season:
        nudged = estimate.probability + season_nudge(prop.season_average, prop.line_value, over_under)
        estimate.probability = max(SEASON_NUDGE_MIN, min(SEASON_NUDGE_MAX, nudged))
        estimate.reasoning.append(
            f"Season avg: {format_fixed(prop.season_average, 1)} vs line {format_number(prop.line_value)}"
        )

    return estimate
