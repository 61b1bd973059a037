"""
Volatility classification from the coefficient of variation (std / mean).

CV < 0.15 -> low, CV > 0.30 -> high, otherwise medium. Calibration
std/avg take precedence; otherwise at least three recent games are
needed. With neither, volatility stays medium and no reasoning is added.
"""

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .models import PlayerPropInput, Volatility
from .numeric import format_fixed

LOW_CV_THRESHOLD = 0.15
HIGH_CV_THRESHOLD = 0.30
MIN_GAMES_FOR_VOLATILITY = 3


@dataclass(frozen=True)
class VolatilityAssessment:
    volatility: Volatility
    reasoning: Optional[str] = None


def coefficient_of_variation(std: float, mean: float) -> float:
    """std / mean; a zero mean gives a signed inf, or nan when std is also zero."""
    if mean == 0:
        if std == 0:
            return math.nan
        return math.copysign(math.inf, std)
    return std / mean


def classify_cv(cv: float) -> Volatility:
    # nan compares False both ways and lands on medium
    if cv < LOW_CV_THRESHOLD:
        return Volatility.LOW
    if cv > HIGH_CV_THRESHOLD:
        return Volatility.HIGH
    return Volatility.MEDIUM


def assess_volatility(prop: PlayerPropInput) -> VolatilityAssessment:
    cal = prop.calibration

    if cal is not None and cal.player_recent_std is not None and cal.player_recent_avg is not None:
        cv = coefficient_of_variation(cal.player_recent_std, cal.player_recent_avg)
        volatility = classify_cv(cv)
        return VolatilityAssessment(
            volatility=volatility,
            reasoning=f"Stat variance: {volatility.value} (CV: {format_fixed(cv * 100, 0)}%)",
        )

    if prop.recent_games and len(prop.recent_games) >= MIN_GAMES_FOR_VOLATILITY:
        games = np.asarray(prop.recent_games, dtype=float)
        cv = coefficient_of_variation(float(np.std(games)), float(np.mean(games)))
        volatility = classify_cv(cv)
        return VolatilityAssessment(volatility=volatility, reasoning=f"Stat variance: {volatility.value}")

    return VolatilityAssessment(volatility=Volatility.MEDIUM)
