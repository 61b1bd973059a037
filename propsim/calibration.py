"""
Calibration adjustment chain.

Applied in a fixed order after the base probability is resolved:
home/away, opponent defense, pace, minutes trend. Each step adds a
delta to the running probability with no intermediate clamping.

Tier tables are written from the OVER bettor's point of view and
negated for UNDER bets, so favourable and unfavourable tiers mirror
exactly. Legacy opponent/pace fields only apply when the matching
calibration field is absent, and never emit a CalibrationFactor.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .models import (
    CalibrationFactor,
    DefenseTier,
    Direction,
    FactorDirection,
    GamePace,
    MinutesTrend,
    OpponentTier,
    PaceTier,
    PlayerPropInput,
)
from .numeric import round_int

HOME_ADJUSTMENT = 0.02

# ─────────────────────────────────────────────────────────────────────────────
# OVER-side adjustment tables (UNDER uses the negation)
# ─────────────────────────────────────────────────────────────────────────────

DEFENSE_ADJUSTMENTS = {
    DefenseTier.LOW: 0.02,
    DefenseTier.MED: 0.0,
    DefenseTier.HIGH: -0.02,
}

PACE_ADJUSTMENTS = {
    PaceTier.FAST: 0.02,
    PaceTier.AVG: 0.0,
    PaceTier.SLOW: -0.02,
}

MINUTES_ADJUSTMENTS = {
    MinutesTrend.UP: 0.02,
    MinutesTrend.FLAT: 0.0,
    MinutesTrend.DOWN: -0.02,
}

LEGACY_OPPONENT_ADJUSTMENTS = {
    OpponentTier.WEAK: 0.05,
    OpponentTier.AVERAGE: 0.0,
    OpponentTier.STRONG: -0.05,
}

LEGACY_PACE_ADJUSTMENTS = {
    GamePace.FAST: 0.03,
    GamePace.AVERAGE: 0.0,
    GamePace.SLOW: -0.03,
}

DEFENSE_FACTOR_NAMES = {DefenseTier.LOW: "Weak Defense", DefenseTier.HIGH: "Strong Defense"}
PACE_FACTOR_NAMES = {PaceTier.FAST: "Fast Pace", PaceTier.SLOW: "Slow Pace"}
MINUTES_FACTOR_NAMES = {MinutesTrend.UP: "Minutes Up", MinutesTrend.DOWN: "Minutes Down"}


@dataclass
class ChainResult:
    probability: float
    reasoning: list[str] = field(default_factory=list)
    factors: list[CalibrationFactor] = field(default_factory=list)


def directional_adjustment(over_adjustment: float, over_under: Direction) -> float:
    """Mirror an OVER-side adjustment for the bet's direction."""
    return over_adjustment if over_under == Direction.OVER else -over_adjustment


def _signed_percent(adjustment: float) -> str:
    sign = "+" if adjustment >= 0 else ""
    return f"{sign}{round_int(adjustment * 100)}%"


def _factor(name: str, adjustment: float) -> CalibrationFactor:
    return CalibrationFactor(
        factor=name,
        adjustment=round_int(adjustment * 100),
        direction=FactorDirection.UP if adjustment > 0 else FactorDirection.DOWN,
    )


def resolve_home_game(prop: PlayerPropInput) -> Optional[bool]:
    """calibration.home_game wins over the legacy flag."""
    if prop.calibration is not None and prop.calibration.home_game is not None:
        return prop.calibration.home_game
    return prop.home_game


def _apply_tier(
    result: ChainResult,
    tier: Enum,
    table: dict,
    factor_names: dict,
    label: str,
    over_under: Direction,
) -> None:
    adjustment = directional_adjustment(table[tier], over_under)
    result.probability += adjustment
    result.reasoning.append(f"{label}: {tier.value} ({_signed_percent(adjustment)})")
    if adjustment != 0:
        result.factors.append(_factor(factor_names[tier], adjustment))


def apply_calibration_chain(prop: PlayerPropInput, probability: float) -> ChainResult:
    """Apply home/away, defense, pace and minutes adjustments in order."""
    result = ChainResult(probability=probability)
    cal = prop.calibration
    over_under = Direction(prop.over_under)

    is_home = resolve_home_game(prop)
    if is_home is not None:
        adjustment = HOME_ADJUSTMENT if is_home else -HOME_ADJUSTMENT
        result.probability += adjustment
        result.reasoning.append("Home game (+2%)" if is_home else "Away game (-2%)")
        result.factors.append(_factor("Home Game" if is_home else "Away Game", adjustment))

    if cal is not None and cal.opponent_def_tier is not None:
        _apply_tier(
            result,
            DefenseTier(cal.opponent_def_tier),
            DEFENSE_ADJUSTMENTS,
            DEFENSE_FACTOR_NAMES,
            "Defense tier",
            over_under,
        )
    elif prop.opponent_tier is not None:
        tier = OpponentTier(prop.opponent_tier)
        result.probability += directional_adjustment(LEGACY_OPPONENT_ADJUSTMENTS[tier], over_under)
        result.reasoning.append(f"Opponent tier: {tier.value}")

    if cal is not None and cal.pace_tier is not None:
        _apply_tier(
            result,
            PaceTier(cal.pace_tier),
            PACE_ADJUSTMENTS,
            PACE_FACTOR_NAMES,
            "Pace",
            over_under,
        )
    elif prop.pace is not None:
        pace = GamePace(prop.pace)
        result.probability += directional_adjustment(LEGACY_PACE_ADJUSTMENTS[pace], over_under)
        result.reasoning.append(f"Game pace: {pace.value}")

    if cal is not None and cal.minutes_trend is not None:
        _apply_tier(
            result,
            MinutesTrend(cal.minutes_trend),
            MINUTES_ADJUSTMENTS,
            MINUTES_FACTOR_NAMES,
            "Minutes trend",
            over_under,
        )

    return result
