"""
Odds conversion utilities.

American odds <-> implied probability, plus the helpers that decide
whether a platform is a pick'em venue and what a winning sportsbook
ticket pays per unit staked.
"""

from .numeric import round_int

PICKEM_PLATFORM_MARKERS = ("prize", "underdog")


def odds_to_implied_probability(odds: float) -> float:
    """
    Convert American odds to implied probability.

    +150 -> 0.40, -110 -> 0.5238, -100 and +100 -> 0.5.
    """
    if odds > 0:
        return 100 / (odds + 100)
    return abs(odds) / (abs(odds) + 100)


def probability_to_odds(probability: float) -> int:
    """
    Convert implied probability to American odds.

    Probabilities at or above 0.5 map to negative (favorite) odds.
    The caller must pass a probability strictly inside (0, 1).
    """
    if probability >= 0.5:
        return -round_int(probability / (1 - probability) * 100)
    return round_int((1 - probability) / probability * 100)


def calculate_break_even(odds: float) -> float:
    """Break-even win probability for a bet at the given American odds."""
    return odds_to_implied_probability(odds)


def american_payout_multiplier(odds: float) -> float:
    """
    Total return per unit stake for a winning bet (stake included).

    +150 -> 2.5, -110 -> 1.909. Zero is not valid American odds and is
    priced as even money.
    """
    if odds > 0:
        return 1 + odds / 100
    if odds == 0:
        return 2.0
    return 1 + 100 / abs(odds)


def is_pickem_platform(platform: str) -> bool:
    """True for PrizePicks/Underdog style platforms (case-insensitive substring match)."""
    name = platform.lower()
    return any(marker in name for marker in PICKEM_PLATFORM_MARKERS)

