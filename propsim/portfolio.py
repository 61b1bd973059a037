"""
Portfolio aggregators over already-simulated props.

- Power entry: every leg must hit. Legs are treated as independent, so the
  combined probability is the product of leg probabilities.
- Flex entry: partial payouts by number of correct legs. Scenario odds use
  the binomial PMF with the MEAN leg probability as a single shared p
  (not a per-leg Poisson-binomial).
- Platform comparison: one prop priced at a sportsbook vs a pick'em leg.

All EVs assume a unit stake.
"""

import math
from typing import Sequence

from .logging_config import get_logger
from .models import (
    FlexEntryResult,
    FlexScenario,
    PickemPayout,
    PickemPlatform,
    PlatformComparison,
    PlayerPropInput,
    PowerEntryResult,
    SimulationResult,
    Venue,
)
from .numeric import format_number, round_half_up, round_int, sequential_sum
from .odds import calculate_break_even
from .simulator import simulate_player_prop

logger = get_logger(__name__)

# Standard pick'em payout structures
POWER_ENTRY_PAYOUTS: dict[int, float] = {
    2: 3,
    3: 5,
    4: 10,
    5: 20,
    6: 40,
}

# legs -> ((correct, payout), ...)
FLEX_ENTRY_PAYOUTS: dict[int, tuple[tuple[int, float], ...]] = {
    3: ((3, 2.25), (2, 1.25)),
    4: ((4, 5), (3, 1.5)),
    5: ((5, 10), (4, 2), (3, 0.4)),
    6: ((6, 25), (5, 2), (4, 0.4)),
}

# ~52.6% to break even on a single leg at 1.9x
PICKEM_COMPARISON_BREAK_EVEN = 0.526


def power_payout_multiplier(num_legs: int) -> float:
    """Table multiplier, else 2^(legs-1)."""
    return POWER_ENTRY_PAYOUTS.get(num_legs) or 2 ** (num_legs - 1)


def get_pickem_payout(num_legs: int) -> PickemPayout:
    """Power multiplier and flex table (if any) for an entry size."""
    return PickemPayout(
        legs=num_legs,
        multiplier=power_payout_multiplier(num_legs),
        flex_payouts=FLEX_ENTRY_PAYOUTS.get(num_legs),
    )


def binomial_probability(n: int, k: int, p: float) -> float:
    return math.comb(n, k) * p ** k * (1 - p) ** (n - k)


def simulate_power_entry(
    legs: Sequence[SimulationResult],
    platform: PickemPlatform = PickemPlatform.PRIZEPICKS,
) -> PowerEntryResult:
    """Simulate a pick'em power play (all legs must hit)."""
    num_legs = len(legs)
    multiplier = power_payout_multiplier(num_legs)

    combined_probability = 1.0
    for leg in legs:
        combined_probability *= leg.estimated_probability

    expected_value = combined_probability * multiplier - 1

    if expected_value > 0.5:
        recommendation = "Strong +EV entry - consider max sizing"
    elif expected_value > 0.1:
        recommendation = "Slight edge - proceed with caution"
    elif expected_value > 0:
        recommendation = "Marginal edge - small play only"
    else:
        recommendation = "Negative EV - avoid this combination"

    logger.debug(
        "power_entry_simulated",
        platform=PickemPlatform(platform).value,
        legs=num_legs,
        combined_probability=combined_probability,
        expected_value=expected_value,
    )

    return PowerEntryResult(
        combined_probability=round_half_up(combined_probability, 4),
        expected_value=round_half_up(expected_value, 2),
        simulated_roi=round_half_up(expected_value, 2),
        is_profitable=expected_value > 0,
        payout_multiplier=multiplier,
        recommendation=recommendation,
    )


def simulate_flex_entry(
    legs: Sequence[SimulationResult],
    platform: PickemPlatform = PickemPlatform.PRIZEPICKS,
) -> FlexEntryResult:
    """Simulate a pick'em flex play (partial payouts)."""
    num_legs = len(legs)
    flex_payouts = FLEX_ENTRY_PAYOUTS.get(num_legs, ())

    if not flex_payouts:
        return FlexEntryResult(
            expected_value=0.0,
            simulated_roi=0.0,
            scenario_payouts=(),
            recommendation=f"Flex entries not available for {num_legs}-leg plays",
        )

    avg_prob = sequential_sum(leg.estimated_probability for leg in legs) / num_legs

    scenarios = []
    for correct, payout in flex_payouts:
        probability = binomial_probability(num_legs, correct, avg_prob)
        scenarios.append(FlexScenario(
            correct=correct,
            probability=round_half_up(probability, 4),
            payout=payout,
            ev_contribution=round_half_up(probability * payout, 3),
        ))

    # Summed from the rounded per-scenario contributions
    total_ev = sequential_sum(s.ev_contribution for s in scenarios)
    expected_value = total_ev - 1

    if expected_value > 0.2:
        recommendation = "Flex entry has significant edge"
    elif expected_value > 0:
        recommendation = "Flex entry is marginally profitable"
    else:
        recommendation = "Flex entry is -EV, consider power play or pass"

    logger.debug(
        "flex_entry_simulated",
        platform=PickemPlatform(platform).value,
        legs=num_legs,
        average_probability=avg_prob,
        expected_value=expected_value,
    )

    return FlexEntryResult(
        expected_value=round_half_up(expected_value, 2),
        simulated_roi=round_half_up(expected_value, 2),
        scenario_payouts=tuple(scenarios),
        recommendation=recommendation,
    )


def compare_platforms(
    prop: PlayerPropInput,
    sportsbook_odds: float,
    pickem_platform: PickemPlatform = PickemPlatform.PRIZEPICKS,
) -> PlatformComparison:
    """Compare sportsbook vs pick'em edge for the same prop."""
    simulation = simulate_player_prop(prop)

    sportsbook_ev = simulation.estimated_probability - calculate_break_even(sportsbook_odds)
    pickem_ev = simulation.estimated_probability - PICKEM_COMPARISON_BREAK_EVEN

    if sportsbook_ev > pickem_ev:
        best_venue = Venue.SPORTSBOOK
        gap = format_number(round_int((sportsbook_ev - pickem_ev) * 1000) / 10)
        reasoning = f"Sportsbook offers {gap}% better edge"
    else:
        best_venue = Venue.PICKEM
        gap = format_number(round_int((pickem_ev - sportsbook_ev) * 1000) / 10)
        reasoning = f"Pick'em platform offers {gap}% better edge"

    logger.debug(
        "platforms_compared",
        player_name=prop.player_name,
        pickem_platform=PickemPlatform(pickem_platform).value,
        sportsbook_odds=sportsbook_odds,
        best_venue=best_venue.value,
    )

    return PlatformComparison(
        sportsbook_ev=round_half_up(sportsbook_ev, 3),
        pickem_ev=round_half_up(pickem_ev, 3),
        best_venue=best_venue,
        reasoning=reasoning,
    )
