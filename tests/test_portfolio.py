"""
Tests for pick'em entries and platform comparison.
"""

import pytest

from propsim.models import PickemPlatform, Venue
from propsim.portfolio import (
    FLEX_ENTRY_PAYOUTS,
    POWER_ENTRY_PAYOUTS,
    binomial_probability,
    compare_platforms,
    get_pickem_payout,
    power_payout_multiplier,
    simulate_flex_entry,
    simulate_power_entry,
)


@pytest.fixture
def legs(make_result):
    """Build n simulated legs at the given probabilities."""
    def _legs(*probabilities):
        return [make_result(estimated_probability=p) for p in probabilities]
    return _legs


class TestPayoutTables:

    @pytest.mark.parametrize("num_legs,multiplier", [(2, 3), (3, 5), (4, 10), (5, 20), (6, 40)])
    def test_power_table(self, num_legs, multiplier):
        assert power_payout_multiplier(num_legs) == multiplier

    def test_power_fallback_doubles(self):
        assert power_payout_multiplier(7) == 64
        assert power_payout_multiplier(8) == 128

    def test_get_pickem_payout_with_flex(self):
        payout = get_pickem_payout(3)
        assert payout.legs == 3
        assert payout.multiplier == 5
        assert payout.flex_payouts == ((3, 2.25), (2, 1.25))

    def test_get_pickem_payout_without_flex(self):
        assert get_pickem_payout(2).flex_payouts is None

    def test_flex_sizes(self):
        assert sorted(FLEX_ENTRY_PAYOUTS) == [3, 4, 5, 6]
        assert sorted(POWER_ENTRY_PAYOUTS) == [2, 3, 4, 5, 6]

    def test_binomial(self):
        assert binomial_probability(3, 2, 0.6) == pytest.approx(0.432)
        assert sum(binomial_probability(4, k, 0.3) for k in range(5)) == pytest.approx(1.0)


class TestPowerEntry:

    def test_three_legs(self, legs):
        entry = simulate_power_entry(legs(0.6, 0.6, 0.6))
        assert entry.combined_probability == 0.216
        assert entry.payout_multiplier == 5
        assert entry.expected_value == 0.08
        assert entry.simulated_roi == 0.08
        assert entry.is_profitable is True
        assert entry.recommendation == "Marginal edge - small play only"

    def test_slight_edge(self, legs):
        entry = simulate_power_entry(legs(0.65, 0.65))
        assert entry.expected_value == 0.27
        assert entry.recommendation == "Slight edge - proceed with caution"

    def test_strong_edge(self, legs):
        entry = simulate_power_entry(legs(*[0.65] * 6), PickemPlatform.UNDERDOG)
        assert entry.payout_multiplier == 40
        assert entry.expected_value == pytest.approx(2.02)
        assert entry.recommendation == "Strong +EV entry - consider max sizing"

    def test_negative(self, legs):
        entry = simulate_power_entry(legs(0.5, 0.5))
        assert entry.expected_value == -0.25
        assert entry.is_profitable is False
        assert entry.recommendation == "Negative EV - avoid this combination"

    def test_uses_fallback_multiplier(self, legs):
        assert simulate_power_entry(legs(*[0.6] * 7)).payout_multiplier == 64


class TestFlexEntry:

    def test_three_legs(self, legs):
        entry = simulate_flex_entry(legs(0.6, 0.6, 0.6))
        assert [s.to_dict() for s in entry.scenario_payouts] == [
            {"correct": 3, "probability": 0.216, "payout": 2.25, "ev_contribution": 0.486},
            {"correct": 2, "probability": 0.432, "payout": 1.25, "ev_contribution": 0.54},
        ]
        assert entry.expected_value == 0.03
        assert entry.simulated_roi == 0.03
        assert entry.recommendation == "Flex entry is marginally profitable"

    def test_uses_mean_probability(self, legs):
        """Legs are modelled with a single shared probability."""
        mixed = simulate_flex_entry(legs(0.5, 0.7, 0.6))
        uniform = simulate_flex_entry(legs(0.6, 0.6, 0.6))
        assert mixed.expected_value == uniform.expected_value
        assert [s.ev_contribution for s in mixed.scenario_payouts] == [
            s.ev_contribution for s in uniform.scenario_payouts
        ]

    def test_half_up_scenario_rounding(self, legs):
        entry = simulate_flex_entry(legs(*[0.5] * 5))
        assert [s.probability for s in entry.scenario_payouts] == [0.0313, 0.1563, 0.3125]
        assert [s.ev_contribution for s in entry.scenario_payouts] == [0.313, 0.313, 0.125]
        assert entry.expected_value == -0.25
        assert entry.recommendation == "Flex entry is -EV, consider power play or pass"

    def test_significant_edge(self, legs):
        entry = simulate_flex_entry(legs(*[0.65] * 6))
        assert entry.expected_value > 0.2
        assert entry.recommendation == "Flex entry has significant edge"

    @pytest.mark.parametrize("num_legs", [1, 2, 7])
    def test_unsupported_sizes(self, legs, num_legs):
        entry = simulate_flex_entry(legs(*[0.6] * num_legs))
        assert entry.expected_value == 0
        assert entry.simulated_roi == 0
        assert entry.scenario_payouts == ()
        assert entry.recommendation == f"Flex entries not available for {num_legs}-leg plays"


class TestComparePlatforms:

    def test_sportsbook_better(self, make_prop):
        comparison = compare_platforms(make_prop(), 120)
        assert comparison.sportsbook_ev == 0.045
        assert comparison.pickem_ev == -0.026
        assert comparison.best_venue == Venue.SPORTSBOOK
        assert comparison.reasoning == "Sportsbook offers 7.1% better edge"

    def test_pickem_better(self, make_prop):
        comparison = compare_platforms(make_prop(), -150, PickemPlatform.UNDERDOG)
        assert comparison.sportsbook_ev == -0.1
        assert comparison.pickem_ev == -0.026
        assert comparison.best_venue == Venue.PICKEM
        assert comparison.reasoning == "Pick'em platform offers 7.4% better edge"

    def test_uses_simulated_probability(self, calibrated_over_prop):
        comparison = compare_platforms(calibrated_over_prop, -110)
        # 0.65 against 0.5238 and 0.526
        assert comparison.sportsbook_ev == 0.126
        assert comparison.pickem_ev == 0.124
        assert comparison.best_venue == Venue.SPORTSBOOK
