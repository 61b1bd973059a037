"""Batch statistics over simulated props."""

from collections import Counter
from typing import Sequence

from .models import BatchSimulationSummary, GroupStats, Recommendation, SimulatedProp
from .numeric import round_half_up, sequential_sum

TOP_N = 5


def _group_by(simulations: Sequence[SimulatedProp], key) -> dict[str, GroupStats]:
    """Count and average edge per group, in first-seen order."""
    edges: dict[str, list[float]] = {}
    for sim in simulations:
        edges.setdefault(key(sim), []).append(sim.result.edge)
    return {
        name: GroupStats(count=len(values), avg_edge=round_half_up(sequential_sum(values) / len(values), 1))
        for name, values in edges.items()
    }


def generate_batch_summary(simulations: Sequence[SimulatedProp]) -> BatchSimulationSummary:
    """
    Summarize a batch of simulations.

    Top props are the five largest edges. Props to avoid come from the five
    smallest edges, keep only negative ones, and list the worst first.
    An empty batch yields an all-zero summary.
    """
    total = len(simulations)
    if total == 0:
        return BatchSimulationSummary()

    avg_confidence = sequential_sum(s.result.confidence_score for s in simulations) / total
    avg_edge = sequential_sum(s.result.edge for s in simulations) / total
    avg_roi = sequential_sum(s.result.simulated_roi for s in simulations) / total

    tiers = Counter(Recommendation(s.result.recommendation) for s in simulations)

    # Stable sort, so equal edges keep input order
    ranked = sorted(simulations, key=lambda s: s.result.edge, reverse=True)
    top_props = ranked[:TOP_N]
    props_to_avoid = [s for s in ranked[-TOP_N:] if s.result.edge < 0][::-1]

    return BatchSimulationSummary(
        total_bets=total,
        average_confidence=round_half_up(avg_confidence, 1),
        average_edge=round_half_up(avg_edge, 1),
        average_simulated_roi=round_half_up(avg_roi, 3),
        strong_plays=tiers[Recommendation.STRONG_PLAY],
        leans=tiers[Recommendation.LEAN],
        passes=tiers[Recommendation.PASS],
        avoids=tiers[Recommendation.AVOID],
        by_platform=_group_by(simulations, lambda s: s.input.platform),
        by_stat_type=_group_by(simulations, lambda s: s.input.stat_type),
        top_props=tuple(top_props),
        props_to_avoid=tuple(props_to_avoid),
    )
