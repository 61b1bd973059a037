"""
Prop Simulation Engine - per-prop outcome synthesis.

simulate_player_prop is the single entry point for one bet:

1. Data completeness (0-100)
2. Base probability (statistical model / hit rate / 0.5) + legacy season nudge
3. Calibration chain (home, defense, pace, minutes)
4. Clamp to [0.35, 0.65]
5. Break-even: 0.5 for pick'em platforms, implied probability of the odds otherwise
6. Edge in percentage points, ROI, confidence, volatility, recommendation

IMPORTANT: the final [0.35, 0.65] clamp caps the largest edge any prop
can show (15 points against a 0.50 break-even), however strong the inputs.

Deterministic and side-effect free apart from a DEBUG log line; missing
inputs degrade to defaults rather than raising.
"""

from .base_probability import estimate_base_probability
from .calibration import apply_calibration_chain
from .completeness import calculate_data_completeness
from .logging_config import get_logger, log_simulation
from .models import ConfidenceLabel, PlayerPropInput, Recommendation, SimulationResult
from .numeric import round_half_up, round_int
from .odds import american_payout_multiplier, calculate_break_even, is_pickem_platform
from .volatility import assess_volatility

logger = get_logger(__name__)

PROBABILITY_FLOOR = 0.35
PROBABILITY_CEILING = 0.65

# Pick'em legs are priced as ~50% break-even at a ~1.9x single-leg payout
PICKEM_BREAK_EVEN = 0.5
PICKEM_PAYOUT = 1.9

# Confidence = 20 + 3 per edge point + 0.4 per completeness point
BASE_CONFIDENCE = 20
EDGE_CONFIDENCE_WEIGHT = 3
DATA_CONFIDENCE_WEIGHT = 0.4

# (min edge, min confidence) per tier, checked in order
STRONG_PLAY_EDGE = 5
STRONG_PLAY_CONFIDENCE = 70
LEAN_EDGE = 2
LEAN_CONFIDENCE = 50

HIGH_CONFIDENCE_LABEL = 70
MEDIUM_CONFIDENCE_LABEL = 40


def clamp_probability(probability: float) -> float:
    return max(PROBABILITY_FLOOR, min(PROBABILITY_CEILING, probability))


def calculate_confidence(edge: float, data_completeness: int) -> int:
    raw = BASE_CONFIDENCE + abs(edge) * EDGE_CONFIDENCE_WEIGHT + data_completeness * DATA_CONFIDENCE_WEIGHT
    return round_int(min(100, max(0, raw)))


def recommend(edge: float, confidence: int) -> Recommendation:
    """First matching tier wins."""
    if edge >= STRONG_PLAY_EDGE and confidence >= STRONG_PLAY_CONFIDENCE:
        return Recommendation.STRONG_PLAY
    if edge >= LEAN_EDGE and confidence >= LEAN_CONFIDENCE:
        return Recommendation.LEAN
    if edge >= 0:
        return Recommendation.PASS
    return Recommendation.AVOID


def get_confidence_label(score: float) -> ConfidenceLabel:
    if score >= HIGH_CONFIDENCE_LABEL:
        return ConfidenceLabel.HIGH
    if score >= MEDIUM_CONFIDENCE_LABEL:
        return ConfidenceLabel.MEDIUM
    return ConfidenceLabel.LOW


def simulate_player_prop(prop: PlayerPropInput) -> SimulationResult:
    """Simulate a single player prop with a calibrated probability."""
    data_completeness = calculate_data_completeness(prop)

    base = estimate_base_probability(prop)
    chain = apply_calibration_chain(prop, base.probability)
    reasoning = base.reasoning + chain.reasoning
    factors = base.factors + chain.factors

    estimated_probability = clamp_probability(chain.probability)

    pickem = is_pickem_platform(prop.platform)
    if pickem:
        break_even = PICKEM_BREAK_EVEN
        payout = PICKEM_PAYOUT
    else:
        break_even = calculate_break_even(prop.odds_or_payout)
        payout = american_payout_multiplier(prop.odds_or_payout)

    edge = (estimated_probability - break_even) * 100
    simulated_roi = estimated_probability * payout - 1
    confidence_score = calculate_confidence(edge, data_completeness)

    volatility = assess_volatility(prop)
    if volatility.reasoning is not None:
        reasoning.append(volatility.reasoning)

    result = SimulationResult(
        estimated_probability=round_half_up(estimated_probability, 2),
        confidence_score=confidence_score,
        volatility_score=volatility.volatility,
        simulated_roi=round_half_up(simulated_roi, 3),
        break_even_probability=round_half_up(break_even, 2),
        edge=round_half_up(edge, 1),
        recommendation=recommend(edge, confidence_score),
        reasoning=tuple(reasoning),
        calibration_factors=tuple(factors),
        data_completeness=data_completeness,
    )

    log_simulation(
        logger,
        player_name=prop.player_name,
        stat_type=prop.stat_type,
        platform=prop.platform,
        recommendation=result.recommendation.value,
        edge=result.edge,
        confidence=result.confidence_score,
        pickem=pickem,
    )
    return result
