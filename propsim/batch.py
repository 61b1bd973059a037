"""
Batch simulation over raw market lines.

Turns stored market lines into prop inputs, simulates the player/fantasy
prop markets, and returns simulated-bet records plus a batch summary and
run notes. Storing those records is up to the caller.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from .config import BatchConfig, settings
from .logging_config import get_logger, log_batch_summary
from .models import (
    BatchSimulationSummary,
    Direction,
    PlayerPropInput,
    Record,
    SimulatedProp,
    Volatility,
)
from .numeric import format_number
from .simulator import simulate_player_prop
from .summary import generate_batch_summary
from .validation import validate_prop_input

logger = get_logger(__name__)


@dataclass(frozen=True)
class MarketLine(Record):
    """A posted line as stored by the line-entry screens."""
    platform: str
    sport: str
    event: str
    market_type: str
    line_value: float
    id: Optional[str] = None
    league: Optional[str] = None
    player_name: Optional[str] = None
    stat_type: Optional[str] = None
    over_under: Optional[str] = None
    odds_or_payout: Optional[float] = None


@dataclass(frozen=True)
class SimulatedBet(Record):
    """Record describing one simulated bet for the bets ledger."""
    platform: str
    market_line_id: Optional[str]
    bet_type: str
    description: str
    estimated_probability: float
    confidence_score: int
    simulated_roi: float
    volatility_score: Volatility
    source: str = "ai_model"
    status: str = "simulated"


@dataclass(frozen=True)
class BatchRun(Record):
    simulations: tuple[SimulatedProp, ...]
    bets: tuple[SimulatedBet, ...]
    summary: BatchSimulationSummary
    skipped: int = 0
    run_notes: dict = field(default_factory=dict)


def market_line_to_prop_input(line: MarketLine, config: Optional[BatchConfig] = None) -> PlayerPropInput:
    """Build a prop input from a market line, filling configured defaults."""
    config = config or settings.batch
    direction = (line.over_under or config.default_direction).lower()
    return PlayerPropInput(
        player_name=line.player_name or config.default_player_name,
        stat_type=line.stat_type or config.default_stat_type,
        line_value=line.line_value,
        over_under=Direction(direction),
        platform=line.platform,
        # Zero is not usable odds, same as missing
        odds_or_payout=line.odds_or_payout or config.default_odds,
    )


def select_market_lines(
    lines: Iterable[MarketLine],
    platforms: Optional[Sequence[str]] = None,
    market_types: Optional[Sequence[str]] = None,
    limit: Optional[int] = None,
) -> list[MarketLine]:
    """Filter lines by platform / market type (empty filter = all), then cap."""
    selected = [
        line for line in lines
        if (not platforms or line.platform in platforms)
        and (not market_types or line.market_type in market_types)
    ]
    if limit is not None:
        selected = selected[:limit]
    return selected


def build_simulated_bet(line: MarketLine, prop: PlayerPropInput, sim: SimulatedProp) -> SimulatedBet:
    bet_type = (
        f"{prop.player_name} {Direction(prop.over_under).value} "
        f"{format_number(prop.line_value)} {prop.stat_type}"
    )
    return SimulatedBet(
        platform=line.platform,
        market_line_id=line.id,
        bet_type=bet_type,
        description=f"{line.event} - {bet_type}",
        estimated_probability=sim.result.estimated_probability,
        confidence_score=sim.result.confidence_score,
        simulated_roi=sim.result.simulated_roi,
        volatility_score=sim.result.volatility_score,
    )


def build_run_notes(summary: BatchSimulationSummary) -> dict:
    return {
        "average_confidence": summary.average_confidence,
        "average_edge": summary.average_edge,
        "strong_plays": summary.strong_plays,
        "leans": summary.leans,
        "top_props_count": len(summary.top_props),
    }


def run_batch_simulation(
    lines: Iterable[MarketLine],
    platforms: Optional[Sequence[str]] = None,
    market_types: Optional[Sequence[str]] = None,
    config: Optional[BatchConfig] = None,
) -> BatchRun:
    """Simulate every prop-type market line and summarize the run."""
    config = config or settings.batch
    selected = select_market_lines(lines, platforms, market_types, limit=config.max_lines)

    simulations: list[SimulatedProp] = []
    bets: list[SimulatedBet] = []
    skipped = 0

    for line in selected:
        if line.market_type not in config.simulated_market_types:
            skipped += 1
            continue

        prop = market_line_to_prop_input(line, config)
        validation = validate_prop_input(prop)
        if validation.issues:
            validation.log_issues(context=f"market_line:{line.id}")

        sim = SimulatedProp(input=prop, result=simulate_player_prop(prop))
        simulations.append(sim)
        bets.append(build_simulated_bet(line, prop, sim))

    summary = generate_batch_summary(simulations)

    logger.info(
        "batch_lines_processed",
        selected=len(selected),
        simulated=len(simulations),
        skipped=skipped,
    )
    log_batch_summary(
        logger,
        total_bets=summary.total_bets,
        average_edge=summary.average_edge,
        strong_plays=summary.strong_plays,
        average_simulated_roi=summary.average_simulated_roi,
    )

    return BatchRun(
        simulations=tuple(simulations),
        bets=tuple(bets),
        summary=summary,
        skipped=skipped,
        run_notes=build_run_notes(summary),
    )
