"""Player prop probability simulation engine - dynamic version loader."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from .config import settings

# Configure structured logging on import
from .logging_config import configure_logging

configure_logging(
    log_level=settings.log_level,
    json_logs=settings.json_logs,
    service_name=settings.service_name,
)


def _candidate_version_paths(start: Path) -> Iterable[Path]:
    """Yield possible VERSION file locations from closest to farthest."""
    env_override = os.getenv("PROPSIM_VERSION_FILE")
    if env_override:
        yield Path(env_override)

    for parent in [start.parent, start.parent.parent]:
        yield parent / "VERSION"


def _load_version() -> str:
    module_path = Path(__file__).resolve()
    for version_path in _candidate_version_paths(module_path):
        try:
            if version_path.is_file():
                value = version_path.read_text(encoding="utf-8").strip()
                if value:
                    return value
        except OSError:
            continue
    return "0.0.0"


__version__ = _load_version()

from .models import (  # noqa: E402
    BatchSimulationSummary,
    CalibrationFactor,
    CalibrationInputs,
    ConfidenceLabel,
    DefenseTier,
    Direction,
    FactorDirection,
    FlexEntryResult,
    FlexScenario,
    GamePace,
    GroupStats,
    MinutesTrend,
    OpponentTier,
    PaceTier,
    PickemPayout,
    PickemPlatform,
    PlatformComparison,
    PlayerPropInput,
    PowerEntryResult,
    Recommendation,
    SimulatedProp,
    SimulationResult,
    Venue,
    Volatility,
)
from .odds import (  # noqa: E402
    calculate_break_even,
    odds_to_implied_probability,
    probability_to_odds,
)
from .portfolio import (  # noqa: E402
    FLEX_ENTRY_PAYOUTS,
    POWER_ENTRY_PAYOUTS,
    compare_platforms,
    simulate_flex_entry,
    simulate_power_entry,
)
from .simulator import get_confidence_label, simulate_player_prop  # noqa: E402
from .summary import generate_batch_summary  # noqa: E402

__all__ = [
    "__version__",
    "BatchSimulationSummary",
    "CalibrationFactor",
    "CalibrationInputs",
    "ConfidenceLabel",
    "DefenseTier",
    "Direction",
    "FactorDirection",
    "FLEX_ENTRY_PAYOUTS",
    "FlexEntryResult",
    "FlexScenario",
    "GamePace",
    "GroupStats",
    "MinutesTrend",
    "OpponentTier",
    "PaceTier",
    "PickemPayout",
    "PickemPlatform",
    "PlatformComparison",
    "PlayerPropInput",
    "POWER_ENTRY_PAYOUTS",
    "PowerEntryResult",
    "Recommendation",
    "SimulatedProp",
    "SimulationResult",
    "Venue",
    "Volatility",
    "calculate_break_even",
    "compare_platforms",
    "generate_batch_summary",
    "get_confidence_label",
    "odds_to_implied_probability",
    "probability_to_odds",
    "simulate_flex_entry",
    "simulate_player_prop",
    "simulate_power_entry",
]
