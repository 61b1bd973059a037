"""
Domain models for the player prop simulation engine.

Plain immutable records. Inputs carry two generations of context fields:
the legacy flat fields (recent_games, season_average, opponent_tier, pace)
and the nested CalibrationInputs. Calibration fields win wherever both
describe the same concept.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional


class Direction(str, Enum):
    """Bet direction."""
    OVER = "over"
    UNDER = "under"


class MinutesTrend(str, Enum):
    UP = "up"
    FLAT = "flat"
    DOWN = "down"


class DefenseTier(str, Enum):
    """Opponent defensive strength (calibration scale)."""
    LOW = "low"     # Weak defense = easier to score
    MED = "med"
    HIGH = "high"   # Strong defense = harder to score


class PaceTier(str, Enum):
    SLOW = "slow"
    AVG = "avg"
    FAST = "fast"


class OpponentTier(str, Enum):
    """Opponent strength (legacy scale)."""
    WEAK = "weak"
    AVERAGE = "average"
    STRONG = "strong"


class GamePace(str, Enum):
    """Game pace (legacy scale)."""
    SLOW = "slow"
    AVERAGE = "average"
    FAST = "fast"


class FactorDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


class Volatility(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Recommendation(str, Enum):
    """Per-prop recommendation tier, strongest first."""
    STRONG_PLAY = "strong_play"
    LEAN = "lean"
    PASS = "pass"
    AVOID = "avoid"


class ConfidenceLabel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Venue(str, Enum):
    SPORTSBOOK = "sportsbook"
    PICKEM = "pickem"


class PickemPlatform(str, Enum):
    PRIZEPICKS = "prizepicks"
    UNDERDOG = "underdog"


def _plain(value: Any) -> Any:
    """Convert enums and tuples into JSON-friendly values."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


class Record:
    """Mixin giving dataclass records a JSON-friendly dict form."""

    def to_dict(self) -> dict[str, Any]:
        return _plain(asdict(self))


@dataclass(frozen=True)
class CalibrationInputs(Record):
    """
    Optional calibration context for one prop.

    Every field is independently optional; any subset is valid.
    Presence (not value) drives data completeness.
    """
    player_recent_avg: Optional[float] = None
    player_recent_std: Optional[float] = None
    player_season_avg: Optional[float] = None
    minutes_trend: Optional[MinutesTrend] = None
    opponent_def_tier: Optional[DefenseTier] = None
    pace_tier: Optional[PaceTier] = None
    home_game: Optional[bool] = None


@dataclass(frozen=True)
class PlayerPropInput(Record):
    """
    One player proposition.

    odds_or_payout is American odds for sportsbooks; it is ignored
    for pick'em platforms (PrizePicks, Underdog).
    """
    player_name: str
    stat_type: str
    line_value: float
    over_under: Direction
    platform: str
    odds_or_payout: float

    # Optional context (legacy)
    recent_games: Optional[tuple[float, ...]] = None
    season_average: Optional[float] = None
    home_game: Optional[bool] = None
    opponent_tier: Optional[OpponentTier] = None
    pace: Optional[GamePace] = None

    calibration: Optional[CalibrationInputs] = None

    def __post_init__(self) -> None:
        # Accept any sequence for recent_games but store it immutably
        if self.recent_games is not None and not isinstance(self.recent_games, tuple):
            object.__setattr__(self, "recent_games", tuple(self.recent_games))


@dataclass(frozen=True)
class CalibrationFactor(Record):
    """One applied adjustment, in whole percentage points."""
    factor: str
    adjustment: int
    direction: FactorDirection


@dataclass(frozen=True)
class SimulationResult(Record):
    """
    Output of simulate_player_prop.

    estimated_probability is clamped to [0.35, 0.65] before rounding,
    which caps the maximum edge any single prop can show.
    """
    estimated_probability: float      # 2 decimals
    confidence_score: int             # 0-100
    volatility_score: Volatility
    simulated_roi: float              # 3 decimals, signed
    break_even_probability: float     # 2 decimals
    edge: float                       # percentage points, 1 decimal
    recommendation: Recommendation
    reasoning: tuple[str, ...] = ()
    calibration_factors: tuple[CalibrationFactor, ...] = ()
    data_completeness: int = 0


@dataclass(frozen=True)
class PickemPayout(Record):
    """Payout structure for a pick'em entry of a given size."""
    legs: int
    multiplier: float
    flex_payouts: Optional[tuple[tuple[int, float], ...]] = None


@dataclass(frozen=True)
class PowerEntryResult(Record):
    combined_probability: float   # 4 decimals
    expected_value: float         # 2 decimals, per unit stake
    simulated_roi: float
    is_profitable: bool
    payout_multiplier: float
    recommendation: str


@dataclass(frozen=True)
class FlexScenario(Record):
    correct: int
    probability: float            # 4 decimals
    payout: float
    ev_contribution: float        # 3 decimals


@dataclass(frozen=True)
class FlexEntryResult(Record):
    expected_value: float
    simulated_roi: float
    scenario_payouts: tuple[FlexScenario, ...]
    recommendation: str


@dataclass(frozen=True)
class PlatformComparison(Record):
    sportsbook_ev: float
    pickem_ev: float
    best_venue: Venue
    reasoning: str


@dataclass(frozen=True)
class SimulatedProp(Record):
    """A prop input paired with its simulation result."""
    input: PlayerPropInput
    result: SimulationResult


@dataclass(frozen=True)
class GroupStats(Record):
    count: int
    avg_edge: float


@dataclass(frozen=True)
class BatchSimulationSummary(Record):
    total_bets: int = 0
    average_confidence: float = 0.0
    average_edge: float = 0.0
    average_simulated_roi: float = 0.0
    strong_plays: int = 0
    leans: int = 0
    passes: int = 0
    avoids: int = 0
    by_platform: dict[str, GroupStats] = field(default_factory=dict)
    by_stat_type: dict[str, GroupStats] = field(default_factory=dict)
    top_props: tuple[SimulatedProp, ...] = ()
    props_to_avoid: tuple[SimulatedProp, ...] = ()
