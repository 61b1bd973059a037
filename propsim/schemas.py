"""
Input schemas for props and market lines arriving as JSON.

pydantic models validate external payloads and convert them into the
engine's frozen dataclasses via to_domain().
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .batch import MarketLine
from .models import (
    CalibrationInputs,
    DefenseTier,
    Direction,
    GamePace,
    MinutesTrend,
    OpponentTier,
    PaceTier,
    PlayerPropInput,
)


class PropInputError(ValueError):
    """Input file or payload is unreadable or has the wrong shape."""


class CalibrationInputsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    player_recent_avg: Optional[float] = None
    player_recent_std: Optional[float] = None
    player_season_avg: Optional[float] = None
    minutes_trend: Optional[MinutesTrend] = None
    opponent_def_tier: Optional[DefenseTier] = None
    pace_tier: Optional[PaceTier] = None
    home_game: Optional[bool] = None

    def to_domain(self) -> CalibrationInputs:
        return CalibrationInputs(**self.model_dump())


class PlayerPropInputModel(BaseModel):
    player_name: str
    stat_type: str
    line_value: float
    over_under: Direction
    platform: str
    odds_or_payout: float

    # Optional context (legacy)
    recent_games: Optional[List[float]] = None
    season_average: Optional[float] = None
    home_game: Optional[bool] = None
    opponent_tier: Optional[OpponentTier] = None
    pace: Optional[GamePace] = None

    calibration: Optional[CalibrationInputsModel] = None

    @field_validator("over_under", mode="before")
    @classmethod
    def normalize_direction(cls, v):
        """Accept 'Over'/'UNDER' etc."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    def to_domain(self) -> PlayerPropInput:
        return PlayerPropInput(
            player_name=self.player_name,
            stat_type=self.stat_type,
            line_value=self.line_value,
            over_under=self.over_under,
            platform=self.platform,
            odds_or_payout=self.odds_or_payout,
            recent_games=tuple(self.recent_games) if self.recent_games is not None else None,
            season_average=self.season_average,
            home_game=self.home_game,
            opponent_tier=self.opponent_tier,
            pace=self.pace,
            calibration=self.calibration.to_domain() if self.calibration is not None else None,
        )


class MarketLineModel(BaseModel):
    id: Optional[str] = None
    platform: str
    sport: str
    league: Optional[str] = None
    event: str
    market_type: str
    player_name: Optional[str] = None
    stat_type: Optional[str] = None
    line_value: float
    over_under: Optional[Direction] = None
    odds_or_payout: Optional[float] = Field(default=None)

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v):
        """Numeric ids are kept as text."""
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("over_under", mode="before")
    @classmethod
    def normalize_direction(cls, v):
        if isinstance(v, str):
            return v.strip().lower() or None
        return v

    def to_domain(self) -> MarketLine:
        return MarketLine(
            id=self.id,
            platform=self.platform,
            sport=self.sport,
            league=self.league,
            event=self.event,
            market_type=self.market_type,
            player_name=self.player_name,
            stat_type=self.stat_type,
            line_value=self.line_value,
            over_under=self.over_under.value if self.over_under is not None else None,
            odds_or_payout=self.odds_or_payout,
        )


def _records(data: Any, key: str) -> list:
    if isinstance(data, dict) and key in data:
        data = data[key]
    if not isinstance(data, list):
        raise PropInputError(f"Expected a list of records or an object with a '{key}' list")
    return data


def load_props(data: Any) -> list[PlayerPropInput]:
    """Validate a list of prop dicts (or {"props": [...]})."""
    return [PlayerPropInputModel.model_validate(item).to_domain() for item in _records(data, "props")]


def load_market_lines(data: Any) -> list[MarketLine]:
    """Validate a list of market line dicts (or {"lines": [...]})."""
    return [MarketLineModel.model_validate(item).to_domain() for item in _records(data, "lines")]
