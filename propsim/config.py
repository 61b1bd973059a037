"""
Configuration for the prop simulation package.

Only operational settings live here (logging, batch-run defaults).
Calibration constants of the engine are module literals next to the
code that applies them and are not overridable from the environment.

Environment override examples:
    PROPSIM_LOG_LEVEL=DEBUG
    PROPSIM_JSON_LOGS=false
    PROPSIM_BATCH__DEFAULT_ODDS=-115
    PROPSIM_BATCH__SIMULATED_MARKET_TYPES='["player_prop", "fantasy_prop"]'
"""

import json
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class BatchConfig(BaseSettings):
    """Defaults used when turning raw market lines into prop inputs."""

    model_config = SettingsConfigDict(env_prefix="PROPSIM_BATCH__")

    # ─────────────────────────────────────────────────────────────────────────
    # MARKET SELECTION
    # ─────────────────────────────────────────────────────────────────────────

    simulated_market_types: Annotated[list[str], NoDecode] = Field(
        default=["player_prop", "fantasy_prop"],
        description="Market types that are simulated as player props. Others are skipped."
    )

    @field_validator("simulated_market_types", mode="before")
    @classmethod
    def parse_market_types(cls, v):
        """Parse JSON array or comma-separated string to list."""
        if isinstance(v, str) and v.strip().startswith("["):
            return json.loads(v)
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    max_lines: int = Field(
        default=500,
        description="Maximum number of market lines considered in one run."
    )

    # ─────────────────────────────────────────────────────────────────────────
    # FALLBACKS FOR INCOMPLETE LINES
    # ─────────────────────────────────────────────────────────────────────────

    default_player_name: str = Field(
        default="Unknown",
        description="Player name used when a market line has none."
    )
    default_stat_type: str = Field(
        default="PTS",
        description="Stat type used when a market line has none."
    )
    default_direction: str = Field(
        default="over",
        description="Bet direction used when a market line has none."
    )
    default_odds: int = Field(
        default=-110,
        description="American odds used when a market line has none (or zero)."
    )


class Settings(BaseSettings):
    """Package settings."""

    model_config = SettingsConfigDict(
        env_prefix="PROPSIM_",
        env_nested_delimiter="__",
    )

    service_name: str = "propsim"
    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR)."
    )
    json_logs: bool = Field(
        default=True,
        description="Render logs as JSON. Set false for colored console output."
    )

    batch: BatchConfig = Field(default_factory=BatchConfig)


# Global settings instance
settings = Settings()
