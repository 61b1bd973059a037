"""
Plausibility checks for prop inputs.

The engine never rejects a prop; these checks only flag values that are
likely data-entry mistakes so they show up in the logs. Issues never
change a simulation result.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List

import structlog

from .models import PlayerPropInput
from .odds import is_pickem_platform

logger = structlog.get_logger()

# American odds live at or beyond +/-100
MIN_ABS_AMERICAN_ODDS = 100


class ValidationSeverity(str, Enum):
    """Severity levels for validation issues."""
    WARNING = "warning"   # Log but continue
    ERROR = "error"       # Numerically unusable; engine falls back to a default


@dataclass
class ValidationIssue:
    """A single validation issue."""
    field: str
    value: Any
    message: str
    severity: ValidationSeverity


@dataclass
class ValidationResult:
    """Result of validation with all issues found."""
    is_valid: bool
    issues: List[ValidationIssue]

    @property
    def has_errors(self) -> bool:
        return any(i.severity == ValidationSeverity.ERROR for i in self.issues)

    @property
    def has_warnings(self) -> bool:
        return any(i.severity == ValidationSeverity.WARNING for i in self.issues)

    def log_issues(self, context: str = "") -> None:
        """Log all validation issues."""
        for issue in self.issues:
            log_method = logger.warning if issue.severity == ValidationSeverity.WARNING else logger.error
            log_method(
                f"Validation {issue.severity.value}",
                context=context,
                field=issue.field,
                value=issue.value,
                message=issue.message,
            )


def validate_odds(odds: float, platform: str, field_name: str = "odds_or_payout") -> List[ValidationIssue]:
    """Sportsbook odds must be American odds (|odds| >= 100)."""
    if is_pickem_platform(platform):
        return []
    if odds == 0:
        return [ValidationIssue(
            field=field_name,
            value=odds,
            message="Zero odds; payout priced as even money",
            severity=ValidationSeverity.ERROR,
        )]
    if abs(odds) < MIN_ABS_AMERICAN_ODDS:
        return [ValidationIssue(
            field=field_name,
            value=odds,
            message=f"American odds {odds} between -100 and +100",
            severity=ValidationSeverity.WARNING,
        )]
    return []


def validate_prop_input(prop: PlayerPropInput) -> ValidationResult:
    """Flag implausible values in a prop input."""
    issues: List[ValidationIssue] = []

    if not prop.platform.strip():
        issues.append(ValidationIssue(
            field="platform",
            value=prop.platform,
            message="Empty platform; priced as a sportsbook",
            severity=ValidationSeverity.WARNING,
        ))

    if prop.line_value < 0:
        issues.append(ValidationIssue(
            field="line_value",
            value=prop.line_value,
            message="Negative line value",
            severity=ValidationSeverity.WARNING,
        ))

    issues.extend(validate_odds(prop.odds_or_payout, prop.platform))

    cal = prop.calibration
    if cal is not None:
        if cal.player_recent_std is not None and cal.player_recent_std < 0:
            issues.append(ValidationIssue(
                field="calibration.player_recent_std",
                value=cal.player_recent_std,
                message="Negative standard deviation",
                severity=ValidationSeverity.WARNING,
            ))
        if cal.player_recent_avg is not None and cal.player_recent_avg <= 0:
            issues.append(ValidationIssue(
                field="calibration.player_recent_avg",
                value=cal.player_recent_avg,
                message="Non-positive recent average; volatility ratio is undefined",
                severity=ValidationSeverity.WARNING,
            ))

    if prop.recent_games and any(g < 0 for g in prop.recent_games):
        issues.append(ValidationIssue(
            field="recent_games",
            value=list(prop.recent_games),
            message="Negative stat value in recent games",
            severity=ValidationSeverity.WARNING,
        ))

    return ValidationResult(is_valid=not any(i.severity == ValidationSeverity.ERROR for i in issues), issues=issues)
