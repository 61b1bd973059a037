"""Data completeness scoring (0-100) from which optional inputs are present."""

from .models import PlayerPropInput

# Points awarded for the presence of each calibration field (sum = 100)
COMPLETENESS_POINTS = {
    "player_recent_avg": 25,
    "player_recent_std": 15,
    "player_season_avg": 20,
    "minutes_trend": 10,
    "opponent_def_tier": 10,
    "pace_tier": 10,
    "home_game": 10,
}

# Legacy inputs can only raise the score to these floors
LEGACY_RECENT_GAMES_FLOOR = 40
LEGACY_SEASON_AVERAGE_FLOOR = 20


def calculate_data_completeness(prop: PlayerPropInput) -> int:
    """
    Score how much supporting data a prop carries.

    Presence counts, not value: home_game=False still scores. Legacy
    fields bump the score up to a floor and never lower it.
    """
    score = 0
    cal = prop.calibration

    if cal is not None:
        for name, points in COMPLETENESS_POINTS.items():
            if getattr(cal, name) is not None:
                score += points

    if prop.recent_games:
        score = max(score, LEGACY_RECENT_GAMES_FLOOR)
    if prop.season_average is not None:
        score = max(score, LEGACY_SEASON_AVERAGE_FLOOR)

    return min(100, score)
