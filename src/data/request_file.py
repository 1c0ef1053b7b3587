"""
Prediction request files.

Reads a JSON document holding a league baseline, two teams' season stats,
optional recent history and optional overrides. Keys are snake_case field
names; league averages also accept avgHome/avgAway.
"""

import json
from pathlib import Path
from typing import Any, Mapping, Union

from src.data.football_data import PredictionInputs
from src.models.stats import (
    LeagueBaseline,
    MatchHistoryEntry,
    PredictionOverrides,
    TeamSeasonStats,
)

TEAM_FIELDS = (
    "home_goals_for",
    "home_goals_against",
    "home_games_played",
    "away_goals_for",
    "away_goals_against",
    "away_games_played",
)


class RequestFileError(ValueError):
    """The request document is missing a required section or value."""


def _league(data: Mapping[str, Any]) -> LeagueBaseline:
    avg_home = data.get("avg_home_goals", data.get("avgHome"))
    avg_away = data.get("avg_away_goals", data.get("avgAway"))
    if avg_home is None or avg_away is None:
        raise RequestFileError("league needs avg_home_goals and avg_away_goals")
    return LeagueBaseline(
        avg_home_goals=float(avg_home),
        avg_away_goals=float(avg_away),
        name=str(data.get("name", "")),
    )


def _team(data: Mapping[str, Any]) -> TeamSeasonStats:
    # Missing counts read as 0; the engine's safe-divide handles them
    values = {name: int(data.get(name) or 0) for name in TEAM_FIELDS}
    return TeamSeasonStats(name=str(data.get("name", "")), **values)


def _history(rows: Any) -> tuple[MatchHistoryEntry, ...]:
    entries = []
    for row in rows or []:
        entries.append(
            MatchHistoryEntry(
                match_number=int(row["match_number"]),
                goals_scored=int(row["goals_scored"]),
                goals_conceded=int(row["goals_conceded"]),
                was_home=bool(row.get("was_home", False)),
                points=int(row.get("points", 0)),
            )
        )
    return tuple(entries)


def parse_prediction_request(
    data: Mapping[str, Any],
) -> tuple[PredictionInputs, PredictionOverrides]:
    """
    Build predictor inputs from a request document.

    Raises:
        RequestFileError: If a required section is missing or malformed,
            or an override is not numeric
    """
    for section in ("league", "home_team", "away_team"):
        if not isinstance(data.get(section), Mapping):
            raise RequestFileError(f"Missing section: {section}")

    raw_overrides = data.get("overrides")
    if raw_overrides is not None and not isinstance(raw_overrides, Mapping):
        raise RequestFileError("overrides must be an object")

    try:
        inputs = PredictionInputs(
            league=_league(data["league"]),
            home_team=_team(data["home_team"]),
            away_team=_team(data["away_team"]),
            home_history=_history(data.get("home_history")),
            away_history=_history(data.get("away_history")),
        )
        overrides = PredictionOverrides.from_dict(raw_overrides)
    except (KeyError, TypeError, ValueError) as e:
        raise RequestFileError(f"Invalid request: {e}") from e

    return inputs, overrides


def load_prediction_request(
    path: Union[str, Path],
) -> tuple[PredictionInputs, PredictionOverrides]:
    """Read and parse a JSON request file."""
    with open(path, encoding="utf-8") as f:
        return parse_prediction_request(json.load(f))
