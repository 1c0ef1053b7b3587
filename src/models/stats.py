"""
Team and league statistics data models.

These are the inputs to the prediction engine. They are plain immutable
records; where they come from (database, CSV, API) is up to the caller.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class LeagueBaseline:
    """League-wide scoring norms used to normalise team statistics."""

    avg_home_goals: float
    avg_away_goals: float
    name: str = ""

    @property
    def avg_total_goals(self) -> float:
        """Average total goals per match."""
        return self.avg_home_goals + self.avg_away_goals


@dataclass(frozen=True)
class TeamSeasonStats:
    """
    Season totals for one team, split by venue.

    Home and away are tracked separately because scoring rates differ
    systematically by venue.
    """

    home_goals_for: int = 0
    home_goals_against: int = 0
    home_games_played: int = 0
    away_goals_for: int = 0
    away_goals_against: int = 0
    away_games_played: int = 0
    name: str = ""

    @property
    def games_played(self) -> int:
        """Total games played."""
        return self.home_games_played + self.away_games_played


@dataclass(frozen=True)
class MatchHistoryEntry:
    """One recent match used for form analysis."""

    match_number: int  # Ascending = more recent
    goals_scored: int
    goals_conceded: int
    was_home: bool = False
    points: int = 0  # 3 win, 1 draw, 0 loss

    @property
    def goal_difference(self) -> int:
        """Goals scored minus goals conceded."""
        return self.goals_scored - self.goals_conceded

    @classmethod
    def from_score(
        cls,
        match_number: int,
        goals_scored: int,
        goals_conceded: int,
        was_home: bool,
    ) -> "MatchHistoryEntry":
        """Build an entry from a final score, deriving league points."""
        if goals_scored > goals_conceded:
            points = 3
        elif goals_scored == goals_conceded:
            points = 1
        else:
            points = 0
        return cls(
            match_number=match_number,
            goals_scored=goals_scored,
            goals_conceded=goals_conceded,
            was_home=was_home,
            points=points,
        )


@dataclass(frozen=True)
class PredictionOverrides:
    """
    Optional per-request parameters.

    Any field left as None falls back to the configured model defaults;
    a None lambda3 means "estimate it from expected goals".
    """

    rho: Optional[float] = None
    goal_line: Optional[float] = None
    btts_odds: Optional[float] = None
    lambda3: Optional[float] = None
    match_odds: Optional[Mapping[str, float]] = None  # 'home', 'draw', 'away'

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "PredictionOverrides":
        """
        Build overrides from a request payload (camelCase or snake_case keys).

        Raises:
            TypeError: If match odds are not a mapping
            ValueError: If a value cannot be read as a number
        """
        if not data:
            return cls()

        def pick(*keys: str) -> Any:
            for key in keys:
                if data.get(key) is not None:
                    return data[key]
            return None

        def number(*keys: str) -> Optional[float]:
            value = pick(*keys)
            return None if value is None else float(value)

        raw_odds = pick("match_odds", "matchOdds")
        if raw_odds is not None and not isinstance(raw_odds, Mapping):
            raise TypeError(f"match_odds must be a mapping, got {type(raw_odds).__name__}")
        match_odds = {
            str(k): float(v) for k, v in (raw_odds or {}).items() if v is not None
        }

        return cls(
            rho=number("rho"),
            goal_line=number("goal_line", "goalLine"),
            btts_odds=number("btts_odds", "bttsOdds"),
            lambda3=number("lambda3"),
            match_odds=match_odds or None,
        )
