"""
Attack and defence strength normalisation.

Converts raw goal totals into ratios against the league average.
A ratio above 1 means the team scores (or concedes) more than average.
"""

from dataclasses import dataclass

from src.models.stats import LeagueBaseline, TeamSeasonStats


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, returning 0 when the denominator is 0."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def strength(goals: int, games_played: int, league_avg: float) -> float:
    """
    Team scoring (or conceding) rate relative to the league average.

    A team with no games played has zero demonstrated strength.

    Args:
        goals: Goals for (attack) or against (defence)
        games_played: Games the goals were spread over
        league_avg: League average goals per game for the comparison side

    Returns:
        Strength ratio (>= 0)
    """
    return safe_divide(safe_divide(goals, games_played), league_avg)


@dataclass(frozen=True)
class TeamStrengths:
    """The four strength ratios used for one fixture."""

    home_attack: float
    away_attack: float
    home_defense: float
    away_defense: float

    @classmethod
    def from_stats(
        cls,
        league: LeagueBaseline,
        home_team: TeamSeasonStats,
        away_team: TeamSeasonStats,
    ) -> "TeamStrengths":
        """
        Compute strengths for home_team hosting away_team.

        Conceding is compared with what an average side scores at that
        venue: the home defence against the league away average, the
        away defence against the league home average.
        """
        return cls(
            home_attack=strength(
                home_team.home_goals_for,
                home_team.home_games_played,
                league.avg_home_goals,
            ),
            away_attack=strength(
                away_team.away_goals_for,
                away_team.away_games_played,
                league.avg_away_goals,
            ),
            home_defense=strength(
                home_team.home_goals_against,
                home_team.home_games_played,
                league.avg_away_goals,
            ),
            away_defense=strength(
                away_team.away_goals_against,
                away_team.away_games_played,
                league.avg_home_goals,
            ),
        )
