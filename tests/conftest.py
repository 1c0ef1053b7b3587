"""Shared fixtures for engine tests."""

import pytest

from config import ModelSettings
from src.models import LeagueBaseline, MatchHistoryEntry, TeamSeasonStats


@pytest.fixture
def league():
    """League with 1.5 home / 1.2 away goals per game."""
    return LeagueBaseline(avg_home_goals=1.5, avg_away_goals=1.2, name="Test League")


@pytest.fixture
def average_home_team():
    """Home side scoring and conceding exactly at the league average."""
    return TeamSeasonStats(
        home_goals_for=15,
        home_goals_against=12,
        home_games_played=10,
        away_goals_for=12,
        away_goals_against=15,
        away_games_played=10,
        name="Average United",
    )


@pytest.fixture
def average_away_team():
    """Away side scoring and conceding exactly at the league average."""
    return TeamSeasonStats(
        home_goals_for=15,
        home_goals_against=12,
        home_games_played=10,
        away_goals_for=12,
        away_goals_against=15,
        away_games_played=10,
        name="Average City",
    )


@pytest.fixture
def model_settings():
    """Engine settings with the documented defaults."""
    return ModelSettings(
        rho=-0.13,
        goal_line=2.5,
        btts_odds=1.80,
        matrix_size=6,
        goal_line_max_total=15,
        btts_max_goals=10,
        min_expected_goals=0.1,
        value_min_edge=0.05,
    )


def make_history(goal_diffs, goals_scored=None):
    """History with match numbers 1..n and the given goal differences."""
    entries = []
    for i, gd in enumerate(goal_diffs):
        scored = goals_scored[i] if goals_scored else max(gd, 0) + 1
        entries.append(
            MatchHistoryEntry.from_score(
                match_number=i + 1,
                goals_scored=scored,
                goals_conceded=scored - gd,
                was_home=i % 2 == 0,
            )
        )
    return entries
