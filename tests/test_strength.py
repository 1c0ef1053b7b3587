"""Tests for strength normalisation."""

import pytest

from src.engine.strength import TeamStrengths, safe_divide, strength
from src.models import LeagueBaseline, TeamSeasonStats


def test_safe_divide():
    assert safe_divide(3, 2) == 1.5
    assert safe_divide(3, 0) == 0.0


def test_strength_zero_games_is_zero():
    assert strength(0, 0, 1.5) == 0.0
    assert strength(10, 0, 1.5) == 0.0


def test_strength_zero_league_average_is_zero():
    assert strength(10, 5, 0.0) == 0.0


def test_strength_ratio():
    # 2 goals per game against a 1.5 average
    assert strength(20, 10, 1.5) == pytest.approx(2.0 / 1.5)


def test_team_strengths_average_teams(league, average_home_team, average_away_team):
    strengths = TeamStrengths.from_stats(league, average_home_team, average_away_team)

    assert strengths.home_attack == pytest.approx(1.0)
    assert strengths.away_attack == pytest.approx(1.0)
    assert strengths.home_defense == pytest.approx(1.0)
    assert strengths.away_defense == pytest.approx(1.0)


def test_team_strengths_use_venue_baselines():
    league = LeagueBaseline(avg_home_goals=2.0, avg_away_goals=1.0)
    home = TeamSeasonStats(home_goals_for=30, home_goals_against=5, home_games_played=10)
    away = TeamSeasonStats(away_goals_for=8, away_goals_against=40, away_games_played=10)

    strengths = TeamStrengths.from_stats(league, home, away)

    assert strengths.home_attack == pytest.approx(3.0 / 2.0)
    assert strengths.home_defense == pytest.approx(0.5 / 1.0)
    assert strengths.away_attack == pytest.approx(0.8 / 1.0)
    assert strengths.away_defense == pytest.approx(4.0 / 2.0)


def test_team_strengths_no_games(league):
    strengths = TeamStrengths.from_stats(league, TeamSeasonStats(), TeamSeasonStats())
    assert strengths == TeamStrengths(0.0, 0.0, 0.0, 0.0)
