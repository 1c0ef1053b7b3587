"""Tests for expected goals and covariance estimation."""

import pytest

from src.engine.expected_goals import estimate_expected_goals, estimate_lambda3
from src.engine.strength import TeamStrengths
from src.models import FormAnalysis, Trend


def neutral():
    return FormAnalysis.neutral()


def test_average_teams_get_league_average(league, average_home_team, average_away_team):
    strengths = TeamStrengths.from_stats(league, average_home_team, average_away_team)
    xg = estimate_expected_goals(strengths, league, neutral(), neutral())

    assert xg.home_exp_goals == pytest.approx(1.5, abs=1e-6)
    assert xg.away_exp_goals == pytest.approx(1.2, abs=1e-6)
    assert xg.total == pytest.approx(2.7, abs=1e-6)
    assert xg.regression_adjustment == 0.0


def test_form_modifier_scales_attack(league):
    strengths = TeamStrengths(home_attack=1.0, away_attack=1.0, home_defense=1.0, away_defense=1.0)
    hot = FormAnalysis(form_modifier=1.2, trend=Trend.IMPROVING)
    cold = FormAnalysis(form_modifier=0.8, trend=Trend.DECLINING)

    xg = estimate_expected_goals(strengths, league, hot, cold)

    assert xg.home_exp_goals == pytest.approx(1.8)
    assert xg.away_exp_goals == pytest.approx(0.96)


def test_regression_adjustment_moves_goals_between_sides(league):
    strengths = TeamStrengths(home_attack=1.0, away_attack=1.0, home_defense=1.0, away_defense=1.0)
    home_form = FormAnalysis(predicted_gd=2.0)
    away_form = FormAnalysis(predicted_gd=0.0)

    xg = estimate_expected_goals(strengths, league, home_form, away_form)

    assert xg.regression_adjustment == pytest.approx(0.5)
    assert xg.home_exp_goals == pytest.approx(2.0)
    assert xg.away_exp_goals == pytest.approx(0.7)


def test_expected_goals_floored(league):
    strengths = TeamStrengths(0.0, 0.0, 0.0, 0.0)
    xg = estimate_expected_goals(strengths, league, neutral(), neutral())

    assert xg.home_exp_goals == 0.1
    assert xg.away_exp_goals == 0.1


def test_large_negative_adjustment_is_floored(league):
    strengths = TeamStrengths(1.0, 1.0, 1.0, 1.0)
    xg = estimate_expected_goals(
        strengths,
        league,
        FormAnalysis(predicted_gd=-10.0),
        FormAnalysis(predicted_gd=0.0),
    )

    assert xg.home_exp_goals == 0.1
    assert xg.away_exp_goals == pytest.approx(1.2 + 2.5)


def test_custom_floor(league):
    xg = estimate_expected_goals(
        TeamStrengths(0.0, 0.0, 0.0, 0.0), league, neutral(), neutral(), min_expected_goals=0.25
    )
    assert xg.home_exp_goals == 0.25


class TestLambda3:
    """Heuristic covariance estimate (league total 2.7)."""

    def test_high_scoring(self, league):
        # 4.0 > 2.7 * 1.2
        assert estimate_lambda3(2.5, 1.5, league) == pytest.approx(0.12)

    def test_high_scoring_capped(self, league):
        assert estimate_lambda3(2.5, 2.5, league) == pytest.approx(0.15)

    def test_low_scoring(self, league):
        # 1.8 < 2.7 * 0.8
        assert estimate_lambda3(1.0, 0.8, league) == -0.05

    def test_typical(self, league):
        assert estimate_lambda3(1.5, 1.2, league) == 0.10
