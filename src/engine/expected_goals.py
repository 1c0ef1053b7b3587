"""
Expected goals estimation.

Combines strength ratios, form modifiers and league averages into the
Poisson rates for each side, and estimates the bivariate covariance rate.
"""

from src.engine.strength import TeamStrengths
from src.models.prediction import ExpectedGoals, FormAnalysis
from src.models.stats import LeagueBaseline

# Predicted goal-difference gap is divided by this before being applied
REGRESSION_DAMPING = 4.0

DEFAULT_MIN_EXPECTED_GOALS = 0.1


def estimate_expected_goals(
    strengths: TeamStrengths,
    league: LeagueBaseline,
    home_form: FormAnalysis,
    away_form: FormAnalysis,
    min_expected_goals: float = DEFAULT_MIN_EXPECTED_GOALS,
) -> ExpectedGoals:
    """
    Calculate expected goals for both teams.

    Expected goals = (attack strength * form modifier) * opponent defence
    * league average, then nudged by the difference in form-predicted
    goal difference.

    Args:
        strengths: Strength ratios for the fixture
        league: League scoring baseline
        home_form: Home team form (neutral if no history)
        away_form: Away team form (neutral if no history)
        min_expected_goals: Floor keeping both rates valid for Poisson

    Returns:
        ExpectedGoals with both values >= min_expected_goals
    """
    home_attack = strengths.home_attack * home_form.form_modifier
    away_attack = strengths.away_attack * away_form.form_modifier

    home_exp_goals = home_attack * strengths.away_defense * league.avg_home_goals
    away_exp_goals = away_attack * strengths.home_defense * league.avg_away_goals

    adjustment = (home_form.predicted_gd - away_form.predicted_gd) / REGRESSION_DAMPING
    home_exp_goals += adjustment
    away_exp_goals -= adjustment

    return ExpectedGoals(
        home_exp_goals=max(min_expected_goals, home_exp_goals),
        away_exp_goals=max(min_expected_goals, away_exp_goals),
        regression_adjustment=adjustment,
    )


def estimate_lambda3(
    home_exp_goals: float,
    away_exp_goals: float,
    league: LeagueBaseline,
) -> float:
    """
    Heuristic covariance rate for the bivariate Poisson model.

    High-scoring games get a moderate positive covariance, low-scoring
    games -0.05 and everything else 0.10. The -0.05 is clamped to 0 when
    the joint distribution is built, so low-scoring games end up modelled
    as independent.
    """
    total_expected = home_exp_goals + away_exp_goals
    league_total = league.avg_total_goals

    if total_expected > league_total * 1.2:
        return min(0.15, home_exp_goals * 0.08, away_exp_goals * 0.08)
    if total_expected < league_total * 0.8:
        return -0.05
    return 0.10
