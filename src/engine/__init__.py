"""Prediction engine: Poisson kernels, scoreline models and value analysis."""

from src.engine.btts import analyze_btts, independent_btts_probability
from src.engine.expected_goals import estimate_expected_goals, estimate_lambda3
from src.engine.form import RegressionResult, TeamFormModel, analyze_team_form, linear_regression
from src.engine.goal_line import (
    analyze_goal_line,
    classify_goal_line,
    over_under_probabilities,
)
from src.engine.poisson import bivariate_poisson_pmf, poisson_pmf
from src.engine.predictor import MatchPredictor
from src.engine.scoreline import (
    bivariate_poisson_matrix,
    dixon_coles_matrix,
    dixon_coles_tau,
    poisson_matrix,
)
from src.engine.strength import TeamStrengths, safe_divide, strength
from src.engine.value import find_match_odds_value

__all__ = [
    "MatchPredictor",
    "RegressionResult",
    "TeamFormModel",
    "TeamStrengths",
    "analyze_btts",
    "analyze_goal_line",
    "analyze_team_form",
    "bivariate_poisson_matrix",
    "bivariate_poisson_pmf",
    "classify_goal_line",
    "dixon_coles_matrix",
    "dixon_coles_tau",
    "estimate_expected_goals",
    "estimate_lambda3",
    "find_match_odds_value",
    "independent_btts_probability",
    "linear_regression",
    "over_under_probabilities",
    "poisson_matrix",
    "poisson_pmf",
    "safe_divide",
    "strength",
]
