"""
Match Predictor.

Single prediction pipeline: strengths and form feed expected goals,
which feed the three scoreline models, the goal-line analysis and the
BTTS analysis. Holds configuration only, no per-match state.
"""

from typing import Optional, Sequence

from config import ModelSettings, settings
from config.logging_config import get_logger
from src.engine.btts import analyze_btts
from src.engine.expected_goals import estimate_expected_goals, estimate_lambda3
from src.engine.form import TeamFormModel
from src.engine.goal_line import analyze_goal_line
from src.engine.scoreline import bivariate_poisson_matrix, dixon_coles_matrix, poisson_matrix
from src.engine.strength import TeamStrengths
from src.engine.value import find_match_odds_value
from src.models.prediction import MatchPrediction
from src.models.stats import (
    LeagueBaseline,
    MatchHistoryEntry,
    PredictionOverrides,
    TeamSeasonStats,
)

logger = get_logger(__name__)


class MatchPredictor:
    """
    Football match predictor.

    Turns season statistics and optional recent history into expected
    goals, scoreline probabilities and goal-line/BTTS value assessments.
    """

    def __init__(
        self,
        model_settings: Optional[ModelSettings] = None,
        form_model: Optional[TeamFormModel] = None,
    ) -> None:
        """
        Initialize the predictor.

        Args:
            model_settings: Engine defaults (default from settings)
            form_model: Form model (default thresholds if not given)
        """
        self.config = model_settings or settings.model
        self.form_model = form_model or TeamFormModel()

    def predict(
        self,
        league: LeagueBaseline,
        home_team: TeamSeasonStats,
        away_team: TeamSeasonStats,
        home_history: Sequence[MatchHistoryEntry] = (),
        away_history: Sequence[MatchHistoryEntry] = (),
        overrides: Optional[PredictionOverrides] = None,
    ) -> MatchPrediction:
        """
        Predict a match.

        Args:
            league: League scoring baseline
            home_team: Home team season stats
            away_team: Away team season stats
            home_history: Home team recent matches (empty = no form adjustment)
            away_history: Away team recent matches
            overrides: Per-request rho, goal line, BTTS odds, lambda3, 1X2 odds

        Returns:
            MatchPrediction with every model block
        """
        overrides = overrides or PredictionOverrides()
        rho = self.config.rho if overrides.rho is None else overrides.rho
        goal_line = self.config.goal_line if overrides.goal_line is None else overrides.goal_line
        btts_odds = self.config.btts_odds if overrides.btts_odds is None else overrides.btts_odds

        strengths = TeamStrengths.from_stats(league, home_team, away_team)
        home_form = self.form_model.analyze(home_history)
        away_form = self.form_model.analyze(away_history)

        expected = estimate_expected_goals(
            strengths,
            league,
            home_form,
            away_form,
            min_expected_goals=self.config.min_expected_goals,
        )
        lam_home = expected.home_exp_goals
        lam_away = expected.away_exp_goals

        if overrides.lambda3 is None:
            lambda3 = estimate_lambda3(lam_home, lam_away, league)
        else:
            lambda3 = overrides.lambda3

        logger.debug(
            "Expected goals estimated",
            home_attack=round(strengths.home_attack, 3),
            away_attack=round(strengths.away_attack, 3),
            home_defense=round(strengths.home_defense, 3),
            away_defense=round(strengths.away_defense, 3),
            home_trend=home_form.trend.value,
            away_trend=away_form.trend.value,
            regression_adjustment=round(expected.regression_adjustment, 3),
            home_xg=round(lam_home, 3),
            away_xg=round(lam_away, 3),
            lambda3=lambda3,
        )

        size = self.config.matrix_size
        poisson = poisson_matrix(lam_home, lam_away, size=size)
        dixon_coles = dixon_coles_matrix(lam_home, lam_away, rho=rho, size=size)
        bivariate = bivariate_poisson_matrix(lam_home, lam_away, lambda3, size=size)

        goal_line_analysis = analyze_goal_line(
            lam_home,
            lam_away,
            bookie_line=goal_line,
            max_total=self.config.goal_line_max_total,
        )
        btts = analyze_btts(
            lam_home,
            lam_away,
            lambda3,
            bookie_odds=btts_odds,
            max_goals=self.config.btts_max_goals,
        )
        value_bets = find_match_odds_value(
            dixon_coles.outcomes,
            overrides.match_odds,
            min_edge=self.config.value_min_edge,
        )

        logger.info(
            "Match predicted",
            home=home_team.name or None,
            away=away_team.name or None,
            home_xg=round(lam_home, 2),
            away_xg=round(lam_away, 2),
            home_win=round(dixon_coles.home_win_prob, 3),
            draw=round(dixon_coles.draw_prob, 3),
            away_win=round(dixon_coles.away_win_prob, 3),
            goal_line=goal_line_analysis.recommendation.value,
            btts=btts.recommendation.value,
            value_bets=len(value_bets),
        )

        return MatchPrediction(
            expected_goals=expected,
            rho=rho,
            lambda3=lambda3,
            home_form=home_form,
            away_form=away_form,
            poisson=poisson,
            dixon_coles=dixon_coles,
            bivariate_poisson=bivariate,
            goal_line=goal_line_analysis,
            btts=btts,
            value_bets=tuple(value_bets),
        )
