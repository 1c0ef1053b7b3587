"""
Prediction output data models.

Every record here is built fresh per prediction and never mutated.
The ``to_dict`` methods produce the consumer view (camelCase keys,
display rounding); the dataclass fields keep full precision.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from src.models.stats import MatchHistoryEntry


class Trend(str, Enum):
    """Direction of a team's recent goal-difference trend."""

    IMPROVING = "improving"
    DECLINING = "declining"
    NEUTRAL = "neutral"


class Recommendation(str, Enum):
    """Market recommendation."""

    OVER = "OVER"
    UNDER = "UNDER"
    NO_BET = "NO BET"
    BTTS_YES = "BET BTTS YES"
    BTTS_NO = "CONSIDER BTTS NO"


class ValueRating(str, Enum):
    """How far the market price is from the model's fair price."""

    STRONG = "STRONG VALUE"
    GOOD = "GOOD VALUE"
    SLIGHT = "SLIGHT VALUE"
    LINE_ACCURATE = "LINE IS ACCURATE"
    NO_VALUE = "NO CLEAR VALUE"
    UNDERPRICED_YES = "UNDERPRICED YES"


class Confidence(str, Enum):
    """Confidence attached to a recommendation."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    NONE = "N/A"


class ScorelineModel(str, Enum):
    """Available joint scoreline models."""

    POISSON = "poisson"
    DIXON_COLES = "dixonColes"
    BIVARIATE_POISSON = "bivariatePoisson"


def _round(value: Optional[float], digits: int) -> Optional[float]:
    if value is None:
        return None
    return round(value, digits)


def _percent(prob: float) -> float:
    return round(prob * 100, 2)


@dataclass(frozen=True)
class FormAnalysis:
    """Regression-based summary of a team's recent matches."""

    slope: float = 0.0  # Goals scored per match number
    intercept: float = 0.0
    gd_slope: float = 0.0  # Goal difference per match number
    gd_intercept: float = 0.0
    r2: float = 0.0  # Fit quality of the goal-difference regression
    predicted_gd: float = 0.0
    trend: Trend = Trend.NEUTRAL
    form_modifier: float = 1.0
    avg_goals_scored: float = 0.0
    avg_goals_conceded: float = 0.0
    avg_points: float = 0.0
    match_data: tuple[MatchHistoryEntry, ...] = ()

    @classmethod
    def neutral(cls) -> "FormAnalysis":
        """Analysis used when a team has no recent history."""
        return cls()

    def to_dict(self) -> dict[str, Any]:
        return {
            "avgGoalsScored": round(self.avg_goals_scored, 2),
            "avgGoalsConceded": round(self.avg_goals_conceded, 2),
            "avgPoints": round(self.avg_points, 2),
            "slope": round(self.slope, 3),
            "intercept": round(self.intercept, 3),
            "gdSlope": round(self.gd_slope, 3),
            "gdIntercept": round(self.gd_intercept, 3),
            "r2": round(self.r2, 3),
            "predictedGD": round(self.predicted_gd, 2),
            "trend": self.trend.value,
            "formModifier": round(self.form_modifier, 3),
            "matchData": [
                {
                    "matchNumber": m.match_number,
                    "goalsScored": m.goals_scored,
                    "goalsConceded": m.goals_conceded,
                    "goalDiff": m.goal_difference,
                    "points": m.points,
                    "wasHome": m.was_home,
                }
                for m in self.match_data
            ],
        }


@dataclass(frozen=True)
class ExpectedGoals:
    """Poisson rate parameters for both sides. Always strictly positive."""

    home_exp_goals: float
    away_exp_goals: float
    regression_adjustment: float = 0.0

    @property
    def total(self) -> float:
        """Total expected goals in the match."""
        return self.home_exp_goals + self.away_exp_goals


@dataclass(frozen=True)
class ScorelineCell:
    """Probability of one exact scoreline."""

    h: int
    a: int
    prob: float
    adjustment: Optional[float] = None  # Dixon-Coles tau, when applied

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"h": self.h, "a": self.a, "prob": self.prob}
        if self.adjustment is not None:
            data["adjustment"] = self.adjustment
        return data


@dataclass(frozen=True)
class OutcomeProbabilities:
    """Home win, draw and away win probabilities summed from a grid."""

    home_win_prob: float
    draw_prob: float
    away_win_prob: float

    @property
    def total(self) -> float:
        return self.home_win_prob + self.draw_prob + self.away_win_prob


@dataclass(frozen=True)
class ScorelineMatrix:
    """
    Truncated scoreline grid plus aggregated 1X2 probabilities.

    Rows are home goals, columns away goals. Scores above the grid are
    excluded, so the cells sum to slightly less than 1.
    """

    model: ScorelineModel
    cells: tuple[tuple[ScorelineCell, ...], ...]
    home_win_prob: float
    draw_prob: float
    away_win_prob: float

    @property
    def size(self) -> int:
        return len(self.cells)

    @property
    def outcomes(self) -> OutcomeProbabilities:
        return OutcomeProbabilities(self.home_win_prob, self.draw_prob, self.away_win_prob)

    def prob(self, h: int, a: int) -> float:
        """Probability of the scoreline h-a."""
        return self.cells[h][a].prob

    @property
    def total_prob(self) -> float:
        """Probability mass captured by the grid."""
        return sum(cell.prob for row in self.cells for cell in row)

    def most_likely(self) -> ScorelineCell:
        """Most probable scoreline on the grid."""
        return max((cell for row in self.cells for cell in row), key=lambda c: c.prob)

    def to_dict(self) -> dict[str, Any]:
        return {
            "homeWinProb": self.home_win_prob,
            "drawProb": self.draw_prob,
            "awayWinProb": self.away_win_prob,
            "matrix": [[cell.to_dict() for cell in row] for row in self.cells],
        }


@dataclass(frozen=True)
class GoalLineAnalysis:
    """Total goals line classification merged with over/under probabilities."""

    total_expected_goals: float
    bookie_line: float
    difference: float
    recommendation: Recommendation
    value_rating: ValueRating
    confidence: Confidence
    over_probability: float
    under_probability: float
    implied_over_odds: Optional[float]
    implied_under_odds: Optional[float]

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalExpectedGoals": round(self.total_expected_goals, 2),
            "bookieLine": self.bookie_line,
            "difference": round(self.difference, 2),
            "recommendation": self.recommendation.value,
            "valueRating": self.value_rating.value,
            "confidence": self.confidence.value,
            "overProbability": _percent(self.over_probability),
            "underProbability": _percent(self.under_probability),
            "impliedOverOdds": _round(self.implied_over_odds, 2),
            "impliedUnderOdds": _round(self.implied_under_odds, 2),
        }


@dataclass(frozen=True)
class BTTSAnalysis:
    """Both-teams-to-score probabilities and value assessment."""

    prob_yes: float
    prob_no: float
    prob_home_zero: float
    prob_away_zero: float
    independent_prob_yes: float  # Comparison only, never drives the pick
    lambda3: float
    model_type: str
    fair_odds: Optional[float]
    bookie_odds: Optional[float]
    expected_value: float
    recommendation: Recommendation
    value_rating: ValueRating
    confidence: Confidence

    def to_dict(self) -> dict[str, Any]:
        return {
            "probBTTS_Yes": _percent(self.prob_yes),
            "probBTTS_No": _percent(self.prob_no),
            "probHomeZero": _percent(self.prob_home_zero),
            "probAwayZero": _percent(self.prob_away_zero),
            "independentProbBTTS_Yes": _percent(self.independent_prob_yes),
            "lambda3": round(self.lambda3, 3),
            "modelType": self.model_type,
            "fairOddsBTTS_Yes": _round(self.fair_odds, 2),
            "bookieOddsYes": self.bookie_odds,
            "expectedValue": round(self.expected_value, 2),
            "recommendation": self.recommendation.value,
            "valueRating": self.value_rating.value,
            "confidence": self.confidence.value,
        }


@dataclass(frozen=True)
class ValueSelection:
    """A 1X2 selection whose model probability beats the market price."""

    selection: str  # 'home', 'draw' or 'away'
    model_prob: float
    implied_prob: float
    edge: float
    odds: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "selection": self.selection,
            "modelProb": round(self.model_prob, 4),
            "impliedProb": round(self.implied_prob, 4),
            "edge": round(self.edge, 4),
            "odds": self.odds,
        }


@dataclass(frozen=True)
class MatchPrediction:
    """Complete output of one prediction call."""

    expected_goals: ExpectedGoals
    rho: float
    lambda3: float
    home_form: FormAnalysis
    away_form: FormAnalysis
    poisson: ScorelineMatrix
    dixon_coles: ScorelineMatrix
    bivariate_poisson: ScorelineMatrix
    goal_line: GoalLineAnalysis
    btts: BTTSAnalysis
    value_bets: tuple[ValueSelection, ...] = field(default_factory=tuple)

    @property
    def home_exp_goals(self) -> float:
        return self.expected_goals.home_exp_goals

    @property
    def away_exp_goals(self) -> float:
        return self.expected_goals.away_exp_goals

    @property
    def total_expected_goals(self) -> float:
        return self.expected_goals.total

    def to_dict(self) -> dict[str, Any]:
        """Consumer view, including the flat Dixon-Coles keys older clients read."""
        dixon_coles = self.dixon_coles.to_dict()
        return {
            "homeExpGoals": round(self.home_exp_goals, 2),
            "awayExpGoals": round(self.away_exp_goals, 2),
            "totalExpectedGoals": round(self.total_expected_goals, 2),
            "rho": self.rho,
            "lambda3": self.lambda3,
            "homeForm": self.home_form.to_dict(),
            "awayForm": self.away_form.to_dict(),
            "regressionAdjustment": round(self.expected_goals.regression_adjustment, 2),
            "poisson": self.poisson.to_dict(),
            "dixonColes": dixon_coles,
            "bivariatePoisson": self.bivariate_poisson.to_dict(),
            "trueGoalLine": self.goal_line.to_dict(),
            "btts": self.btts.to_dict(),
            "valueBets": [v.to_dict() for v in self.value_bets],
            # Legacy flat view
            "homeWinProb": dixon_coles["homeWinProb"],
            "drawProb": dixon_coles["drawProb"],
            "awayWinProb": dixon_coles["awayWinProb"],
            "matrix": dixon_coles["matrix"],
        }
