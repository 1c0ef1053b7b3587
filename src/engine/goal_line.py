"""
Total goals (over/under) line analysis.

Compares the model's total expected goals with a bookmaker line and
computes over/under probabilities by convolving the two Poisson rates.
"""

from dataclasses import dataclass
from typing import Optional

from src.engine.poisson import poisson_pmf
from src.models.prediction import Confidence, GoalLineAnalysis, Recommendation, ValueRating
from src.utils.odds import fair_odds

DEFAULT_LINE = 2.5
DEFAULT_MAX_TOTAL = 15

# Expected total must clear the line by more than this to recommend a side
LINE_MARGIN = 0.20
STRONG_DIFFERENCE = 0.5
GOOD_DIFFERENCE = 0.3


@dataclass(frozen=True)
class OverUnderProbabilities:
    """Probability mass either side of a goal line."""

    over_probability: float
    under_probability: float
    implied_over_odds: Optional[float]
    implied_under_odds: Optional[float]


@dataclass(frozen=True)
class GoalLineClassification:
    """Recommendation from comparing expected total goals with a line."""

    total_expected_goals: float
    bookie_line: float
    difference: float
    recommendation: Recommendation
    value_rating: ValueRating
    confidence: Confidence


def total_goals_probability(total: int, lam_home: float, lam_away: float) -> float:
    """P(home + away == total) under independent Poisson."""
    return sum(
        poisson_pmf(h, lam_home) * poisson_pmf(total - h, lam_away)
        for h in range(total + 1)
    )


def over_under_probabilities(
    lam_home: float,
    lam_away: float,
    line: float = DEFAULT_LINE,
    max_total: int = DEFAULT_MAX_TOTAL,
) -> OverUnderProbabilities:
    """
    Over/under probabilities for a total goals line.

    Totals above max_total are dropped; the tail is negligible for
    realistic rates. Correlation models are not applied here.
    """
    over_prob = 0.0
    under_prob = 0.0

    for total in range(max_total + 1):
        prob = total_goals_probability(total, lam_home, lam_away)
        if total > line:
            over_prob += prob
        else:
            under_prob += prob

    return OverUnderProbabilities(
        over_probability=over_prob,
        under_probability=under_prob,
        implied_over_odds=fair_odds(over_prob),
        implied_under_odds=fair_odds(under_prob),
    )


def _rate_difference(abs_diff: float) -> tuple[ValueRating, Confidence]:
    if abs_diff > STRONG_DIFFERENCE:
        return ValueRating.STRONG, Confidence.HIGH
    if abs_diff > GOOD_DIFFERENCE:
        return ValueRating.GOOD, Confidence.MEDIUM
    return ValueRating.SLIGHT, Confidence.LOW


def classify_goal_line(
    total_expected_goals: float,
    bookie_line: float = DEFAULT_LINE,
) -> GoalLineClassification:
    """
    Classify a goal line as OVER, UNDER or NO BET.

    Args:
        total_expected_goals: Model total expected goals
        bookie_line: Bookmaker line (e.g. 2.5)

    Returns:
        GoalLineClassification with value rating and confidence
    """
    difference = total_expected_goals - bookie_line

    if total_expected_goals > bookie_line + LINE_MARGIN:
        recommendation = Recommendation.OVER
        value_rating, confidence = _rate_difference(abs(difference))
    elif total_expected_goals < bookie_line - LINE_MARGIN:
        recommendation = Recommendation.UNDER
        value_rating, confidence = _rate_difference(abs(difference))
    else:
        recommendation = Recommendation.NO_BET
        value_rating = ValueRating.LINE_ACCURATE
        confidence = Confidence.NONE

    return GoalLineClassification(
        total_expected_goals=total_expected_goals,
        bookie_line=bookie_line,
        difference=difference,
        recommendation=recommendation,
        value_rating=value_rating,
        confidence=confidence,
    )


def analyze_goal_line(
    lam_home: float,
    lam_away: float,
    bookie_line: float = DEFAULT_LINE,
    max_total: int = DEFAULT_MAX_TOTAL,
) -> GoalLineAnalysis:
    """Classification and over/under probabilities for one line."""
    classification = classify_goal_line(lam_home + lam_away, bookie_line)
    probabilities = over_under_probabilities(lam_home, lam_away, bookie_line, max_total)

    return GoalLineAnalysis(
        total_expected_goals=classification.total_expected_goals,
        bookie_line=classification.bookie_line,
        difference=classification.difference,
        recommendation=classification.recommendation,
        value_rating=classification.value_rating,
        confidence=classification.confidence,
        over_probability=probabilities.over_probability,
        under_probability=probabilities.under_probability,
        implied_over_odds=probabilities.implied_over_odds,
        implied_under_odds=probabilities.implied_under_odds,
    )
