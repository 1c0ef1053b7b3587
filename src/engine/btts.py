"""
Both Teams To Score analysis.

Derives P(BTTS yes) from the bivariate Poisson blank probabilities and
compares the implied fair price with the bookmaker's BTTS-yes odds.
"""

import math
from typing import Optional

from src.engine.poisson import bivariate_poisson_pmf, clamp_lambda3
from src.models.prediction import BTTSAnalysis, Confidence, Recommendation, ValueRating
from src.utils.odds import fair_odds

DEFAULT_BTTS_ODDS = 1.80
DEFAULT_MAX_GOALS = 10

# (minimum bookie - fair difference, rating, confidence), checked in order
YES_VALUE_TIERS = (
    (0.30, ValueRating.STRONG, Confidence.HIGH),
    (0.15, ValueRating.GOOD, Confidence.MEDIUM),
    (0.05, ValueRating.SLIGHT, Confidence.LOW),
)
NO_VALUE_THRESHOLD = -0.20


def independent_btts_probability(lam_home: float, lam_away: float) -> float:
    """P(both score) assuming independent Poisson goals."""
    return (1 - math.exp(-lam_home)) * (1 - math.exp(-lam_away))


def _classify(
    fair: Optional[float],
    bookie_odds: Optional[float],
) -> tuple[Recommendation, ValueRating, Confidence, float]:
    if not bookie_odds or fair is None:
        return Recommendation.NO_BET, ValueRating.NO_VALUE, Confidence.NONE, 0.0

    value_diff = bookie_odds - fair
    for threshold, rating, confidence in YES_VALUE_TIERS:
        if value_diff > threshold:
            return Recommendation.BTTS_YES, rating, confidence, value_diff

    if value_diff < NO_VALUE_THRESHOLD:
        # Bookie prices "yes" shorter than fair, so the "no" side is the lean
        return Recommendation.BTTS_NO, ValueRating.UNDERPRICED_YES, Confidence.NONE, value_diff

    return Recommendation.NO_BET, ValueRating.NO_VALUE, Confidence.NONE, value_diff


def analyze_btts(
    lam_home: float,
    lam_away: float,
    lam3: float,
    bookie_odds: Optional[float] = DEFAULT_BTTS_ODDS,
    max_goals: int = DEFAULT_MAX_GOALS,
) -> BTTSAnalysis:
    """
    Analyse the BTTS market.

    Args:
        lam_home: Home expected goals
        lam_away: Away expected goals
        lam3: Covariance rate; 0 (or anything clamped to 0) is independent
        bookie_odds: Bookmaker decimal odds for BTTS yes
        max_goals: Highest opponent score summed for the blank probabilities

    Returns:
        BTTSAnalysis with probabilities, fair odds and recommendation
    """
    prob_0_0 = bivariate_poisson_pmf(0, 0, lam_home, lam_away, lam3)
    prob_home_zero = sum(
        bivariate_poisson_pmf(0, k, lam_home, lam_away, lam3) for k in range(max_goals + 1)
    )
    prob_away_zero = sum(
        bivariate_poisson_pmf(k, 0, lam_home, lam_away, lam3) for k in range(max_goals + 1)
    )

    prob_no = prob_home_zero + prob_away_zero - prob_0_0
    prob_yes = 1 - prob_no
    fair = fair_odds(prob_yes)

    recommendation, value_rating, confidence, expected_value = _classify(fair, bookie_odds)

    # Reports the model actually used: a negative lam3 (the low-scoring
    # estimate) is clamped to 0, so it reads as independent even though the
    # raw lam3 is echoed back nonzero
    if clamp_lambda3(lam_home, lam_away, lam3) > 0:
        model_type = "Bivariate Poisson"
    else:
        model_type = "Independent Poisson"

    return BTTSAnalysis(
        prob_yes=prob_yes,
        prob_no=prob_no,
        prob_home_zero=prob_home_zero,
        prob_away_zero=prob_away_zero,
        independent_prob_yes=independent_btts_probability(lam_home, lam_away),
        lambda3=lam3,
        model_type=model_type,
        fair_odds=fair,
        bookie_odds=bookie_odds,
        expected_value=expected_value,
        recommendation=recommendation,
        value_rating=value_rating,
        confidence=confidence,
    )
