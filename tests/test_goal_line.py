"""Tests for over/under goal-line analysis."""

import math

import pytest

from src.engine.goal_line import (
    analyze_goal_line,
    classify_goal_line,
    over_under_probabilities,
    total_goals_probability,
)
from src.engine.poisson import poisson_pmf
from src.models import Confidence, Recommendation, ValueRating


class TestOverUnderProbabilities:
    """Convolution of the two Poisson rates."""

    def test_total_goals_is_poisson_of_summed_rate(self):
        for total in range(8):
            assert total_goals_probability(total, 1.5, 1.2) == pytest.approx(poisson_pmf(total, 2.7))

    def test_over_25(self):
        probs = over_under_probabilities(1.5, 1.2, line=2.5)
        under = sum(poisson_pmf(k, 2.7) for k in range(3))

        assert probs.under_probability == pytest.approx(under)
        assert probs.over_probability == pytest.approx(1 - under, abs=1e-6)
        assert probs.over_probability + probs.under_probability == pytest.approx(1.0, abs=1e-6)

    def test_implied_odds(self):
        probs = over_under_probabilities(1.5, 1.2, line=2.5)

        assert probs.implied_over_odds == pytest.approx(1 / probs.over_probability)
        assert probs.implied_under_odds == pytest.approx(1 / probs.under_probability)

    def test_whole_number_line_counts_push_as_under(self):
        probs = over_under_probabilities(1.5, 1.2, line=3.0)
        under = sum(poisson_pmf(k, 2.7) for k in range(4))
        assert probs.under_probability == pytest.approx(under)

    def test_line_above_truncation_has_no_over_odds(self):
        probs = over_under_probabilities(1.5, 1.2, line=20.5)

        assert probs.over_probability == 0.0
        assert probs.implied_over_odds is None
        assert probs.implied_under_odds is not None


class TestClassifyGoalLine:
    """Goal-line recommendation thresholds."""

    def test_exact_half_goal_difference_is_good_not_strong(self):
        result = classify_goal_line(3.0, 2.5)

        assert result.difference == 0.5
        assert result.recommendation == Recommendation.OVER
        assert result.value_rating == ValueRating.GOOD
        assert result.confidence == Confidence.MEDIUM

    def test_strong_over(self):
        result = classify_goal_line(3.1, 2.5)

        assert result.recommendation == Recommendation.OVER
        assert result.value_rating == ValueRating.STRONG
        assert result.confidence == Confidence.HIGH

    def test_exact_point_three_difference_is_slight(self):
        result = classify_goal_line(0.3, 0.0)

        assert result.difference == 0.3
        assert result.recommendation == Recommendation.OVER
        assert result.value_rating == ValueRating.SLIGHT
        assert result.confidence == Confidence.LOW

    def test_slight_over(self):
        result = classify_goal_line(2.75, 2.5)

        assert result.recommendation == Recommendation.OVER
        assert result.value_rating == ValueRating.SLIGHT

    def test_under(self):
        result = classify_goal_line(1.9, 2.5)

        assert result.recommendation == Recommendation.UNDER
        assert result.value_rating == ValueRating.STRONG
        assert result.confidence == Confidence.HIGH
        assert result.difference == pytest.approx(-0.6)

    def test_good_under(self):
        result = classify_goal_line(2.1, 2.5)

        assert result.recommendation == Recommendation.UNDER
        assert result.value_rating == ValueRating.GOOD

    @pytest.mark.parametrize("total", [2.5, 2.6, 2.4, 2.65])
    def test_inside_margin_is_no_bet(self, total):
        result = classify_goal_line(total, 2.5)

        assert result.recommendation == Recommendation.NO_BET
        assert result.value_rating == ValueRating.LINE_ACCURATE
        assert result.confidence == Confidence.NONE


def test_analyze_goal_line_merges_classification_and_probabilities():
    analysis = analyze_goal_line(1.8, 1.4, bookie_line=2.5)

    assert analysis.total_expected_goals == pytest.approx(3.2)
    assert analysis.recommendation == Recommendation.OVER
    assert analysis.over_probability == pytest.approx(1 - sum(poisson_pmf(k, 3.2) for k in range(3)), abs=1e-6)

    data = analysis.to_dict()
    assert data["bookieLine"] == 2.5
    assert data["recommendation"] == "OVER"
    assert data["overProbability"] == round(analysis.over_probability * 100, 2)
    assert math.isclose(data["impliedOverOdds"], round(1 / analysis.over_probability, 2))
