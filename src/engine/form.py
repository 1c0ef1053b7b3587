"""
Team Form Model.

Fits a linear trend to a team's recent results and turns it into a
trend label, a bounded expected-goals multiplier and a predicted goal
difference for the next match.
"""

from dataclasses import dataclass
from typing import Sequence

from src.models.prediction import FormAnalysis, Trend
from src.models.stats import MatchHistoryEntry


@dataclass(frozen=True)
class RegressionResult:
    """Ordinary least squares fit of y on x."""

    slope: float
    intercept: float
    r2: float

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept


def linear_regression(x_values: Sequence[float], y_values: Sequence[float]) -> RegressionResult:
    """
    Fit y = slope * x + intercept by ordinary least squares.

    Args:
        x_values: Independent variable
        y_values: Dependent variable, same length as x_values

    Returns:
        RegressionResult. Empty input gives all zeros; identical x values
        give slope 0 and intercept mean(y).
    """
    n = len(x_values)
    if n == 0:
        return RegressionResult(slope=0.0, intercept=0.0, r2=0.0)

    sum_x = sum(x_values)
    sum_y = sum(y_values)
    sum_xy = sum(x * y for x, y in zip(x_values, y_values))
    sum_x2 = sum(x * x for x in x_values)

    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0:
        return RegressionResult(slope=0.0, intercept=sum_y / n, r2=0.0)

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n

    mean_y = sum_y / n
    ss_total = sum((y - mean_y) ** 2 for y in y_values)
    ss_residual = sum(
        (y - (slope * x + intercept)) ** 2 for x, y in zip(x_values, y_values)
    )
    r2 = 1 - ss_residual / ss_total if ss_total != 0 else 0.0

    return RegressionResult(slope=slope, intercept=intercept, r2=r2)


class TeamFormModel:
    """
    Regression-based form model for football teams.

    The goal-difference slope is the primary signal; the goals-scored
    slope is reported alongside it for reference.
    """

    IMPROVING_THRESHOLD = 0.25
    DECLINING_THRESHOLD = -0.25

    # Modifier = 1 + slope * weight, capped so form stays secondary to
    # the season-long strength ratios
    MODIFIER_WEIGHT = 0.4
    MIN_MODIFIER = 0.80
    MAX_MODIFIER = 1.20

    def classify_trend(self, gd_slope: float) -> Trend:
        """Map a goal-difference slope onto a trend label."""
        if gd_slope > self.IMPROVING_THRESHOLD:
            return Trend.IMPROVING
        if gd_slope < self.DECLINING_THRESHOLD:
            return Trend.DECLINING
        return Trend.NEUTRAL

    def form_modifier(self, gd_slope: float) -> float:
        """Bounded multiplicative nudge applied to attack strength."""
        # Applied for any slope, including inside the +/-0.25 neutral band where
        # an older rule kept 1.0
        modifier = 1.0 + gd_slope * self.MODIFIER_WEIGHT
        return max(self.MIN_MODIFIER, min(self.MAX_MODIFIER, modifier))

    def analyze(self, history: Sequence[MatchHistoryEntry]) -> FormAnalysis:
        """
        Analyse a team's recent matches.

        Args:
            history: Recent matches in any order (re-sorted by match_number)

        Returns:
            FormAnalysis; neutral when history is empty
        """
        if not history:
            return FormAnalysis.neutral()

        matches = sorted(history, key=lambda m: m.match_number)
        n = len(matches)

        x_values = [m.match_number for m in matches]
        goals_scored = [m.goals_scored for m in matches]
        goals_conceded = [m.goals_conceded for m in matches]
        goal_diffs = [m.goal_difference for m in matches]
        points = [m.points for m in matches]

        goals_fit = linear_regression(x_values, goals_scored)
        gd_fit = linear_regression(x_values, goal_diffs)

        # One step past the sample: match numbers are expected to run 1..n
        predicted_gd = gd_fit.predict(n + 1)

        return FormAnalysis(
            slope=goals_fit.slope,
            intercept=goals_fit.intercept,
            gd_slope=gd_fit.slope,
            gd_intercept=gd_fit.intercept,
            r2=gd_fit.r2,
            predicted_gd=predicted_gd,
            trend=self.classify_trend(gd_fit.slope),
            form_modifier=self.form_modifier(gd_fit.slope),
            avg_goals_scored=sum(goals_scored) / n,
            avg_goals_conceded=sum(goals_conceded) / n,
            avg_points=sum(points) / n,
            match_data=tuple(matches),
        )


_default_model = TeamFormModel()


def analyze_team_form(history: Sequence[MatchHistoryEntry]) -> FormAnalysis:
    """Analyse form with the default thresholds."""
    return _default_model.analyze(history)
