"""Data models for the prediction engine."""

from src.models.prediction import (
    BTTSAnalysis,
    Confidence,
    ExpectedGoals,
    FormAnalysis,
    GoalLineAnalysis,
    MatchPrediction,
    OutcomeProbabilities,
    Recommendation,
    ScorelineCell,
    ScorelineMatrix,
    ScorelineModel,
    Trend,
    ValueRating,
    ValueSelection,
)
from src.models.stats import (
    LeagueBaseline,
    MatchHistoryEntry,
    PredictionOverrides,
    TeamSeasonStats,
)

__all__ = [
    # Input models
    "LeagueBaseline",
    "MatchHistoryEntry",
    "PredictionOverrides",
    "TeamSeasonStats",
    # Output models
    "BTTSAnalysis",
    "Confidence",
    "ExpectedGoals",
    "FormAnalysis",
    "GoalLineAnalysis",
    "MatchPrediction",
    "OutcomeProbabilities",
    "Recommendation",
    "ScorelineCell",
    "ScorelineMatrix",
    "ScorelineModel",
    "Trend",
    "ValueRating",
    "ValueSelection",
]
