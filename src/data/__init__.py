"""Data services for fetching external statistics."""

from src.data.football_data import (
    NEW_FORMAT_LEAGUES,
    SEASON_LEAGUES,
    DataNotFoundError,
    FootballDataService,
    LeagueData,
    MatchResult,
    PredictionInputs,
    TeamRecord,
    parse_league_csv,
    recent_history,
)
from src.data.request_file import (
    RequestFileError,
    load_prediction_request,
    parse_prediction_request,
)

__all__ = [
    "DataNotFoundError",
    "FootballDataService",
    "LeagueData",
    "MatchResult",
    "NEW_FORMAT_LEAGUES",
    "PredictionInputs",
    "RequestFileError",
    "SEASON_LEAGUES",
    "TeamRecord",
    "load_prediction_request",
    "parse_league_csv",
    "parse_prediction_request",
    "recent_history",
]
