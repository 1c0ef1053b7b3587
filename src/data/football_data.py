"""
Football Data Service.

Fetches and caches results from football-data.co.uk and turns them into
prediction inputs: league baselines, venue-split team stats and recent
match history.
"""

import asyncio
import csv
import io
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional

import httpx

from config import DataSettings, settings
from config.logging_config import get_logger
from src.models.stats import LeagueBaseline, MatchHistoryEntry, TeamSeasonStats
from src.utils.retries import with_async_retry

logger = get_logger(__name__)

BASE_URL = "https://www.football-data.co.uk"

# Leagues published per season folder: /mmz4281/<season>/<code>.csv
SEASON_LEAGUES = {
    "E0": "Premier League",
    "E1": "Championship",
    "E2": "League One",
    "E3": "League Two",
    "EC": "National League",
    "SC0": "Scottish Premiership",
    "SC1": "Scottish Championship",
    "SC2": "Scottish League One",
    "SC3": "Scottish League Two",
    "SP1": "La Liga",
    "SP2": "Segunda Division",
    "D1": "Bundesliga",
    "D2": "2. Bundesliga",
    "I1": "Serie A",
    "I2": "Serie B",
    "F1": "Ligue 1",
    "F2": "Ligue 2",
    "P1": "Primeira Liga",
    "N1": "Eredivisie",
    "B1": "Jupiler Pro League",
    "T1": "Super Lig",
    "G1": "Super League Greece",
}

# Leagues published as one multi-season file: /new/<code>.csv
NEW_FORMAT_LEAGUES = {
    "AUT": "Austrian Bundesliga",
    "DNK": "Danish Superliga",
    "SWZ": "Swiss Super League",
}

DEFAULT_AVG_HOME_GOALS = 1.5
DEFAULT_AVG_AWAY_GOALS = 1.2

DATE_FORMATS = ("%d/%m/%Y", "%d/%m/%y", "%Y-%m-%d")


class DataNotFoundError(LookupError):
    """A league or team could not be resolved from the data source."""


@dataclass
class MatchResult:
    """Result of a completed match."""

    home_team: str
    away_team: str
    home_goals: int
    away_goals: int
    match_date: Optional[datetime] = None

    @property
    def total_goals(self) -> int:
        """Total goals scored in the match."""
        return self.home_goals + self.away_goals


@dataclass
class TeamRecord:
    """Running venue-split totals for one team."""

    team_name: str

    home_played: int = 0
    home_goals_for: int = 0
    home_goals_against: int = 0

    away_played: int = 0
    away_goals_for: int = 0
    away_goals_against: int = 0

    def to_season_stats(self) -> TeamSeasonStats:
        return TeamSeasonStats(
            home_goals_for=self.home_goals_for,
            home_goals_against=self.home_goals_against,
            home_games_played=self.home_played,
            away_goals_for=self.away_goals_for,
            away_goals_against=self.away_goals_against,
            away_games_played=self.away_played,
            name=self.team_name,
        )


@dataclass
class LeagueData:
    """Parsed results and totals for an entire league season."""

    league_code: str
    teams: dict[str, TeamRecord] = field(default_factory=dict)
    match_results: list[MatchResult] = field(default_factory=list)
    total_matches: int = 0
    total_home_goals: int = 0
    total_away_goals: int = 0
    last_updated: Optional[datetime] = None

    @property
    def avg_home_goals(self) -> float:
        """League average home goals per match."""
        if self.total_matches == 0:
            return DEFAULT_AVG_HOME_GOALS
        return self.total_home_goals / self.total_matches

    @property
    def avg_away_goals(self) -> float:
        """League average away goals per match."""
        if self.total_matches == 0:
            return DEFAULT_AVG_AWAY_GOALS
        return self.total_away_goals / self.total_matches

    def to_baseline(self) -> LeagueBaseline:
        name = SEASON_LEAGUES.get(self.league_code) or NEW_FORMAT_LEAGUES.get(
            self.league_code, self.league_code
        )
        return LeagueBaseline(
            avg_home_goals=self.avg_home_goals,
            avg_away_goals=self.avg_away_goals,
            name=name,
        )

    def add_result(self, result: MatchResult) -> None:
        """Fold one completed match into the league and team totals."""
        self.match_results.append(result)
        self.total_matches += 1
        self.total_home_goals += result.home_goals
        self.total_away_goals += result.away_goals

        home = self.teams.setdefault(result.home_team, TeamRecord(team_name=result.home_team))
        home.home_played += 1
        home.home_goals_for += result.home_goals
        home.home_goals_against += result.away_goals

        away = self.teams.setdefault(result.away_team, TeamRecord(team_name=result.away_team))
        away.away_played += 1
        away.away_goals_for += result.away_goals
        away.away_goals_against += result.home_goals


@dataclass(frozen=True)
class PredictionInputs:
    """Everything the predictor needs for one fixture."""

    league: LeagueBaseline
    home_team: TeamSeasonStats
    away_team: TeamSeasonStats
    home_history: tuple[MatchHistoryEntry, ...] = ()
    away_history: tuple[MatchHistoryEntry, ...] = ()


def season_label(season: str) -> str:
    """Turn a season folder code like '2526' into '2025/2026'."""
    return f"20{season[:2]}/20{season[2:]}"


def _parse_date(value: str) -> Optional[datetime]:
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


def parse_league_csv(
    content: str,
    league_code: str,
    season: Optional[str] = None,
) -> LeagueData:
    """
    Parse a football-data.co.uk results CSV.

    Args:
        content: CSV text
        league_code: League code the file belongs to
        season: For multi-season files, keep only rows whose Season
            column matches (e.g. '2025/2026')

    Returns:
        LeagueData; rows without a final score are skipped
    """
    league = LeagueData(league_code=league_code)
    reader = csv.DictReader(io.StringIO(content.lstrip("\ufeff")))

    for row in reader:
        if season and row.get("Season", "").strip() != season:
            continue

        # Season files use HomeTeam/FTHG, multi-season files Home/HG
        home_team = (row.get("HomeTeam") or row.get("Home") or "").strip()
        away_team = (row.get("AwayTeam") or row.get("Away") or "").strip()
        home_goals = (row.get("FTHG") or row.get("HG") or "").strip()
        away_goals = (row.get("FTAG") or row.get("AG") or "").strip()

        if not home_team or not away_team or not home_goals or not away_goals:
            continue

        try:
            result = MatchResult(
                home_team=home_team,
                away_team=away_team,
                home_goals=int(float(home_goals)),
                away_goals=int(float(away_goals)),
                match_date=_parse_date(row.get("Date", "").strip()),
            )
        except ValueError:
            logger.debug("Skipping malformed row", league=league_code, row=row)
            continue

        league.add_result(result)

    league.last_updated = datetime.now(timezone.utc)
    return league


def recent_history(
    league: LeagueData,
    team_name: str,
    length: int,
) -> list[MatchHistoryEntry]:
    """
    Last `length` matches for a team, oldest first, numbered from 1.

    Results without a date keep their file order ahead of dated ones.
    """
    if length <= 0:
        return []

    played = [
        r for r in league.match_results
        if r.home_team == team_name or r.away_team == team_name
    ]
    played.sort(key=lambda r: r.match_date or datetime.min)
    recent = played[-length:]

    history = []
    for number, result in enumerate(recent, start=1):
        was_home = result.home_team == team_name
        scored = result.home_goals if was_home else result.away_goals
        conceded = result.away_goals if was_home else result.home_goals
        history.append(MatchHistoryEntry.from_score(number, scored, conceded, was_home))
    return history


class FootballDataService:
    """
    Service for fetching and caching football statistics.

    Uses football-data.co.uk CSV files for historical results.
    """

    def __init__(
        self,
        data_settings: Optional[DataSettings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            data_settings: Season, cache and timeout settings (default from settings)
            client: HTTP client to use (one is created if not given)
        """
        self.config = data_settings or settings.data
        self._cache: dict[str, LeagueData] = {}
        self._cache_duration = timedelta(hours=self.config.cache_hours)
        self._client = client or httpx.AsyncClient(timeout=self.config.timeout)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "FootballDataService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def league_url(self, league_code: str) -> Optional[str]:
        """CSV URL for a league code, or None if unknown."""
        if league_code in SEASON_LEAGUES:
            return f"{BASE_URL}/mmz4281/{self.config.season}/{league_code}.csv"
        if league_code in NEW_FORMAT_LEAGUES:
            return f"{BASE_URL}/new/{league_code}.csv"
        return None

    @staticmethod
    def _normalize_team_name(name: str) -> str:
        """
        Normalize team name for matching.

        Handles common variations between data sources.
        """
        name_mappings = {
            "manchester united": "man united",
            "man utd": "man united",
            "manchester city": "man city",
            "nottingham forest": "nott'm forest",
            "wolverhampton": "wolves",
            "wolverhampton wanderers": "wolves",
        }

        normalized = name.lower().strip()
        return name_mappings.get(normalized, normalized)

    @with_async_retry(max_attempts=3)
    async def _download(self, url: str) -> str:
        response = await self._client.get(url)
        response.raise_for_status()
        return response.text

    async def fetch_league_data(self, league_code: str) -> Optional[LeagueData]:
        """
        Fetch and parse league data from football-data.co.uk.

        Args:
            league_code: League code (E0, E1, SC0, etc.)

        Returns:
            LeagueData or None if the league is unknown or the fetch failed
        """
        url = self.league_url(league_code)
        if not url:
            logger.warning("Unknown league code", league=league_code)
            return None

        try:
            content = await self._download(url)
        except httpx.HTTPError as e:
            logger.error("Failed to fetch league data", league=league_code, error=str(e))
            return None

        season = season_label(self.config.season) if league_code in NEW_FORMAT_LEAGUES else None
        league = parse_league_csv(content, league_code, season=season)

        logger.info(
            "Fetched league data",
            league=league_code,
            teams=len(league.teams),
            matches=league.total_matches,
            avg_home_goals=f"{league.avg_home_goals:.2f}",
            avg_away_goals=f"{league.avg_away_goals:.2f}",
        )
        return league

    async def get_league_data(
        self,
        league_code: str,
        force_refresh: bool = False,
    ) -> Optional[LeagueData]:
        """
        Get league data, using cache if available.

        Args:
            league_code: League code
            force_refresh: Force refresh from source

        Returns:
            LeagueData or None
        """
        if not force_refresh and league_code in self._cache:
            cached = self._cache[league_code]
            if cached.last_updated and datetime.now(timezone.utc) - cached.last_updated < self._cache_duration:
                return cached

        league = await self.fetch_league_data(league_code)
        if league:
            self._cache[league_code] = league
        return league

    async def _require_league(self, league_code: str) -> LeagueData:
        league = await self.get_league_data(league_code)
        if league is None:
            raise DataNotFoundError(f"League data unavailable: {league_code}")
        return league

    def find_team(self, league: LeagueData, team_name: str) -> Optional[str]:
        """Resolve a team name to the spelling used in the league file."""
        wanted = self._normalize_team_name(team_name)
        for name in league.teams:
            if self._normalize_team_name(name) == wanted:
                return name
        return None

    def _require_team(self, league: LeagueData, team_name: str) -> str:
        name = self.find_team(league, team_name)
        if name is None:
            logger.warning("Team not found", league=league.league_code, team=team_name)
            raise DataNotFoundError(f"Team not found in {league.league_code}: {team_name}")
        return name

    async def get_league_baseline(self, league_code: str) -> LeagueBaseline:
        """League scoring averages for a league code."""
        league = await self._require_league(league_code)
        return league.to_baseline()

    async def get_team_stats(self, league_code: str, team_name: str) -> TeamSeasonStats:
        """Venue-split season stats for a team."""
        league = await self._require_league(league_code)
        return league.teams[self._require_team(league, team_name)].to_season_stats()

    async def get_match_history(
        self,
        league_code: str,
        team_name: str,
        length: Optional[int] = None,
    ) -> list[MatchHistoryEntry]:
        """Recent matches for a team, oldest first."""
        league = await self._require_league(league_code)
        name = self._require_team(league, team_name)
        return recent_history(league, name, self.config.history_length if length is None else length)

    async def get_prediction_inputs(
        self,
        league_code: str,
        home_team: str,
        away_team: str,
    ) -> PredictionInputs:
        """
        Resolve all inputs for one fixture.

        Raises:
            DataNotFoundError: If the league or either team cannot be found
        """
        # Warm the cache once so the lookups below share a single download
        await self._require_league(league_code)

        baseline, home_stats, away_stats, home_history, away_history = await asyncio.gather(
            self.get_league_baseline(league_code),
            self.get_team_stats(league_code, home_team),
            self.get_team_stats(league_code, away_team),
            self.get_match_history(league_code, home_team),
            self.get_match_history(league_code, away_team),
        )

        return PredictionInputs(
            league=baseline,
            home_team=home_stats,
            away_team=away_stats,
            home_history=tuple(home_history),
            away_history=tuple(away_history),
        )
