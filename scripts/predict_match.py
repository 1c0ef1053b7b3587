#!/usr/bin/env python3
"""
Predict Match Script.

Runs the prediction engine for one fixture and prints the result as JSON.
Inputs come either from a JSON request file or from football-data.co.uk.

Examples:
    python scripts/predict_match.py --input request.json
    python scripts/predict_match.py --league E0 --home Arsenal --away Chelsea --goal-line 2.5
"""

import asyncio
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import argparse

from config import settings
from config.logging_config import bind_context, get_logger, setup_logging
from src.data import (
    DataNotFoundError,
    FootballDataService,
    PredictionInputs,
    RequestFileError,
    load_prediction_request,
)
from src.engine import MatchPredictor
from src.models import PredictionOverrides

logger = get_logger(__name__)


def overrides_from_args(args: argparse.Namespace) -> PredictionOverrides:
    """Build overrides from command line flags."""
    match_odds = {
        key: value
        for key, value in (
            ("home", args.home_odds),
            ("draw", args.draw_odds),
            ("away", args.away_odds),
        )
        if value is not None
    }
    return PredictionOverrides(
        rho=args.rho,
        goal_line=args.goal_line,
        btts_odds=args.btts_odds,
        lambda3=args.lambda3,
        match_odds=match_odds or None,
    )


async def fetch_inputs(league: str, home: str, away: str) -> PredictionInputs:
    """Resolve fixture inputs from football-data.co.uk."""
    async with FootballDataService() as service:
        return await service.get_prediction_inputs(league, home, away)


async def main(args: argparse.Namespace) -> int:
    """
    Run one prediction.

    Returns:
        Process exit code
    """
    setup_logging(
        log_level=args.log_level or settings.log_level,
        log_file=settings.log_file,
        json_format=settings.log_json,
    )

    try:
        if args.input:
            inputs, overrides = load_prediction_request(args.input)
            # Flags given on the command line win over the file
            cli_overrides = overrides_from_args(args)
            overrides = PredictionOverrides(
                rho=overrides.rho if cli_overrides.rho is None else cli_overrides.rho,
                goal_line=overrides.goal_line if cli_overrides.goal_line is None else cli_overrides.goal_line,
                btts_odds=overrides.btts_odds if cli_overrides.btts_odds is None else cli_overrides.btts_odds,
                lambda3=overrides.lambda3 if cli_overrides.lambda3 is None else cli_overrides.lambda3,
                match_odds=cli_overrides.match_odds or overrides.match_odds,
            )
        else:
            bind_context(league=args.league, home_team=args.home, away_team=args.away)
            inputs = await fetch_inputs(args.league, args.home, args.away)
            overrides = overrides_from_args(args)
    except (OSError, json.JSONDecodeError, RequestFileError, DataNotFoundError) as e:
        logger.error("Could not load prediction inputs", error=str(e))
        return 1

    prediction = MatchPredictor().predict(
        inputs.league,
        inputs.home_team,
        inputs.away_team,
        home_history=inputs.home_history,
        away_history=inputs.away_history,
        overrides=overrides,
    )

    output = json.dumps(prediction.to_dict(), indent=2)
    if args.output:
        Path(args.output).write_text(output)
        logger.info("Prediction saved to file", path=args.output)
    else:
        print(output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Predict a football match and find goal-market value")

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--input", "-i", type=str, help="JSON request file")
    source.add_argument("--league", "-l", type=str, help="football-data.co.uk league code (e.g. E0)")

    parser.add_argument("--home", type=str, help="Home team name (with --league)")
    parser.add_argument("--away", type=str, help="Away team name (with --league)")

    parser.add_argument("--rho", type=float, help="Dixon-Coles rho")
    parser.add_argument("--goal-line", type=float, help="Bookmaker total goals line")
    parser.add_argument("--btts-odds", type=float, help="Bookmaker BTTS yes odds")
    parser.add_argument("--lambda3", type=float, help="Bivariate Poisson covariance (estimated if omitted)")
    parser.add_argument("--home-odds", type=float, help="Match odds: home win")
    parser.add_argument("--draw-odds", type=float, help="Match odds: draw")
    parser.add_argument("--away-odds", type=float, help="Match odds: away win")

    parser.add_argument("--output", "-o", type=str, help="Write JSON to this file instead of stdout")
    parser.add_argument("--log-level", type=str, help="Override LOG_LEVEL")
    return parser


if __name__ == "__main__":
    parser = build_parser()
    args = parser.parse_args()

    if args.league and not (args.home and args.away):
        parser.error("--league requires --home and --away")

    sys.exit(asyncio.run(main(args)))
