#!/usr/bin/env python3
"""
Cycling Results - command line entry point

Resolves races, cyclist profiles, events and authenticated users against the
configured store and prints the camelCase payload as JSON.
"""
import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Optional

import structlog

from cycling_results.adapters.database.manager import DatabaseManager
from cycling_results.application.event_service import EventService
from cycling_results.application.race_results_service import RaceResultsService
from cycling_results.application.user_service import UserService
from cycling_results.config import Config
from cycling_results.core.errors import CyclingResultsError


logger = logging.getLogger(__name__)


def configure_logging(config: Config) -> None:
    """Set up stdlib logging and structlog from the configuration."""
    log_level = getattr(logging, config.log_level)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    # Set SQLAlchemy engine and asyncio loggers to WARNING to reduce noise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    if config.log_format == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Cycling results lookups")
    commands = parser.add_subparsers(dest="command", required=True)

    race = commands.add_parser("race", help="Race of an event with its results")
    race.add_argument("event_id")
    race.add_argument("category_id")
    race.add_argument("gender_id")
    race.add_argument("length_id")

    cyclist = commands.add_parser("cyclist", help="Cyclist profile with results")
    cyclist.add_argument("user_id")

    event = commands.add_parser("event", help="Event with its races")
    event.add_argument("event_id")

    user = commands.add_parser("user", help="Authenticated user record")
    user.add_argument("auth_user_id")

    return parser


async def run_command(args: argparse.Namespace, database: DatabaseManager) -> Optional[Any]:
    """Run one lookup and return the domain record, or None when not found."""
    if args.command == "race":
        return await RaceResultsService(database).resolve_race(
            args.event_id, args.category_id, args.gender_id, args.length_id
        )
    if args.command == "cyclist":
        return await RaceResultsService(database).get_cyclist_with_results(args.user_id)
    if args.command == "event":
        return await EventService(database).get_event_with_races(args.event_id)
    if args.command == "user":
        return await UserService(database).get_auth_user(args.auth_user_id)
    raise ValueError(f"Unknown command: {args.command}")


async def main(argv: Optional[list] = None) -> int:
    """Main entry point for the cycling results CLI."""
    args = build_parser().parse_args(argv)

    config = Config.from_env()
    configure_logging(config)

    database = DatabaseManager(config)
    await database.initialize()
    try:
        record = await run_command(args, database)
    except CyclingResultsError as e:
        logger.error(f"Lookup failed: {e}")
        return 2
    finally:
        await database.close()

    if record is None:
        logger.info("Not found")
        return 1

    print(json.dumps(record.to_dict(), indent=2))
    return 0


def cli() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
