"""Main entry point for the contribution statistics tool.

This script wires the infrastructure into the application service, runs it and
hands the result to the selected reporter.
"""
import argparse
import asyncio
import logging
import sys
from datetime import date
from typing import List, Optional
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from contrib_stats.application.aggregator import Aggregator
from contrib_stats.application.contributions_service import ContributionsService
from contrib_stats.application.extractor import ContributionExtractor
from contrib_stats.config import Settings, load_settings
from contrib_stats.domain.errors import ContribStatsError, InputError
from contrib_stats.domain.models import AggregateStats, SortKey, TimeRange
from contrib_stats.infrastructure.github_client import GitHubContributionsClient
from contrib_stats.infrastructure.progress import TqdmProgress
from contrib_stats.infrastructure.reporters import REPORT_MODES, build_reporter
from contrib_stats.infrastructure.soup_markup import SoupMarkupDocument


logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="contrib-stats",
        description="Summarize a GitHub user's public contributions per project."
    )
    parser.add_argument("username", nargs="?", help="GitHub username")
    parser.add_argument("--from", dest="start", metavar="YYYY-MM-DD", help="first day (default: one year before --to)")
    parser.add_argument("--to", dest="end", metavar="YYYY-MM-DD", help="last day (default: today)")
    parser.add_argument(
        "--sort",
        choices=[key.value for key in SortKey],
        default=SortKey.PROJECT.value,
        help="column to order projects by"
    )
    parser.add_argument("--format", dest="mode", choices=REPORT_MODES, default="table", help="report format")
    parser.add_argument("--log-level", help="logging level (default: CONTRIB_STATS_LOG_LEVEL or ERROR)")
    return parser.parse_args(argv)


def _parse_date(value: str, option: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InputError(f"Invalid {option} date {value!r}, expected YYYY-MM-DD.") from None


def build_time_range(start: Optional[str], end: Optional[str], today: date) -> TimeRange:
    """Resolve the requested window, defaulting to the year up to today."""
    end_date = _parse_date(end, "--to") if end else today
    if not start:
        return TimeRange.last_year(end_date)
    return TimeRange(start=_parse_date(start, "--from"), end=end_date)


def configure_logging(level: str) -> None:
    """Configure root logging, rejecting unknown level names."""
    level = level.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise InputError(f"Unknown log level {level!r}.")

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


async def main(username: str, time_range: TimeRange, settings: Settings) -> AggregateStats:
    """Execute the statistics run."""
    client = GitHubContributionsClient(
        username,
        base_url=settings.base_url,
        timeout=settings.timeout,
        max_connections=settings.max_connections
    )
    service = ContributionsService(
        fetcher=client,
        extractor=ContributionExtractor(client.base_url, SoupMarkupDocument),
        aggregator=Aggregator(username, settings.commit_history_url_template),
        max_chunk_days=settings.chunk_days
    )

    try:
        return await service.collect(time_range, progress=TqdmProgress())
    finally:
        await service.close()


def run(argv: Optional[List[str]] = None) -> int:
    """Run the tool and return the process exit code."""
    # Load environment variables from .env or env file
    load_dotenv('.env') or load_dotenv('env')

    args = parse_args(argv)
    console = Console()
    err_console = Console(stderr=True)

    try:
        settings = load_settings()
        configure_logging(args.log_level or settings.log_level)

        if not args.username or not args.username.strip():
            raise InputError("You should specify the username")

        username = args.username.strip()
        time_range = build_time_range(args.start, args.end, date.today())
        reporter = build_reporter(args.mode, console)

        logger.info(f"Collecting contributions of {username}")
        stats = asyncio.run(main(username, time_range, settings))
    except ContribStatsError as e:
        err_console.print(f"\n[bold red]ERROR[/] {escape(str(e))}")
        return 1
    except Exception as e:
        logger.exception("Unexpected failure")
        err_console.print(f"\n[bold red]ERROR[/] {escape(repr(e))}")
        return 1

    reporter.report(stats, SortKey(args.sort))
    return 0


if __name__ == "__main__":
    sys.exit(run())
