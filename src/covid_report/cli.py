"""
COVID-19 Report Command Line

Usage: covid-report [-c] [-f] [-n] [-r SECONDS] [-v] <country>[, <province>[, <county>]]

Wires the pipeline together: query normalization, cached or direct fetch,
filtering, aggregation, delta computation and rendering.
"""

import argparse
import sys
from typing import Callable, List, Optional

from .aggregator import aggregate, compute_delta
from .cache import resolve
from .config.constants import DEFAULT_REFRESH_INTERVAL_SECONDS, TOOL_NAME, __version__
from .config.logging_config import configure_logging, get_logger, level_for_verbosity
from .data_filter import filter_records
from .data_loader import fetch as fetch_url
from .data_loader import parse_payload
from .exceptions import CovidReportError, NoResultError
from .models import Query
from .query import normalize_query
from .report import render
from .url_builder import build_query_url

logger = get_logger(__name__)

EPILOG = """examples:
  covid-report world
  covid-report gb
  covid-report us, new york, new york
  covid-report --csv us, california"""


class ReportArgumentParser(argparse.ArgumentParser):
    """ArgumentParser whose usage errors exit with status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = ReportArgumentParser(
        prog=TOOL_NAME,
        description="Print COVID-19 case figures for a country, province or US county.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "query",
        nargs="*",
        metavar="QUERY",
        help="COUNTRY[, PROVINCE[, COUNTY]]: two-letter country code or 'world', optional province and US county",
    )
    parser.add_argument(
        "-c", "--csv", dest="csv", action="store_true", default=False, help="print one CSV row"
    )
    parser.add_argument(
        "-f",
        "--force-refresh",
        dest="force_refresh",
        action="store_true",
        default=False,
        help="refetch even if the cached data is fresh",
    )
    parser.add_argument(
        "-n",
        "--no-cache",
        dest="no_cache",
        action="store_true",
        default=False,
        help="query the API directly without the cache",
    )
    parser.add_argument(
        "-r",
        "--refresh-interval",
        dest="refresh_interval",
        type=int,
        default=DEFAULT_REFRESH_INTERVAL_SECONDS,
        metavar="SECONDS",
        help=f"maximum cache age before a refetch (default: {DEFAULT_REFRESH_INTERVAL_SECONDS})",
    )
    parser.add_argument(
        "-v", "--verbose", dest="verbose", action="count", default=0, help="log progress to stderr"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run(
    query: Query,
    csv_mode: bool = False,
    force_refresh: bool = False,
    no_cache: bool = False,
    refresh_interval: int = DEFAULT_REFRESH_INTERVAL_SECONDS,
    fetch: Callable[[str], str] = fetch_url,
) -> str:
    """
    Produce the report for a query.

    Args:
        query: Normalized query
        csv_mode: Render a CSV row instead of the text block
        force_refresh: Refetch the cached body regardless of age
        no_cache: Query the API directly, bypassing the cache
        refresh_interval: Maximum cache age in seconds
        fetch: Function performing the HTTP GET

    Returns:
        Rendered report

    Raises:
        CovidReportError: If the cache directory is unusable or nothing matched
    """
    if no_cache:
        payload = fetch(build_query_url(query, caching_mode=False, want_timeline=False))
        # The API filtered server-side
        records = parse_payload(payload, query)
    else:
        payload = resolve(query, force_refresh, refresh_interval, fetch=fetch)
        records = filter_records(parse_payload(payload, query), query)

    if not records:
        raise NoResultError(str(query))

    snapshot = aggregate(records, query)
    delta = compute_delta(records, snapshot)

    return render(snapshot, delta, query, csv_mode=csv_mode)


def main(argv: Optional[List[str]] = None) -> int:
    """Console entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(level_for_verbosity(args.verbose))

    try:
        query = normalize_query(args.query)
        report = run(
            query,
            csv_mode=args.csv,
            force_refresh=args.force_refresh,
            no_cache=args.no_cache,
            refresh_interval=args.refresh_interval,
        )
    except CovidReportError as e:
        logger.error(str(e))
        return e.exit_code

    print(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
