"""
Query normalization.

Turns the positional command-line tokens, e.g. ``["us,", "new", "york"]``,
into a canonical lowercase Query.
"""

from typing import Sequence

from .config.logging_config import get_logger
from .exceptions import QueryError
from .models import Query

logger = get_logger(__name__)


def normalize_query(args: Sequence[str]) -> Query:
    """
    Build a Query from positional arguments.

    The tokens are joined with spaces and split on commas into country code,
    province and county. Each part is trimmed and lowercased; anything after
    the third comma-separated field is ignored.

    Args:
        args: Positional command-line tokens

    Returns:
        Normalized Query

    Raises:
        QueryError: If no country code was given
    """
    parts = [part.strip().lower() for part in " ".join(args).split(",")]
    parts += [""] * (3 - len(parts))
    country_code, province, county = parts[:3]

    if not country_code:
        raise QueryError("Missing country code (use 'world' for global figures).")

    query = Query(country_code=country_code, province=province, county=county)
    logger.debug(f"Normalized query: {query!r}")
    return query
