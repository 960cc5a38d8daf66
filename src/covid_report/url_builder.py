"""
Upstream request URLs.

Chooses the dataset (``source=jhu`` worldwide or ``source=csbs`` for US
states and counties) and the endpoint (``latest`` summary or ``locations``
list) for a Query.
"""

from typing import List, Tuple
from urllib.parse import quote

from .config.constants import (
    API_BASE_URL,
    GLOBAL_SOURCE,
    LATEST_ENDPOINT,
    LOCATIONS_ENDPOINT,
    REGIONAL_SOURCE,
)
from .models import CacheKey, Query


def _format_url(endpoint: str, params: List[Tuple[str, str]]) -> str:
    query_string = "&".join(f"{name}={quote(value, safe='')}" for name, value in params)
    return f"{API_BASE_URL}/{endpoint}?{query_string}"


def build_query_url(query: Query, caching_mode: bool = False, want_timeline: bool = True) -> str:
    """
    Build the request URL for a query.

    Args:
        query: Normalized query
        caching_mode: Request the shared per-dataset body used by the cache
        want_timeline: For world queries, ask for the timeline-carrying list
            instead of the summary endpoint

    Returns:
        Absolute request URL
    """
    if caching_mode:
        return build_cache_url(query)

    if query.is_world:
        if want_timeline:
            return _format_url(LOCATIONS_ENDPOINT, [("source", GLOBAL_SOURCE), ("timelines", "true")])
        return _format_url(LATEST_ENDPOINT, [("source", GLOBAL_SOURCE)])

    source = REGIONAL_SOURCE if query.is_regional else GLOBAL_SOURCE
    endpoint = LOCATIONS_ENDPOINT if (query.province or query.county) else LATEST_ENDPOINT

    params = [("source", source), ("country_code", query.country_code)]
    if query.province:
        params.append(("province", query.province))
    if query.county:
        params.append(("county", query.county))
    params.append(("timelines", "true"))

    return _format_url(endpoint, params)


def build_cache_url(query: Query) -> str:
    """
    Build the URL whose body is stored in the query's cache bucket.

    Only the dataset varies; the body covers every location of that dataset
    so all provinces of a country share one cached download.
    """
    source = REGIONAL_SOURCE if CacheKey.for_query(query) is CacheKey.US else GLOBAL_SOURCE
    return _format_url(LOCATIONS_ENDPOINT, [("source", source), ("timelines", "true")])
