"""
COVID-19 Data Loading Module

This module handles fetching and initial parsing of COVID-19 data from the
coronavirus-tracker API:
- a single HTTP GET returning the raw JSON body
- typed deserialization of the ``latest``, ``location`` and ``locations``
  payload shapes into LocationRecord values
"""

import json
from typing import Dict, List, Optional

import requests

from .config.constants import (
    DEFAULT_TIMEOUT_SECONDS,
    METRICS,
    REQUEST_HEADERS,
    WORLD_CODE,
    WORLD_NAME,
)
from .config.logging_config import get_logger
from .models import LocationRecord, Query, Timeline

logger = get_logger(__name__)


def fetch(url: str, timeout: int = DEFAULT_TIMEOUT_SECONDS) -> str:
    """
    Fetch a JSON body from the API.

    Args:
        url: Request URL

    Returns:
        Raw response body, or an empty string if the request failed
    """
    try:
        logger.info(f"Fetching {url}")

        response = requests.get(url, headers=REQUEST_HEADERS, timeout=timeout)
        response.raise_for_status()

        logger.info(f"Received {len(response.text)} bytes")
        return response.text

    except requests.RequestException as e:
        logger.error(f"Failed to fetch API data: {e}")
        return ""


def _to_int(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _to_optional_int(value) -> Optional[int]:
    return None if value is None else _to_int(value)


def parse_timelines(timelines: Optional[Dict]) -> Dict[str, Timeline]:
    """
    Normalize a ``timelines`` object to metric -> {date: count}.

    The API wraps each series as ``{"latest": n, "timeline": {...}}``; a plain
    date mapping is accepted as well. Empty series are dropped.
    """
    parsed = {}

    for metric in METRICS:
        series = (timelines or {}).get(metric)
        if isinstance(series, dict) and isinstance(series.get("timeline"), dict):
            series = series["timeline"]
        if isinstance(series, dict) and series:
            parsed[metric] = {str(date): _to_int(count) for date, count in series.items()}

    return parsed


def parse_location(location: Dict) -> LocationRecord:
    """
    Parse one API location object into a LocationRecord.

    Args:
        location: Location dictionary from the API

    Returns:
        LocationRecord with missing counts defaulted to 0
    """
    latest = location.get("latest") or {}

    return LocationRecord(
        country=location.get("country") or "",
        country_code=location.get("country_code") or "",
        province=location.get("province") or "",
        county=location.get("county") or "",
        country_population=_to_optional_int(location.get("country_population")),
        last_updated=location.get("last_updated"),
        confirmed=_to_int(latest.get("confirmed")),
        deaths=_to_int(latest.get("deaths")),
        recovered=_to_int(latest.get("recovered")),
        timelines=parse_timelines(location.get("timelines")),
    )


def parse_summary(latest: Dict, query: Optional[Query] = None) -> LocationRecord:
    """
    Wrap a ``latest`` summary body as a single synthetic record.

    The summary carries only totals, so the record is named after the query:
    "World" for the world sentinel, otherwise the upper-cased country code.
    """
    if query is None or query.is_world:
        country, country_code = WORLD_NAME, WORLD_CODE
    else:
        country, country_code = query.country_code.upper(), query.country_code

    return parse_location({"country": country, "country_code": country_code, "latest": latest})


def parse_payload(raw: str, query: Optional[Query] = None) -> List[LocationRecord]:
    """
    Deserialize a raw API body into location records.

    Args:
        raw: Raw JSON text (possibly empty after a failed fetch)
        query: Query used to name a summary-only record

    Returns:
        List of LocationRecord; empty if the body is empty or not understood
    """
    if not raw or not raw.strip():
        logger.warning("Empty API payload")
        return []

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse API JSON: {e}")
        return []

    if not isinstance(data, dict):
        logger.warning(f"Unexpected API payload type: {type(data).__name__}")
        return []

    if isinstance(data.get("locations"), list):
        records = [parse_location(location) for location in data["locations"]]
        logger.debug(f"Parsed location list with {len(records)} records")
        return records

    if isinstance(data.get("location"), dict):
        logger.debug("Parsed single location payload")
        return [parse_location(data["location"])]

    if isinstance(data.get("latest"), dict):
        logger.debug("Parsed summary payload")
        return [parse_summary(data["latest"], query)]

    logger.warning(f"Unrecognized API payload keys: {sorted(data)}")
    return []
