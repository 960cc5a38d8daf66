"""
COVID-19 Location Filtering Module

Narrows a multi-location API response down to the records matching a query.
Fields are matched by case-insensitive substring containment, so short or
partial names ("new" for New York/New Jersey/...) keep working.
"""

from typing import List, Sequence

import pandas as pd

from .config.logging_config import get_logger
from .models import LocationRecord, Query

logger = get_logger(__name__)

MATCH_FIELDS = ["country_code", "province", "county"]


def records_to_frame(records: Sequence[LocationRecord]) -> pd.DataFrame:
    """
    Tabulate the matchable fields and counts of each record.

    Args:
        records: Location records

    Returns:
        DataFrame with one row per record, in input order
    """
    rows = [
        {
            "country_code": record.country_code,
            "province": record.province,
            "county": record.county,
            "confirmed": record.confirmed,
            "deaths": record.deaths,
            "recovered": record.recovered,
        }
        for record in records
    ]
    return pd.DataFrame(rows, columns=MATCH_FIELDS + ["confirmed", "deaths", "recovered"])


def _contains(column: pd.Series, term: str) -> pd.Series:
    return column.fillna("").astype(str).str.contains(term, case=False, regex=False)


def filter_records(records: Sequence[LocationRecord], query: Query) -> List[LocationRecord]:
    """
    Keep the records matching a query.

    World queries keep everything. Otherwise the country code must match,
    then the province when one is given, then (US only) the county.

    Args:
        records: Parsed location records
        query: Normalized query

    Returns:
        Matching records in their original order (possibly empty)
    """
    if query.is_world:
        logger.info(f"World query, keeping all {len(records)} records")
        return list(records)

    df = records_to_frame(records)
    mask = _contains(df["country_code"], query.country_code)

    if query.province:
        mask &= _contains(df["province"], query.province)

    if query.is_us and query.county:
        mask &= _contains(df["county"], query.county)

    matched = [record for record, keep in zip(records, mask.tolist()) if keep]
    logger.info(f"{len(matched)} of {len(records)} records match '{query}'")
    return matched
