"""
COVID-19 Aggregation Module

Reduces the matching location records to one Snapshot of totals and, when
timelines are available, to the Delta between the two most recent dates.
"""

from typing import Optional, Sequence

import pandas as pd

from .config.constants import METRICS, WORLD_NAME
from .config.logging_config import get_logger
from .data_filter import records_to_frame
from .models import Delta, LocationRecord, Query, Snapshot

logger = get_logger(__name__)


def aggregate(records: Sequence[LocationRecord], query: Optional[Query] = None) -> Snapshot:
    """
    Sum the counts of all matching records.

    Population, last update time and country name are not summed; they are
    read from the first record since matching records share a country. A world
    query spans every country, so it is named "World" and has no population.

    Args:
        records: Matching location records (at least one)
        query: Query the records were selected for

    Returns:
        Snapshot of the totals

    Raises:
        ValueError: If records is empty
    """
    if not records:
        raise ValueError("Cannot aggregate an empty record set")

    totals = records_to_frame(records)[list(METRICS)].sum()
    first = records[0]
    is_world = query is not None and query.is_world

    snapshot = Snapshot(
        confirmed=int(totals["confirmed"]),
        deaths=int(totals["deaths"]),
        recovered=int(totals["recovered"]),
        population=None if is_world else first.country_population,
        last_updated=first.last_updated,
        country_name=WORLD_NAME if is_world else first.country,
    )
    logger.debug(f"Aggregated {len(records)} records: {snapshot}")
    return snapshot


def timeline_frame(records: Sequence[LocationRecord], metric: str) -> pd.DataFrame:
    """
    Tabulate one metric's timelines with a row per record and a column per date.

    Dates are ISO-8601 strings, so sorting the column labels orders them
    chronologically. Dates missing from a record's series are NaN.
    """
    frame = pd.DataFrame([record.timeline(metric) for record in records])
    return frame.reindex(columns=sorted(frame.columns))


def compute_delta(records: Sequence[LocationRecord], snapshot: Snapshot) -> Optional[Delta]:
    """
    Compute the change since the previous timeline date.

    The newest and previous dates are the last two dates of the confirmed
    timeline. Each metric's delta is its snapshot total minus the sum of the
    records' values at the previous date.

    Args:
        records: Matching location records
        snapshot: Totals computed from the same records

    Returns:
        Delta, or None when a record has no confirmed timeline or the
        timeline has fewer than two dates
    """
    if not records or any(not record.timeline("confirmed") for record in records):
        logger.info("No confirmed timeline available, skipping delta")
        return None

    dates = list(timeline_frame(records, "confirmed").columns)
    if len(dates) < 2:
        logger.info(f"Confirmed timeline has {len(dates)} date(s), skipping delta")
        return None

    newest_date, previous_date = dates[-1], dates[-2]

    deltas = {}
    for metric in METRICS:
        frame = timeline_frame(records, metric)
        if previous_date not in frame.columns or frame[previous_date].isna().any():
            logger.debug(f"No {metric} value for {previous_date}")
            deltas[metric] = None
            continue
        deltas[metric] = getattr(snapshot, metric) - int(frame[previous_date].sum())

    return Delta(
        d_confirmed=deltas["confirmed"],
        d_deaths=deltas["deaths"],
        d_recovered=deltas["recovered"],
        newest_date=newest_date,
        previous_date=previous_date,
    )
