"""
COVID-19 Report Rendering Module

Formats a Snapshot and optional Delta either as a human-readable block or
as a single CSV row.
"""

import csv
import io
from typing import List, Optional

import pandas as pd

from .config.constants import CSV_COLUMNS, TEXT_LABEL_WIDTH, UNKNOWN_VALUE
from .models import Delta, Query, Snapshot

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def _format_timestamp(value: Optional[str], fmt: str) -> str:
    if not value:
        return UNKNOWN_VALUE
    try:
        return pd.Timestamp(value).strftime(fmt)
    except (TypeError, ValueError):
        return value


def _optional(value) -> str:
    return "" if value is None else str(value)


def render_csv(snapshot: Snapshot, delta: Optional[Delta], query: Query) -> str:
    """
    Render one CSV row in CSV_COLUMNS order; missing deltas are empty fields.
    """
    row = {
        "country_code": query.country_code,
        "province": query.province,
        "county": query.county,
        "confirmed": snapshot.confirmed,
        "deaths": snapshot.deaths,
        "recovered": snapshot.recovered,
    }
    if delta is not None:
        row.update(
            d_confirmed=_optional(delta.d_confirmed),
            d_deaths=_optional(delta.d_deaths),
            d_recovered=_optional(delta.d_recovered),
            newest_date=_format_timestamp(delta.newest_date, DATE_FORMAT),
        )

    buffer = io.StringIO()
    csv.DictWriter(buffer, fieldnames=CSV_COLUMNS, restval="", lineterminator="\n").writerow(row)
    return buffer.getvalue().rstrip("\n")


def render_title(snapshot: Snapshot, query: Query) -> str:
    title = snapshot.country_name or query.country_code.upper()
    if query.province:
        title += f" >> {query.province.title()}"
    if query.county:
        title += f" > {query.county.title()} County"
    return title


def _count_line(label: str, value: int, change: Optional[int], width: int) -> str:
    line = f"{label:<{TEXT_LABEL_WIDTH}}{value:>{width},}"
    if change is not None:
        line += f" ({change:+,})"
    return line


def render_text(snapshot: Snapshot, delta: Optional[Delta], query: Query) -> str:
    """
    Render the human-readable report.

    Counts are right-aligned in a column one character wider than the longest
    grouped number. The snapshot and delta dates are only shown when a delta
    was computed; the API reload time is always shown.
    """
    width = max(len(f"{snapshot.confirmed:,}"), len(f"{snapshot.deaths:,}")) + 1

    lines: List[str] = [
        render_title(snapshot, query),
        _count_line("Confirmed:", snapshot.confirmed, delta.d_confirmed if delta else None, width),
        _count_line("Deaths:", snapshot.deaths, delta.d_deaths if delta else None, width),
        "",
    ]

    if delta is not None:
        lines.append(f"Latest snapshot: {_format_timestamp(delta.newest_date, DATE_FORMAT)}")
        lines.append(f"Delta from:      {_format_timestamp(delta.previous_date, DATE_FORMAT)}")
    lines.append(f"API reload:      {_format_timestamp(snapshot.last_updated, DATETIME_FORMAT)}")

    return "\n".join(lines)


def render(snapshot: Snapshot, delta: Optional[Delta], query: Query, csv_mode: bool = False) -> str:
    if csv_mode:
        return render_csv(snapshot, delta, query)
    return render_text(snapshot, delta, query)
