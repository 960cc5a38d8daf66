"""
COVID-19 Report Data Models

Immutable value types passed between the pipeline stages: the normalized
query, the deserialized API location records, and the aggregated snapshot
and delta that the report is rendered from.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from .config.constants import US_CODE, WORLD_CODE

Timeline = Dict[str, int]


@dataclass(frozen=True)
class Query:
    """A normalized (country_code, province, county) triple."""

    country_code: str
    province: str = ""
    county: str = ""

    @property
    def is_world(self) -> bool:
        return self.country_code == WORLD_CODE

    @property
    def is_us(self) -> bool:
        return self.country_code == US_CODE

    @property
    def is_regional(self) -> bool:
        """US queries narrowed to a state use the regional dataset."""
        return self.is_us and bool(self.province)

    def __str__(self) -> str:
        return ", ".join(part for part in (self.country_code, self.province, self.county) if part)


class CacheKey(str, Enum):
    """The two cache buckets; every query maps to exactly one of them."""

    US = "us"
    WORLD = "world"

    @classmethod
    def for_query(cls, query: Query) -> "CacheKey":
        return cls.US if query.is_regional else cls.WORLD


@dataclass(frozen=True)
class LocationRecord:
    """One location of an API response."""

    country: str
    country_code: str
    province: str = ""
    county: str = ""
    country_population: Optional[int] = None
    last_updated: Optional[str] = None
    confirmed: int = 0
    deaths: int = 0
    recovered: int = 0
    timelines: Dict[str, Timeline] = field(default_factory=dict)

    def timeline(self, metric: str) -> Timeline:
        return self.timelines.get(metric, {})


@dataclass(frozen=True)
class Snapshot:
    """Totals for a resolved query at request time."""

    confirmed: int
    deaths: int
    recovered: int
    population: Optional[int]
    last_updated: Optional[str]
    country_name: str


@dataclass(frozen=True)
class Delta:
    """Change between the newest and the previous timeline date."""

    d_confirmed: Optional[int]
    d_deaths: Optional[int]
    d_recovered: Optional[int]
    newest_date: str
    previous_date: str
