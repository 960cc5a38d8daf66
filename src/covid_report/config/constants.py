"""
COVID-19 Report - Configuration Constants

Centralized configuration and constants for the entire project.
This module contains the upstream API endpoints, dataset names, cache
layout and report settings used across different modules.
"""

__version__ = "1.0.0"

TOOL_NAME = "covid-report"

# Upstream API (coronavirus-tracker-api v2)
API_BASE_URL = "https://coronavirus-tracker-api.herokuapp.com/v2"
LATEST_ENDPOINT = "latest"
LOCATIONS_ENDPOINT = "locations"
REQUEST_HEADERS = {"Accept": "application/json"}
DEFAULT_TIMEOUT_SECONDS = 30

# Datasets exposed by the API
GLOBAL_SOURCE = "jhu"  # Johns Hopkins, worldwide, with timelines
REGIONAL_SOURCE = "csbs"  # US states and counties, no timelines

# Reserved query values
WORLD_CODE = "world"
WORLD_NAME = "World"
US_CODE = "us"

# Cache settings
XDG_CACHE_ENV = "XDG_CACHE_HOME"
HOME_ENV = "HOME"
DEFAULT_CACHE_SUBDIR = ".cache"
DEFAULT_REFRESH_INTERVAL_SECONDS = 6 * 60 * 60

# Metrics reported by the API, in report order
METRICS = ("confirmed", "deaths", "recovered")

# Report layout
CSV_COLUMNS = [
    "country_code",
    "province",
    "county",
    "confirmed",
    "deaths",
    "recovered",
    "d_confirmed",
    "d_deaths",
    "d_recovered",
    "newest_date",
]
TEXT_LABEL_WIDTH = 10
UNKNOWN_VALUE = "unknown"

NO_RESULT_NOTE = (
    "Note: US provinces and counties come from the CSBS dataset, which has no "
    "timelines, and recovered counts are missing for most locations."
)

# Logging configuration
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL = "WARNING"
