"""
On-disk response cache.

Raw API bodies are kept in ``$XDG_CACHE_HOME/covid-report`` (or
``$HOME/.cache/covid-report``), one flat file per CacheKey. A file is reused
until it is older than the refresh interval.
"""

import math
import os
import tempfile
import time
from pathlib import Path
from typing import Callable, Mapping, Optional

from .config.constants import (
    DEFAULT_CACHE_SUBDIR,
    DEFAULT_REFRESH_INTERVAL_SECONDS,
    HOME_ENV,
    TOOL_NAME,
    XDG_CACHE_ENV,
)
from .config.logging_config import get_logger
from .data_loader import fetch as fetch_url
from .exceptions import CacheDirectoryError
from .models import CacheKey, Query
from .url_builder import build_cache_url

logger = get_logger(__name__)


def resolve_cache_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """
    Locate (and create) the tool's cache directory.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Path to the per-tool cache directory

    Raises:
        CacheDirectoryError: If the base cache directory does not exist or
            the tool directory cannot be created in it
    """
    environ = os.environ if environ is None else environ

    candidates = []
    if environ.get(XDG_CACHE_ENV):
        candidates.append(Path(environ[XDG_CACHE_ENV]))
    if environ.get(HOME_ENV):
        candidates.append(Path(environ[HOME_ENV]) / DEFAULT_CACHE_SUBDIR)

    base = next((candidate for candidate in candidates if candidate.is_dir()), None)
    if base is None:
        raise CacheDirectoryError(
            f"No cache directory: neither ${XDG_CACHE_ENV} nor ${HOME_ENV}/{DEFAULT_CACHE_SUBDIR} "
            "is an existing directory."
        )

    cache_dir = base / TOOL_NAME
    try:
        cache_dir.mkdir(exist_ok=True)
    except OSError as e:
        raise CacheDirectoryError(f"Cannot create cache directory {cache_dir}: {e}") from e
    return cache_dir


def cache_path(cache_dir: Path, query: Query) -> Path:
    return cache_dir / CacheKey.for_query(query).value


def cache_age(path: Path, now: Optional[float] = None) -> float:
    """Seconds since the file was last written, infinite if it is missing."""
    try:
        mtime = path.stat().st_mtime
    except FileNotFoundError:
        return math.inf

    return (time.time() if now is None else now) - mtime


def needs_refresh(
    age: float, force_refresh: bool = False, refresh_interval: float = DEFAULT_REFRESH_INTERVAL_SECONDS
) -> bool:
    return force_refresh or age > refresh_interval


def write_cache(path: Path, payload: str) -> None:
    """Replace the cache file with payload in one rename."""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(payload)
        os.replace(tmp_name, path)
    except OSError:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def resolve(
    query: Query,
    force_refresh: bool = False,
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL_SECONDS,
    cache_dir: Optional[Path] = None,
    fetch: Callable[[str], str] = fetch_url,
) -> str:
    """
    Return the raw payload for a query, from cache when it is fresh.

    Args:
        query: Normalized query
        force_refresh: Ignore the file age and refetch
        refresh_interval: Maximum age in seconds before a refetch
        cache_dir: Cache directory (defaults to resolve_cache_dir())
        fetch: Function performing the HTTP GET

    Returns:
        Raw JSON body; empty if a refetch failed

    Raises:
        CacheDirectoryError: If the cache directory is unusable
    """
    cache_dir = resolve_cache_dir() if cache_dir is None else cache_dir
    path = cache_path(cache_dir, query)
    age = cache_age(path)

    if not needs_refresh(age, force_refresh, refresh_interval):
        logger.info(f"Using cached {path} ({age:.0f}s old)")
        return path.read_text(encoding="utf-8")

    logger.info(f"Refreshing {path} (age {age:.0f}s, forced={force_refresh})")
    payload = fetch(build_cache_url(query))

    if payload:
        try:
            write_cache(path, payload)
        except OSError as e:
            raise CacheDirectoryError(f"Cannot write cache file {path}: {e}") from e
    else:
        logger.warning(f"Empty response, keeping existing {path}")

    return payload
