"""Utility helpers for URL normalization and output naming."""

from __future__ import annotations

import datetime as dt
import re
import time
from typing import Optional
from urllib.parse import urlparse

HOST_PATTERN = re.compile(r"[^a-zA-Z0-9]")


def sanitize_host(host: str, fallback: str = "site") -> str:
    """Replace every non-alphanumeric character of a host name with ``_``."""
    return HOST_PATTERN.sub("_", host) or fallback


def normalize_url(value: str) -> str:
    """Return an absolute http(s) URL, adding ``https://`` to bare hosts."""
    candidate = value.strip()
    if not candidate:
        raise ValueError("No URL given")
    if "://" not in candidate:
        candidate = f"https://{candidate}"
    parsed = urlparse(candidate)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise ValueError(f"Not an http(s) URL: {value}")
    return candidate


def output_dir_name(url: str, timestamp_ms: Optional[int] = None) -> str:
    """Build the ``cloned_<host>_<timestamp>`` directory name for a run."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    host = urlparse(url).hostname or ""
    return f"cloned_{sanitize_host(host)}_{timestamp_ms}"


def utc_timestamp() -> str:
    """ISO-8601 timestamp in UTC with millisecond precision."""
    now = dt.datetime.now(dt.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
