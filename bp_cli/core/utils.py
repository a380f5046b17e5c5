"""Utility functions for bp CLI."""

from __future__ import annotations

import re
import sys
import unicodedata
from typing import Any, Dict, List, Optional, Union

from loguru import logger
from tqdm import tqdm

from .config import API_MAX_PER_PAGE, Site
from .http import http_request

__all__ = [
    "fetch_all",
    "first_record",
    "parse_identifier",
    "parse_list",
    "slugify",
]


def fetch_all(
    site: Site,
    path: str,
    *,
    params: Optional[Dict[str, Any]] = None,
    per_page: int = API_MAX_PER_PAGE,
    limit: Optional[int] = None,
    desc: str = "Loading",
) -> List[dict]:
    """Fetch pages of a collection until ``X-WP-TotalPages`` is reached.

    ``limit`` stops early once that many items were collected.
    """
    per_page = min(per_page, API_MAX_PER_PAGE)
    if limit is not None:
        per_page = max(1, min(per_page, limit))
    params = dict(params or {})
    url = site.endpoint(path)

    results: List[dict] = []
    page = 1
    with tqdm(total=None, unit="pg", desc=desc, disable=not sys.stderr.isatty()) as bar:
        while True:
            query = dict(params, page=page, per_page=per_page)
            data, headers = http_request("GET", url, site.auth, params=query)
            items = data if isinstance(data, list) else []
            results.extend(items)
            bar.update(1)
            try:
                total_pages = int(headers.get("x-wp-totalpages") or 1)
            except ValueError:
                total_pages = 1
            bar.total = total_pages
            if limit is not None and len(results) >= limit:
                results = results[:limit]
                break
            if page >= total_pages or len(items) < per_page:
                break
            page += 1
    logger.debug("Fetched {} item(s) from {} in {} page(s)", len(results), path, page)
    return results


def first_record(data: Any) -> Optional[dict]:
    """Return the single object from a BuddyPress response.

    BuddyPress endpoints wrap single objects in a one-element list; WordPress
    core endpoints return the object itself.
    """
    if isinstance(data, list):
        return data[0] if data and isinstance(data[0], dict) else None
    if isinstance(data, dict):
        return data
    return None


def parse_identifier(value: Union[str, int, None]) -> Union[int, str, None]:
    """Return ``value`` as an int id when numeric, else as a stripped name."""
    if value is None:
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    return text


def parse_list(value: Optional[str]) -> Optional[List[str]]:
    """Split a comma separated option value, dropping blanks."""
    if value is None:
        return None
    items = [part.strip() for part in value.split(",")]
    return [item for item in items if item]


def slugify(name: str, maxlen: int = 200) -> str:
    """Return a URL slug for *name* the way WordPress sanitizes titles."""
    name = unicodedata.normalize("NFKD", name or "")
    name = name.encode("ascii", "ignore").decode("ascii").lower()
    name = re.sub(r"[^a-z0-9\s_-]", "", name)
    name = re.sub(r"[\s-]+", "-", name).strip("-")
    return name[:maxlen].rstrip("-")
