"""Minimal HTTP helpers for the CLI.

The implementation uses :mod:`urllib` from the Python standard library.
Every failure, HTTP or network, is raised as :class:`ApiError` so the
adapters can map it onto an outcome instead of the transport deciding how
the process exits.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Tuple
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from loguru import logger


class ApiError(Exception):
    """An error response from the REST API.

    ``status`` is the HTTP status code, or ``0`` when the site could not be
    reached at all.  ``code`` is WordPress's machine readable error code
    (``rest_post_invalid_id`` and the like) when the body carried one.
    """

    def __init__(self, status: int, message: str, code: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.code = code
        self.message = message

    @property
    def not_found(self) -> bool:
        return self.status == 404


def _query(params: Optional[Dict[str, Any]]) -> str:
    if not params:
        return ""
    clean = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        clean[key] = value
    return urlencode(clean, doseq=True)


def http_request(
    method: str,
    url: str,
    auth: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = None,
    *,
    params: Optional[Dict[str, Any]] = None,
) -> Tuple[Any, Dict[str, str]]:
    """Perform an HTTP request and return ``(parsed JSON, response headers)``."""

    headers = {"Accept": "application/json"}
    if auth:
        headers["Authorization"] = auth
    data = None
    if payload is not None:
        # JSON body for POST/PUT requests
        headers["Content-Type"] = "application/json"
        data = json.dumps(payload).encode("utf-8")
    query = _query(params)
    if query:
        url = f"{url}{'&' if '?' in url else '?'}{query}"
    logger.debug("{} {}", method.upper(), url)
    req = Request(url=url, method=method.upper(), headers=headers, data=data)
    try:
        with urlopen(req, timeout=60) as resp:
            raw = resp.read()
            resp_headers = {k.lower(): v for k, v in dict(resp.headers).items()}
    except HTTPError as e:
        raise _api_error(e) from e
    except URLError as e:
        raise ApiError(0, f"Network error: {e.reason}", "network_error") from e

    if not raw:
        return None, resp_headers
    try:
        return json.loads(raw.decode("utf-8")), resp_headers
    except ValueError as e:
        raise ApiError(0, f"Invalid JSON response from {url}", "invalid_json") from e


def http_json(
    method: str,
    url: str,
    auth: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = None,
    *,
    params: Optional[Dict[str, Any]] = None,
) -> Any:
    """Like :func:`http_request` but return only the parsed body."""
    data, _ = http_request(method, url, auth, payload, params=params)
    return data


def _api_error(e: HTTPError) -> ApiError:
    body = e.read().decode("utf-8", errors="ignore")
    message = body or str(e.reason)
    code = ""
    try:
        data = json.loads(body)
        if isinstance(data, dict) and data.get("message"):
            message = data["message"]
            code = data.get("code") or ""
    except ValueError:
        pass
    logger.debug("HTTP {} {}: {}", e.code, code, message)

    if e.code == 401:
        message = f"Authentication failed: {message}"
    elif e.code == 403:
        message = f"Forbidden: {message} (does this user have the required capability?)"
    return ApiError(e.code, message, code)
