"""User lookups shared by the other adapters."""

from __future__ import annotations

from ..core import ApiError, Outcome, Site, first_record, http_json, parse_identifier
from ..core.config import API_MAX_PER_PAGE
from ..core.entities import USER

USER_NOT_FOUND = "No user found by that username or ID"


def resolve_user(site: Site, ident) -> Outcome:
    """Find a user by numeric id or login name.

    The value of an ok outcome is the user record (see ``USER``).
    """
    key = parse_identifier(ident)
    if key in (None, "", 0):
        return Outcome.not_found(USER_NOT_FOUND)
    try:
        if isinstance(key, int):
            data = http_json(
                "GET", site.endpoint(f"wp/v2/users/{key}"), site.auth, params={"context": "edit"}
            )
            user = first_record(data)
        else:
            data = http_json(
                "GET",
                site.endpoint("wp/v2/users"),
                site.auth,
                params={"search": key, "context": "edit", "per_page": API_MAX_PER_PAGE},
            )
            user = next(
                (
                    u
                    for u in data or []
                    if key.lower() in ((u.get("username") or "").lower(), (u.get("slug") or "").lower())
                ),
                None,
            )
    except ApiError as e:
        if e.not_found:
            return Outcome.not_found(USER_NOT_FOUND)
        return Outcome.failed(f"Could not look up user {ident}: {e.message}")
    if not user:
        return Outcome.not_found(USER_NOT_FOUND)
    return Outcome.ok(USER.record(user))
