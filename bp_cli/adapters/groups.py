"""Community group operations."""

from __future__ import annotations

from typing import Any, Dict, Optional

from loguru import logger

from ..core import ApiError, Outcome, Site, fetch_all, first_record, http_json, parse_identifier, slugify
from ..core.entities import GROUP

GROUP_STATUSES = ("public", "private", "hidden")
GROUP_LIST_TYPES = ("active", "newest", "alphabetical", "random", "popular")
GROUP_NOT_FOUND = "No group found by that slug or ID."

_BASE = "buddypress/v1/groups"


def _failed(action: str, e: ApiError) -> Outcome:
    return Outcome.failed(f"Could not {action} the group: {e.message}")


def get_group(site: Site, ident) -> Outcome:
    """Fetch a group by numeric id or slug."""
    key = parse_identifier(ident)
    if key in (None, "", 0):
        return Outcome.not_found(GROUP_NOT_FOUND)
    try:
        if isinstance(key, int):
            group = first_record(http_json("GET", site.endpoint(f"{_BASE}/{key}"), site.auth))
        else:
            found = http_json(
                "GET",
                site.endpoint(_BASE),
                site.auth,
                params={"slug": key, "show_hidden": True},
            )
            group = next((g for g in found or [] if g.get("slug") == key), None)
    except ApiError as e:
        if e.not_found:
            return Outcome.not_found(GROUP_NOT_FOUND)
        return _failed("fetch", e)
    if not group or not group.get("id"):
        return Outcome.not_found(GROUP_NOT_FOUND)
    return Outcome.ok(GROUP.record(group))


def create_group(
    site: Site,
    name: Optional[str],
    slug: Optional[str] = None,
    description: str = "",
    status: str = "public",
    creator_id: Optional[int] = None,
    enable_forum: bool = False,
) -> Outcome:
    if not name:
        return Outcome.invalid("You must provide a --name parameter when creating a group.")
    if status not in GROUP_STATUSES:
        return Outcome.invalid(f"Invalid group status: {status}.")
    payload: Dict[str, Any] = {
        "name": name,
        "slug": slug or slugify(name),
        "description": description or "",
        "status": status,
        "enable_forum": bool(enable_forum),
    }
    if creator_id:
        payload["creator_id"] = creator_id
    try:
        group = first_record(http_json("POST", site.endpoint(_BASE), site.auth, payload))
    except ApiError as e:
        return _failed("create", e)
    if not group or not group.get("id"):
        return Outcome.failed("Could not create the group.")
    record = GROUP.record(group)
    return Outcome.ok(record, f"Group (ID {record['id']}) created: {record['url']}")


def update_group(site: Site, ident, **changes: Any) -> Outcome:
    """Apply ``changes`` to a group.

    Options left unset are ``None`` and ignored; with nothing to change the
    group is only looked up and the update reports success.
    """
    found = get_group(site, ident)
    if not found:
        return found
    group = found.value
    changes = {k: v for k, v in changes.items() if v is not None}
    if "status" in changes and changes["status"] not in GROUP_STATUSES:
        return Outcome.invalid(f"Invalid group status: {changes['status']}.")
    if not changes:
        logger.debug("Nothing to update for group {}", group["id"])
        return Outcome.ok(group, "Group successfully updated.")
    try:
        data = http_json("PUT", site.endpoint(f"{_BASE}/{group['id']}"), site.auth, changes)
    except ApiError as e:
        return _failed("update", e)
    updated = first_record(data)
    if not updated:
        return Outcome.failed("Could not update the group.")
    return Outcome.ok(GROUP.record(updated), "Group successfully updated.")


def delete_group(site: Site, ident) -> Outcome:
    found = get_group(site, ident)
    if not found:
        return found
    group_id = found.value["id"]
    try:
        data = http_json("DELETE", site.endpoint(f"{_BASE}/{group_id}"), site.auth)
    except ApiError as e:
        return _failed("delete", e)
    if not (isinstance(data, dict) and data.get("deleted")):
        return Outcome.failed("Could not delete the group.")
    return Outcome.ok(group_id, "Group successfully deleted.")


def list_groups(site: Site, *, count: Optional[int] = None, **filters: Any) -> Outcome:
    """List groups matching ``filters``; an empty list is still a success."""
    if filters.get("type") and filters["type"] not in GROUP_LIST_TYPES:
        return Outcome.invalid(f"Invalid group list type: {filters['type']}.")
    params = {k: v for k, v in filters.items() if v not in (None, "")}
    try:
        groups = fetch_all(site, _BASE, params=params, limit=count, desc="Groups")
    except ApiError as e:
        return Outcome.failed(f"Could not list groups: {e.message}")
    return Outcome.ok([GROUP.record(g) for g in groups])
