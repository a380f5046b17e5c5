"""Extended profile (xprofile) field groups, fields and field data."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..core import ApiError, Outcome, Site, first_record, http_json, parse_identifier
from ..core.entities import FIELD, FIELD_GROUP
from .users import resolve_user

# Field types BuddyPress registers out of the box
FIELD_TYPES = (
    "checkbox",
    "checkbox_acceptance",
    "datebox",
    "multiselectbox",
    "number",
    "radio",
    "selectbox",
    "telephone",
    "textarea",
    "textbox",
    "url",
    "wp-biography",
    "wp-textbox",
)
DEFAULT_FIELD_TYPE = "textbox"

FIELD_NOT_FOUND = "Field not found."

_GROUPS = "buddypress/v1/xprofile/groups"
_FIELDS = "buddypress/v1/xprofile/fields"


# --- field groups ---------------------------------------------------------


def create_field_group(
    site: Site,
    name: Optional[str],
    description: str = "",
    can_delete: bool = True,
) -> Outcome:
    if not name:
        return Outcome.invalid("Please specify a group name.")
    payload = {"name": name, "description": description or "", "can_delete": bool(can_delete)}
    try:
        group = first_record(http_json("POST", site.endpoint(_GROUPS), site.auth, payload))
    except ApiError:
        return Outcome.failed("Could not create field group.")
    if not group or not group.get("id"):
        return Outcome.failed("Could not create field group.")
    record = FIELD_GROUP.record(group)
    return Outcome.ok(
        record, f'Created XProfile field group "{record["name"]}" (ID {record["id"]})'
    )


def get_field_group(site: Site, ident) -> Outcome:
    key = parse_identifier(ident)
    if not isinstance(key, int):
        return Outcome.invalid("This is not a valid field group ID.")
    try:
        group = first_record(http_json("GET", site.endpoint(f"{_GROUPS}/{key}"), site.auth))
    except ApiError as e:
        if e.not_found:
            return Outcome.not_found("No field group found.")
        return Outcome.failed(f"Could not fetch field group {key}: {e.message}")
    if not group or not group.get("id"):
        return Outcome.not_found("No field group found.")
    return Outcome.ok(FIELD_GROUP.record(group))


def delete_field_group(site: Site, ident) -> Outcome:
    key = parse_identifier(ident)
    if not isinstance(key, int):
        return Outcome.invalid("This is not a valid field group ID.")
    try:
        data = http_json("DELETE", site.endpoint(f"{_GROUPS}/{key}"), site.auth)
    except ApiError as e:
        if e.not_found:
            return Outcome.not_found("No field group found.")
        return Outcome.failed("Could not delete the field group.")
    if isinstance(data, dict) and data.get("deleted"):
        return Outcome.ok(key, "Field group deleted.")
    return Outcome.failed("Could not delete the field group.")


# --- fields ---------------------------------------------------------------


def _all_fields(site: Site, **filters: Any) -> List[dict]:
    """Return every field of the matching groups, keyed by id and id-sorted.

    Fields are nested under their field group in the API response; this
    flattens them so each field stands on its own with its ``group_id``.
    """
    params: Dict[str, Any] = {k: v for k, v in filters.items() if v not in (None, "")}
    params["fetch_fields"] = True
    groups = http_json("GET", site.endpoint(_GROUPS), site.auth, params=params) or []
    by_id: Dict[int, dict] = {}
    for group in groups:
        for field in group.get("fields") or []:
            field.setdefault("group_id", group.get("id"))
            by_id[int(field["id"])] = field
    return [by_id[k] for k in sorted(by_id)]


def list_fields(site: Site, **filters: Any) -> Outcome:
    try:
        fields = _all_fields(site, **filters)
    except ApiError as e:
        return Outcome.failed(f"Could not list fields: {e.message}")
    return Outcome.ok([FIELD.record(f) for f in fields])


def create_field(
    site: Site,
    name: Optional[str],
    field_group_id,
    type: str = DEFAULT_FIELD_TYPE,
    description: str = "",
    is_required: bool = False,
) -> Outcome:
    if type not in FIELD_TYPES:
        return Outcome.invalid("Not a valid field type.")
    if not name:
        return Outcome.invalid("Please specify a field name.")
    group_id = parse_identifier(field_group_id)
    if not isinstance(group_id, int):
        return Outcome.invalid("This is not a valid field group ID.")
    payload = {
        "group_id": group_id,
        "type": type,
        "name": name,
        "description": description or "",
        "required": bool(is_required),
    }
    try:
        field = first_record(http_json("POST", site.endpoint(_FIELDS), site.auth, payload))
    except ApiError:
        return Outcome.failed("Could not create field.")
    if not field or not field.get("id"):
        return Outcome.failed("Could not create field.")
    record = FIELD.record(field)
    return Outcome.ok(record, f'Created XProfile field "{record["name"]}" (ID {record["id"]})')


def resolve_field_id(site: Site, ident) -> Outcome:
    """Turn a numeric id or a field name into a field id."""
    key = parse_identifier(ident)
    if isinstance(key, int):
        return Outcome.ok(key)
    if not key:
        return Outcome.not_found(FIELD_NOT_FOUND)
    try:
        fields = _all_fields(site)
    except ApiError as e:
        return Outcome.failed(f"Could not look up field {key}: {e.message}")
    for field in fields:
        if field.get("name") == key:
            return Outcome.ok(int(field["id"]))
    return Outcome.not_found(FIELD_NOT_FOUND)


def _fetch_field(site: Site, field_id: int) -> Optional[dict]:
    try:
        field = first_record(http_json("GET", site.endpoint(f"{_FIELDS}/{field_id}"), site.auth))
    except ApiError as e:
        if e.not_found:
            return None
        raise
    if not field or not field.get("id"):
        return None
    return FIELD.record(field)


def get_field(site: Site, ident) -> Outcome:
    key = parse_identifier(ident)
    if not isinstance(key, int):
        return Outcome.invalid("Please provide a numeric field ID.")
    try:
        field = _fetch_field(site, key)
    except ApiError as e:
        return Outcome.failed(f"Could not fetch field {key}: {e.message}")
    if field is None:
        return Outcome.not_found("No field found.")
    return Outcome.ok(field)


def delete_field(site: Site, ident, delete_data: bool = False) -> Outcome:
    resolved = resolve_field_id(site, ident)
    if not resolved:
        return resolved
    field_id = resolved.value
    try:
        field = _fetch_field(site, field_id)
        if field is None:
            return Outcome.not_found(FIELD_NOT_FOUND)
        data = http_json(
            "DELETE",
            site.endpoint(f"{_FIELDS}/{field_id}"),
            site.auth,
            params={"delete_data": bool(delete_data)},
        )
    except ApiError:
        return Outcome.failed(f"Failed deleting field {field_id}.")
    if isinstance(data, dict) and data.get("deleted"):
        return Outcome.ok(
            field_id, f'Deleted XProfile field "{field["name"]}" (ID {field["id"]})'
        )
    return Outcome.failed(f"Failed deleting field {field_id}.")


def field_value(field_type: str, value: str):
    """Checkbox fields store several values; every other type a single string."""
    if field_type == "checkbox":
        return value.split(",")
    return value


def set_field_data(site: Site, user, field, value: Optional[str]) -> Outcome:
    """Store ``value`` in ``field`` for ``user``.

    Both ``user`` (login or id) and ``field`` (name or id) are resolved
    before anything is written.
    """
    found_user = resolve_user(site, user)
    if not found_user:
        return found_user
    user_rec = found_user.value

    if not value:
        return Outcome.invalid("Please specify a value information to set.")

    resolved = resolve_field_id(site, field)
    if not resolved:
        return resolved
    try:
        field_rec = _fetch_field(site, resolved.value)
    except ApiError as e:
        return Outcome.failed(f"Could not fetch field {resolved.value}: {e.message}")
    if field_rec is None or not field_rec.get("name"):
        return Outcome.not_found(FIELD_NOT_FOUND)

    payload = {"value": field_value(field_rec["type"], value)}
    try:
        data = http_json(
            "POST",
            site.endpoint(f"buddypress/v1/xprofile/{field_rec['id']}/data/{user_rec['id']}"),
            site.auth,
            payload,
        )
    except ApiError:
        return Outcome.failed("Could not set profile data.")
    if not data:
        return Outcome.failed("Could not set profile data.")
    return Outcome.ok(
        payload["value"],
        f'Updated field "{field_rec["name"]}" (ID {field_rec["id"]}) with value "{value}" '
        f'for user {user_rec["slug"]} (ID {user_rec["id"]})',
    )
