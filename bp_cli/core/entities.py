"""Field descriptors for the records the CLI displays.

Each entity type lists its visible fields in display order together with
the REST key each one is read from.  The formatter uses that order as the
default projection, so adding a field here is enough to make it show up in
``get`` and ``list`` output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence


@dataclass(frozen=True)
class Field:
    name: str
    kind: Callable[[Any], Any] = str
    source: Optional[str] = None

    @property
    def key(self) -> str:
        return self.source or self.name


def _plain(value: Any) -> Any:
    # WordPress returns some text fields as {"raw": ..., "rendered": ...}
    if isinstance(value, dict) and ("raw" in value or "rendered" in value):
        raw = value.get("raw")
        return raw if raw is not None else value.get("rendered")
    return value


def _coerce(kind: Callable[[Any], Any], value: Any) -> Any:
    if value is None or isinstance(value, (list, dict)):
        return value
    if kind is bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)
    try:
        return kind(value)
    except (TypeError, ValueError):
        return value


@dataclass(frozen=True)
class Entity:
    name: str
    fields: Sequence[Field]
    list_fields: Optional[Sequence[str]] = None

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    @property
    def default_list_fields(self) -> List[str]:
        return list(self.list_fields or self.field_names)

    def record(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Project a REST object onto this entity's fields, in order."""
        return {f.name: _coerce(f.kind, _plain(data.get(f.key))) for f in self.fields}


GROUP = Entity(
    "group",
    [
        Field("id", int),
        Field("name"),
        Field("slug"),
        Field("description"),
        Field("status"),
        Field("creator_id", int),
        Field("parent_id", int),
        Field("enable_forum", bool),
        Field("date_created"),
        Field("url", source="link"),
    ],
    list_fields=["id", "name", "slug", "status", "creator_id", "date_created"],
)

FIELD_GROUP = Entity(
    "xprofile field group",
    [
        Field("id", int),
        Field("name"),
        Field("description"),
        Field("group_order", int),
        Field("can_delete", bool),
    ],
)

FIELD = Entity(
    "xprofile field",
    [
        Field("id", int),
        Field("group_id", int),
        Field("parent_id", int),
        Field("type"),
        Field("name"),
        Field("description"),
        Field("is_required", bool),
        Field("can_delete", bool),
        Field("field_order", int),
        Field("order_by"),
    ],
    list_fields=["id", "name", "description", "type", "group_id", "is_required"],
)

USER = Entity(
    "user",
    [
        Field("id", int),
        Field("username"),
        Field("slug"),
        Field("name"),
    ],
)

EMAIL_POST = Entity(
    "email post",
    [
        Field("id", int),
        Field("date"),
        Field("modified"),
        Field("slug"),
        Field("status"),
        Field("type"),
        Field("title"),
        Field("content"),
        Field("excerpt"),
        Field("link"),
    ],
)
