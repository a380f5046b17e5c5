"""XProfile commands."""

from __future__ import annotations

from ..adapters.xprofile import (
    create_field,
    create_field_group,
    delete_field,
    delete_field_group,
    get_field,
    get_field_group,
    list_fields,
    set_field_data,
)
from ..core import get_site, report, show_item, show_items
from ..core.entities import FIELD, FIELD_GROUP


def cmd_xprofile_create_group(args) -> None:
    site = get_site()
    outcome = create_field_group(
        site, args.name, description=args.description, can_delete=args.can_delete
    )
    if outcome and args.porcelain:
        print(outcome.value["id"])
        return
    report(outcome)


def cmd_xprofile_get_group(args) -> None:
    site = get_site()
    show_item(get_field_group(site, args.field_group_id), args, FIELD_GROUP.field_names)


def cmd_xprofile_delete_group(args) -> None:
    site = get_site()
    report(delete_field_group(site, args.field_group_id))


def cmd_xprofile_list_fields(args) -> None:
    site = get_site()
    outcome = list_fields(
        site,
        profile_group_id=args.profile_group_id,
        user_id=args.user_id,
        member_type=args.member_type,
        hide_empty_groups=args.hide_empty_groups or None,
        hide_empty_fields=args.hide_empty_fields or None,
        exclude_groups=args.exclude_groups,
        exclude_fields=args.exclude_fields,
    )
    show_items(outcome, args, FIELD.default_list_fields)


def cmd_xprofile_create_field(args) -> None:
    site = get_site()
    outcome = create_field(
        site,
        args.name,
        args.field_group_id,
        type=args.type,
        description=args.description,
        is_required=args.required,
    )
    if outcome and args.porcelain:
        print(outcome.value["id"])
        return
    report(outcome)


def cmd_xprofile_delete_field(args) -> None:
    site = get_site()
    report(delete_field(site, args.field_id, delete_data=args.delete_data))


def cmd_xprofile_get_field(args) -> None:
    site = get_site()
    show_item(get_field(site, args.field_id), args, FIELD.field_names)


def cmd_xprofile_set_data(args) -> None:
    site = get_site()
    report(set_field_data(site, args.user_id, args.field_id, args.value))


__all__ = [
    "cmd_xprofile_create_group",
    "cmd_xprofile_get_group",
    "cmd_xprofile_delete_group",
    "cmd_xprofile_list_fields",
    "cmd_xprofile_create_field",
    "cmd_xprofile_delete_field",
    "cmd_xprofile_get_field",
    "cmd_xprofile_set_data",
]
