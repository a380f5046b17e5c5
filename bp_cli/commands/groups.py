"""Group commands."""

from __future__ import annotations

from ..adapters.groups import create_group, delete_group, get_group, list_groups, update_group
from ..core import confirm, get_site, report, show_item, show_items
from ..core.entities import GROUP


def cmd_group_create(args) -> None:
    site = get_site()
    outcome = create_group(
        site,
        args.name,
        slug=args.slug,
        description=args.description,
        status=args.status,
        creator_id=args.creator_id,
        enable_forum=args.enable_forum,
    )
    if outcome and args.porcelain:
        print(outcome.value["id"])
        return
    report(outcome)


def cmd_group_get(args) -> None:
    site = get_site()
    show_item(get_group(site, args.group), args, GROUP.field_names)


def cmd_group_update(args) -> None:
    site = get_site()
    outcome = update_group(
        site,
        args.group,
        name=args.name,
        slug=args.slug,
        description=args.description,
        status=args.status,
        enable_forum=args.enable_forum,
    )
    report(outcome)


def cmd_group_delete(args) -> None:
    site = get_site()
    confirm(f"Are you sure you want to delete group {args.group}?", args.yes)
    report(delete_group(site, args.group))


def cmd_group_list(args) -> None:
    site = get_site()
    outcome = list_groups(
        site,
        count=args.count,
        type=args.type,
        user_id=args.user_id,
        status=args.status,
        search=args.search,
        show_hidden=args.show_hidden or None,
    )
    show_items(outcome, args, GROUP.default_list_fields)


__all__ = [
    "cmd_group_create",
    "cmd_group_get",
    "cmd_group_update",
    "cmd_group_delete",
    "cmd_group_list",
]
