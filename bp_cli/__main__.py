"""Command line entry point for bp CLI."""

from __future__ import annotations

import argparse
import sys

from bp_cli import __version__
from bp_cli.adapters.groups import GROUP_LIST_TYPES, GROUP_STATUSES
from bp_cli.adapters.xprofile import DEFAULT_FIELD_TYPE
from bp_cli.core import FORMATS, setup_logging
from bp_cli.commands import (
    cmd_config_set,
    cmd_config_show,
    cmd_group_create,
    cmd_group_get,
    cmd_group_update,
    cmd_group_delete,
    cmd_group_list,
    cmd_xprofile_create_group,
    cmd_xprofile_get_group,
    cmd_xprofile_delete_group,
    cmd_xprofile_list_fields,
    cmd_xprofile_create_field,
    cmd_xprofile_delete_field,
    cmd_xprofile_get_field,
    cmd_xprofile_set_data,
    cmd_email_create,
    cmd_email_get_post,
    cmd_email_reinstall,
)


class CommandParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors the way commands report failures."""

    def error(self, message):
        self.print_usage(sys.stderr)
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(1)


def _bool(value: str) -> bool:
    text = value.strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off"):
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {value!r}")


def _add_format(p, *, fields=True, field=False):
    p.add_argument("--format", choices=FORMATS, default="table", help="Render output in a particular format")
    if fields:
        p.add_argument("--fields", help="Comma separated list of fields to show")
    if field:
        p.add_argument("--field", help="Print the value of a single field")


def build_parser() -> argparse.ArgumentParser:
    parser = CommandParser(prog="bp", description="BuddyPress administration CLI")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log HTTP requests to stderr")
    sub = parser.add_subparsers(dest="cmd", parser_class=CommandParser)

    # config
    p_config = sub.add_parser("config", help="Site URL and credentials")
    sub_config = p_config.add_subparsers(dest="config_cmd", parser_class=CommandParser)

    p_config_set = sub_config.add_parser("set", help="Save site URL and credentials to ~/.bp-cli.json")
    p_config_set.add_argument("--url", help="Site URL, e.g. https://example.com")
    p_config_set.add_argument("--root-url", help="Primary site URL of a multisite network")
    p_config_set.add_argument("--user", help="User login")
    p_config_set.add_argument("--password", help="Application password")
    p_config_set.set_defaults(func=cmd_config_set)

    p_config_show = sub_config.add_parser("show", help="Show the effective configuration")
    p_config_show.set_defaults(func=cmd_config_show)

    # group
    p_group = sub.add_parser("group", help="Manage community groups")
    sub_group = p_group.add_subparsers(dest="group_cmd", parser_class=CommandParser)

    p_g_create = sub_group.add_parser("create", help="Create a group")
    p_g_create.add_argument("--name", help="Name of the group")
    p_g_create.add_argument("--slug", help="URL-safe slug (derived from the name by default)")
    p_g_create.add_argument("--description", default="", help="Group description")
    p_g_create.add_argument("--creator-id", "--creator_id", dest="creator_id", type=int, help="Id of the group creator")
    p_g_create.add_argument("--status", choices=GROUP_STATUSES, default="public")
    p_g_create.add_argument("--enable-forum", "--enable_forum", dest="enable_forum", action="store_true")
    p_g_create.add_argument("--porcelain", action="store_true", help="Output only the new group id")
    p_g_create.set_defaults(func=cmd_group_create)

    p_g_get = sub_group.add_parser("get", help="Get a group")
    p_g_get.add_argument("group", help="Group id or slug")
    _add_format(p_g_get, field=True)
    p_g_get.set_defaults(func=cmd_group_get)

    p_g_update = sub_group.add_parser("update", help="Update a group")
    p_g_update.add_argument("group", help="Group id or slug")
    p_g_update.add_argument("--name")
    p_g_update.add_argument("--slug")
    p_g_update.add_argument("--description")
    p_g_update.add_argument("--status", choices=GROUP_STATUSES)
    p_g_update.add_argument("--enable-forum", "--enable_forum", dest="enable_forum", type=_bool)
    p_g_update.set_defaults(func=cmd_group_update)

    p_g_delete = sub_group.add_parser("delete", help="Delete a group")
    p_g_delete.add_argument("group", help="Group id or slug")
    p_g_delete.add_argument("--yes", action="store_true", help="Answer yes to the confirmation message")
    p_g_delete.set_defaults(func=cmd_group_delete)

    p_g_list = sub_group.add_parser("list", help="List groups")
    p_g_list.add_argument("--type", choices=GROUP_LIST_TYPES, help="Sort order")
    p_g_list.add_argument("--user-id", "--user_id", dest="user_id", type=int, help="Only groups this user belongs to")
    p_g_list.add_argument("--status", choices=GROUP_STATUSES)
    p_g_list.add_argument("--search", help="Search term")
    p_g_list.add_argument("--show-hidden", "--show_hidden", dest="show_hidden", action="store_true")
    p_g_list.add_argument("--count", type=int, help="Maximum number of groups to return")
    _add_format(p_g_list)
    p_g_list.set_defaults(func=cmd_group_list)

    # xprofile
    p_xp = sub.add_parser("xprofile", help="Manage extended profile fields")
    sub_xp = p_xp.add_subparsers(dest="xprofile_cmd", parser_class=CommandParser)

    p_xp_cg = sub_xp.add_parser("create_group", help="Create a field group")
    p_xp_cg.add_argument("--name", help="Name of the field group")
    p_xp_cg.add_argument("--description", default="")
    p_xp_cg.add_argument("--can-delete", "--can_delete", dest="can_delete", type=_bool, default=True)
    p_xp_cg.add_argument("--porcelain", action="store_true", help="Output only the new field group id")
    p_xp_cg.set_defaults(func=cmd_xprofile_create_group)

    p_xp_gg = sub_xp.add_parser("get_group", help="Get a field group")
    p_xp_gg.add_argument("field_group_id", help="Field group id")
    _add_format(p_xp_gg)
    p_xp_gg.set_defaults(func=cmd_xprofile_get_group)

    p_xp_dg = sub_xp.add_parser("delete_group", help="Delete a field group")
    p_xp_dg.add_argument("field_group_id", help="Field group id")
    p_xp_dg.set_defaults(func=cmd_xprofile_delete_group)

    p_xp_lf = sub_xp.add_parser("list_fields", help="List fields of all field groups")
    p_xp_lf.add_argument("--profile-group-id", "--profile_group_id", dest="profile_group_id", type=int)
    p_xp_lf.add_argument("--user-id", "--user_id", dest="user_id", type=int)
    p_xp_lf.add_argument("--member-type", "--member_type", dest="member_type")
    p_xp_lf.add_argument("--hide-empty-groups", "--hide_empty_groups", dest="hide_empty_groups", action="store_true")
    p_xp_lf.add_argument("--hide-empty-fields", "--hide_empty_fields", dest="hide_empty_fields", action="store_true")
    p_xp_lf.add_argument("--exclude-groups", "--exclude_groups", dest="exclude_groups", help="Comma separated group ids")
    p_xp_lf.add_argument("--exclude-fields", "--exclude_fields", dest="exclude_fields", help="Comma separated field ids")
    _add_format(p_xp_lf)
    p_xp_lf.set_defaults(func=cmd_xprofile_list_fields)

    p_xp_cf = sub_xp.add_parser("create_field", help="Create a field")
    p_xp_cf.add_argument("--type", default=DEFAULT_FIELD_TYPE, help=f"Field type (default: {DEFAULT_FIELD_TYPE})")
    p_xp_cf.add_argument("--field-group-id", "--field_group_id", dest="field_group_id", required=True)
    p_xp_cf.add_argument("--name", required=True, help="Name of the new field")
    p_xp_cf.add_argument("--description", default="")
    p_xp_cf.add_argument("--required", action="store_true", help="Make the field required")
    p_xp_cf.add_argument("--porcelain", action="store_true", help="Output only the new field id")
    p_xp_cf.set_defaults(func=cmd_xprofile_create_field)

    p_xp_df = sub_xp.add_parser("delete_field", help="Delete a field")
    p_xp_df.add_argument("field_id", help="Field id or name")
    p_xp_df.add_argument("--delete-data", "--delete_data", dest="delete_data", action="store_true",
                         help="Delete user data for the field as well")
    p_xp_df.set_defaults(func=cmd_xprofile_delete_field)

    p_xp_gf = sub_xp.add_parser("get_field", help="Get a field")
    p_xp_gf.add_argument("field_id", help="Field id")
    _add_format(p_xp_gf)
    p_xp_gf.set_defaults(func=cmd_xprofile_get_field)

    p_xp_sd = sub_xp.add_parser("set_data", help="Set profile data for a user")
    p_xp_sd.add_argument("--user-id", "--user_id", dest="user_id", required=True, help="User login or id")
    p_xp_sd.add_argument("--field-id", "--field_id", dest="field_id", required=True, help="Field name or id")
    p_xp_sd.add_argument("--value", required=True, help="Value to set; comma separated for checkboxes")
    p_xp_sd.set_defaults(func=cmd_xprofile_set_data)

    # email
    p_email = sub.add_parser("email", help="Manage email templates")
    sub_email = p_email.add_subparsers(dest="email_cmd", parser_class=CommandParser)

    p_e_create = sub_email.add_parser("create", aliases=["add"], help="Create an email post for a new email type")
    p_e_create.add_argument("source", nargs="?", help="Read content from this file, or - for standard input")
    p_e_create.add_argument("--type", help="Unique email type (slug)")
    p_e_create.add_argument("--type-description", "--type_description", dest="type_description", default="")
    p_e_create.add_argument("--subject", help="Email subject line")
    p_e_create.add_argument("--content", help="Email content")
    p_e_create.add_argument("--plain-text-content", "--plain_text_content", dest="plain_text_content", default="")
    p_e_create.add_argument("--edit", action="store_true", help="Edit the content in $EDITOR")
    p_e_create.add_argument("--porcelain", action="store_true", help="Output only the new post id")
    p_e_create.set_defaults(func=cmd_email_create)

    p_e_get = sub_email.add_parser("get-post", help="Get the post connected to an email type")
    p_e_get.add_argument("type", help="Email type")
    _add_format(p_e_get, field=True)
    p_e_get.set_defaults(func=cmd_email_get_post)

    p_e_reinstall = sub_email.add_parser("reinstall", help="Reinstall the default emails")
    p_e_reinstall.add_argument("--yes", action="store_true", help="Answer yes to the confirmation message")
    p_e_reinstall.set_defaults(func=cmd_email_reinstall)

    parser.set_defaults(
        _groups={
            "config": p_config,
            "group": p_group,
            "xprofile": p_xp,
            "email": p_email,
        }
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if not args.cmd:
        parser.print_help()
        return 0
    if not hasattr(args, "func"):
        args._groups[args.cmd].print_help()
        return 0
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
