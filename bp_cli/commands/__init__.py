"""Command handlers for bp CLI."""

from .config import cmd_config_set, cmd_config_show
from .groups import (
    cmd_group_create,
    cmd_group_get,
    cmd_group_update,
    cmd_group_delete,
    cmd_group_list,
)
from .xprofile import (
    cmd_xprofile_create_group,
    cmd_xprofile_get_group,
    cmd_xprofile_delete_group,
    cmd_xprofile_list_fields,
    cmd_xprofile_create_field,
    cmd_xprofile_delete_field,
    cmd_xprofile_get_field,
    cmd_xprofile_set_data,
)
from .emails import cmd_email_create, cmd_email_get_post, cmd_email_reinstall

__all__ = [
    "cmd_config_set",
    "cmd_config_show",
    "cmd_group_create",
    "cmd_group_get",
    "cmd_group_update",
    "cmd_group_delete",
    "cmd_group_list",
    "cmd_xprofile_create_group",
    "cmd_xprofile_get_group",
    "cmd_xprofile_delete_group",
    "cmd_xprofile_list_fields",
    "cmd_xprofile_create_field",
    "cmd_xprofile_delete_field",
    "cmd_xprofile_get_field",
    "cmd_xprofile_set_data",
    "cmd_email_create",
    "cmd_email_get_post",
    "cmd_email_reinstall",
]
