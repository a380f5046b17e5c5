"""Email template commands."""

from __future__ import annotations

from ..adapters.emails import create_email, get_email_post, reinstall_emails
from ..core import confirm, get_site_context, report, show_item
from ..core.entities import EMAIL_POST


def cmd_email_create(args) -> None:
    ctx = get_site_context()
    outcome = create_email(
        ctx,
        args.type,
        args.subject,
        content=args.content,
        plain_text_content=args.plain_text_content,
        type_description=args.type_description,
        source=args.source,
        edit=args.edit,
    )
    if outcome and args.porcelain:
        print(outcome.value)
        return
    report(outcome)


def cmd_email_get_post(args) -> None:
    ctx = get_site_context()
    show_item(get_email_post(ctx, args.type), args, EMAIL_POST.field_names)


def cmd_email_reinstall(args) -> None:
    ctx = get_site_context()
    confirm("Are you sure you want to reinstall BuddyPress emails?", args.yes)
    report(reinstall_emails(ctx))


__all__ = ["cmd_email_create", "cmd_email_get_post", "cmd_email_reinstall"]
