"""Transactional email templates.

An email template is a ``bp-email`` post bound to a term of the
``bp-email-type`` taxonomy whose slug is the email type.  On multisite
networks both live on the network's primary site.
"""

from __future__ import annotations

from typing import Callable, Optional

from loguru import logger

from ..core import (
    ApiError,
    Outcome,
    Site,
    SiteContext,
    edit_text,
    first_record,
    http_json,
    read_from_file_or_stdin,
    slugify,
)
from ..core.entities import EMAIL_POST

EMAIL_POST_TYPE = "bp-email"
EMAIL_TAX_TYPE = "bp-email-type"


def _find_type_term(site: Site, email_type: str) -> Optional[dict]:
    terms = http_json(
        "GET",
        site.endpoint(f"wp/v2/{EMAIL_TAX_TYPE}"),
        site.auth,
        params={"slug": email_type, "hide_empty": False},
    )
    slug = slugify(email_type)
    return next(
        (t for t in terms or [] if t.get("slug") == slug or t.get("name") == email_type),
        None,
    )


def create_email(
    ctx: SiteContext,
    email_type: Optional[str],
    subject: Optional[str],
    content: Optional[str] = None,
    plain_text_content: str = "",
    type_description: str = "",
    source: Optional[str] = None,
    edit: bool = False,
    editor: Callable[[str, str], Optional[str]] = edit_text,
) -> Outcome:
    """Create an email post for a new email type.

    The steps run in a fixed order and stop at the first problem: the type
    must be given and unused, the subject given, and the content given
    directly, read from ``source`` or written in the editor.  Everything
    happens on the primary site.
    """
    with ctx.on_root() as site:
        return _create_email(
            site, email_type, subject, content, plain_text_content,
            type_description, source, edit, editor,
        )


def _create_email(
    site: Site,
    email_type: Optional[str],
    subject: Optional[str],
    content: Optional[str],
    plain_text_content: str,
    type_description: str,
    source: Optional[str],
    edit: bool,
    editor: Callable[[str, str], Optional[str]],
) -> Outcome:
    if not email_type:
        return Outcome.invalid("The 'type' field must be filled in.")

    try:
        existing = _find_type_term(site, email_type)
    except ApiError as e:
        return Outcome.failed(f"Could not check email type '{email_type}': {e.message}")
    if existing:
        return Outcome.conflict(f"Email type '{email_type}' already exists.")

    if not subject:
        return Outcome.invalid("The 'subject' field must be filled in.")

    if source:
        try:
            content = read_from_file_or_stdin(source)
        except OSError as e:
            return Outcome.invalid(f"Unable to read content from '{source}': {e.strerror or e}")
    if edit:
        current = content or ""
        content = editor(current, "BP Email Content") or current

    if not content:
        return Outcome.invalid("The 'content' field must be filled in.")

    failure = Outcome.failed(f"There was a problem creating the email post for type '{email_type}'.")
    payload = {
        "title": subject,
        "content": content,
        "excerpt": plain_text_content or "",
        "status": "publish",
    }
    try:
        post = first_record(
            http_json("POST", site.endpoint(f"wp/v2/{EMAIL_POST_TYPE}"), site.auth, payload)
        )
    except ApiError as e:
        logger.debug("Email post insert for {} failed: {}", email_type, e.message)
        return failure
    if not post or not post.get("id"):
        return failure

    try:
        bound = _bind_type(site, post["id"], email_type, type_description)
    except ApiError as e:
        logger.debug("Binding email type {} failed: {}", email_type, e.message)
        bound = False
    if not bound:
        _discard(site, f"wp/v2/{EMAIL_POST_TYPE}/{post['id']}")
        return failure
    return Outcome.ok(post["id"], f"Email post created for type '{email_type}'.")


def _bind_type(site: Site, post_id: int, email_type: str, type_description: str) -> bool:
    term = first_record(
        http_json(
            "POST",
            site.endpoint(f"wp/v2/{EMAIL_TAX_TYPE}"),
            site.auth,
            {"name": email_type, "slug": email_type},
        )
    )
    if not term or not term.get("id"):
        return False
    try:
        http_json(
            "POST",
            site.endpoint(f"wp/v2/{EMAIL_POST_TYPE}/{post_id}"),
            site.auth,
            {EMAIL_TAX_TYPE: [term["id"]]},
        )
        if type_description:
            http_json(
                "POST",
                site.endpoint(f"wp/v2/{EMAIL_TAX_TYPE}/{term['id']}"),
                site.auth,
                {"description": type_description},
            )
    except ApiError:
        _discard(site, f"wp/v2/{EMAIL_TAX_TYPE}/{term['id']}")
        raise
    return True


def _discard(site: Site, path: str) -> None:
    try:
        http_json("DELETE", site.endpoint(path), site.auth, params={"force": True})
    except ApiError as e:
        logger.warning("Could not remove {}: {}", path, e.message)


def get_email_post(ctx: SiteContext, email_type: str) -> Outcome:
    """Return the post bound to ``email_type``, looked up on the primary site."""
    with ctx.on_root() as site:
        return _get_email_post(site, email_type)


def _get_email_post(site: Site, email_type: str) -> Outcome:
    missing = Outcome.not_found(f"Email post for type '{email_type}' does not exist.")
    if not email_type:
        return missing
    try:
        term = _find_type_term(site, email_type)
        if not term:
            return missing
        posts = http_json(
            "GET",
            site.endpoint(f"wp/v2/{EMAIL_POST_TYPE}"),
            site.auth,
            params={EMAIL_TAX_TYPE: term["id"], "context": "edit", "per_page": 1},
        )
    except ApiError as e:
        if e.not_found:
            return missing
        return Outcome.failed(f"Could not fetch email post for type '{email_type}': {e.message}")
    post = first_record(posts)
    if not post:
        return missing
    return Outcome.ok(EMAIL_POST.record(post))


def reinstall_emails(ctx: SiteContext) -> Outcome:
    """Reset all email posts to the defaults shipped with BuddyPress.

    Emails are network wide, so the reset runs on the primary site.  The
    site answers with a status code (0 on success) and a message that is
    passed through unchanged.
    """
    with ctx.on_root() as site:
        try:
            data = http_json("POST", site.endpoint("buddypress/v1/emails/reinstall"), site.auth, {})
        except ApiError as e:
            return Outcome.failed(e.message)
    data = data if isinstance(data, dict) else {}
    message = data.get("message") or ""
    if data.get("code") == 0:
        return Outcome.ok(None, message or "Emails have been successfully reinstalled.")
    return Outcome.failed(message or "Could not reinstall emails.")
