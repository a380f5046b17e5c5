"""Interactive helpers: confirmations, the external editor and content input."""

from __future__ import annotations

import os
import shlex
import subprocess
import sys
import tempfile
from pathlib import Path
from typing import Optional

from InquirerPy import inquirer
from loguru import logger

from .result import fail


def _execute(prompt):
    """Execute a prompt and handle ``Ctrl-C`` gracefully."""
    try:
        return prompt.execute()
    except KeyboardInterrupt:
        fail("Aborted.")


def confirm(message: str, assume_yes: bool = False) -> None:
    """Ask ``message`` and stop the command unless the user agrees.

    ``assume_yes`` comes from ``--yes`` and skips the prompt entirely.
    """
    if assume_yes:
        return
    if not _execute(inquirer.confirm(message=message, default=False)):
        fail("Aborted.")


def edit_text(initial: str, title: str = "") -> Optional[str]:
    """Open ``$VISUAL``/``$EDITOR`` on ``initial`` and return the result.

    Returns ``None`` when the editor exits with an error or the text came
    back unchanged, so callers can fall back to what they had.
    """
    editor = os.environ.get("VISUAL") or os.environ.get("EDITOR") or "vi"
    editor_argv = shlex.split(editor, posix=(os.name != "nt"))
    prefix = "".join(c if c.isalnum() else "-" for c in title.lower()).strip("-")
    fd, path = tempfile.mkstemp(prefix=f"{prefix or 'bp-cli'}-", suffix=".html")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(initial)
        logger.debug("Launching editor: {} {}", editor, path)
        proc = subprocess.run([*editor_argv, path], check=False)
        if proc.returncode != 0:
            logger.warning("Editor exited with status {}", proc.returncode)
            return None
        output = Path(path).read_text(encoding="utf-8")
    finally:
        os.unlink(path)
    if output == initial:
        return None
    return output


def read_from_file_or_stdin(source: str) -> str:
    """Return the contents of ``source``, or standard input when it is ``-``.

    Raises :class:`OSError` when the file cannot be read.
    """
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")
