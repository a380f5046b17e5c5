"""Outcome of an adapter operation."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Status(str, Enum):
    OK = "ok"
    INVALID = "invalid"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    FAILED = "failed"


@dataclass
class Outcome:
    """Result of a single operation against the site.

    Adapters return one of these instead of printing or exiting so that the
    command layer decides how to report it.  ``value`` carries the entity or
    id on success.
    """

    status: Status
    message: str = ""
    value: Any = None

    def __bool__(self) -> bool:
        return self.status is Status.OK

    @classmethod
    def ok(cls, value: Any = None, message: str = "") -> "Outcome":
        return cls(Status.OK, message, value)

    @classmethod
    def invalid(cls, message: str) -> "Outcome":
        return cls(Status.INVALID, message)

    @classmethod
    def not_found(cls, message: str) -> "Outcome":
        return cls(Status.NOT_FOUND, message)

    @classmethod
    def conflict(cls, message: str) -> "Outcome":
        return cls(Status.CONFLICT, message)

    @classmethod
    def failed(cls, message: str) -> "Outcome":
        return cls(Status.FAILED, message)


def fail(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def report(outcome: Outcome) -> None:
    """Print ``Success: ...`` for an ok outcome, otherwise fail with exit 1."""
    if outcome:
        if outcome.message:
            print(f"Success: {outcome.message}")
        return
    fail(outcome.message)
