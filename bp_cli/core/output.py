"""Rendering of records as table, JSON, CSV or YAML."""

from __future__ import annotations

import csv
import json
import sys
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .result import Outcome, fail, report
from .utils import parse_list

FORMATS = ("table", "csv", "json", "yaml")

__all__ = [
    "FORMATS",
    "format_item",
    "format_items",
    "format_rows",
    "project",
    "show_item",
    "show_items",
]


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ", ".join(_cell(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _check_unique(fields: Sequence[str]) -> None:
    seen = set()
    for name in fields:
        if name in seen:
            fail(f"Duplicate field: {name}.")
        seen.add(name)


def project(
    record: Dict[str, Any],
    fields: Optional[Sequence[str]],
) -> Dict[str, Any]:
    """Return ``record`` restricted to ``fields`` in the given order.

    Without ``fields`` the record is returned as is.  Asking for a field the
    record does not have, or the same field twice, is an input error.
    """
    if not fields:
        return dict(record)
    _check_unique(fields)
    for name in fields:
        if name not in record:
            fail(f"Invalid field: {name}.")
    return {name: record[name] for name in fields}


def format_rows(rows: List[Dict[str, Any]], fields: Sequence[str]) -> None:
    widths = [max(len(_cell(r.get(f))) for r in rows + [dict(zip(fields, fields))]) for f in fields]
    header = " | ".join(f.ljust(w) for f, w in zip(fields, widths))
    sep = "-+-".join("-" * w for w in widths)
    print(header)
    print(sep)
    for r in rows:
        print(" | ".join(_cell(r.get(f)).ljust(w) for f, w in zip(fields, widths)))


def _write_csv(rows: List[Dict[str, Any]], fields: Sequence[str]) -> None:
    writer = csv.DictWriter(sys.stdout, fieldnames=list(fields), lineterminator="\n")
    writer.writeheader()
    for r in rows:
        writer.writerow({f: _cell(r.get(f)) for f in fields})


def _dump(data: Any, fmt: str) -> None:
    if fmt == "json":
        print(json.dumps(data, ensure_ascii=False, indent=2))
    else:
        sys.stdout.write(yaml.safe_dump(data, sort_keys=False, allow_unicode=True))


def format_item(
    record: Dict[str, Any],
    fmt: str = "table",
    fields: Optional[Sequence[str]] = None,
    *,
    field: Optional[str] = None,
) -> None:
    """Render a single record.

    ``field`` prints just that value, which is handy in shell scripts.
    """
    if field:
        value = project(record, [field])[field]
        if fmt in ("json", "yaml") and isinstance(value, (list, dict)):
            _dump(value, fmt)
        else:
            print(_cell(value))
        return

    item = project(record, fields)
    if fmt in ("json", "yaml"):
        _dump(item, fmt)
    elif fmt == "csv":
        _write_csv([{"Field": k, "Value": v} for k, v in item.items()], ["Field", "Value"])
    else:
        format_rows([{"Field": k, "Value": v} for k, v in item.items()], ["Field", "Value"])


def format_items(
    records: List[Dict[str, Any]],
    fmt: str = "table",
    fields: Optional[Sequence[str]] = None,
) -> None:
    """Render a sequence of records, one row each.

    ``fields`` defaults to the keys of the first record.  An empty sequence
    still renders a well formed result: a bare header for table/csv and an
    empty list for json/yaml.
    """
    if not fields:
        fields = list(records[0].keys()) if records else []
    _check_unique(fields)
    rows = [project(r, fields) for r in records]
    if fmt in ("json", "yaml"):
        _dump(rows, fmt)
    elif fmt == "csv":
        _write_csv(rows, fields)
    else:
        format_rows(rows, fields)


def show_item(outcome: Outcome, args, default_fields: Sequence[str]) -> None:
    """Render the record of an ok ``outcome`` using the ``get`` options in ``args``."""
    if not outcome:
        report(outcome)
        return
    fields = parse_list(getattr(args, "fields", None)) or list(default_fields)
    format_item(outcome.value, args.format, fields, field=getattr(args, "field", None))


def show_items(outcome: Outcome, args, default_fields: Sequence[str]) -> None:
    """Render the records of an ok ``outcome`` using the ``list`` options in ``args``."""
    if not outcome:
        report(outcome)
        return
    fields = parse_list(getattr(args, "fields", None)) or list(default_fields)
    format_items(outcome.value, args.format, fields)
