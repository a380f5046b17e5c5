import json

import pytest
import yaml

from bp_cli.core.entities import FIELD, GROUP
from bp_cli.core.output import format_item, format_items

ROWS = [
    {"id": 1, "name": "One", "slug": "one", "tags": ["a", "b"]},
    {"id": 2, "name": "Two", "slug": "two", "tags": []},
]


def test_table_list_projection_order(capsys):
    format_items(ROWS, "table", ["slug", "id"])
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].split(" | ") == ["slug", "id"]
    assert lines[2].split(" | ") == ["one ", "1 "]
    assert len(lines) == 4


def test_table_empty_list_prints_header(capsys):
    format_items([], "table", ["id", "name"])
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["id | name", "---+-----"]


@pytest.mark.parametrize("fmt,expected", [("json", "[]\n"), ("yaml", "[]\n"), ("csv", "id,name\n")])
def test_empty_list_other_formats(capsys, fmt, expected):
    format_items([], fmt, ["id", "name"])
    assert capsys.readouterr().out == expected


def test_csv_joins_lists(capsys):
    format_items(ROWS, "csv", ["id", "tags"])
    assert capsys.readouterr().out == 'id,tags\n1,"a, b"\n2,\n'


def test_json_list_keeps_lists(capsys):
    format_items(ROWS, "json", ["name", "tags"])
    assert json.loads(capsys.readouterr().out) == [
        {"name": "One", "tags": ["a", "b"]},
        {"name": "Two", "tags": []},
    ]


def test_item_table_is_field_value(capsys):
    format_item(ROWS[0], "table", ["name", "slug"])
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].split(" | ")[0].strip() == "Field"
    assert [p.strip() for p in lines[2].split(" | ")] == ["name", "One"]
    assert [p.strip() for p in lines[3].split(" | ")] == ["slug", "one"]


def test_item_yaml_keeps_order(capsys):
    format_item(ROWS[0], "yaml", ["slug", "id"])
    out = capsys.readouterr().out
    assert out == "slug: one\nid: 1\n"
    assert yaml.safe_load(out) == {"slug": "one", "id": 1}


def test_item_single_field(capsys):
    format_item(ROWS[0], "table", field="slug")
    assert capsys.readouterr().out == "one\n"


def test_unknown_field_is_an_error(capsys):
    with pytest.raises(SystemExit) as exc:
        format_items(ROWS, "table", ["id", "nope"])
    assert exc.value.code == 1
    assert "Error: Invalid field: nope." in capsys.readouterr().err


def test_entity_record_flattens_rendered_text():
    record = GROUP.record({
        "id": "7",
        "name": "G",
        "slug": "g",
        "description": {"raw": "plain", "rendered": "<p>plain</p>"},
        "status": "public",
        "creator_id": 1,
        "parent_id": 0,
        "enable_forum": "0",
        "date_created": "2026-10-18T12:00:00",
        "link": "https://example.com/groups/g/",
    })
    assert list(record) == GROUP.field_names
    assert record["id"] == 7
    assert record["description"] == "plain"
    assert record["enable_forum"] is False
    assert record["url"] == "https://example.com/groups/g/"


def test_field_list_defaults_are_a_subset():
    assert FIELD.default_list_fields == ["id", "name", "description", "type", "group_id", "is_required"]
    assert set(FIELD.default_list_fields) <= set(FIELD.field_names)


@pytest.mark.parametrize("records", [ROWS, []])
def test_duplicate_field_is_an_error(capsys, records):
    with pytest.raises(SystemExit) as exc:
        format_items(records, "csv", ["id", "id"])
    assert exc.value.code == 1
    assert "Error: Duplicate field: id." in capsys.readouterr().err
