"""Tests for bookmark models and their JSON form."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from vaultmarks.bookmarks.models import Document, FileNode, GroupNode


def test_file_node_defaults():
    node = FileNode(path="a.md")
    assert node.type == "file"
    assert node.ctime == 0


def test_negative_ctime_rejected():
    with pytest.raises(ValidationError):
        FileNode(path="a.md", ctime=-1)


def test_to_json_shape_and_key_order():
    doc = Document(items=[
        FileNode(path="a.md", ctime=5),
        GroupNode(path="G", title="G", ctime=7, items=[FileNode(path="G/b.md")]),
    ])
    raw = doc.to_json()
    data = json.loads(raw)

    assert list(data) == ["items"]
    assert list(data["items"][0]) == ["type", "ctime", "path"]
    assert list(data["items"][1]) == ["type", "ctime", "title", "path", "items"]
    assert data["items"][1]["items"][0] == {"type": "file", "ctime": 0, "path": "G/b.md"}
    # two-space indentation
    assert '\n  "items": [' in raw
    assert '\n    {\n      "type": "file"' in raw


def test_to_json_keeps_unicode():
    doc = Document(items=[FileNode(path="Café/Über.md")])
    assert "Café/Über.md" in doc.to_json()


def test_from_json_round_trip():
    doc = Document(items=[GroupNode(path="G", title="G", items=[FileNode(path="G/a.md", ctime=3)])])
    assert Document.from_json(doc.to_json()) == doc


def test_from_json_rejects_invalid_json():
    with pytest.raises(ValueError, match="not valid JSON"):
        Document.from_json("{nope")


@pytest.mark.parametrize("raw", ['{"other": []}', '{"items": {}}', "[]", '"items"'])
def test_from_json_rejects_missing_items(raw):
    with pytest.raises(ValueError, match="items"):
        Document.from_json(raw)


def test_from_json_skips_foreign_and_invalid_entries():
    raw = json.dumps({
        "items": [
            {"type": "search", "query": "tag:#todo"},
            {"type": "url", "url": "https://example.com"},
            {"type": "file", "path": "keep.md", "ctime": 1},
            {"type": "file"},
            "junk",
            {"type": "group", "title": "G", "path": "G", "items": [
                {"type": "file", "path": "G/a.md"},
                {"type": "file", "path": 42},
            ]},
        ]
    })
    doc = Document.from_json(raw)
    assert [n.path for n in doc.items] == ["keep.md", "G"]
    assert [n.path for n in doc.items[1].items] == ["G/a.md"]


def test_from_json_group_without_items_or_title():
    doc = Document.from_json('{"items": [{"type": "group", "path": "G"}]}')
    group = doc.items[0]
    assert isinstance(group, GroupNode)
    assert group.items == []
    assert group.title == ""


def test_document_validates_discriminated_union():
    doc = Document.model_validate({"items": [
        {"type": "group", "title": "G", "path": "G", "items": [{"type": "file", "path": "G/a.md"}]},
    ]})
    assert isinstance(doc.items[0], GroupNode)
    assert isinstance(doc.items[0].items[0], FileNode)


@pytest.mark.parametrize("ctime, expected", [
    (1.5, 1),
    (1700000000000.75, 1700000000000),
    (-5, 0),
    (None, 0),
    ("yesterday", 0),
    (True, 0),
    (float("inf"), 0),
])
def test_from_json_tolerates_odd_ctime(ctime, expected):
    raw = json.dumps({"items": [
        {"type": "file", "path": "a.md", "ctime": ctime},
        {"type": "group", "title": "G", "path": "G", "ctime": ctime, "items": []},
    ]})
    doc = Document.from_json(raw)
    assert [n.path for n in doc.items] == ["a.md", "G"]
    assert [n.ctime for n in doc.items] == [expected, expected]


def test_from_json_non_string_title_becomes_empty():
    doc = Document.from_json('{"items": [{"type": "group", "path": "G", "title": 7}]}')
    assert doc.items[0].title == ""


def test_from_json_deep_json_nesting_raises_value_error():
    raw = '{"items": ' + "[" * 100000 + "]" * 100000 + "}"
    with pytest.raises(ValueError, match="nested too deeply"):
        Document.from_json(raw)


def test_from_json_deep_group_chain_raises_value_error():
    depth = 3000
    opening = "".join(f'{{"type": "group", "title": "g", "path": "g{i}", "items": [' for i in range(depth))
    leaf = '{"type": "file", "path": "leaf.md"}'
    raw = '{"items": [' + opening + leaf + "]}" * depth + "]}"
    with pytest.raises(ValueError, match="nested too deeply"):
        Document.from_json(raw)
