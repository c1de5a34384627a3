# ruff: noqa: S101
import json

import pytest

from benchlab.catalog import (
    PRESET_PROFILES,
    catalog_from_records,
    complexity_class,
    find_profile,
    load_catalog,
    profile_from_mapping,
)
from benchlab.config import HTTP_METHODS
from benchlab.errors import CatalogError


def _record(**overrides):
    record = {
        "id": "orders",
        "label": "Orders · API D",
        "complexity": "Média",
        "description": "Order lookup.",
        "method": "get",
        "baseUrl": "https://orders.example.com",
        "path": "/v1/orders",
        "headers": {"Accept": "application/json", "X-Retries": 2, "X-Debug": True},
        "query": {"limit": 10, "cursor": None},
        "body": {},
        "checklist": ["Ask for a sandbox key."],
    }
    record.update(overrides)
    return record


def test_presets_are_well_formed():
    assert [p.id for p in PRESET_PROFILES] == ["payments", "loans", "kyc"]
    for profile in PRESET_PROFILES:
        assert profile.method in HTTP_METHODS
        assert profile.checklist
        assert all(isinstance(v, str) for v in profile.headers.values())
    assert catalog_from_records(
        {
            "id": p.id,
            "label": p.label,
            "method": p.method,
            "base_url": p.base_url,
            "path": p.path,
            "headers": p.headers,
            "query": p.query,
            "body": p.body,
        }
        for p in PRESET_PROFILES
    )


def test_profile_from_mapping_normalizes_record():
    profile = profile_from_mapping(_record())
    assert profile.method == "GET"
    assert profile.base_url == "https://orders.example.com"
    assert profile.headers == {"Accept": "application/json", "X-Retries": "2", "X-Debug": "true"}
    assert profile.query == {"limit": 10, "cursor": None}
    assert profile.checklist == ("Ask for a sandbox key.",)


def test_profile_from_mapping_defaults():
    profile = profile_from_mapping({"id": "bare"})
    assert profile.label == "bare"
    assert profile.method == "GET"
    assert profile.path == "/"
    assert profile.headers == {}
    assert profile.body == {}
    assert profile.checklist == ()


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"id": ""}, "id must not be empty"),
        ({"method": "TRACE"}, "unsupported method"),
        ({"headers": {"X": {"nested": 1}}}, "non-scalar"),
        ({"headers": ["Accept"]}, "must be an object"),
        ({"query": {"ids": [1, 2]}}, "non-scalar"),
        ({"body": {"when": object()}}, "not JSON-serializable"),
        ({"checklist": "read the docs"}, "list of strings"),
        ({"label": 5}, "'label' must be a string"),
    ],
)
def test_profile_from_mapping_rejects_bad_records(overrides, message):
    with pytest.raises(CatalogError, match=message):
        profile_from_mapping(_record(**overrides))


def test_catalog_rejects_duplicates_and_empty():
    with pytest.raises(CatalogError, match="Duplicate profile id"):
        catalog_from_records([_record(), _record()])
    with pytest.raises(CatalogError, match="empty"):
        catalog_from_records([])


def test_load_catalog_from_file(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps([_record(), _record(id="second", method="POST")]), encoding="utf-8")

    profiles = load_catalog(path)

    assert [p.id for p in profiles] == ["orders", "second"]
    assert profiles[1].method == "POST"


def test_load_catalog_errors(tmp_path):
    with pytest.raises(CatalogError, match="Could not read catalog"):
        load_catalog(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogError, match="Could not read catalog"):
        load_catalog(broken)

    not_a_list = tmp_path / "object.json"
    not_a_list.write_text('{"id": "x"}', encoding="utf-8")
    with pytest.raises(CatalogError, match="JSON array"):
        load_catalog(not_a_list)


def test_find_profile():
    assert find_profile(PRESET_PROFILES, "kyc").id == "kyc"
    assert find_profile(PRESET_PROFILES, "nope") is PRESET_PROFILES[0]


@pytest.mark.parametrize(
    ("label", "expected"),
    [("Baixa", "baixa"), ("Média", "media"), ("Very High", "very-high"), ("High", "high")],
)
def test_complexity_class(label, expected):
    assert complexity_class(label) == expected
