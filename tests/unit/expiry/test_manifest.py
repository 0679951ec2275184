"""Tests for flag manifest loading and validation."""
from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from flagfit.core.exceptions import ManifestError
from flagfit.core.expiry import load_manifest, parse_manifest

from helpers.records import flag_entry, write_manifest


def test_loads_yaml_manifest(tmp_path: Path) -> None:
    path = write_manifest(tmp_path / "flags.yaml", [flag_entry(), flag_entry(owner="alice")])

    entries = load_manifest(path)

    assert [e["owner"] for e in entries] == ["bob", "alice"]


def test_loads_json_manifest(tmp_path: Path) -> None:
    path = write_manifest(tmp_path / "flags.json", [flag_entry()])

    entries = load_manifest(path)

    assert entries[0]["expiryDate"] == "2023-01-10"


def test_unquoted_yaml_dates_stay_strings(tmp_path: Path) -> None:
    path = tmp_path / "flags.yaml"
    path.write_text(
        "flags:\n"
        "  - annotation: FlagType.Experiment\n"
        "    owner: bob\n"
        "    expiryDate: 2023-01-10\n",
        encoding="utf-8",
    )

    entries = load_manifest(path)

    assert entries[0]["expiryDate"] == "2023-01-10"


def test_unquoted_impossible_date_fails_only_its_entry(tmp_path: Path) -> None:
    path = tmp_path / "flags.yaml"
    path.write_text(
        "flags:\n"
        "  - annotation: FlagType.Experiment\n"
        "    owner: bob\n"
        "    expiryDate: 2023-02-30\n"
        "  - annotation: FlagType.Experiment\n"
        "    owner: alice\n"
        "    expiryDate: 2023-01-10\n",
        encoding="utf-8",
    )

    entries = load_manifest(path)

    assert [e["expiryDate"] for e in entries] == ["2023-02-30", "2023-01-10"]


def test_unquoted_short_date_is_kept_verbatim(tmp_path: Path) -> None:
    path = tmp_path / "flags.yaml"
    path.write_text(
        "flags:\n  - annotation: FlagType.Experiment\n    owner: bob\n    expiryDate: 2023-1-5\n",
        encoding="utf-8",
    )

    assert load_manifest(path)[0]["expiryDate"] == "2023-1-5"


def test_explicit_timestamp_tag_with_bad_day_is_a_manifest_error(tmp_path: Path) -> None:
    path = tmp_path / "flags.yaml"
    path.write_text("flags:\n  - annotation: FlagType.Ops\n    expiryDate: !!timestamp 2023-02-30\n", encoding="utf-8")

    with pytest.raises(ManifestError):
        load_manifest(path)


def test_empty_file_has_no_entries(tmp_path: Path) -> None:
    path = tmp_path / "flags.yaml"
    path.write_text("", encoding="utf-8")

    assert load_manifest(path) == []


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ManifestError) as exc_info:
        load_manifest(tmp_path / "nope.yaml")

    assert exc_info.value.context["path"].endswith("nope.yaml")


@pytest.mark.parametrize("text", ["flags: [unclosed", "{not json"])
def test_unreadable_content(tmp_path: Path, text: str) -> None:
    suffix = ".json" if text.startswith("{") else ".yaml"
    path = tmp_path / f"flags{suffix}"
    path.write_text(text, encoding="utf-8")

    with pytest.raises(ManifestError):
        load_manifest(path)


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"entries": []},
        {"flags": [{"owner": "bob"}]},
        {"flags": [{"annotation": "FlagType.Ops", "owner": 42}]},
        {"version": 2, "flags": []},
        {"flags": [{"annotation": "FlagType.Ops", "location": {"line": 3}}]},
    ],
)
def test_schema_violations(payload) -> None:
    with pytest.raises(ManifestError) as exc_info:
        parse_manifest(payload)

    assert exc_info.value.context["errors"]


def test_bad_dates_are_not_a_manifest_error() -> None:
    entries = parse_manifest({"flags": [flag_entry(expiry_date="not-a-date")]})

    assert entries[0]["expiryDate"] == "not-a-date"


def test_python_datetimes_become_dates() -> None:
    entries = parse_manifest({"flags": [flag_entry(expiry_date=datetime(2023, 1, 10, 9, 0))]})

    assert entries[0]["expiryDate"] == "2023-01-10"


def test_project_schema_override(tmp_path: Path) -> None:
    schema_dir = tmp_path / ".flagfit" / "schemas" / "manifest"
    schema_dir.mkdir(parents=True)
    (schema_dir / "flag-manifest.schema.yaml").write_text(
        "type: object\nrequired: [flags, team]\n",
        encoding="utf-8",
    )

    with pytest.raises(ManifestError):
        parse_manifest({"flags": []}, repo_root=tmp_path)
    assert parse_manifest({"flags": [], "team": "growth"}, repo_root=tmp_path) == []
