"""Unit tests for whole-document JSON persistence."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from core.errors import LedgerStoreError
from store.document_io import read_document, utc_timestamp, write_document


def test_read_document_creates_missing_file(tmp_path: Path) -> None:
    """A missing document is created with an empty collection."""
    document_path = tmp_path / "nested" / "data.json"

    document = read_document(document_path, "records")

    assert document["records"] == []
    assert json.loads(document_path.read_text(encoding="utf-8"))["records"] == []


def test_read_document_serves_empty_document_when_corrupt(tmp_path: Path) -> None:
    """Unparseable content degrades to an empty document without overwriting."""
    document_path = tmp_path / "data.json"
    document_path.write_text("{not json", encoding="utf-8")

    document = read_document(document_path, "records")

    assert document["records"] == []
    assert document_path.read_text(encoding="utf-8") == "{not json"


def test_read_document_serves_empty_document_for_top_level_list(tmp_path: Path) -> None:
    """A document must be a JSON object."""
    document_path = tmp_path / "data.json"
    document_path.write_text("[1, 2]", encoding="utf-8")

    assert read_document(document_path, "records")["records"] == []


def test_read_document_renames_legacy_collection(tmp_path: Path) -> None:
    """Older documents keyed by a legacy name are read transparently."""
    document_path = tmp_path / "data.json"
    document_path.write_text(json.dumps({"production_data": [{"id": 1}]}), encoding="utf-8")

    document = read_document(document_path, "records", ("production_data",))

    assert document["records"] == [{"id": 1}]
    assert "production_data" not in document


def test_read_document_drops_non_object_records(tmp_path: Path) -> None:
    """Non-object entries in the collection are discarded."""
    document_path = tmp_path / "data.json"
    document_path.write_text(json.dumps({"records": [{"id": 1}, 7, "x"]}), encoding="utf-8")

    assert read_document(document_path, "records")["records"] == [{"id": 1}]


def test_write_document_sets_metadata_and_leaves_no_temp_file(tmp_path: Path) -> None:
    """Writes stamp updated_at and replace the file atomically."""
    document_path = tmp_path / "data.json"

    write_document(document_path, {"records": [{"name": "뚜껑"}]})

    payload = json.loads(document_path.read_text(encoding="utf-8"))
    assert payload["metadata"]["version"] == "1.0.0"
    assert payload["records"][0]["name"] == "뚜껑"
    assert list(tmp_path.iterdir()) == [document_path]


def test_write_document_raises_when_directory_is_unwritable(tmp_path: Path) -> None:
    """Filesystem failures surface as store errors."""
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(LedgerStoreError):
        write_document(blocker / "data.json", {"records": []})


def test_write_document_raises_for_unserializable_values(tmp_path: Path) -> None:
    """Values JSON cannot encode are rejected before touching disk."""
    document_path = tmp_path / "data.json"

    with pytest.raises(LedgerStoreError):
        write_document(document_path, {"records": [{"tags": {1, 2}}]})

    assert not document_path.exists()


def test_utc_timestamp_uses_z_suffix_with_milliseconds() -> None:
    """Timestamps are ISO UTC with millisecond precision."""
    timestamp = utc_timestamp()

    assert timestamp.endswith("Z") and len(timestamp) == len("2025-08-01T00:00:00.000Z")
