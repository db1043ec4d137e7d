"""Unit tests for core config parsing."""

from __future__ import annotations

import os

import pytest

from core.config import LedgerConfig
from core.errors import LedgerConfigError


def test_from_env_reads_data_root(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve data root from environment."""
    monkeypatch.setenv("LEDGER_DATA_ROOT", "./.tmp-ledger")

    config = LedgerConfig.from_env()

    assert config.data_root.name == ".tmp-ledger"


def test_from_env_builds_document_paths(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Store paths should join the data root and configured file names."""
    monkeypatch.setenv("LEDGER_DATA_ROOT", str(tmp_path))
    monkeypatch.setenv("LEDGER_DELIVERY_FILE", "hourly.json")

    config = LedgerConfig.from_env()

    assert config.delivery_path == tmp_path.resolve() / "hourly.json"


def test_from_env_defaults_file_names(monkeypatch: pytest.MonkeyPatch) -> None:
    """Default file names should match existing data files."""
    monkeypatch.delenv("LEDGER_PRODUCTION_FILE", raising=False)

    config = LedgerConfig.from_env()

    assert config.production_path.name == "production-data.json"


def test_from_env_raises_for_invalid_recent_days(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for non-numeric recent-days values."""
    monkeypatch.setenv("LEDGER_RECENT_DAYS", "two-weeks")

    with pytest.raises(LedgerConfigError):
        LedgerConfig.from_env()

    assert os.getenv("LEDGER_RECENT_DAYS") == "two-weeks"


def test_from_env_raises_for_non_positive_recent_days(monkeypatch: pytest.MonkeyPatch) -> None:
    """A zero-day window should be rejected."""
    monkeypatch.setenv("LEDGER_RECENT_DAYS", "0")

    with pytest.raises(LedgerConfigError):
        LedgerConfig.from_env()


def test_from_env_rejects_file_name_with_directory(monkeypatch: pytest.MonkeyPatch) -> None:
    """Store file names must not smuggle in a directory."""
    monkeypatch.setenv("LEDGER_PRODUCTION_FILE", "nested/production.json")

    with pytest.raises(LedgerConfigError):
        LedgerConfig.from_env()


def test_from_env_reads_legacy_batch_file_name(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """The legacy batch document name should be configurable."""
    monkeypatch.setenv("LEDGER_DATA_ROOT", str(tmp_path))
    monkeypatch.setenv("LEDGER_LEGACY_BATCH_FILE", "batches.json")

    config = LedgerConfig.from_env()

    assert config.legacy_batch_path == tmp_path.resolve() / "batches.json"
