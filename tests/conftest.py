"""Pytest configuration and shared store fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def ledger_config(tmp_path: Path):
    """Config rooted in a temporary directory."""
    from core.config import LedgerConfig

    return LedgerConfig(data_root=tmp_path)


@pytest.fixture
def production_store(ledger_config):
    """Empty production store in a temporary directory."""
    from store.production_store import ProductionStore

    return ProductionStore(ledger_config.production_path)


@pytest.fixture
def delivery_store(ledger_config):
    """Empty delivery store in a temporary directory."""
    from store.delivery_store import DeliveryStore

    return DeliveryStore(ledger_config.delivery_path)
