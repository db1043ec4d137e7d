"""Ledger exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Read degradation and unparseable rows are logged, not raised.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base exception for all ledger failures."""


class LedgerConfigError(LedgerError):
    """Raised for invalid runtime configuration."""


class LedgerIngestError(LedgerError):
    """Raised when an import source cannot be read at all."""


class LedgerStoreError(LedgerError):
    """Raised when a store document cannot be written."""


class LedgerRecordError(LedgerError):
    """Raised for a single record that fails validation."""
