"""Runtime configuration model for the ledger.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_DATA_ROOT,
    DEFAULT_DELIVERY_FILE_NAME,
    DEFAULT_LEGACY_BATCH_FILE_NAME,
    DEFAULT_PRODUCTION_FILE_NAME,
    DEFAULT_RECENT_DAYS,
)
from core.errors import LedgerConfigError


@dataclass(frozen=True)
class LedgerConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local directory holding the store documents.
        production_file_name: File name of the production document.
        delivery_file_name: File name of the delivery document.
        legacy_batch_file_name: File name of the migrated legacy batch document.
        recent_days: Default window for recent delivery queries.
    """

    data_root: Path
    production_file_name: str = DEFAULT_PRODUCTION_FILE_NAME
    delivery_file_name: str = DEFAULT_DELIVERY_FILE_NAME
    legacy_batch_file_name: str = DEFAULT_LEGACY_BATCH_FILE_NAME
    recent_days: int = DEFAULT_RECENT_DAYS

    @property
    def production_path(self) -> Path:
        """Return the production document path."""
        return self.data_root / self.production_file_name

    @property
    def delivery_path(self) -> Path:
        """Return the delivery document path."""
        return self.data_root / self.delivery_file_name

    @property
    def legacy_batch_path(self) -> Path:
        """Return the legacy batch document path."""
        return self.data_root / self.legacy_batch_file_name

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            LedgerConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("LEDGER_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        production_file_name = os.getenv("LEDGER_PRODUCTION_FILE", DEFAULT_PRODUCTION_FILE_NAME)
        delivery_file_name = os.getenv("LEDGER_DELIVERY_FILE", DEFAULT_DELIVERY_FILE_NAME)
        legacy_batch_file_name = os.getenv(
            "LEDGER_LEGACY_BATCH_FILE",
            DEFAULT_LEGACY_BATCH_FILE_NAME,
        )
        recent_days_value = os.getenv("LEDGER_RECENT_DAYS", str(DEFAULT_RECENT_DAYS))
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            production_file_name=_parse_file_name("LEDGER_PRODUCTION_FILE", production_file_name),
            delivery_file_name=_parse_file_name("LEDGER_DELIVERY_FILE", delivery_file_name),
            legacy_batch_file_name=_parse_file_name(
                "LEDGER_LEGACY_BATCH_FILE",
                legacy_batch_file_name,
            ),
            recent_days=_parse_recent_days(recent_days_value),
        )


def _parse_file_name(variable: str, raw_value: str) -> str:
    """Validate a store file name environment value.

    Args:
        variable: Environment variable name for error context.
        raw_value: Raw string from environment.

    Returns:
        Stripped file name.

    Raises:
        LedgerConfigError: If value is blank or contains a directory part.
    """
    value = raw_value.strip()
    if not value or Path(value).name != value:
        raise LedgerConfigError(
            f"Invalid {variable} value: expected a plain file name, got '{raw_value}'. "
            "Use LEDGER_DATA_ROOT to choose the directory."
        )
    return value


def _parse_recent_days(raw_value: str) -> int:
    """Parse the recent-days environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed positive day count.

    Raises:
        LedgerConfigError: If value is not a positive integer.
    """
    try:
        days = int(raw_value)
    except ValueError as error:
        raise LedgerConfigError(
            "Invalid LEDGER_RECENT_DAYS value: "
            f"expected integer, got '{raw_value}'. "
            "Set LEDGER_RECENT_DAYS to a numeric value."
        ) from error
    if days < 1:
        raise LedgerConfigError(
            f"Invalid LEDGER_RECENT_DAYS value: expected at least 1, got {days}."
        )
    return days
