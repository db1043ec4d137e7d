"""Record schema instances for each store flavor.

Both stores share one generic design and differ only in the
natural key and the compare-field allow-list declared here.
"""

from __future__ import annotations

from core.constants import (
    DELIVERY_COLLECTION,
    HOUR_FIELD_NAMES,
    LEGACY_BATCH_COMPARE_FIELDS,
    LEGACY_BATCH_KEY_FIELDS,
    PRODUCTION_COLLECTION,
    PRODUCTION_COMPARE_FIELDS,
    PRODUCTION_KEY_FIELDS,
)
from core.types import RecordSchema

PRODUCTION_SCHEMA = RecordSchema(
    name="production",
    collection=PRODUCTION_COLLECTION,
    key_fields=PRODUCTION_KEY_FIELDS,
    compare_fields=PRODUCTION_COMPARE_FIELDS,
)

LEGACY_BATCH_SCHEMA = RecordSchema(
    name="production_legacy_batch",
    collection=PRODUCTION_COLLECTION,
    key_fields=LEGACY_BATCH_KEY_FIELDS,
    compare_fields=LEGACY_BATCH_COMPARE_FIELDS,
)

DELIVERY_SCHEMA = RecordSchema(
    name="delivery",
    collection=DELIVERY_COLLECTION,
    key_fields=("date",),
    compare_fields=HOUR_FIELD_NAMES + ("total",),
)
