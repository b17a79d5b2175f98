"""Book metadata table used to validate references."""

from bibleref.metadata.table import (
    BUNDLED_METADATA_PATH,
    MetadataError,
    MetadataRecord,
    MetadataTable,
    default_table,
    load_metadata,
    normalize_key,
)

__all__ = [
    "BUNDLED_METADATA_PATH",
    "MetadataError",
    "MetadataRecord",
    "MetadataTable",
    "default_table",
    "load_metadata",
    "normalize_key",
]
