"""catalogsnap - decoding and validation of catalog metadata snapshots."""

from catalogsnap.decoder import (
    decode,
    decode_catalog_metadata,
    load_catalog_metadata,
    parse_catalog_metadata,
)
from catalogsnap.errors import (
    CatalogDecodeError,
    InvariantViolationError,
    StructuralDecodeError,
)
from catalogsnap.models import CatalogMetadata

try:
    from importlib.metadata import version

    __version__ = version("catalogsnap")
except Exception:
    # Package metadata is not available when running from a source checkout
    __version__ = "0.1.0"

__all__ = [
    "decode",
    "decode_catalog_metadata",
    "load_catalog_metadata",
    "parse_catalog_metadata",
    "CatalogDecodeError",
    "InvariantViolationError",
    "StructuralDecodeError",
    "CatalogMetadata",
]
