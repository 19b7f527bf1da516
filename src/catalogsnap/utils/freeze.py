"""Hashable and read-only snapshots of decoded values.

Opaque payloads are JSON structures, so they cannot be hashed directly.
``freeze`` turns them into nested tuples and frozensets that compare equal
exactly when the original values do. ``read_only`` stores a payload so that
it cannot be changed in place, and ``thaw`` turns it back into plain dicts
and lists for encoding.
"""

from collections.abc import Mapping, Set
from types import MappingProxyType
from typing import Any


def freeze(value: Any) -> Any:
    """Convert a value into an equivalent hashable structure.

    Booleans are tagged so that ``true`` and ``1`` stay distinct, as they
    are in JSON.

    Args:
        value: Any decoded value (model, JSON structure, scalar)

    Returns:
        Hashable representation of the value
    """
    if isinstance(value, bool):
        return ("__bool__", value)
    if isinstance(value, Mapping):
        return (
            "__mapping__",
            frozenset((key, freeze(item)) for key, item in value.items()),
        )
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    if isinstance(value, Set):
        return frozenset(freeze(item) for item in value)
    return value


def read_only(value: Any) -> Any:
    """Copy a JSON structure into read-only mapping proxies and tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: read_only(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(read_only(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Inverse of ``read_only``: plain dicts and lists."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    return value
