"""Decode errors raised for malformed catalog documents."""

from typing import Optional, Tuple, Union

PathItem = Union[str, int]

# pydantic error types raised by model validators for business-rule failures
INVARIANT_ERROR_TYPES = frozenset({"foreign_key_columns"})


def format_path(path: Tuple[PathItem, ...]) -> str:
    """Render a location tuple as ``tables[3].info.foreign_keys[0]``."""
    rendered = ""
    for item in path:
        if isinstance(item, int):
            rendered += f"[{item}]"
        elif rendered:
            rendered += f".{item}"
        else:
            rendered = str(item)
    return rendered or "$"


class CatalogDecodeError(ValueError):
    """Raised when a catalog document cannot be decoded.

    Attributes:
        entity: Entity kind and identity, e.g. ``table (name=public.orders)``
        path: Location of the offending value inside the document
        reason: Human-readable explanation
        error_count: Total number of problems found in the document
        details: Every problem found, rendered as ``path: reason``
    """

    def __init__(
        self,
        reason: str,
        path: Tuple[PathItem, ...] = (),
        entity: Optional[str] = None,
        error_count: int = 1,
        details: Tuple[str, ...] = (),
    ):
        self.reason = reason
        self.path = tuple(path)
        self.entity = entity
        self.error_count = error_count
        self.details = tuple(details) or (f"{format_path(self.path)}: {reason}",)
        super().__init__(self._render())

    def _render(self) -> str:
        message = f"{format_path(self.path)}: {self.reason}"
        if self.entity:
            message = f"{self.entity}: {message}"
        if self.error_count > 1:
            message += f" (and {self.error_count - 1} more error(s))"
        return message


class StructuralDecodeError(CatalogDecodeError):
    """A required field is missing or a field has the wrong shape."""

    pass


class InvariantViolationError(CatalogDecodeError):
    """A well-shaped field breaks a business rule of its entity."""

    pass
