"""Base model for catalog entities."""

from typing import Any, ClassVar, Dict, Tuple

from pydantic import BaseModel, ConfigDict

from catalogsnap.utils.freeze import freeze


def field_names(**aliases: str) -> ConfigDict:
    """Build a model config that maps internal attribute names to external keys.

    Attributes not listed keep their own name as the external key.

    Args:
        **aliases: Pairs of ``internal_name="external_name"``

    Returns:
        ConfigDict fragment with the alias table installed
    """
    table: Dict[str, str] = dict(aliases)
    return ConfigDict(alias_generator=lambda name: table.get(name, name))


class CatalogBaseModel(BaseModel):
    """Immutable value record decoded from a catalog document.

    Unknown keys in the source document are ignored. Equality and hashing are
    over all attributes, including opaque JSON payloads.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    # Entity kind used in decode error messages
    entity_kind: ClassVar[str] = "entity"

    def _identity(self) -> Tuple[Any, ...]:
        return tuple(freeze(getattr(self, name)) for name in type(self).model_fields)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())

    def to_document(self) -> Dict[str, Any]:
        """Encode back to the external document form."""
        return self.model_dump(mode="json", by_alias=True)
