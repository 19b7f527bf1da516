"""Catalog metadata snapshot and the sections that have no owning table."""

from typing import Dict, FrozenSet, List, Mapping, Optional, Tuple

from pydantic import AliasChoices, Field

from .associated import ComputedField, EventTrigger, Function, Permission, Relation
from .base import CatalogBaseModel
from .primitives import (
    Identifier,
    Payload,
    PGScalarType,
    QualifiedName,
    RoleName,
    StrictText,
)
from .table import Table


class CustomTypes(CatalogBaseModel):
    """User-defined GraphQL type definitions.

    Definitions are kept uninterpreted; each kind is absent (None) when the
    document omits it.
    """

    entity_kind = "custom types"

    input_objects: Optional[Tuple[Payload, ...]] = None
    objects: Optional[Tuple[Payload, ...]] = None
    scalars: Optional[Tuple[Payload, ...]] = None
    enums: Optional[Tuple[Payload, ...]] = None

    def type_names(self) -> List[str]:
        """Names of all defined types, in document order."""
        names = []
        for group in (self.input_objects, self.objects, self.scalars, self.enums):
            for definition in group or ():
                if isinstance(definition, Mapping) and isinstance(definition.get("name"), str):
                    names.append(definition["name"])
        return names


class CatalogCustomTypes(CatalogBaseModel):
    """Custom types plus the database scalar types they may refer to.

    ``pg_scalars`` is not stored metadata; it comes from the database's type
    catalog and is carried along so type definitions can be checked later.
    """

    entity_kind = "custom types"

    custom_types: CustomTypes
    pg_scalars: FrozenSet[PGScalarType]


class RemoteSchema(CatalogBaseModel):
    """Registered remote GraphQL schema."""

    entity_kind = "remote schema"

    name: Identifier
    definition: Payload
    comment: Optional[StrictText] = None


class ListedQuery(CatalogBaseModel):
    entity_kind = "listed query"

    name: Identifier
    query: StrictText


class CollectionDef(CatalogBaseModel):
    """Query collection referenced by the allow-list."""

    entity_kind = "allow-list collection"

    queries: Tuple[ListedQuery, ...]


class ActionPermission(CatalogBaseModel):
    entity_kind = "action permission"

    role: RoleName
    comment: Optional[StrictText] = None


class Action(CatalogBaseModel):
    """Custom action backed by a webhook."""

    entity_kind = "action"

    name: Identifier
    definition: Payload
    comment: Optional[StrictText] = None
    permissions: Tuple[ActionPermission, ...] = ()


class CatalogMetadata(CatalogBaseModel):
    """Complete catalog snapshot handed to the schema cache builder.

    Sections keep document order. Nothing is sorted, deduplicated or checked
    across entities; a relation may name a table that is not in ``tables``.
    """

    entity_kind = "catalog metadata"

    tables: Tuple[Table, ...] = ()
    relations: Tuple[Relation, ...] = ()
    permissions: Tuple[Permission, ...] = ()
    event_triggers: Tuple[EventTrigger, ...] = ()
    remote_schemas: Tuple[RemoteSchema, ...] = ()
    functions: Tuple[Function, ...] = ()
    allowlist_collections: Tuple[CollectionDef, ...] = Field(
        default=(),
        validation_alias=AliasChoices("allowlist_collections", "allowlist"),
        serialization_alias="allowlist_collections",
    )
    computed_fields: Tuple[ComputedField, ...] = ()
    custom_types: CatalogCustomTypes
    actions: Tuple[Action, ...] = ()

    def get_table(self, name: QualifiedName) -> Optional[Table]:
        """Find a tracked table by qualified name.

        Args:
            name: Qualified name of the table

        Returns:
            First matching Table, or None if it is not tracked
        """
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def table_names(self) -> List[str]:
        """Qualified names of all tracked tables, as ``schema.name``."""
        return [str(table.name) for table in self.tables]

    def section_counts(self) -> Dict[str, int]:
        """Number of entries in each list section."""
        return {
            "tables": len(self.tables),
            "relations": len(self.relations),
            "permissions": len(self.permissions),
            "event_triggers": len(self.event_triggers),
            "remote_schemas": len(self.remote_schemas),
            "functions": len(self.functions),
            "allowlist_collections": len(self.allowlist_collections),
            "computed_fields": len(self.computed_fields),
            "actions": len(self.actions),
        }
