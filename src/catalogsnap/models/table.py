"""Tracked table and introspected table structure models."""

from types import MappingProxyType
from typing import Annotated, Any, Dict, FrozenSet, Mapping, Optional, Tuple

from pydantic import AfterValidator, Field, PlainSerializer, model_validator
from pydantic_core import PydanticCustomError

from catalogsnap.utils.freeze import read_only, thaw

from .base import CatalogBaseModel, field_names
from .primitives import (
    OID,
    ColumnName,
    Constraint,
    Flag,
    Identifier,
    QualifiedTable,
    StrictText,
    SystemDefined,
)

# Local column -> referenced column
ColumnMapping = Mapping[str, str]


class ForeignKey(CatalogBaseModel):
    """Foreign key constraint from a table to ``foreign_table``.

    ``columns`` and ``foreign_columns`` are paired positionally into
    ``column_mapping``; lists of different length are rejected.
    """

    entity_kind = "foreign key"

    constraint: Constraint = Field(description="Constraint backing the key")
    foreign_table: QualifiedTable = Field(description="Referenced table")
    columns: Tuple[ColumnName, ...] = Field(description="Local columns")
    foreign_columns: Tuple[ColumnName, ...] = Field(
        description="Referenced columns, in the same order as columns"
    )

    @model_validator(mode="after")
    def _check_column_lengths(self) -> "ForeignKey":
        if len(self.columns) != len(self.foreign_columns):
            raise PydanticCustomError(
                "foreign_key_columns",
                "columns and foreign_columns differ in length ({columns} vs {foreign_columns})",
                {
                    "columns": len(self.columns),
                    "foreign_columns": len(self.foreign_columns),
                },
            )
        return self

    @property
    def column_mapping(self) -> ColumnMapping:
        """Local column to referenced column, in declaration order."""
        # Repeated local columns keep the last pairing
        return MappingProxyType(dict(zip(self.columns, self.foreign_columns)))

    def _identity(self) -> Tuple[Any, ...]:
        return (self.constraint, self.foreign_table, frozenset(self.column_mapping.items()))


class PrimaryKey(CatalogBaseModel):
    """Primary key constraint and its ordered columns."""

    entity_kind = "primary key"

    constraint: Constraint
    columns: Annotated[Tuple[ColumnName, ...], Field(min_length=1)]


class RawColumnInfo(CatalogBaseModel):
    """Column as reported by database introspection."""

    entity_kind = "column"

    name: ColumnName
    position: Annotated[int, Field(strict=True, ge=1)]
    type: Identifier
    is_nullable: Flag
    description: Optional[StrictText] = None


class ViewInfo(CatalogBaseModel):
    """Mutability of a view."""

    entity_kind = "view info"

    is_updatable: Flag
    is_deletable: Flag
    is_insertable: Flag


class CustomRootFields(CatalogBaseModel):
    """Overrides for the root field names generated for a table."""

    entity_kind = "custom root fields"

    select: Optional[Identifier] = None
    select_by_pk: Optional[Identifier] = None
    select_aggregate: Optional[Identifier] = None
    insert: Optional[Identifier] = None
    update: Optional[Identifier] = None
    delete: Optional[Identifier] = None


class TableConfig(CatalogBaseModel):
    """Per-table configuration stored in metadata."""

    entity_kind = "table configuration"

    custom_root_fields: CustomRootFields = Field(default_factory=CustomRootFields)
    custom_column_names: Annotated[
        Dict[ColumnName, Identifier], AfterValidator(read_only), PlainSerializer(thaw)
    ] = Field(default_factory=lambda: MappingProxyType({}))


class TableInfo(CatalogBaseModel):
    """Structure of a physical table obtained by introspection.

    ``unique_constraints`` does not include the primary key. This is a
    contract on whoever produces the document and is not checked here.
    """

    entity_kind = "table info"

    oid: OID
    columns: Tuple[RawColumnInfo, ...]
    primary_key: Optional[PrimaryKey] = None
    unique_constraints: FrozenSet[Constraint]
    foreign_keys: FrozenSet[ForeignKey]
    view_info: Optional[ViewInfo] = None
    description: Optional[StrictText] = None

    def column_names(self) -> Tuple[str, ...]:
        """Column names in introspection order."""
        return tuple(column.name for column in self.columns)


class Table(CatalogBaseModel):
    """A tracked table.

    ``info`` is None when the table is tracked in metadata but was not found
    (or not yet introspected) in the database.
    """

    model_config = field_names(system_defined="is_system_defined")

    entity_kind = "table"

    name: QualifiedTable
    system_defined: SystemDefined
    is_enum: Flag
    configuration: TableConfig
    info: Optional[TableInfo] = None

    @property
    def exists(self) -> bool:
        """Whether the physical table was found by introspection."""
        return self.info is not None
