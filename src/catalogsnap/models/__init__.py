"""Catalog metadata models."""

from .base import CatalogBaseModel, field_names
from .primitives import (
    DEFAULT_SCHEMA,
    Constraint,
    FunctionVolatility,
    PermType,
    QualifiedName,
    QualifiedFunction,
    QualifiedTable,
    RelType,
)
from .table import (
    ColumnMapping,
    CustomRootFields,
    ForeignKey,
    PrimaryKey,
    RawColumnInfo,
    Table,
    TableConfig,
    TableInfo,
    ViewInfo,
)
from .associated import (
    AddComputedField,
    ComputedField,
    ComputedFieldDefinition,
    EventTrigger,
    Function,
    FunctionConfig,
    Permission,
    QualifiedPGType,
    RawFunctionInfo,
    Relation,
)
from .metadata import (
    Action,
    ActionPermission,
    CatalogCustomTypes,
    CatalogMetadata,
    CollectionDef,
    CustomTypes,
    ListedQuery,
    RemoteSchema,
)

__all__ = [
    "CatalogBaseModel",
    "field_names",
    "DEFAULT_SCHEMA",
    "Constraint",
    "FunctionVolatility",
    "PermType",
    "QualifiedName",
    "QualifiedFunction",
    "QualifiedTable",
    "RelType",
    "ColumnMapping",
    "CustomRootFields",
    "ForeignKey",
    "PrimaryKey",
    "RawColumnInfo",
    "Table",
    "TableConfig",
    "TableInfo",
    "ViewInfo",
    "AddComputedField",
    "ComputedField",
    "ComputedFieldDefinition",
    "EventTrigger",
    "Function",
    "FunctionConfig",
    "Permission",
    "QualifiedPGType",
    "RawFunctionInfo",
    "Relation",
    "Action",
    "ActionPermission",
    "CatalogCustomTypes",
    "CatalogMetadata",
    "CollectionDef",
    "CustomTypes",
    "ListedQuery",
    "RemoteSchema",
]
