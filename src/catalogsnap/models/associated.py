"""Entities attached to tracked tables: relationships, permissions, event
triggers, computed fields and SQL functions."""

from typing import Annotated, Optional, Tuple

from pydantic import Field

from .base import CatalogBaseModel, field_names
from .primitives import (
    ComputedFieldName,
    Flag,
    FunctionArgName,
    FunctionVolatility,
    Identifier,
    Payload,
    PermType,
    QualifiedFunction,
    QualifiedTable,
    RelName,
    RelType,
    RoleName,
    StrictText,
    SystemDefined,
    TriggerName,
)


class Relation(CatalogBaseModel):
    """Object or array relationship defined on a table."""

    model_config = field_names(name="rel_name", kind="rel_type", definition="def")

    entity_kind = "relation"

    table: QualifiedTable
    name: RelName
    kind: RelType
    definition: Payload = Field(description="Relationship definition, uninterpreted")
    comment: Optional[StrictText] = None


class Permission(CatalogBaseModel):
    """Access rule for one role and operation on a table.

    (table, role, kind) identifies a permission, but duplicates are not
    rejected here.
    """

    model_config = field_names(kind="perm_type", definition="def")

    entity_kind = "permission"

    table: QualifiedTable
    role: RoleName
    kind: PermType
    definition: Payload = Field(description="Permission definition, uninterpreted")
    comment: Optional[StrictText] = None


class EventTrigger(CatalogBaseModel):
    """Event trigger defined on a table."""

    model_config = field_names(definition="def")

    entity_kind = "event trigger"

    table: QualifiedTable
    name: TriggerName
    definition: Payload = Field(description="Trigger definition, uninterpreted")


class QualifiedPGType(CatalogBaseModel):
    """Argument type of a SQL function."""

    model_config = field_names(schema_name="schema")

    entity_kind = "argument type"

    schema_name: Identifier
    name: Identifier
    type: Identifier


class RawFunctionInfo(CatalogBaseModel):
    """One SQL function signature as reported by introspection."""

    entity_kind = "function info"

    has_variadic: Flag
    function_type: FunctionVolatility
    return_type_schema: Identifier
    return_type_name: Identifier
    return_type_type: Identifier
    returns_set: Flag
    input_arg_types: Tuple[QualifiedPGType, ...]
    input_arg_names: Tuple[FunctionArgName, ...]
    default_args: Annotated[int, Field(strict=True, ge=0)]
    returns_table: Flag
    description: Optional[StrictText] = None


class ComputedFieldDefinition(CatalogBaseModel):
    entity_kind = "computed field definition"

    function: QualifiedFunction
    table_argument: Optional[FunctionArgName] = None
    session_argument: Optional[FunctionArgName] = None


class AddComputedField(CatalogBaseModel):
    """Computed field as stored in metadata."""

    entity_kind = "computed field"

    table: QualifiedTable
    name: ComputedFieldName
    definition: ComputedFieldDefinition
    comment: Optional[StrictText] = None


class ComputedField(CatalogBaseModel):
    """A computed field together with every overload of its function.

    Choosing which overload applies is left to the consumer.
    """

    entity_kind = "computed field"

    computed_field: AddComputedField
    function_info: Tuple[RawFunctionInfo, ...]


class FunctionConfig(CatalogBaseModel):
    entity_kind = "function configuration"

    session_argument: Optional[FunctionArgName] = None


class Function(CatalogBaseModel):
    """A tracked SQL function and its overload set."""

    model_config = field_names(
        name="function",
        system_defined="is_system_defined",
        overloads="info",
    )

    entity_kind = "function"

    name: QualifiedFunction
    system_defined: SystemDefined
    configuration: FunctionConfig
    overloads: Tuple[RawFunctionInfo, ...]
