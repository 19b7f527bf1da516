"""Identifier and scalar types shared by catalog entities."""

from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import (
    AfterValidator,
    Field,
    JsonValue,
    PlainSerializer,
    StringConstraints,
    model_validator,
)
from pydantic_core import PydanticCustomError

from catalogsnap.utils.freeze import read_only, thaw

from .base import CatalogBaseModel, field_names


DEFAULT_SCHEMA = "public"

Identifier = Annotated[str, StringConstraints(strict=True, min_length=1)]

ColumnName = Identifier
RoleName = Identifier
TriggerName = Identifier
RelName = Identifier
ConstraintName = Identifier
ComputedFieldName = Identifier
FunctionArgName = Identifier
PGScalarType = Identifier

OID = Annotated[int, Field(strict=True, ge=0)]
Flag = Annotated[bool, Field(strict=True)]
SystemDefined = Flag
StrictText = Annotated[str, Field(strict=True)]

# Uninterpreted JSON, stored read-only and encoded back as plain JSON
Payload = Annotated[JsonValue, AfterValidator(read_only), PlainSerializer(thaw)]


class RelType(str, Enum):
    """Kind of relationship between two tables."""

    OBJECT = "object"
    ARRAY = "array"


class PermType(str, Enum):
    """Operation a permission rule applies to."""

    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


class FunctionVolatility(str, Enum):
    """Postgres function volatility class."""

    VOLATILE = "VOLATILE"
    STABLE = "STABLE"
    IMMUTABLE = "IMMUTABLE"


class QualifiedName(CatalogBaseModel):
    """Schema-qualified name of a table or function.

    Accepts ``{"schema": ..., "name": ...}``, a ``[schema, name]`` pair, or a
    bare name. The schema defaults to ``public``.
    """

    model_config = field_names(schema_name="schema")

    entity_kind = "qualified name"

    schema_name: Identifier = Field(
        default=DEFAULT_SCHEMA, description="Schema the object lives in"
    )
    name: Identifier = Field(description="Object name")

    @model_validator(mode="before")
    @classmethod
    def _accept_short_forms(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"schema": DEFAULT_SCHEMA, "name": data}
        if isinstance(data, (list, tuple)):
            if len(data) != 2:
                raise PydanticCustomError(
                    "qualified_name",
                    "expected a [schema, name] pair, got {length} element(s)",
                    {"length": len(data)},
                )
            return {"schema": data[0], "name": data[1]}
        return data

    def __str__(self) -> str:
        return f"{self.schema_name}.{self.name}"


QualifiedTable = QualifiedName
QualifiedFunction = QualifiedName


class Constraint(CatalogBaseModel):
    """A named database constraint; a bare string is taken as its name."""

    entity_kind = "constraint"

    name: ConstraintName
    oid: Optional[OID] = None

    @model_validator(mode="before")
    @classmethod
    def _accept_name(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"name": data}
        return data
