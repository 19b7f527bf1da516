"""Decoding of catalog documents into validated, immutable models.

Every function here either returns a fully decoded entity or raises a
``CatalogDecodeError``; partially decoded results are never returned.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Type, TypeVar, Union

from pydantic import ValidationError

from catalogsnap.errors import (
    INVARIANT_ERROR_TYPES,
    CatalogDecodeError,
    InvariantViolationError,
    PathItem,
    StructuralDecodeError,
    format_path,
)
from catalogsnap.models import (
    Action,
    CatalogBaseModel,
    CatalogCustomTypes,
    CatalogMetadata,
    CollectionDef,
    ComputedField,
    EventTrigger,
    ForeignKey,
    Function,
    Permission,
    Relation,
    RemoteSchema,
    Table,
    TableInfo,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=CatalogBaseModel)

# Aggregate section -> entity kind reported for errors inside it
SECTION_ENTITIES: Dict[str, str] = {
    "tables": Table.entity_kind,
    "relations": Relation.entity_kind,
    "permissions": Permission.entity_kind,
    "event_triggers": EventTrigger.entity_kind,
    "remote_schemas": RemoteSchema.entity_kind,
    "functions": Function.entity_kind,
    "allowlist_collections": CollectionDef.entity_kind,
    "allowlist": CollectionDef.entity_kind,
    "computed_fields": ComputedField.entity_kind,
    "custom_types": CatalogCustomTypes.entity_kind,
    "actions": Action.entity_kind,
}

# Keys that identify a record, in display order
IDENTITY_KEYS = ("table", "function", "name", "rel_name", "role", "perm_type", "constraint")


def decode(model: Type[ModelT], document: Any, entity: Optional[str] = None) -> ModelT:
    """Decode a document into ``model``.

    Args:
        model: Entity class to decode into
        document: Parsed JSON document (dict, list, scalars)
        entity: Entity description for error messages, defaults to the
            model's entity kind

    Returns:
        Decoded entity

    Raises:
        StructuralDecodeError: If a field is missing or has the wrong shape
        InvariantViolationError: If a field breaks an entity rule
    """
    try:
        return model.model_validate(document)
    except ValidationError as e:
        error = _decode_error(model, document, e, entity)
        logger.error(f"Failed to decode {model.entity_kind}: {error}")
        raise error from e
    except RecursionError as e:
        error = StructuralDecodeError(
            "document is nested too deeply", entity=entity or model.entity_kind
        )
        logger.error(f"Failed to decode {model.entity_kind}: {error}")
        raise error from e


def decode_catalog_metadata(document: Any) -> CatalogMetadata:
    """Decode a full catalog snapshot.

    All sections are decoded; any failure aborts the whole snapshot.
    """
    logger.debug("Decoding catalog metadata document")
    metadata = decode(CatalogMetadata, document)
    counts = ", ".join(f"{name}={count}" for name, count in metadata.section_counts().items())
    logger.info(f"Decoded catalog metadata ({counts})")
    return metadata


def parse_catalog_metadata(text: Union[str, bytes]) -> CatalogMetadata:
    """Parse JSON text and decode it as a catalog snapshot.

    ``bytes`` may be UTF-8, UTF-16 or UTF-32 encoded.
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        reason = f"invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})"
        raise _parse_error(reason) from e
    except UnicodeDecodeError as e:
        reason = f"invalid {e.encoding} text: {e.reason} at byte {e.start}"
        raise _parse_error(reason) from e
    except RecursionError as e:
        raise _parse_error("document is nested too deeply") from e
    return decode_catalog_metadata(document)


def load_catalog_metadata(path: Union[str, Path]) -> CatalogMetadata:
    """Read a JSON file and decode it as a catalog snapshot.

    Raises:
        FileNotFoundError: If the file does not exist
        CatalogDecodeError: If the document is malformed
    """
    path = Path(path)
    logger.debug(f"Loading catalog metadata from {path}")
    return parse_catalog_metadata(path.read_bytes())


def decode_foreign_key(document: Any) -> ForeignKey:
    return decode(ForeignKey, document)


def decode_table_info(document: Any) -> TableInfo:
    return decode(TableInfo, document)


def decode_table(document: Any) -> Table:
    return decode(Table, document)


def decode_relation(document: Any) -> Relation:
    return decode(Relation, document)


def decode_permission(document: Any) -> Permission:
    return decode(Permission, document)


def decode_event_trigger(document: Any) -> EventTrigger:
    return decode(EventTrigger, document)


def decode_computed_field(document: Any) -> ComputedField:
    return decode(ComputedField, document)


def decode_function(document: Any) -> Function:
    return decode(Function, document)


def decode_custom_types(document: Any) -> CatalogCustomTypes:
    return decode(CatalogCustomTypes, document)


def _parse_error(reason: str) -> StructuralDecodeError:
    error = StructuralDecodeError(reason, entity=CatalogMetadata.entity_kind)
    logger.error(f"Failed to parse catalog metadata: {error}")
    return error


def _decode_error(
    model: Type[CatalogBaseModel],
    document: Any,
    error: ValidationError,
    entity: Optional[str],
) -> CatalogDecodeError:
    details = error.errors(include_url=False)
    first = details[0]
    loc: Tuple[PathItem, ...] = tuple(first["loc"])

    if entity is None:
        entity = _describe_entity(model, document, loc)

    error_cls = (
        InvariantViolationError
        if first["type"] in INVARIANT_ERROR_TYPES
        else StructuralDecodeError
    )
    return error_cls(
        first["msg"],
        path=loc,
        entity=entity,
        error_count=len(details),
        details=tuple(f"{format_path(tuple(d['loc']))}: {d['msg']}" for d in details),
    )


def _describe_entity(
    model: Type[CatalogBaseModel], document: Any, loc: Tuple[PathItem, ...]
) -> str:
    kind = model.entity_kind
    record = document

    if model is CatalogMetadata:
        if not loc or loc[0] not in SECTION_ENTITIES:
            return kind
        kind = SECTION_ENTITIES[str(loc[0])]
        if loc[0] == "custom_types":
            return kind
        if len(loc) < 2 or not isinstance(loc[1], int):
            return kind
        record = _lookup(document, loc[:2])

    identity = _identify(record)
    return f"{kind} ({identity})" if identity else kind


def _lookup(document: Any, loc: Tuple[PathItem, ...]) -> Any:
    current = document
    for item in loc:
        if isinstance(item, int) and isinstance(current, list) and 0 <= item < len(current):
            current = current[item]
        elif isinstance(item, str) and isinstance(current, dict) and item in current:
            current = current[item]
        else:
            return None
    return current


def _identify(record: Any) -> str:
    if not isinstance(record, dict):
        return ""
    if isinstance(record.get("computed_field"), dict):
        record = record["computed_field"]
    parts = [f"{key}={_render(record[key])}" for key in IDENTITY_KEYS if key in record]
    return ", ".join(parts)


def _render(value: Any) -> str:
    if isinstance(value, dict) and "name" in value:
        if "schema" in value:
            return f"{value['schema']}.{value['name']}"
        return str(value["name"])
    if isinstance(value, list):
        return ".".join(str(item) for item in value)
    return str(value)
