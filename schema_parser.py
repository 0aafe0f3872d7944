"""
JSON-LD structured data extraction
"""
import json
import logging
from typing import Any, List, Sequence, Tuple

from document import DocumentAdapter
from models import SchemaRecord

logger = logging.getLogger(__name__)

JSON_LD_SELECTOR = 'script[type="application/ld+json"]'
UNKNOWN_TYPE = "Unknown"

def _reject_constant(name: str):
    raise ValueError(f"Invalid JSON constant: {name}")

def parse_schema(document: DocumentAdapter) -> Tuple[SchemaRecord, ...]:
    """Parse every non-blank JSON-LD block; invalid blocks are recorded, not raised"""
    schemas = []

    for script in document.query_all(JSON_LD_SELECTOR):
        raw_json = document.get_text(script)
        if not raw_json.strip():
            continue

        try:
            parsed = json.loads(raw_json, parse_constant=_reject_constant)
        except (ValueError, RecursionError) as e:
            logger.warning(f"Invalid JSON-LD block: {e}")
            schemas.append(SchemaRecord(
                type=UNKNOWN_TYPE,
                raw_json=raw_json,
                parsed=None,
                is_valid=False,
                error=str(e) or "Invalid JSON",
            ))
            continue

        schemas.append(SchemaRecord(
            type=extract_schema_type(parsed),
            raw_json=raw_json,
            parsed=parsed,
            is_valid=True,
        ))

    return tuple(schemas)

def _type_names(value: Any) -> List[str]:
    if isinstance(value, list):
        return [str(item) for item in value if item]
    if value:
        return [str(value)]
    return []

def extract_schema_type(parsed: Any) -> str:
    """
    Derive a display type for a parsed JSON-LD value.

    Uses @type (arrays joined with ", "), else the flattened @type of each
    @graph node. Anything else, top-level arrays included, is Unknown.
    """
    if not isinstance(parsed, dict) or not parsed:
        return UNKNOWN_TYPE

    if parsed.get("@type"):
        return ", ".join(_type_names(parsed["@type"])) or UNKNOWN_TYPE

    graph = parsed.get("@graph")
    if isinstance(graph, list) and graph:
        types = []
        for node in graph:
            if isinstance(node, dict):
                types.extend(_type_names(node.get("@type")))
        return ", ".join(types) if types else UNKNOWN_TYPE

    return UNKNOWN_TYPE

def has_schema_type(schemas: Sequence[SchemaRecord], schema_type: str) -> bool:
    return any(schema_type in schema.type for schema in schemas)

def get_unique_schema_types(schemas: Sequence[SchemaRecord]) -> List[str]:
    types = []
    for schema in schemas:
        if schema.type == UNKNOWN_TYPE:
            continue
        for name in schema.type.split(","):
            name = name.strip()
            if name and name not in types:
                types.append(name)
    return types

def validate_schema_basic(schema: SchemaRecord) -> bool:
    """Valid JSON with both @context and @type present"""
    if not schema.is_valid or not isinstance(schema.parsed, dict):
        return False
    return bool(schema.parsed.get("@context")) and bool(schema.parsed.get("@type"))
