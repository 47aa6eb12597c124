"""JSON Schema validation for settings and registry export documents.

This module loads the formal JSON Schemas shipped with the package and
validates documents before they are turned into typed objects.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema import ValidationError

# heavy_reference_validator/core/schema.py -> heavy_reference_validator/schemas/
SCHEMA_DIR = Path(__file__).parent.parent / "schemas"

SETTINGS_SCHEMA = "settings.schema.json"
REGISTRY_EXPORT_SCHEMA = "registry_export.schema.json"


@lru_cache(maxsize=None)
def load_schema(name: str) -> dict[str, Any]:
    """Load a JSON schema from disk.

    Args:
        name: File name of the schema inside the schemas directory

    Returns:
        Dictionary containing the JSON Schema.

    Raises:
        FileNotFoundError: If schema file doesn't exist
        json.JSONDecodeError: If schema is invalid JSON
    """
    schema_path = SCHEMA_DIR / name
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_path}")

    with schema_path.open("r", encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def validate_document(document: Any, schema_name: str) -> None:
    """Validate a document against one of the bundled schemas.

    Args:
        document: Parsed JSON document
        schema_name: File name of the schema to validate against

    Raises:
        ValidationError: If the document doesn't conform to the schema
        FileNotFoundError: If schema file is missing
    """
    schema = load_schema(schema_name)
    jsonschema.validate(instance=document, schema=schema)


def describe_validation_error(error: ValidationError) -> str:
    """Build a user-friendly description of a schema violation.

    Example:
        "at assets -> 0 -> disk_size: -5 is not valid under any of the given schemas"

    Args:
        error: Error raised by ``validate_document``

    Returns:
        Location of the offending value and the schema message
    """
    error_path = " -> ".join(str(p) for p in error.absolute_path) if error.absolute_path else "root"
    return f"at {error_path}: {error.message}"


def load_json_document(path: Path) -> Any:
    """Read a JSON document from disk.

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file is not valid JSON
    """
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)
