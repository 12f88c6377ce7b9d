"""
Schema Registry Module.

Loads the JSON schemas that client settings files are checked against and
validates parsed settings with jsonschema. The schemas bundled with the
package are used unless another directory is given.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema
from loguru import logger

BUNDLED_SCHEMA_DIR = Path(__file__).parent / "schemas"


class SchemaValidationError(Exception):
    """Raised when settings fail schema validation."""

    def __init__(self, message: str, errors: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class SchemaRegistry:
    """
    Registry of JSON schemas, loaded lazily from disk and cached.

    Attributes:
        schema_dir: Directory containing ``<name>.json`` schema files.
    """

    def __init__(self, schema_dir: str | Path | None = None) -> None:
        self.schema_dir = Path(schema_dir) if schema_dir else BUNDLED_SCHEMA_DIR
        self._schemas: Dict[str, Dict[str, Any]] = {}
        logger.debug(f"SchemaRegistry initialized, schema_dir={self.schema_dir}")

    def get_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Retrieve a schema by name, loading it from disk on first use.

        Args:
            schema_name: Schema file name without the .json extension.

        Raises:
            FileNotFoundError: If the schema file does not exist.
            SchemaValidationError: If the schema file cannot be read or parsed.
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self.schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(
                f"Schema not found: {schema_name} (expected at {schema_path})"
            )

        try:
            schema = json.loads(schema_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise SchemaValidationError(f"Failed to load schema {schema_name}: {e}") from e

        self._schemas[schema_name] = schema
        logger.debug(f"Schema loaded: {schema_name}")
        return schema

    def validate(self, data: Dict[str, Any], schema_name: str) -> None:
        """
        Validate data against a named schema, reporting every violation.

        Raises:
            SchemaValidationError: If validation fails.
        """
        schema = self.get_schema(schema_name)
        validator = jsonschema.Draft7Validator(schema)
        errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))

        if errors:
            messages = []
            for error in errors:
                path = " -> ".join(str(p) for p in error.absolute_path) or "(root)"
                messages.append(f"  [{path}] {error.message}")

            raise SchemaValidationError(
                f"Schema validation failed for '{schema_name}' "
                f"({len(errors)} error(s)):\n" + "\n".join(messages),
                errors=messages,
            )

        logger.debug(f"Validation passed: {schema_name}")

    def list_schemas(self) -> List[str]:
        """List the schema names available in the schema directory."""
        if not self.schema_dir.exists():
            return []
        return sorted(f.stem for f in self.schema_dir.glob("*.json") if f.is_file())
