"""
metadata/validator.py: JSON Schema validation for hookchain YAML metadata files.

Validates entity hook configuration files against the bundled JSON Schema.

Usage:
    from hookchain.metadata.validator import validate_metadata_dir, validate_yaml_file

    issues = validate_metadata_dir(Path("metadata"))
    for issue in issues:
        print(issue)
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

logger = logging.getLogger(__name__)

_SCHEMAS_DIR = Path(__file__).parent / "schemas"
_ENTITY_SCHEMA = "entity.schema.json"


@dataclass
class ValidationIssue:
    """A single validation finding for a metadata YAML file."""

    file: Path
    message: str
    path: str = ""          # location within the document, e.g. "addons[1]/requiredKeys"
    severity: str = "error" # "error" | "warning"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"[{self.severity.upper()}] {self.file}{loc}: {self.message}"


def _load_schema(name: str) -> dict[str, Any]:
    schema_path = _SCHEMAS_DIR / name
    with schema_path.open() as fh:
        return json.load(fh)


def _json_path(error: ValidationError) -> str:
    """Convert a jsonschema ValidationError path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


def validate_yaml_file(
    yaml_path: Path,
    *,
    schema: dict[str, Any] | None = None,
) -> list[ValidationIssue]:
    """
    Validate a single entity YAML file.

    Args:
        yaml_path: Path to the YAML file to validate.
        schema:    Pre-loaded schema. Loaded from the package if omitted.

    Returns:
        A list of :class:`ValidationIssue` objects (empty on success).
    """
    try:
        with yaml_path.open() as fh:
            doc = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        return [ValidationIssue(file=yaml_path, message=f"YAML parse error: {exc}")]

    if doc is None:
        return [
            ValidationIssue(file=yaml_path, message="File is empty or contains only whitespace")
        ]

    validator = Draft202012Validator(schema or _load_schema(_ENTITY_SCHEMA))

    return [
        ValidationIssue(file=yaml_path, message=error.message, path=_json_path(error))
        for error in sorted(validator.iter_errors(doc), key=lambda e: [str(p) for p in e.path])
    ]


def validate_metadata_dir(metadata_dir: Path) -> list[ValidationIssue]:
    """
    Validate every ``entities/*.yaml`` file under *metadata_dir*.

    A metadata directory without an ``entities/`` subdirectory yields a
    single warning.

    Returns:
        A flat list of :class:`ValidationIssue` objects across all files.
    """
    if not metadata_dir.is_dir():
        return [
            ValidationIssue(
                file=metadata_dir,
                message=f"Metadata directory does not exist: {metadata_dir}",
            )
        ]

    entities_dir = metadata_dir / "entities"
    if not entities_dir.is_dir():
        logger.warning("No entities directory under %s", metadata_dir)
        return [
            ValidationIssue(
                file=metadata_dir,
                message="No entities/ directory found",
                severity="warning",
            )
        ]

    schema = _load_schema(_ENTITY_SCHEMA)
    issues: list[ValidationIssue] = []
    for yaml_file in sorted(entities_dir.glob("*.yaml")):
        issues.extend(validate_yaml_file(yaml_file, schema=schema))
    return issues
