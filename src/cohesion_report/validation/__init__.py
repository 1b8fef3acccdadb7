"""Schema validation gate for skeleton, metric, index and matrix documents."""

from .schema import (
    SCHEMA_NAMES,
    load_schema,
    schema_path,
    validate_document,
    validate_index_document,
    validate_matrix_document,
    validate_skeleton_document,
)

__all__ = [
    "SCHEMA_NAMES",
    "load_schema",
    "schema_path",
    "validate_document",
    "validate_index_document",
    "validate_matrix_document",
    "validate_skeleton_document",
]
