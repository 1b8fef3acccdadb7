"""Schema validation gate for structured artifacts.

Every document that leaves the pipeline is checked here first:

    validate_skeleton_document(doc)   # input, before a Skeleton is built
    validate_index_document(doc)      # before index.json / any page is written
    validate_matrix_document(doc)     # before matrix.json / matrix.html

JSON Schema covers shape and types. The extra checks cover what a schema
cannot say: no NaN/Inf anywhere, and cross references (matrix cells point at
declared rows).
"""

from __future__ import annotations

import json
import math
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterator

from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

from ..exceptions import SchemaViolation
from ..logging_config import get_logger

logger = get_logger(__name__)

SCHEMA_DIR = Path(__file__).parent / "schemas"
SCHEMA_NAMES = ("skeleton", "metric", "index", "matrix")


@lru_cache(maxsize=None)
def load_schema(name: str) -> dict[str, Any]:
    """Load a bundled schema by short name (``"index"``, ``"matrix"``, ...)."""
    if name not in SCHEMA_NAMES:
        raise KeyError(f"Unknown schema: {name!r}")
    path = SCHEMA_DIR / f"{name}.schema.json"
    return json.loads(path.read_text(encoding="utf-8"))


def schema_path(name: str) -> Path:
    load_schema(name)
    return SCHEMA_DIR / f"{name}.schema.json"


def validate_document(document: Any, schema_name: str) -> None:
    """Validate a document against a bundled schema.

    Raises:
        SchemaViolation: With the most relevant error and its JSON path
    """
    validator = Draft202012Validator(load_schema(schema_name))
    error = best_match(validator.iter_errors(document))
    if error is not None:
        location = "/".join(str(p) for p in error.absolute_path)
        raise SchemaViolation(schema_name, error.message, location=location)
    _check_finite(document, schema_name)


def validate_index_document(document: Any) -> None:
    """Validate an index document.

    Checks:
        - conforms to index.schema.json
        - every number is finite
        - no class appears twice within one metric
        - ``defects`` matches the number of flagged classes
    """
    validate_document(document, "index")
    for metric in document["metrics"]:
        names = [entry["class"] for entry in metric["classes"]]
        if len(names) != len(set(names)):
            raise SchemaViolation(
                "index", "duplicate class entries", location=f"metrics/{metric['name']}"
            )
        flagged = sum(1 for entry in metric["classes"] if entry["defect"])
        if flagged != metric["defects"]:
            raise SchemaViolation(
                "index",
                f"defects={metric['defects']} but {flagged} classes are flagged",
                location=f"metrics/{metric['name']}",
            )
    logger.debug(f"Index document valid ({len(document['metrics'])} metrics)")


def validate_matrix_document(document: Any) -> None:
    """Validate a matrix document.

    Checks:
        - conforms to matrix.schema.json
        - every cell's row and column are declared rows
        - no (row, column) pair appears twice
    """
    validate_document(document, "matrix")
    rows = set(document["rows"])
    seen: set[tuple[str, str]] = set()
    for i, cell in enumerate(document["cells"]):
        key = (cell["row"], cell["column"])
        if cell["row"] not in rows or cell["column"] not in rows:
            raise SchemaViolation("matrix", f"cell refers to unknown class {key}", f"cells/{i}")
        if key in seen:
            raise SchemaViolation("matrix", f"duplicate cell {key}", f"cells/{i}")
        seen.add(key)
    logger.debug(f"Matrix document valid ({len(rows)} rows, {len(seen)} cells)")


def validate_skeleton_document(document: Any) -> None:
    validate_document(document, "skeleton")


def _check_finite(document: Any, schema_name: str) -> None:
    for path, value in _walk_numbers(document, ""):
        if math.isnan(value) or math.isinf(value):
            raise SchemaViolation(schema_name, f"NaN/Inf detected: {value}", location=path)


def _walk_numbers(node: Any, path: str) -> Iterator[tuple[str, float]]:
    if isinstance(node, bool):
        return
    if isinstance(node, float):
        yield path, node
    elif isinstance(node, dict):
        for key, value in node.items():
            yield from _walk_numbers(value, f"{path}/{key}" if path else str(key))
    elif isinstance(node, list):
        for i, value in enumerate(node):
            yield from _walk_numbers(value, f"{path}/{i}" if path else str(i))
