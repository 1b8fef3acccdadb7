"""Artifact writer for the run's output directory.

Layout::

    <output>/skeleton.json
    <output>/metrics/<METRIC>/<class>.json
    <output>/index.json, matrix.json
    <output>/index.html, matrix.html, badge.svg
    <output>/cohesion.css, schemas/*.schema.json

Each metric job writes only under ``metrics/<METRIC>/``, so concurrent jobs
never touch the same file. All writes go through ``ArtifactWriter`` so any
I/O failure surfaces as a PersistenceError.
"""

from __future__ import annotations

import json
import shutil
from pathlib import Path, PurePosixPath
from typing import Any, Union
from urllib.parse import quote

from .exceptions import PersistenceError, PreconditionError
from .logging_config import get_logger

logger = get_logger(__name__)

METRICS_DIR = "metrics"


def safe_component(name: str) -> str:
    """Injective mapping of a class/metric name to one path component."""
    return quote(name, safe="._-$")


def metric_artifact_path(metric: str, class_name: str) -> PurePosixPath:
    """Relative path of a class's artifact for one metric."""
    return PurePosixPath(METRICS_DIR, safe_component(metric), f"{safe_component(class_name)}.json")


def to_json(document: Any) -> str:
    """Deterministic JSON text: stable key order, no NaN, trailing newline."""
    return json.dumps(document, indent=2, ensure_ascii=False, allow_nan=False) + "\n"


class ArtifactWriter:
    """Writes artifacts below a single output directory."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def create(self) -> None:
        """Create the output directory, refusing to reuse an existing one.

        Raises:
            PreconditionError: If the path already exists (file or directory)
            PersistenceError: If the directory cannot be created
        """
        if self.root.exists():
            raise PreconditionError(self.root.resolve())
        try:
            self.root.mkdir(parents=True, exist_ok=False)
        except FileExistsError:
            raise PreconditionError(self.root.resolve())
        except OSError as e:
            raise PersistenceError(self.root, str(e))
        logger.debug(f"Created output directory {self.root}")

    def path(self, relative: Union[str, PurePosixPath]) -> Path:
        return self.root / Path(relative)

    def write_text(self, relative: Union[str, PurePosixPath], text: str) -> Path:
        target = self.path(relative)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        except OSError as e:
            raise PersistenceError(target, str(e))
        return target

    def write_json(self, relative: Union[str, PurePosixPath], document: Any) -> Path:
        try:
            text = to_json(document)
        except (TypeError, ValueError) as e:
            raise PersistenceError(self.path(relative), f"not serializable: {e}")
        return self.write_text(relative, text)

    def copy_file(self, source: Path, relative: Union[str, PurePosixPath]) -> Path:
        target = self.path(relative)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)
        except OSError as e:
            raise PersistenceError(target, str(e))
        return target
