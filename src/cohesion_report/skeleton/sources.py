"""Skeleton sources: where the pipeline gets its structural input from.

Two sources ship with the package:

* JsonSkeletonSource reads a skeleton document produced by an external
  extractor (or a previous run's ``skeleton.json``).
* PythonSourceExtractor builds a skeleton from Python source files.
"""

from __future__ import annotations

import ast
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from ..exceptions import SchemaViolation, StructuralInvariantError
from ..logging_config import get_logger
from ..validation import validate_skeleton_document
from .document import skeleton_from_dict
from .models import AttributeRef, ClassInfo, Method, Skeleton

logger = get_logger(__name__)

_SKIP_DIRS = frozenset(
    {
        "venv", ".venv", "__pycache__", ".git", ".tox", ".mypy_cache",
        ".pytest_cache", "node_modules", "dist", "build", ".eggs",
    }
)


class SkeletonSource(ABC):
    """Provides the skeleton for one run."""

    @abstractmethod
    def extract(self) -> Skeleton:
        """Return the skeleton. Raise StructuralInvariantError if malformed."""

    @property
    def description(self) -> str:
        return self.__class__.__name__


class StaticSkeletonSource(SkeletonSource):
    """Wraps an in-memory skeleton."""

    def __init__(self, skeleton: Skeleton):
        self._skeleton = skeleton

    def extract(self) -> Skeleton:
        return self._skeleton


class JsonSkeletonSource(SkeletonSource):
    """Reads a skeleton JSON document from disk."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    @property
    def description(self) -> str:
        return str(self.path)

    def extract(self) -> Skeleton:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as e:
            raise StructuralInvariantError(f"cannot read {self.path}: {e}")
        except json.JSONDecodeError as e:
            raise StructuralInvariantError(f"invalid JSON in {self.path}: {e}")
        except UnicodeDecodeError as e:
            raise StructuralInvariantError(f"{self.path} is not UTF-8: {e.reason}")

        try:
            validate_skeleton_document(data)
        except SchemaViolation as e:
            raise StructuralInvariantError(f"{e.reason} at '{e.location}'")

        return skeleton_from_dict(data)


class PythonSourceExtractor(SkeletonSource):
    """Builds a skeleton from the Python sources under a directory.

    Each ``class`` statement (nested ones included) becomes a class named
    ``<module>.<qualname>``. Attributes are class-level assignments plus
    ``self.x = ...`` assignments in any method. A method accesses ``self.x``
    for every non-method ``x`` it references, and ``Other.x`` for sibling
    classes of the same module.
    """

    def __init__(self, root_dir: Union[str, Path], include_tests: bool = False):
        self.root_dir = Path(root_dir)
        self.include_tests = include_tests
        logger.debug(f"Initialized {self.__class__.__name__} for {self.root_dir}")

    @property
    def description(self) -> str:
        return str(self.root_dir)

    def extract(self) -> Skeleton:
        if not self.root_dir.is_dir():
            raise StructuralInvariantError(f"source directory not found: {self.root_dir}")

        classes: list[ClassInfo] = []
        files_parsed = 0
        for filepath in sorted(self.root_dir.rglob("*.py")):
            if not filepath.is_file() or self._should_skip(filepath):
                continue
            tree = self._parse(filepath)
            if tree is None:
                continue
            files_parsed += 1
            classes.extend(_ModuleClasses(self._module_name(filepath), tree).collect())

        logger.info(f"Extracted {len(classes)} classes from {files_parsed} files")
        return Skeleton(classes=tuple(classes))

    def _should_skip(self, filepath: Path) -> bool:
        rel = filepath.relative_to(self.root_dir)
        if any(part in _SKIP_DIRS or part.endswith(".egg-info") for part in rel.parts[:-1]):
            return True
        if self.include_tests:
            return False
        name = filepath.name
        return (
            name == "conftest.py"
            or name.startswith("test_")
            or name.endswith("_test.py")
            or "tests" in rel.parts[:-1]
        )

    def _module_name(self, filepath: Path) -> str:
        parts = list(filepath.relative_to(self.root_dir).with_suffix("").parts)
        if parts and parts[-1] == "__init__":
            parts.pop()
        return ".".join(parts) or self.root_dir.name

    def _parse(self, filepath: Path) -> Optional[ast.Module]:
        try:
            content = filepath.read_text(encoding="utf-8", errors="replace")
            return ast.parse(content, filename=str(filepath))
        except OSError as e:
            logger.warning(f"Skipping {filepath}: cannot read file: {e}")
        except (SyntaxError, ValueError) as e:
            logger.warning(f"Skipping {filepath}: cannot parse: {e}")
        return None


class _ModuleClasses:
    """Collects ClassInfo for every class statement in one module."""

    def __init__(self, module: str, tree: ast.Module):
        self.module = module
        self.tree = tree
        # simple name -> qualified name, for Other.x references
        self.top_level = {
            node.name: f"{module}.{node.name}"
            for node in tree.body
            if isinstance(node, ast.ClassDef)
        }

    def collect(self) -> list[ClassInfo]:
        result: list[ClassInfo] = []
        for node in self.tree.body:
            if isinstance(node, ast.ClassDef):
                self._visit(node, node.name, result)
        return result

    def _visit(self, node: ast.ClassDef, qualname: str, out: list[ClassInfo]) -> None:
        out.append(self._class_info(node, qualname))
        for child in node.body:
            if isinstance(child, ast.ClassDef):
                self._visit(child, f"{qualname}.{child.name}", out)

    def _class_info(self, node: ast.ClassDef, qualname: str) -> ClassInfo:
        name = f"{self.module}.{qualname}"
        functions = [
            child
            for child in node.body
            if isinstance(child, (ast.FunctionDef, ast.AsyncFunctionDef))
        ]
        method_names = {f.name for f in functions}

        attributes: dict[str, None] = {}
        for child in node.body:
            for target in _assign_targets(child):
                if isinstance(target, ast.Name) and not _is_dunder(target.id):
                    attributes[target.id] = None

        methods = []
        for func in functions:
            receiver = _receiver_name(func)
            accesses: set[AttributeRef] = set()
            for sub in ast.walk(func):
                if receiver is not None:
                    for target in _assign_targets(sub):
                        if _is_attribute_of(target, receiver) and target.attr not in method_names:
                            attributes[target.attr] = None
                if not isinstance(sub, ast.Attribute) or not isinstance(sub.value, ast.Name):
                    continue
                ref = self._reference(sub, receiver, node.name, method_names, name)
                if ref is not None:
                    accesses.add(ref)
            methods.append(Method(name=func.name, accesses=frozenset(accesses)))

        return ClassInfo(name=name, methods=tuple(methods), attributes=tuple(attributes))

    def _reference(
        self,
        node: ast.Attribute,
        receiver: Optional[str],
        simple_name: str,
        method_names: set[str],
        qualified: str,
    ) -> Optional[AttributeRef]:
        base = node.value.id  # type: ignore[attr-defined]
        if base == receiver or base == simple_name:
            if node.attr in method_names:
                return None
            return AttributeRef(name=node.attr)
        owner = self.top_level.get(base)
        if owner is not None and owner != qualified:
            return AttributeRef(name=node.attr, owner=owner)
        return None


def _receiver_name(func: ast.AST) -> Optional[str]:
    """Name bound to the instance/class (``self``/``cls``), None for staticmethods."""
    for deco in func.decorator_list:  # type: ignore[attr-defined]
        if isinstance(deco, ast.Name) and deco.id == "staticmethod":
            return None
    args = func.args  # type: ignore[attr-defined]
    positional = list(getattr(args, "posonlyargs", [])) + list(args.args)
    return positional[0].arg if positional else None


def _assign_targets(node: ast.AST) -> list[ast.expr]:
    if isinstance(node, ast.Assign):
        targets = list(node.targets)
    elif isinstance(node, (ast.AnnAssign, ast.AugAssign)):
        targets = [node.target]
    else:
        return []
    flat: list[ast.expr] = []
    while targets:
        target = targets.pop(0)
        if isinstance(target, (ast.Tuple, ast.List)):
            targets.extend(target.elts)
        elif isinstance(target, ast.Starred):
            targets.append(target.value)
        else:
            flat.append(target)
    return flat


def _is_attribute_of(node: ast.expr, receiver: str) -> bool:
    return (
        isinstance(node, ast.Attribute)
        and isinstance(node.value, ast.Name)
        and node.value.id == receiver
    )


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def skeleton_source_for(path: Union[str, Path]) -> SkeletonSource:
    """Pick a source for a CLI argument: ``.json`` file or source directory."""
    path = Path(path)
    if path.suffix == ".json" and path.is_file():
        return JsonSkeletonSource(path)
    return PythonSourceExtractor(path)
