"""Structural skeleton of a codebase: classes, methods, attribute accesses."""

from .document import skeleton_from_dict, skeleton_to_dict
from .models import AttributeRef, ClassInfo, Method, Skeleton, validate_skeleton
from .sources import (
    JsonSkeletonSource,
    PythonSourceExtractor,
    SkeletonSource,
    StaticSkeletonSource,
    skeleton_source_for,
)

__all__ = [
    "AttributeRef",
    "ClassInfo",
    "Method",
    "Skeleton",
    "validate_skeleton",
    "skeleton_from_dict",
    "skeleton_to_dict",
    "SkeletonSource",
    "StaticSkeletonSource",
    "JsonSkeletonSource",
    "PythonSourceExtractor",
    "skeleton_source_for",
]
