"""Cross-class relationship matrix built from the skeleton alone."""

from .builder import build_matrix
from .models import Matrix

__all__ = ["Matrix", "build_matrix"]
