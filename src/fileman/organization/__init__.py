"""Materialization of clusters into the output tree."""

from .errors import MaterializationError
from .materializer import SymlinkMaterializer

__all__ = ["MaterializationError", "SymlinkMaterializer"]
