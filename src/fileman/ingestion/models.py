"""Data models produced while listing and extracting features from files."""

from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

from pydantic import BaseModel, Field


class FileEntry(BaseModel):
    """Canonical absolute path of one listed directory entry."""

    path: Path

    @property
    def name(self) -> str:
        """Return the entry's base name."""
        return self.path.name


class FeatureVector(BaseModel):
    """Clustering features for a single entry.

    Attributes:
        created_at: Creation time in whole seconds since the epoch.
        placeholder: Constant second dimension.
    """

    created_at: float
    placeholder: float = 0.0

    def as_row(self) -> Tuple[float, float]:
        """Return the vector as a row for the feature matrix."""
        return (self.created_at, self.placeholder)


class FeatureSample(BaseModel):
    """An entry paired with the feature vector extracted from it."""

    entry: FileEntry
    vector: FeatureVector


class ExtractionResult(BaseModel):
    """Outcome of feature extraction over a listing.

    Attributes:
        samples: Entries whose metadata was readable, in listing order.
        skipped: Paths excluded from clustering because metadata was unreadable.
        errors: Diagnostics describing each skipped path.
    """

    samples: List[FeatureSample] = Field(default_factory=list)
    skipped: List[Path] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)

    @property
    def vectors(self) -> List[FeatureVector]:
        """Return the feature vectors aligned with ``samples``."""
        return [sample.vector for sample in self.samples]


__all__ = ["FileEntry", "FeatureVector", "FeatureSample", "ExtractionResult"]
