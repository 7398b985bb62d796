"""Directory listing and feature extraction."""

from .discovery import DirectoryLister
from .errors import ListingError
from .extractors import FeatureExtractor, creation_timestamp
from .models import ExtractionResult, FeatureSample, FeatureVector, FileEntry

__all__ = [
    "DirectoryLister",
    "ExtractionResult",
    "FeatureExtractor",
    "FeatureSample",
    "FeatureVector",
    "FileEntry",
    "ListingError",
    "creation_timestamp",
]
