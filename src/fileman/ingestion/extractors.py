"""Feature extraction from filesystem metadata."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional

from .models import ExtractionResult, FeatureSample, FeatureVector, FileEntry

LOGGER = logging.getLogger(__name__)

TimestampReader = Callable[[Path], float]


def creation_timestamp(path: Path) -> float:
    """Return the creation time of ``path`` in whole seconds since the epoch.

    Uses ``st_birthtime`` where the platform reports it and falls back to the
    inode change time (``st_ctime``) otherwise.

    Raises:
        OSError: If the path cannot be stat'ed.
        ValueError: If the timestamp predates the epoch.
    """
    stat = path.stat()
    created = getattr(stat, "st_birthtime", None)
    if created is None:
        created = stat.st_ctime
    if created < 0:
        raise ValueError(f"creation time {created} is before the epoch")
    return float(int(created))


class FeatureExtractor:
    """Derive one feature vector per entry from its creation timestamp."""

    def __init__(self, timestamp_reader: Optional[TimestampReader] = None) -> None:
        self._read_timestamp = timestamp_reader or creation_timestamp

    def extract(self, entries: Iterable[FileEntry]) -> ExtractionResult:
        """Build feature samples, skipping entries whose metadata is unreadable.

        Args:
            entries: Listed entries in listing order.

        Returns:
            ExtractionResult: Samples for readable entries plus diagnostics for
            skipped ones.
        """
        result = ExtractionResult()
        for entry in entries:
            try:
                created = self._read_timestamp(entry.path)
            except (OSError, ValueError) as exc:
                message = f"Couldn't get metadata for {entry.path}: {exc}"
                LOGGER.warning("%s", message)
                result.skipped.append(entry.path)
                result.errors.append(message)
                continue
            result.samples.append(
                FeatureSample(entry=entry, vector=FeatureVector(created_at=created))
            )
        return result


__all__ = ["FeatureExtractor", "TimestampReader", "creation_timestamp"]
