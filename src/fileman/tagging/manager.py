"""Apply and prune cluster tags on original files."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from fileman.clustering.models import ClusterSet, cluster_label

from .errors import TagError
from .store import TagStore

LOGGER = logging.getLogger(__name__)


class TagManager:
    """Maintain ``<prefix>_<cluster_id>`` tags through an injected :class:`TagStore`."""

    def __init__(self, store: TagStore, prefix: str) -> None:
        if not prefix:
            raise ValueError("Tagging requires a non-empty prefix")
        self.store = store
        self.prefix = prefix
        self._pattern = re.compile(rf"{re.escape(prefix)}_\d+")

    def owns(self, tag: str) -> bool:
        """Return True when ``tag`` follows this manager's naming convention."""
        return self._pattern.fullmatch(tag) is not None

    def prune(self, paths: Iterable[Path]) -> int:
        """Remove previously applied cluster tags, ignoring per-file failures.

        Returns:
            int: Number of tags removed.
        """
        removed = 0
        for path in paths:
            try:
                removed += len(self.store.remove_tags_matching(path, self.owns))
            except OSError as exc:
                LOGGER.debug("Skipping tag pruning for %s: %s", path, exc)
        return removed

    def apply(self, clusters: ClusterSet) -> int:
        """Tag every clustered path with its cluster label.

        Returns:
            int: Number of files tagged.

        Raises:
            TagError: If any tag cannot be written.
        """
        applied = 0
        for cluster_id, paths in clusters.clusters.items():
            tag = cluster_label(self.prefix, cluster_id)
            for path in paths:
                try:
                    self.store.add_tag(path, tag)
                except OSError as exc:
                    raise TagError(f"Could not tag {path} with {tag}: {exc}") from exc
                applied += 1
        LOGGER.info("Applied %d tag(s) with prefix %r", applied, self.prefix)
        return applied


__all__ = ["TagManager"]
