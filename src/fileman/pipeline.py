"""End-to-end orchestration of a clustering run."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from fileman.clustering import ClusteringEngine, ClusterSet, aggregate_clusters
from fileman.ingestion import DirectoryLister, FeatureExtractor
from fileman.organization import SymlinkMaterializer
from fileman.tagging import TagManager

LOGGER = logging.getLogger(__name__)


class ClusterError(Exception):
    """Raised when a run is refused before any filesystem changes."""


class ClusterRunResult(BaseModel):
    """Summary of a single clustering run.

    Attributes:
        input_root: Directory that was scanned.
        target_root: Output directory for the symlink tree.
        listed: Number of entries found in the input directory.
        clusters: Cluster membership and noise.
        skipped: Entries excluded because their metadata was unreadable.
        errors: Diagnostics for skipped entries.
        links: Symlinks written under ``target_root``.
        tags_pruned: Stale cluster tags removed from listed files.
        tags_applied: Files tagged with their cluster label.
        dry_run: Whether filesystem changes were skipped.
        elapsed_ms: Wall-clock duration of the run.
    """

    input_root: Path
    target_root: Path
    listed: int = 0
    clusters: ClusterSet = Field(default_factory=ClusterSet)
    skipped: List[Path] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    links: List[Path] = Field(default_factory=list)
    tags_pruned: int = 0
    tags_applied: int = 0
    dry_run: bool = False
    elapsed_ms: int = 0


class ClusterPipeline:
    """Coordinate listing, extraction, clustering, materialization, and tagging."""

    def __init__(
        self,
        lister: DirectoryLister,
        extractor: FeatureExtractor,
        engine: ClusteringEngine,
        materializer: SymlinkMaterializer,
        prefix: str,
        tag_manager: Optional[TagManager] = None,
    ) -> None:
        self.lister = lister
        self.extractor = extractor
        self.engine = engine
        self.materializer = materializer
        self.prefix = prefix
        self.tag_manager = tag_manager

    def run(self, input_root: Path, target_root: Path, dry_run: bool = False) -> ClusterRunResult:
        """Cluster the entries of ``input_root`` and write the results.

        Args:
            input_root: Directory whose immediate entries are clustered.
            target_root: Output directory, replaced on every run.
            dry_run: Compute clusters without touching the filesystem.

        Returns:
            ClusterRunResult: Counts and membership for the run.

        Raises:
            ClusterError: If ``target_root`` would overwrite ``input_root``.
            ListingError: If the input directory cannot be listed.
            MaterializationError: If the symlink tree cannot be written.
            TagError: If a cluster tag cannot be applied.
        """
        started = time.perf_counter()
        input_root = input_root.expanduser().resolve()
        target_root = target_root.expanduser().absolute()
        resolved_target = target_root.resolve()
        if resolved_target == input_root or resolved_target in input_root.parents:
            raise ClusterError(
                f"Target path {target_root} must not contain the input path {input_root}."
            )

        entries = self.lister.scan(input_root)
        extraction = self.extractor.extract(entries)
        classifications = self.engine.classify(extraction.vectors)
        clusters = aggregate_clusters(extraction.samples, classifications)

        result = ClusterRunResult(
            input_root=input_root,
            target_root=target_root,
            listed=len(entries),
            clusters=clusters,
            skipped=extraction.skipped,
            errors=extraction.errors,
            dry_run=dry_run,
        )

        if not dry_run:
            result.links = self.materializer.materialize(clusters, target_root, self.prefix)
            if self.tag_manager is not None:
                result.tags_pruned = self.tag_manager.prune(entry.path for entry in entries)
                result.tags_applied = self.tag_manager.apply(clusters)

        result.elapsed_ms = int((time.perf_counter() - started) * 1000)
        LOGGER.info(
            "Clustered %d of %d entries into %d cluster(s) in %d ms",
            clusters.clustered_count,
            len(entries),
            len(clusters.clusters),
            result.elapsed_ms,
        )
        return result


__all__ = ["ClusterError", "ClusterPipeline", "ClusterRunResult"]
