"""Write clusters to disk as directories of symlinks."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

from fileman.clustering.models import ClusterSet, cluster_label

from .errors import MaterializationError

LOGGER = logging.getLogger(__name__)


class SymlinkMaterializer:
    """Replace a target directory with one symlink folder per cluster.

    The new tree is assembled in a staging directory next to the target and only
    swapped in once every link exists, so a failed build leaves any previous
    target untouched.
    """

    def materialize(self, clusters: ClusterSet, target: Path, prefix: str) -> list[Path]:
        """Build ``<target>/<prefix>_<id>/<basename>`` links for every clustered path.

        Args:
            clusters: Cluster membership to write.
            target: Output directory; an existing one is deleted and replaced.
            prefix: Prefix for the per-cluster directory names.

        Returns:
            list[Path]: Symlink locations under the final target.

        Raises:
            MaterializationError: If any directory or link cannot be created, or the
                previous target cannot be removed.
        """
        target = target.expanduser().absolute()
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            staging = Path(
                tempfile.mkdtemp(prefix=f".{target.name}.", suffix=".staging", dir=target.parent)
            )
            staging.chmod(_directory_mode())
        except OSError as exc:
            raise MaterializationError(f"Could not prepare output directory {target}: {exc}") from exc

        try:
            relative_links = self._populate(staging, clusters, prefix)
        except OSError as exc:
            shutil.rmtree(staging, ignore_errors=True)
            raise MaterializationError(f"Could not create cluster links in {target}: {exc}") from exc

        try:
            self._replace(staging, target)
        except OSError as exc:
            shutil.rmtree(staging, ignore_errors=True)
            raise MaterializationError(f"Could not replace output directory {target}: {exc}") from exc

        LOGGER.info("Wrote %d link(s) into %s", len(relative_links), target)
        return [target / relative for relative in relative_links]

    def _populate(self, root: Path, clusters: ClusterSet, prefix: str) -> list[Path]:
        links: list[Path] = []
        for cluster_id, paths in clusters.clusters.items():
            folder = Path(cluster_label(prefix, cluster_id))
            (root / folder).mkdir(parents=True, exist_ok=True)
            for source in paths:
                link = folder / source.name
                (root / link).symlink_to(source)
                links.append(link)
        return links

    def _replace(self, staging: Path, target: Path) -> None:
        if target.is_symlink() or target.is_file():
            target.unlink()
        elif target.exists():
            shutil.rmtree(target)
        staging.rename(target)


def _directory_mode() -> int:
    """Return the mode `mkdir` would give a new directory under the current umask."""
    mask = os.umask(0)
    os.umask(mask)
    return 0o777 & ~mask


__all__ = ["SymlinkMaterializer"]
