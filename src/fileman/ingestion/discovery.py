"""Directory listing utilities."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import ListingError
from .models import FileEntry

LOGGER = logging.getLogger(__name__)


class DirectoryLister:
    """List the immediate entries of a directory as canonical paths.

    Nothing is filtered: hidden files, subdirectories and special files are all
    returned. Entries are ordered by name so repeated runs see the same order.
    """

    def scan(self, root: Path) -> list[FileEntry]:
        """Return canonical entries directly under ``root``.

        Args:
            root: Directory to scan (not recursed).

        Returns:
            list[FileEntry]: One entry per child of ``root``.

        Raises:
            ListingError: If the directory cannot be read or a child cannot be
                canonicalized.
        """
        try:
            children = sorted(root.expanduser().iterdir())
        except OSError as exc:
            raise ListingError(f"Could not read directory {root}: {exc}") from exc

        entries: list[FileEntry] = []
        for child in children:
            try:
                resolved = child.resolve(strict=True)
            except (OSError, RuntimeError) as exc:
                raise ListingError(f"Could not canonicalize {child}: {exc}") from exc
            entries.append(FileEntry(path=resolved))

        LOGGER.debug("Listed %d entries under %s", len(entries), root)
        return entries


__all__ = ["DirectoryLister"]
