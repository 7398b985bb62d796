"""Tag storage backed by extended attributes."""

from __future__ import annotations

import errno
import os
from pathlib import Path
from typing import Callable, Protocol

XDG_TAGS_ATTRIBUTE = "user.xdg.tags"


class TagStore(Protocol):
    """Capability for reading and mutating the tags attached to a file."""

    def read_tags(self, path: Path) -> list[str]:
        ...

    def add_tag(self, path: Path, value: str) -> None:
        ...

    def remove_tags_matching(self, path: Path, predicate: Callable[[str], bool]) -> list[str]:
        """Remove tags for which ``predicate`` holds and return them."""
        ...


class XattrTagStore:
    """Store tags as a comma-separated list in the ``user.xdg.tags`` attribute.

    This is the freedesktop convention understood by Linux file managers. All
    operations raise ``OSError`` when the filesystem refuses the attribute call.
    Bytes that are not valid UTF-8 survive a read and write unchanged.
    """

    def __init__(self, attribute: str = XDG_TAGS_ATTRIBUTE) -> None:
        self.attribute = attribute

    def read_tags(self, path: Path) -> list[str]:
        try:
            raw = os.getxattr(path, self.attribute)
        except OSError as exc:
            if exc.errno == errno.ENODATA:
                return []
            raise
        return [tag for tag in raw.decode("utf-8", "surrogateescape").split(",") if tag]

    def add_tag(self, path: Path, value: str) -> None:
        tags = self.read_tags(path)
        if value in tags:
            return
        self._write(path, [*tags, value])

    def remove_tags_matching(self, path: Path, predicate: Callable[[str], bool]) -> list[str]:
        tags = self.read_tags(path)
        removed = [tag for tag in tags if predicate(tag)]
        if removed:
            self._write(path, [tag for tag in tags if not predicate(tag)])
        return removed

    def _write(self, path: Path, tags: list[str]) -> None:
        if tags:
            os.setxattr(path, self.attribute, ",".join(tags).encode("utf-8", "surrogateescape"))
        else:
            os.removexattr(path, self.attribute)


__all__ = ["TagStore", "XattrTagStore", "XDG_TAGS_ATTRIBUTE"]
