"""Shared fixtures for the fileman test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List

import pytest


class MemoryTagStore:
    """In-memory stand-in for the extended-attribute tag store."""

    def __init__(self) -> None:
        self.tags: Dict[Path, List[str]] = {}
        self.failing: set[Path] = set()

    def _check(self, path: Path) -> None:
        if path in self.failing:
            raise OSError(f"tags unavailable for {path}")

    def read_tags(self, path: Path) -> list[str]:
        self._check(path)
        return list(self.tags.get(path, []))

    def add_tag(self, path: Path, value: str) -> None:
        self._check(path)
        existing = self.tags.setdefault(path, [])
        if value not in existing:
            existing.append(value)

    def remove_tags_matching(self, path: Path, predicate: Callable[[str], bool]) -> list[str]:
        self._check(path)
        existing = self.tags.get(path, [])
        removed = [tag for tag in existing if predicate(tag)]
        self.tags[path] = [tag for tag in existing if not predicate(tag)]
        return removed


@pytest.fixture
def tag_store() -> MemoryTagStore:
    return MemoryTagStore()


def make_files(root: Path, stamps: Dict[str, float | None]) -> Callable[[Path], float]:
    """Create one file per name under ``root`` and return a matching timestamp reader.

    Names mapped to ``None`` behave as if their metadata could not be read.
    """
    root.mkdir(parents=True, exist_ok=True)
    for name in stamps:
        (root / name).write_text(name, encoding="utf-8")

    def _reader(path: Path) -> float:
        value = stamps.get(path.name)
        if value is None:
            raise OSError(f"metadata unavailable for {path.name}")
        return value

    return _reader


@pytest.fixture
def file_factory() -> Callable[[Path, Dict[str, float | None]], Callable[[Path], float]]:
    return make_files
