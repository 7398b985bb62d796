"""Tests for end-to-end clustering runs."""

from __future__ import annotations

from pathlib import Path

import pytest

from fileman.clustering import DBSCANEngine
from fileman.ingestion import DirectoryLister, FeatureExtractor, ListingError
from fileman.organization import SymlinkMaterializer
from fileman.pipeline import ClusterError, ClusterPipeline
from fileman.tagging import TagManager

SHOOT = {"a.jpg": 0.0, "b.jpg": 100.0, "c.jpg": 200.0, "d.jpg": 10000.0, "e.jpg": 10100.0}


def _pipeline(reader, prefix: str = "cluster", tag_manager=None) -> ClusterPipeline:
    return ClusterPipeline(
        lister=DirectoryLister(),
        extractor=FeatureExtractor(timestamp_reader=reader),
        engine=DBSCANEngine(epsilon=600.0, min_points=3),
        materializer=SymlinkMaterializer(),
        prefix=prefix,
        tag_manager=tag_manager,
    )


def test_run_links_dense_files_and_drops_noise(tmp_path: Path, file_factory) -> None:
    source = tmp_path / "input"
    reader = file_factory(source, SHOOT)
    target = tmp_path / "out"

    result = _pipeline(reader).run(source, target)

    folders = list(target.iterdir())
    assert [folder.name for folder in folders] == ["cluster_0"]
    assert sorted(link.name for link in folders[0].iterdir()) == ["a.jpg", "b.jpg", "c.jpg"]
    for link in folders[0].iterdir():
        assert link.resolve() == (source / link.name).resolve()
    assert result.listed == 5
    assert [path.name for path in result.clusters.noise] == ["d.jpg", "e.jpg"]
    assert len(result.links) == 3
    assert result.elapsed_ms >= 0


def test_unreadable_files_never_reach_the_output(tmp_path: Path, file_factory) -> None:
    source = tmp_path / "input"
    reader = file_factory(
        source, {"a.jpg": 0.0, "broken.jpg": None, "b.jpg": 50.0, "c.jpg": 90.0}
    )
    target = tmp_path / "out"

    result = _pipeline(reader).run(source, target)

    assert result.skipped == [(source / "broken.jpg").resolve()]
    assert sorted(link.name for link in (target / "cluster_0").iterdir()) == [
        "a.jpg",
        "b.jpg",
        "c.jpg",
    ]
    assert not list(target.rglob("broken.jpg"))


def test_run_tags_clustered_files_after_pruning(tmp_path: Path, file_factory, tag_store) -> None:
    source = tmp_path / "input"
    reader = file_factory(source, SHOOT)
    noise = (source / "d.jpg").resolve()
    member = (source / "a.jpg").resolve()
    tag_store.tags[noise] = ["shoot_4", "keep"]
    tag_store.tags[member] = ["shoot_9"]

    result = _pipeline(reader, "shoot", TagManager(tag_store, "shoot")).run(
        source, tmp_path / "out"
    )

    assert result.tags_pruned == 2
    assert result.tags_applied == 3
    assert tag_store.tags[noise] == ["keep"]
    assert tag_store.tags[member] == ["shoot_0"]


def test_dry_run_leaves_filesystem_untouched(tmp_path: Path, file_factory, tag_store) -> None:
    source = tmp_path / "input"
    reader = file_factory(source, SHOOT)
    target = tmp_path / "out"

    result = _pipeline(reader, tag_manager=TagManager(tag_store, "cluster")).run(
        source, target, dry_run=True
    )

    assert result.dry_run is True
    assert result.clusters.clustered_count == 3
    assert not target.exists()
    assert tag_store.tags == {}


@pytest.mark.parametrize("relative_target", [".", ".."])
def test_target_enclosing_input_is_refused(
    tmp_path: Path, file_factory, relative_target: str
) -> None:
    source = tmp_path / "input"
    reader = file_factory(source, SHOOT)

    with pytest.raises(ClusterError):
        _pipeline(reader).run(source, source / relative_target)

    assert sorted(path.name for path in source.iterdir()) == sorted(SHOOT)


def test_target_inside_input_is_allowed(tmp_path: Path, file_factory) -> None:
    source = tmp_path / "input"
    reader = file_factory(source, {"a.jpg": 0.0, "b.jpg": 1.0, "c.jpg": 2.0})

    result = _pipeline(reader).run(source, source / "clusters")

    assert result.listed == 3
    assert (source / "clusters" / "cluster_0").is_dir()


def test_missing_input_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(ListingError):
        _pipeline(lambda path: 0.0).run(tmp_path / "missing", tmp_path / "out")
