"""Clustering data models."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, model_validator


def cluster_label(prefix: str, cluster_id: int) -> str:
    """Return the directory/tag name for a cluster, e.g. ``cluster_3``."""
    return f"{prefix}_{cluster_id}"


class Classification(BaseModel):
    """DBSCAN outcome for one feature vector.

    Attributes:
        kind: ``core`` and ``edge`` points belong to ``cluster_id``; ``noise`` to none.
        cluster_id: Cluster identifier, ``None`` for noise.
    """

    kind: Literal["core", "edge", "noise"]
    cluster_id: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _check_cluster_id(self) -> "Classification":
        if (self.kind == "noise") != (self.cluster_id is None):
            raise ValueError("cluster_id must be set exactly for core and edge points")
        return self

    @classmethod
    def core(cls, cluster_id: int) -> "Classification":
        return cls(kind="core", cluster_id=cluster_id)

    @classmethod
    def edge(cls, cluster_id: int) -> "Classification":
        return cls(kind="edge", cluster_id=cluster_id)

    @classmethod
    def noise(cls) -> "Classification":
        return cls(kind="noise")

    @property
    def is_noise(self) -> bool:
        return self.kind == "noise"


class ClusterSet(BaseModel):
    """Original paths grouped by cluster.

    Attributes:
        clusters: Cluster id to member paths, in listing order.
        noise: Paths that belong to no cluster.
    """

    clusters: Dict[int, List[Path]] = Field(default_factory=dict)
    noise: List[Path] = Field(default_factory=list)

    @property
    def clustered_count(self) -> int:
        return sum(len(paths) for paths in self.clusters.values())

    def labelled(self, prefix: str) -> Dict[str, List[Path]]:
        """Return the clusters keyed by their ``<prefix>_<id>`` label."""
        return {
            cluster_label(prefix, cluster_id): list(paths)
            for cluster_id, paths in sorted(self.clusters.items())
        }


__all__ = ["Classification", "ClusterSet", "cluster_label"]
