"""Density clustering of file features."""

from .aggregator import aggregate_clusters
from .engine import ClusteringEngine, DBSCANEngine
from .models import Classification, ClusterSet, cluster_label

__all__ = [
    "Classification",
    "ClusterSet",
    "ClusteringEngine",
    "DBSCANEngine",
    "aggregate_clusters",
    "cluster_label",
]
