"""Density-based clustering backed by scikit-learn's DBSCAN.

The algorithm itself is treated as a black box: callers hand over feature
vectors plus the two DBSCAN parameters and receive one classification per
vector, in input order. Anything satisfying :class:`ClusteringEngine` can be
substituted.
"""

from __future__ import annotations

import logging
from typing import Protocol, Sequence

import numpy as np
from sklearn.cluster import DBSCAN

from fileman.ingestion.models import FeatureVector

from .models import Classification

LOGGER = logging.getLogger(__name__)


class ClusteringEngine(Protocol):
    """Classify feature vectors into core, edge, and noise points."""

    def classify(self, vectors: Sequence[FeatureVector]) -> list[Classification]:
        """Return one classification per vector, in the same order."""
        ...


class DBSCANEngine:
    """Run DBSCAN over creation-time feature vectors.

    Args:
        epsilon: Maximum euclidean distance (seconds) between neighbours.
        min_points: Neighbourhood size, counting the point itself, needed to
            make a core point. ``0`` behaves like ``1``.
    """

    def __init__(self, epsilon: float, min_points: int) -> None:
        if epsilon <= 0:
            raise ValueError("epsilon must be positive")
        if min_points < 0:
            raise ValueError("min_points must not be negative")
        self.epsilon = epsilon
        self.min_points = min_points

    def classify(self, vectors: Sequence[FeatureVector]) -> list[Classification]:
        if not vectors:
            return []

        matrix = np.array([vector.as_row() for vector in vectors], dtype=float)
        model = DBSCAN(eps=self.epsilon, min_samples=max(self.min_points, 1), metric="euclidean")
        labels = model.fit_predict(matrix)
        core_indices = set(model.core_sample_indices_.tolist())

        classifications: list[Classification] = []
        for index, label in enumerate(labels.tolist()):
            if label < 0:
                classifications.append(Classification.noise())
            elif index in core_indices:
                classifications.append(Classification.core(label))
            else:
                classifications.append(Classification.edge(label))

        LOGGER.info(
            "DBSCAN produced %d cluster(s) from %d vector(s)",
            len({label for label in labels.tolist() if label >= 0}),
            len(vectors),
        )
        return classifications


__all__ = ["ClusteringEngine", "DBSCANEngine"]
