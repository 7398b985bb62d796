"""Group classified entries into clusters."""

from __future__ import annotations

from typing import Sequence

from fileman.ingestion.models import FeatureSample

from .models import Classification, ClusterSet


def aggregate_clusters(
    samples: Sequence[FeatureSample],
    classifications: Sequence[Classification],
) -> ClusterSet:
    """Group sample paths by cluster id; noise points are kept aside.

    Args:
        samples: Clustered samples in the order they were classified.
        classifications: Engine output aligned with ``samples``.

    Returns:
        ClusterSet: Paths per cluster, preserving sample order within each cluster.

    Raises:
        ValueError: If the two sequences differ in length.
    """
    if len(samples) != len(classifications):
        raise ValueError(
            f"Got {len(classifications)} classifications for {len(samples)} samples"
        )

    result = ClusterSet()
    for sample, classification in zip(samples, classifications):
        if classification.is_noise:
            result.noise.append(sample.entry.path)
            continue
        result.clusters.setdefault(classification.cluster_id, []).append(sample.entry.path)
    return result


__all__ = ["aggregate_clusters"]
