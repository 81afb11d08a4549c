"""
Splitting of metric collections into size-bounded batches.
"""
from typing import Iterable, List

from .metric import OpenTsdbMetric


def partition(metrics: Iterable[OpenTsdbMetric], limit: int) -> List[List[OpenTsdbMetric]]:
    """
    Divide metrics into batches of at most ``limit`` entries.

    A limit of 0 puts everything in a single batch, even when there are no
    metrics. Batches follow the iteration order of ``metrics``; for a set that
    order is arbitrary, so callers must not rely on which metric ends up in
    which batch.

    Args:
        metrics (iterable): The metrics to split
        limit (int): Maximum batch size, 0 for no limit

    Returns:
        list: The batches

    Raises:
        ValueError: If limit is negative
    """
    if limit < 0:
        raise ValueError(f"Batch size limit must be >= 0, got {limit}")

    metrics = list(metrics)
    if limit == 0 or len(metrics) <= limit:
        return [metrics]

    batches = []
    pending = []
    for metric in metrics:
        pending.append(metric)
        if len(pending) >= limit:
            batches.append(pending)
            pending = []
    if pending:
        batches.append(pending)
    return batches
