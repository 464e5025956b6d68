"""
Core analysis and aggregation functions.
"""

from .mathematics import (
    compute_distances,
    average_path_length,
    clustering_coefficient,
    degree_histogram,
    network_metrics
)
from .aggregation import AggregationMode, aggregate

__all__ = [
    "compute_distances",
    "average_path_length",
    "clustering_coefficient",
    "degree_histogram",
    "network_metrics",
    "AggregationMode",
    "aggregate"
]
