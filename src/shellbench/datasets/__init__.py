"""
Datasets package public API.

Re-export the dataset generator so callers can write:
    from shellbench.datasets import make_dataset, SUPPORTED_DISTS
"""

from .generators import DEFAULT_RANGE, SUPPORTED_DISTS, make_dataset

__all__ = ["make_dataset", "SUPPORTED_DISTS", "DEFAULT_RANGE"]
