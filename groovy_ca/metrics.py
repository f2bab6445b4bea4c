"""Scalar summaries of binary arrays and operator histories."""

import numpy as np
from typing import Dict, Optional, Sequence
from dataclasses import dataclass
from scipy import ndimage


@dataclass(frozen=True)
class RunMetrics:
    """Mean densities of the operator histories of one run."""
    derivative_density: float  # rho, mean fraction of flipping cells
    groovy_density: float
    second_order_density: Optional[float] = None  # only for elementary rules

    def to_dict(self) -> Dict:
        return {
            "derivative_density": self.derivative_density,
            "groovy_density": self.groovy_density,
            "second_order_density": self.second_order_density,
        }


def density(arr) -> float:
    """Fraction of cells equal to 1. An empty array has density 0."""
    arr = np.asarray(arr)
    if arr.size == 0:
        return 0.0
    return float(arr.sum() / arr.size)


def mean_density(history: Sequence[np.ndarray]) -> float:
    """Arithmetic mean of per-step densities (not the density of the whole history)."""
    if len(history) == 0:
        return 0.0
    return float(np.mean([density(arr) for arr in history]))


def activity_clusters(arr) -> int:
    """Count connected regions of 1-cells in a 1D or 2D array.

    Used to tell a structured commutator from scattered noise. Regions touching
    opposite edges are counted separately.
    """
    arr = np.asarray(arr)
    if arr.size == 0:
        return 0
    _, num_clusters = ndimage.label(arr)
    return int(num_clusters)
