"""Reproducibility utilities for deterministic runs."""

import random
from typing import Optional

import numpy as np


def set_all_seeds(seed: int):
    """Set random seeds for reproducibility.

    Args:
        seed: Random seed
    """
    random.seed(seed)
    np.random.seed(seed)


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Return a NumPy generator; seeded generators give identical presets."""
    return np.random.default_rng(seed)
