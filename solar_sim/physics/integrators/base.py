"""Abstract base class for numerical integrators."""

from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np


class Integrator(ABC):
    """Abstract interface for numerical integrators."""

    @abstractmethod
    def step(
        self,
        positions: np.ndarray,
        velocities: np.ndarray,
        masses: np.ndarray,
        forces: np.ndarray,
        dt: float,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Perform one integration step.

        Args:
            positions: Current positions, shape (n, 3)
            velocities: Current velocities, shape (n, 3)
            masses: Masses, shape (n,)
            forces: Net force on each body, shape (n, 3)
            dt: Time step

        Returns:
            Tuple of (new_positions, new_velocities)
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this integrator."""
        pass

    @property
    @abstractmethod
    def order(self) -> int:
        """Return the order of accuracy (e.g., 1 for Euler)."""
        pass
