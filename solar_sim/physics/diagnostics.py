"""Read-only diagnostics: energies, orbital radii and angular momentum.

Potential energy uses the same distance floor as the force calculation:
    U_i = -G * M * m_i / sqrt(max(r_i^2, floor))
so a body sitting on the attractor still gets a finite value. Repulsion and
pair gravity are not included; the numbers describe the Sun-only problem.
"""

import math
from typing import Dict, Optional, Tuple

import numpy as np

from solar_sim.physics.simulation_state import SimulationState
from solar_sim.utils.config import IntegratorConfig


def circular_speed(G: float, M: float, r: float) -> float:
    """Speed of a circular orbit of radius r around mass M: sqrt(G*M/r)."""
    if r <= 0:
        return 0.0
    return math.sqrt(G * M / r)


class Diagnostics:
    """Computes summary quantities of a SimulationState."""

    def __init__(self, config: Optional[IntegratorConfig] = None):
        self.config = config or IntegratorConfig()

    def orbital_radii(self, state: SimulationState) -> np.ndarray:
        """Distance of each body from the attractor, shape (n,)."""
        rel = state.positions - state.attractor.position.to_array()[np.newaxis, :]
        return np.linalg.norm(rel, axis=1)

    def compute_energies(self, state: SimulationState) -> Tuple[float, float, float]:
        """Return (K, U, E) for the movable bodies in the attractor's field."""
        K = 0.5 * float(np.sum(state.masses * np.sum(state.velocities ** 2, axis=1)))
        r_sq = self.orbital_radii(state) ** 2
        safe_r = np.sqrt(np.maximum(r_sq, self.config.distance_floor))
        U = -float(np.sum(
            self.config.gravitational_constant * float(state.attractor.mass) * state.masses / safe_r
        ))
        return K, U, K + U

    def angular_momentum(self, state: SimulationState) -> float:
        """Magnitude of total angular momentum about the attractor."""
        rel = state.positions - state.attractor.position.to_array()[np.newaxis, :]
        L = np.sum(state.masses[:, np.newaxis] * np.cross(rel, state.velocities), axis=0)
        return float(np.linalg.norm(L))

    def radius_drift(self, state: SimulationState, reference_radii: np.ndarray) -> float:
        """Largest relative change of any body's orbital radius versus reference."""
        reference = np.asarray(reference_radii, dtype=np.float64)
        current = self.orbital_radii(state)
        with np.errstate(divide='ignore', invalid='ignore'):
            drift = np.where(reference > 0, np.abs(current - reference) / reference, 0.0)
        return float(np.max(drift)) if drift.size else 0.0

    def summary(self, state: SimulationState) -> Dict[str, float]:
        K, U, E = self.compute_energies(state)
        radii = self.orbital_radii(state)
        return {
            "time": state.time,
            "steps": state.step_count,
            "K": K,
            "U": U,
            "E": E,
            "L": self.angular_momentum(state),
            "r_min": float(np.min(radii)),
            "r_max": float(np.max(radii)),
        }
