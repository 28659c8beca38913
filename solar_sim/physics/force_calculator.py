"""Force accumulation toward the attractor, with optional pair gravity and repulsion.

Attraction on body i:
    d_i = attractor.position - x_i
    F_i = G * M * m_i / max(|d_i|^2, floor) * normalize(d_i)

Repulsion (when enabled and |d_i|^2 < R^2, with R^2 the repulsion distance squared):
    F_i -= k * m_i * (R^2 / max(|d_i|^2, floor)) * normalize(d_i)

normalize() of a zero vector is the zero vector, so a body sitting exactly on
the attractor feels no force at all instead of NaN.
"""

from typing import Optional

import numpy as np

from solar_sim.physics import vector
from solar_sim.physics.simulation_state import SimulationState
from solar_sim.physics.vector import Vector3
from solar_sim.utils.config import AttractionMode, IntegratorConfig


def _unit_vectors(diff: np.ndarray, dist_sq: np.ndarray) -> np.ndarray:
    """Row-wise normalize ``diff`` using its squared lengths; zero rows stay zero."""
    dist = np.sqrt(dist_sq)
    unit = np.zeros_like(diff)
    np.divide(diff, dist[..., np.newaxis], out=unit, where=dist[..., np.newaxis] > 0)
    return unit


class ForceCalculator:
    """Accumulates forces into a SimulationState according to an IntegratorConfig."""

    def __init__(self, config: Optional[IntegratorConfig] = None):
        self.config = config or IntegratorConfig()

    def accumulate(self, state: SimulationState) -> np.ndarray:
        """Add this tick's forces into ``state.forces`` and return it.

        The caller is expected to have reset the accumulator first.
        """
        state.forces += self.attractor_forces(state.positions, state.masses, state.attractor)
        if self.config.attraction_mode == AttractionMode.ALL_PAIRS:
            state.forces += self.pair_forces(state.positions, state.masses)
        return state.forces

    def attractor_forces(self, positions: np.ndarray, masses: np.ndarray, attractor) -> np.ndarray:
        """Attractor gravity (plus repulsion, if enabled) on every body, shape (n, 3)."""
        cfg = self.config
        to_attractor = attractor.position.to_array()[np.newaxis, :] - positions
        raw_dist_sq = np.sum(to_attractor ** 2, axis=1)
        dist_sq = np.maximum(raw_dist_sq, cfg.distance_floor)
        direction = _unit_vectors(to_attractor, raw_dist_sq)

        magnitude = cfg.gravitational_constant * float(attractor.mass) * masses / dist_sq

        if cfg.repulsion_enabled:
            repulsion = cfg.repulsion_strength * masses * (cfg.repulsion_distance_sq / dist_sq)
            magnitude = magnitude - np.where(raw_dist_sq < cfg.repulsion_distance_sq, repulsion, 0.0)

        return direction * magnitude[:, np.newaxis]

    def pair_forces(self, positions: np.ndarray, masses: np.ndarray) -> np.ndarray:
        """Mutual gravity between every unordered pair of bodies, shape (n, 3).

        Each pair contributes equal and opposite forces, so the sum over all
        bodies is zero.
        """
        cfg = self.config
        n = positions.shape[0]
        pos_i = np.reshape(positions, (n, 1, 3))
        pos_j = np.reshape(positions, (1, n, 3))
        r_diff = pos_j - pos_i
        raw_dist_sq = np.sum(r_diff ** 2, axis=2)
        dist_sq = np.maximum(raw_dist_sq, cfg.distance_floor)
        unit = _unit_vectors(r_diff, raw_dist_sq)

        force_mag = cfg.gravitational_constant * np.outer(masses, masses) / dist_sq
        np.fill_diagonal(force_mag, 0.0)
        return np.sum(force_mag[:, :, np.newaxis] * unit, axis=1)

    def attractor_force(self, position: Vector3, mass: float, attractor) -> Vector3:
        """Force from the attractor on a single point mass.

        Same rules as attractor_forces(), evaluated with the scalar vector
        library; handy for inspecting one body without building a state.
        """
        cfg = self.config
        to_attractor = vector.subtract(attractor.position, position)
        raw_dist_sq = vector.length_squared(to_attractor)
        dist_sq = max(raw_dist_sq, cfg.distance_floor)
        direction = vector.normalize(to_attractor)

        force = vector.scale(direction, cfg.gravitational_constant * attractor.mass * mass / dist_sq)
        if cfg.repulsion_enabled and raw_dist_sq < cfg.repulsion_distance_sq:
            repulsion = cfg.repulsion_strength * mass * (cfg.repulsion_distance_sq / dist_sq)
            force = vector.add(force, vector.scale(direction, -repulsion))
        return force
