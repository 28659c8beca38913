"""Owned simulation state: movable bodies as arrays plus the fixed attractor."""

from typing import List, Optional, Sequence

import numpy as np

from solar_sim.errors import ConfigurationError
from solar_sim.physics.bodies import Attractor, Body, BodyUpdate
from solar_sim.physics.vector import Vector3


class SimulationState:
    """Kinematic state of all movable bodies.

    Bodies are stored column-wise so forces and integration run vectorized:
    positions and velocities are (n, 3), masses is (n,). Row i always belongs
    to ids[i], and rows keep the order the bodies were supplied in.

    The forces array is the per-tick accumulator. It is zeroed at the start
    of every tick and only the integrator writes to it.
    """

    def __init__(
        self,
        ids: Sequence[str],
        positions: np.ndarray,
        velocities: np.ndarray,
        masses: np.ndarray,
        attractor: Attractor,
    ):
        self.ids: List[str] = list(ids)
        self.positions = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
        self.velocities = np.asarray(velocities, dtype=np.float64).reshape(-1, 3)
        self.masses = np.asarray(masses, dtype=np.float64).reshape(-1)
        self.forces = np.zeros_like(self.positions)
        self.attractor = attractor
        self.time = 0.0
        self.step_count = 0

    @classmethod
    def from_bodies(cls, bodies: Sequence[Body], attractor: Optional[Attractor]) -> "SimulationState":
        """Validate bodies and attractor and pack them into a new state.

        Raises:
            ConfigurationError: If the list is empty, the attractor is missing,
                an id repeats, a body shares the attractor's id, or any mass or
                vector is invalid.
        """
        if attractor is None:
            raise ConfigurationError("An attractor is required to initialize the simulation")
        if not bodies:
            raise ConfigurationError("At least one body is required to initialize the simulation")

        attractor.validate()
        seen = set()
        for body in bodies:
            body.validate()
            if body.id in seen:
                raise ConfigurationError(f"Duplicate body id '{body.id}'")
            if body.id == attractor.id:
                raise ConfigurationError(f"Body '{body.id}' uses the attractor's id; the attractor is not a movable body")
            seen.add(body.id)

        # Copy the attractor so later edits to the caller's object cannot move it
        fixed = Attractor(
            id=attractor.id,
            mass=float(attractor.mass),
            position=attractor.position,
            velocity=attractor.velocity,
        )
        return cls(
            ids=[b.id for b in bodies],
            positions=[b.position.to_array() for b in bodies],
            velocities=[b.velocity.to_array() for b in bodies],
            masses=[float(b.mass) for b in bodies],
            attractor=fixed,
        )

    @property
    def n_bodies(self) -> int:
        return len(self.ids)

    def reset_forces(self):
        self.forces.fill(0.0)

    def updates(self) -> List[BodyUpdate]:
        """Current {id, position, velocity} for every body, in init order."""
        return [
            BodyUpdate(
                id=body_id,
                position=Vector3.from_array(self.positions[i]),
                velocity=Vector3.from_array(self.velocities[i]),
            )
            for i, body_id in enumerate(self.ids)
        ]

    def to_bodies(self) -> List[Body]:
        """Current state as Body objects, in init order."""
        return [
            Body(
                id=body_id,
                mass=float(self.masses[i]),
                position=Vector3.from_array(self.positions[i]),
                velocity=Vector3.from_array(self.velocities[i]),
            )
            for i, body_id in enumerate(self.ids)
        ]

    def index_of(self, body_id: str) -> int:
        return self.ids.index(body_id)
