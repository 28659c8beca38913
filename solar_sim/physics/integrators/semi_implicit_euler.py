"""Semi-implicit (symplectic) Euler integrator, O(h) accuracy."""

from typing import Tuple

import numpy as np

from solar_sim.physics.integrators.base import Integrator


class SemiImplicitEulerIntegrator(Integrator):
    """Semi-implicit Euler: kick the velocity, then drift with the new velocity.

    Unlike explicit Euler, the position update uses v_new rather than v_old,
    which keeps orbits bounded instead of spiralling outward.
    """

    @property
    def name(self) -> str:
        return "semi_implicit_euler"

    @property
    def order(self) -> int:
        return 1

    def step(self, positions, velocities, masses, forces, dt: float) -> Tuple[np.ndarray, np.ndarray]:
        """Semi-implicit Euler step: v_new = v + (F/m)*dt, r_new = r + v_new*dt.

        Args:
            positions: Current positions
            velocities: Current velocities
            masses: Body masses
            forces: Net force on each body
            dt: Time step

        Returns:
            Tuple of (new_positions, new_velocities)
        """
        # Compute accelerations: a = F / m
        accelerations = forces / np.reshape(masses, (-1, 1))

        # Update velocities: v_new = v + a*dt
        new_velocities = velocities + accelerations * dt

        # Update positions with the new velocity: r_new = r + v_new*dt
        new_positions = positions + new_velocities * dt

        return new_positions, new_velocities
