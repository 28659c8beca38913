"""Asteroid belt preset: a thin ring of small bodies on near-circular orbits."""

import math
from typing import List, Optional, Tuple

from solar_sim.physics import constants
from solar_sim.physics.bodies import Attractor, Body
from solar_sim.physics.vector import Vector3
from solar_sim.presets.base import Preset
from solar_sim.presets.utils import tangential_velocity
from solar_sim.utils.config import IntegratorConfig


class AsteroidBelt(Preset):
    """Ring of asteroids around a central Sun in the xz-plane.

    Each asteroid gets a random radius in [min_radius, max_radius), a random
    angle and a small height offset, and a size from which its mass follows
    (mass = 5 * size^3). Velocities are tangential at speed_boost times the
    circular speed.
    """

    def __init__(
        self,
        n_bodies: int = 500,
        seed: Optional[int] = None,
        config: Optional[IntegratorConfig] = None,
        sun_mass: float = constants.SUN_MASS,
        min_radius: float = 35.0,
        max_radius: float = 41.0,
        height: float = 1.0,
        min_size: float = 0.05,
        max_size: float = 0.15,
        speed_boost: float = constants.ORBIT_SPEED_BOOST,
    ):
        """Initialize asteroid belt preset.

        Args:
            n_bodies: Number of asteroids (default: 500)
            seed: Random seed
            config: Integrator config supplying G
            sun_mass: Sun mass (default: 1000)
            min_radius: Inner belt radius (default: 35)
            max_radius: Outer belt radius (default: 41)
            height: Total vertical thickness of the belt (default: 1.0)
            min_size: Smallest asteroid size (default: 0.05)
            max_size: Largest asteroid size (default: 0.15)
            speed_boost: Multiplier on the circular speed (default: 1.01)
        """
        super().__init__(n_bodies, seed, config, sun_mass)
        self.min_radius = min_radius
        self.max_radius = max_radius
        self.height = height
        self.min_size = min_size
        self.max_size = max_size
        self.speed_boost = speed_boost

    @property
    def name(self) -> str:
        return "asteroid_belt"

    def generate(self) -> Tuple[List[Body], Attractor]:
        """Generate the belt.

        Returns:
            Tuple of (bodies, attractor); body ids are ``asteroid_<i>``
        """
        n = self.n_bodies
        radii = self.rng.uniform(self.min_radius, self.max_radius, n)
        angles = self.rng.uniform(0.0, 2 * math.pi, n)
        heights = (self.rng.uniform(0.0, 1.0, n) - 0.5) * self.height
        sizes = self.rng.uniform(self.min_size, self.max_size, n)

        bodies = []
        for i in range(n):
            position = Vector3(
                math.cos(angles[i]) * radii[i],
                float(heights[i]),
                math.sin(angles[i]) * radii[i],
            )
            bodies.append(Body(
                id=f"asteroid_{i}",
                mass=5.0 * float(sizes[i]) ** 3,
                position=position,
                velocity=tangential_velocity(position, self.G, self.sun_mass, self.speed_boost),
            ))

        return bodies, self.make_sun()
