"""Single body on a circular orbit; the reference case for stability checks."""

from typing import List, Optional, Tuple

from solar_sim.physics import constants
from solar_sim.physics.bodies import Attractor, Body
from solar_sim.physics.vector import Vector3
from solar_sim.presets.base import Preset
from solar_sim.presets.utils import tangential_velocity
from solar_sim.utils.config import IntegratorConfig


class CircularOrbit(Preset):
    """One or more bodies on circular orbits at evenly spaced radii.

    With the defaults (G=0.1, M=1000, r=10) the orbital speed is sqrt(10).
    """

    def __init__(
        self,
        n_bodies: int = 1,
        seed: Optional[int] = None,
        config: Optional[IntegratorConfig] = None,
        sun_mass: float = constants.SUN_MASS,
        radius: float = 10.0,
        spacing: float = 5.0,
        body_mass: float = 1.0,
    ):
        super().__init__(n_bodies, seed, config, sun_mass)
        self.radius = radius
        self.spacing = spacing
        self.body_mass = body_mass

    @property
    def name(self) -> str:
        return "circular"

    def generate(self) -> Tuple[List[Body], Attractor]:
        bodies = []
        for i in range(self.n_bodies):
            position = Vector3(self.radius + i * self.spacing, 0.0, 0.0)
            bodies.append(Body(
                id=f"body_{i}",
                mass=self.body_mass,
                position=position,
                velocity=tangential_velocity(position, self.G, self.sun_mass),
            ))
        return bodies, self.make_sun()
