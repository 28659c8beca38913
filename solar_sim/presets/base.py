"""Base class for preset scenarios."""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from solar_sim.physics import constants
from solar_sim.physics.bodies import Attractor, Body
from solar_sim.physics.vector import Vector3
from solar_sim.utils.config import IntegratorConfig
from solar_sim.utils.reproducibility import make_rng


class Preset(ABC):
    """Abstract base class for preset scenarios.

    Presets seed orbital velocities from ``config.gravitational_constant``;
    pass the integrator's own config so seeding and integration agree on G.
    """

    def __init__(
        self,
        n_bodies: int = 1,
        seed: Optional[int] = None,
        config: Optional[IntegratorConfig] = None,
        sun_mass: float = constants.SUN_MASS,
    ):
        """Initialize preset.

        Args:
            n_bodies: Number of movable bodies
            seed: Random seed for reproducibility
            config: Integrator config supplying G
            sun_mass: Attractor mass
        """
        self.n_bodies = n_bodies
        self.seed = seed
        self.config = config or IntegratorConfig()
        self.sun_mass = sun_mass
        self.rng = make_rng(seed)

    @property
    def G(self) -> float:
        return self.config.gravitational_constant

    def make_sun(self) -> Attractor:
        return Attractor(id="sun", mass=self.sun_mass, position=Vector3(), velocity=Vector3())

    @abstractmethod
    def generate(self) -> Tuple[List[Body], Attractor]:
        """Generate initial conditions.

        Returns:
            Tuple of (bodies, attractor)
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this preset."""
        pass
