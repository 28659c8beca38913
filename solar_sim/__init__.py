"""
Solar Simulator - the body-motion core of a 3D solar-system viewer.

Features:
- Sun-only or all-pairs gravity with a distance floor
- Optional short-range repulsion near the Sun
- Semi-implicit Euler integration
- Typed init/tick/update messages with a JSON codec
- Background worker and frame driver for render-loop hosting
- Asteroid belt and circular orbit presets
"""

__version__ = "0.1.0"

from solar_sim.errors import ConfigurationError, MessageError, SolarSimError
from solar_sim.physics.body_integrator import BodyIntegrator
from solar_sim.physics.bodies import Attractor, Body, BodyUpdate
from solar_sim.physics.vector import Vector3
from solar_sim.utils.config import AttractionMode, IntegratorConfig

__all__ = [
    "BodyIntegrator",
    "Attractor",
    "Body",
    "BodyUpdate",
    "Vector3",
    "AttractionMode",
    "IntegratorConfig",
    "ConfigurationError",
    "MessageError",
    "SolarSimError",
]
