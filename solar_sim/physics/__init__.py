"""Physics core: vectors, bodies, forces and the body integrator."""

from solar_sim.physics.vector import Vector3
from solar_sim.physics.bodies import Attractor, Body, BodyUpdate
from solar_sim.physics.simulation_state import SimulationState
from solar_sim.physics.force_calculator import ForceCalculator
from solar_sim.physics.body_integrator import BodyIntegrator
from solar_sim.physics.diagnostics import Diagnostics, circular_speed

__all__ = [
    "Vector3",
    "Attractor",
    "Body",
    "BodyUpdate",
    "SimulationState",
    "ForceCalculator",
    "BodyIntegrator",
    "Diagnostics",
    "circular_speed",
]
