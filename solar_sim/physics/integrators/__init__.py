"""Numerical integrators for body motion."""

from solar_sim.physics.integrators.base import Integrator
from solar_sim.physics.integrators.semi_implicit_euler import SemiImplicitEulerIntegrator

__all__ = ["Integrator", "SemiImplicitEulerIntegrator"]
