"""Body integrator: owns the simulation state and advances it one tick at a time."""

import logging
import math
import numbers
from typing import Optional, Sequence

import numpy as np

from solar_sim.errors import MessageError
from solar_sim.io.messages import InitRequest, TickRequest, UpdateResponse
from solar_sim.physics.bodies import Attractor, Body
from solar_sim.physics.force_calculator import ForceCalculator
from solar_sim.physics.integrators.base import Integrator
from solar_sim.physics.integrators.semi_implicit_euler import SemiImplicitEulerIntegrator
from solar_sim.physics.simulation_state import SimulationState
from solar_sim.utils.config import IntegratorConfig

logger = logging.getLogger(__name__)


class BodyIntegrator:
    """Single-writer owner of a SimulationState.

    Lifecycle: uninitialized -> initialize() -> tick() repeatedly. initialize()
    may be called again at any point and replaces the state wholesale.
    Calls must be serialized; nothing here suspends mid-tick.
    """

    def __init__(self, config: Optional[IntegratorConfig] = None, integrator: Optional[Integrator] = None):
        """Initialize integrator.

        Args:
            config: Physics settings (default: IntegratorConfig())
            integrator: Time-stepping scheme (default: semi-implicit Euler)
        """
        self.config = config or IntegratorConfig()
        self.integrator = integrator or SemiImplicitEulerIntegrator()
        self.force_calculator = ForceCalculator(self.config)
        self._state: Optional[SimulationState] = None

    @property
    def state(self) -> Optional[SimulationState]:
        return self._state

    @property
    def is_initialized(self) -> bool:
        return self._state is not None

    def initialize(self, bodies: Sequence[Body], attractor: Optional[Attractor]):
        """Replace any existing state with ``bodies`` orbiting ``attractor``.

        Raises:
            ConfigurationError: On malformed input; the previous state is kept.
        """
        state = SimulationState.from_bodies(bodies, attractor)
        state.reset_forces()
        self._state = state
        logger.info(
            "Integrator initialized with %d bodies around '%s' (mode=%s, repulsion=%s)",
            state.n_bodies, state.attractor.id, self.config.attraction_mode.value, self.config.repulsion_enabled,
        )

    def reset(self):
        """Drop all state and return to the uninitialized state."""
        self._state = None

    def tick(self, dt: float) -> Optional[UpdateResponse]:
        """Advance every body by ``dt`` seconds.

        Returns:
            UpdateResponse with every body in init order, or None when the
            tick was skipped (uninitialized, no bodies, or dt not a positive
            finite number). A skipped tick leaves the state untouched.
        """
        state = self._state
        if state is None or state.n_bodies == 0 or not _valid_dt(dt):
            logger.debug("Skipping tick (initialized=%s, dt=%r)", state is not None, dt)
            return None
        dt = float(dt)

        state.reset_forces()
        self.force_calculator.accumulate(state)
        state.positions, state.velocities = self.integrator.step(
            state.positions, state.velocities, state.masses, state.forces, dt
        )
        state.time += dt
        state.step_count += 1

        return UpdateResponse(bodies=state.updates())

    def handle(self, message) -> Optional[UpdateResponse]:
        """Dispatch one request.

        InitRequest returns None; TickRequest returns the tick's update, or
        None if the tick was skipped.

        Raises:
            MessageError: If ``message`` is not a known request
            ConfigurationError: If an InitRequest carries malformed bodies
        """
        if isinstance(message, InitRequest):
            self.initialize(message.bodies, message.sun)
            return None
        if isinstance(message, TickRequest):
            return self.tick(message.dt)
        raise MessageError(f"Integrator cannot handle {type(message).__name__}")


def _valid_dt(dt) -> bool:
    if isinstance(dt, (bool, np.bool_)) or not isinstance(dt, numbers.Real):
        return False
    return math.isfinite(dt) and dt > 0
