"""Hosting the integrator: background worker and frame driver."""

from solar_sim.runtime.worker import IntegratorWorker
from solar_sim.runtime.driver import FrameDriver, LocalChannel

__all__ = ["IntegratorWorker", "FrameDriver", "LocalChannel"]
