"""CLI main entry point."""

import argparse
import logging
import sys
import time
from typing import List, Optional

from solar_sim.errors import ConfigurationError
from solar_sim.physics.body_integrator import BodyIntegrator
from solar_sim.physics.diagnostics import Diagnostics
from solar_sim.presets import PRESETS, get_preset
from solar_sim.runtime.driver import FrameDriver, LocalChannel
from solar_sim.runtime.worker import IntegratorWorker
from solar_sim.utils.config import AttractionMode, Config, IntegratorConfig, load_config
from solar_sim.utils.logging_setup import configure_logging
from solar_sim.utils.reproducibility import set_all_seeds

logger = logging.getLogger(__name__)


def build_config(args) -> Config:
    """Merge an optional config file with command-line overrides."""
    config = load_config(args.config) if args.config else Config()

    integrator = config.integrator.to_dict()
    if args.attraction_mode is not None:
        integrator['attraction_mode'] = args.attraction_mode
    if args.no_repulsion:
        integrator['repulsion_enabled'] = False
    if args.max_dt is not None:
        integrator['max_dt'] = args.max_dt

    overrides = {
        'preset': args.preset,
        'n_bodies': args.bodies,
        'steps': args.steps,
        'dt': args.dt,
        'seed': args.seed,
        'debug_every': args.debug_every,
        'log_level': args.log_level,
    }
    data = config.to_dict()
    data.update({k: v for k, v in overrides.items() if v is not None})
    if args.threaded:
        data['threaded'] = True
    data['integrator'] = IntegratorConfig(**integrator)
    return Config(**data)


def _print_row(step: int, summary: dict, E0: float):
    dE = (summary['E'] - E0) / abs(E0) * 100 if abs(E0) > 0 else 0.0
    print(f"{step:<8} {summary['time']:<10.3f} {summary['K']:<12.4f} {summary['U']:<12.4f} "
          f"{summary['E']:<12.4f} {summary['r_min']:<10.3f} {summary['r_max']:<10.3f} {dE:<10.4f}%")


def run_simulation(config: Config) -> BodyIntegrator:
    """Run a headless simulation and print a diagnostics table.

    Returns:
        The BodyIntegrator holding the final state
    """
    if config.seed is not None:
        set_all_seeds(config.seed)

    preset = get_preset(config.preset, n_bodies=config.n_bodies, seed=config.seed, config=config.integrator)
    bodies, sun = preset.generate()

    worker = None
    if config.threaded:
        worker = IntegratorWorker(config.integrator).start()
        channel = worker
        integrator = worker.integrator
    else:
        channel = LocalChannel(BodyIntegrator(config.integrator))
        integrator = channel.integrator

    driver = FrameDriver(channel, max_dt=config.integrator.max_dt)
    diagnostics = Diagnostics(config.integrator)

    print(f"Running simulation: {preset.name} with {len(bodies)} bodies")
    print(f"Mode: {config.integrator.attraction_mode.value}, repulsion: {config.integrator.repulsion_enabled}, "
          f"dt: {config.dt} (max {config.integrator.max_dt}), threaded: {config.threaded}")

    started = time.perf_counter()
    try:
        driver.initialize(bodies, sun)
        driver.poll(timeout=0)
        if worker is not None:
            worker.join()
            driver.poll(timeout=0)
        if driver.last_error is not None:
            raise ConfigurationError(driver.last_error)

        summary = diagnostics.summary(integrator.state)
        E0 = summary['E']
        print(f"{'Step':<8} {'Time':<10} {'K':<12} {'U':<12} {'E':<12} {'r_min':<10} {'r_max':<10} {'dE/E0':<10}")
        print("-" * 90)
        _print_row(0, summary, E0)

        for step in range(1, config.steps + 1):
            posted = driver.on_frame(config.dt)
            # Wait for the result so every frame advances the simulation
            driver.poll(timeout=None if (worker is not None and posted) else 0)
            if driver.last_error is not None:
                raise ConfigurationError(driver.last_error)
            if config.debug_every > 0 and step % config.debug_every == 0:
                _print_row(step, diagnostics.summary(integrator.state), E0)
    finally:
        if worker is not None:
            worker.stop()

    elapsed = time.perf_counter() - started
    logger.info("Ran %d steps in %.3fs (%d frames dropped)", config.steps, elapsed, driver.frames_dropped)
    print("Simulation complete!")
    return integrator


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Solar Simulator - headless body integrator")

    parser.add_argument('--config', type=str, default=None,
                        help='Load settings from a .json or .yaml file (flags override it)')

    # Simulation parameters
    parser.add_argument('--preset', type=str, default=None, choices=sorted(PRESETS),
                        help='Preset scenario (default: asteroid_belt)')
    parser.add_argument('--bodies', type=int, default=None,
                        help='Number of movable bodies (default: 500)')
    parser.add_argument('--steps', type=int, default=None,
                        help='Number of frames to simulate (default: 1000)')
    parser.add_argument('--dt', type=float, default=None,
                        help='Frame time in seconds before clamping (default: 0.016)')
    parser.add_argument('--max-dt', type=float, default=None,
                        help='Largest step handed to one tick (default: 0.05)')
    parser.add_argument('--debug-every', type=int, default=None,
                        help='Print diagnostics every N steps (default: 100)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducibility')

    # Physics variants
    parser.add_argument('--attraction-mode', type=str, default=None,
                        choices=[m.value for m in AttractionMode],
                        help='Sun-only gravity or Sun plus all body pairs (default: sun_only)')
    parser.add_argument('--no-repulsion', action='store_true',
                        help='Disable the short-range repulsion near the Sun')

    # Hosting
    parser.add_argument('--threaded', action='store_true',
                        help='Run the integrator on a background worker thread')
    parser.add_argument('--log-level', type=str, default=None,
                        help='Logging level (default: INFO)')

    args = parser.parse_args(argv)

    try:
        config = build_config(args)
        configure_logging(config.log_level)
        run_simulation(config)
    except (ConfigurationError, ValueError) as e:
        logger.critical("Simulation aborted: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
