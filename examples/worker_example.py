"""Driving the integrator from a render loop through a background worker."""

import time

from solar_sim import IntegratorConfig
from solar_sim.presets import AsteroidBelt
from solar_sim.runtime import FrameDriver, IntegratorWorker
from solar_sim.utils.logging_setup import configure_logging


def main():
    configure_logging("INFO")
    config = IntegratorConfig()
    bodies, sun = AsteroidBelt(n_bodies=500, seed=7, config=config).generate()

    with IntegratorWorker(config) as worker:
        driver = FrameDriver(worker, max_dt=config.max_dt)
        driver.initialize(bodies, sun)

        last = time.perf_counter()
        for frame in range(300):
            now = time.perf_counter()
            driver.on_frame(now - last)
            last = now
            driver.poll()
            time.sleep(1 / 60)

        driver.poll(timeout=1.0)

    p = driver.positions["asteroid_0"]
    print(f"asteroid_0 at ({p.x:.3f}, {p.y:.3f}, {p.z:.3f})")
    print(f"Updates applied: {driver.updates_applied}, frames dropped: {driver.frames_dropped}")


if __name__ == "__main__":
    main()
