"""Basic example of using the body integrator."""

from solar_sim import BodyIntegrator, IntegratorConfig
from solar_sim.physics.diagnostics import Diagnostics
from solar_sim.presets import AsteroidBelt
from solar_sim.utils.logging_setup import configure_logging


def main():
    """Run a small asteroid belt for a few hundred frames."""
    configure_logging("INFO")

    # One config for both seeding and integration, so G matches
    config = IntegratorConfig()
    bodies, sun = AsteroidBelt(n_bodies=200, seed=42, config=config).generate()

    integrator = BodyIntegrator(config)
    integrator.initialize(bodies, sun)
    diagnostics = Diagnostics(config)

    K, U, E0 = diagnostics.compute_energies(integrator.state)
    print(f"Initial energy: {E0:.6f}")

    for step in range(500):
        update = integrator.tick(0.016)
        if step % 100 == 0:
            first = update.bodies[0]
            _, _, E = diagnostics.compute_energies(integrator.state)
            print(f"Step {step}: {first.id} at ({first.position.x:.3f}, {first.position.z:.3f}), Energy={E:.6f}")

    print("Simulation complete!")


if __name__ == "__main__":
    main()
