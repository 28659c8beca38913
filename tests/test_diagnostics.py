"""Regression tests for diagnostics and orbit stability."""

import math

import numpy as np
import pytest

from solar_sim.physics import constants
from solar_sim.physics.bodies import Attractor, Body
from solar_sim.physics.body_integrator import BodyIntegrator
from solar_sim.physics.diagnostics import Diagnostics, circular_speed
from solar_sim.physics.vector import Vector3
from solar_sim.presets import AsteroidBelt, CircularOrbit
from solar_sim.utils.config import IntegratorConfig


def test_circular_speed():
    """sqrt(G*M/r) with the shared constants gives sqrt(10) at r=10."""
    assert abs(circular_speed(constants.G, 1000.0, 10.0) - math.sqrt(10.0)) < 1e-12
    assert circular_speed(constants.G, 1000.0, 0.0) == 0.0


def test_circular_orbit_stability():
    """A circular orbit at r=10 stays within 10% of r after 1000 ticks at dt=0.01."""
    config = IntegratorConfig()
    bodies, sun = CircularOrbit(radius=10.0, config=config).generate()
    v_circ = circular_speed(config.gravitational_constant, constants.SUN_MASS, 10.0)
    assert np.allclose(bodies[0].velocity.to_array(), [0.0, 0.0, v_circ])

    integrator = BodyIntegrator(config)
    integrator.initialize(bodies, sun)
    diagnostics = Diagnostics(config)

    radii = []
    for _ in range(1000):
        integrator.tick(0.01)
        radii.append(diagnostics.orbital_radii(integrator.state)[0])

    radii = np.array(radii)
    assert np.all(np.abs(radii - 10.0) / 10.0 < 0.1)


def test_seeded_orbits_use_integrator_g():
    """Orbits seeded from the integrator's own G stay circular for a non-default G."""
    config = IntegratorConfig(gravitational_constant=0.5)
    bodies, sun = CircularOrbit(n_bodies=3, radius=10.0, spacing=4.0, config=config).generate()

    integrator = BodyIntegrator(config)
    integrator.initialize(bodies, sun)
    diagnostics = Diagnostics(config)
    reference = diagnostics.orbital_radii(integrator.state)

    for _ in range(2000):
        integrator.tick(0.01)

    assert diagnostics.radius_drift(integrator.state, reference) < 0.05


def test_mismatched_g_breaks_orbit():
    """Seeding with a different G than the integrator's leaves the circle."""
    seed_config = IntegratorConfig(gravitational_constant=0.1)
    run_config = IntegratorConfig(gravitational_constant=0.4)
    bodies, sun = CircularOrbit(radius=10.0, config=seed_config).generate()

    integrator = BodyIntegrator(run_config)
    integrator.initialize(bodies, sun)
    diagnostics = Diagnostics(run_config)

    max_drift = 0.0
    for _ in range(1000):
        integrator.tick(0.01)
        max_drift = max(max_drift, diagnostics.radius_drift(integrator.state, np.array([10.0])))

    assert max_drift > 0.1


def test_asteroid_belt_stays_in_belt():
    """Belt asteroids keep their radius within 10% over many frames."""
    config = IntegratorConfig()
    bodies, sun = AsteroidBelt(n_bodies=50, seed=3, config=config).generate()

    integrator = BodyIntegrator(config)
    integrator.initialize(bodies, sun)
    diagnostics = Diagnostics(config)
    reference = diagnostics.orbital_radii(integrator.state)

    for _ in range(500):
        integrator.tick(constants.MAX_DT)

    assert diagnostics.radius_drift(integrator.state, reference) < 0.1


def test_energies_known_state():
    """K, U and E for one body at r=5 moving at speed 1."""
    integrator = BodyIntegrator()
    body = Body(id="p", mass=1.0, position=Vector3(5.0, 0.0, 0.0), velocity=Vector3(0.0, 0.0, -1.0))
    integrator.initialize([body], Attractor(id="sun", mass=1000.0))

    K, U, E = Diagnostics().compute_energies(integrator.state)

    assert abs(K - 0.5) < 1e-12
    assert abs(U - (-20.0)) < 1e-12
    assert abs(E - (K + U)) < 1e-12


def test_potential_energy_uses_floor():
    """A body on the attractor has finite potential energy."""
    integrator = BodyIntegrator()
    integrator.initialize([Body(id="c", mass=1.0)], Attractor(id="sun", mass=1000.0))

    _, U, _ = Diagnostics().compute_energies(integrator.state)

    assert np.isfinite(U)
    assert abs(U - (-0.1 * 1000.0 / np.sqrt(0.1))) < 1e-9


def test_angular_momentum_conserved():
    """Central forces with semi-implicit Euler conserve angular momentum."""
    config = IntegratorConfig()
    bodies, sun = AsteroidBelt(n_bodies=20, seed=11, config=config).generate()
    integrator = BodyIntegrator(config)
    integrator.initialize(bodies, sun)
    diagnostics = Diagnostics(config)

    L0 = diagnostics.angular_momentum(integrator.state)
    for _ in range(200):
        integrator.tick(0.05)
    L1 = diagnostics.angular_momentum(integrator.state)

    assert L0 > 0
    assert abs(L1 - L0) / L0 < 1e-9


def test_energy_bounded_on_circular_orbit():
    """Total energy stays close to its initial value for a circular orbit."""
    config = IntegratorConfig()
    bodies, sun = CircularOrbit(radius=10.0, config=config).generate()
    integrator = BodyIntegrator(config)
    integrator.initialize(bodies, sun)
    diagnostics = Diagnostics(config)

    _, _, E0 = diagnostics.compute_energies(integrator.state)
    for _ in range(1000):
        integrator.tick(0.01)
    _, _, E1 = diagnostics.compute_energies(integrator.state)

    assert abs(E1 - E0) / abs(E0) < 0.01


def test_summary_keys():
    """summary() reports the table fields the CLI prints."""
    config = IntegratorConfig()
    bodies, sun = CircularOrbit(n_bodies=2, config=config).generate()
    integrator = BodyIntegrator(config)
    integrator.initialize(bodies, sun)
    integrator.tick(0.01)

    summary = Diagnostics(config).summary(integrator.state)

    assert set(summary) == {"time", "steps", "K", "U", "E", "L", "r_min", "r_max"}
    assert summary["steps"] == 1
    assert summary["r_min"] == pytest.approx(10.0, rel=1e-3)
    assert summary["r_max"] == pytest.approx(15.0, rel=1e-3)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
