"""Tests for the body integrator."""

import numpy as np
import pytest

from solar_sim.errors import ConfigurationError, MessageError
from solar_sim.io.messages import InitRequest, TickRequest, UpdateResponse
from solar_sim.physics.bodies import Attractor, Body
from solar_sim.physics.body_integrator import BodyIntegrator
from solar_sim.physics.vector import Vector3
from solar_sim.utils.config import AttractionMode, IntegratorConfig


def make_sun(mass=1000.0):
    return Attractor(id="sun", mass=mass, position=Vector3(0.0, 0.0, 0.0), velocity=Vector3(0.0, 0.0, 0.0))


def make_bodies():
    return [
        Body(id="p", mass=1.0, position=Vector3(5.0, 0.0, 0.0), velocity=Vector3(0.0, 0.0, -1.0)),
        Body(id="q", mass=2.0, position=Vector3(0.0, 1.0, 8.0), velocity=Vector3(1.1, 0.0, 0.0)),
        Body(id="r", mass=0.5, position=Vector3(-3.0, 0.2, -4.0), velocity=Vector3(0.0, 0.0, 1.0)),
    ]


def test_concrete_tick():
    """One tick of a body at (5,0,0) moving along -z around a mass-1000 Sun."""
    integrator = BodyIntegrator()
    body = Body(id="p", mass=1.0, position=Vector3(5.0, 0.0, 0.0), velocity=Vector3(0.0, 0.0, -1.0))
    integrator.initialize([body], make_sun())

    update = integrator.tick(0.1)

    assert isinstance(update, UpdateResponse)
    assert len(update.bodies) == 1
    result = update.bodies[0]
    assert result.id == "p"
    assert np.allclose(result.velocity.to_array(), [-0.4, 0.0, -1.0])
    assert np.allclose(result.position.to_array(), [4.96, 0.0, -0.1])


def test_initialize_zeroes_forces():
    """Initialize sets every force accumulator to zero."""
    integrator = BodyIntegrator()
    integrator.initialize(make_bodies(), make_sun())

    assert integrator.is_initialized
    assert integrator.state.forces.shape == (3, 3)
    assert np.allclose(integrator.state.forces, 0.0)


def test_zero_dt_is_identity():
    """A tick with dt=0 leaves positions and velocities unchanged."""
    integrator = BodyIntegrator()
    integrator.initialize(make_bodies(), make_sun())
    before_pos = integrator.state.positions.copy()
    before_vel = integrator.state.velocities.copy()

    assert integrator.tick(0) is None
    assert integrator.tick(0.0) is None

    assert np.array_equal(integrator.state.positions, before_pos)
    assert np.array_equal(integrator.state.velocities, before_vel)
    assert integrator.state.step_count == 0


@pytest.mark.parametrize("dt", [None, -0.1, float('nan'), float('inf'), "0.1", True])
def test_invalid_dt_skips_tick(dt):
    """Falsy, negative or non-numeric dt skips the tick without mutating state."""
    integrator = BodyIntegrator()
    integrator.initialize(make_bodies(), make_sun())
    before = integrator.state.positions.copy()

    assert integrator.tick(dt) is None
    assert np.array_equal(integrator.state.positions, before)


def test_tick_before_initialize_is_skipped():
    """Ticks are no-ops until initialize() succeeds."""
    integrator = BodyIntegrator()
    assert integrator.tick(0.016) is None
    assert integrator.state is None


def test_coincident_body_stays_finite():
    """A body on top of the attractor does not produce NaN or Inf."""
    integrator = BodyIntegrator()
    body = Body(id="c", mass=1.0, position=Vector3(0.0, 0.0, 0.0), velocity=Vector3(0.0, 0.0, 0.0))
    integrator.initialize([body], make_sun())

    update = integrator.tick(0.05)

    assert update.bodies[0].position.is_finite()
    assert update.bodies[0].velocity.is_finite()
    assert np.all(np.isfinite(integrator.state.forces))


def test_update_preserves_ids_and_order():
    """Update contains exactly the init ids, in init order, without the Sun."""
    integrator = BodyIntegrator()
    bodies = make_bodies()
    integrator.initialize(bodies, make_sun())

    update = integrator.tick(0.016)

    assert [b.id for b in update.bodies] == [b.id for b in bodies]
    assert "sun" not in update.by_id()


def test_initialize_is_idempotent():
    """Initializing twice with the same input then ticking matches initializing once."""
    once = BodyIntegrator()
    once.initialize(make_bodies(), make_sun())
    expected = once.tick(0.05)

    twice = BodyIntegrator()
    twice.initialize(make_bodies(), make_sun())
    twice.initialize(make_bodies(), make_sun())
    actual = twice.tick(0.05)

    assert actual == expected


def test_reinitialize_replaces_state():
    """A second initialize discards previous bodies and time."""
    integrator = BodyIntegrator()
    integrator.initialize(make_bodies(), make_sun())
    for _ in range(5):
        integrator.tick(0.02)
    assert integrator.state.step_count == 5

    fresh = [Body(id="solo", mass=3.0, position=Vector3(12.0, 0.0, 0.0))]
    integrator.initialize(fresh, make_sun(500.0))

    assert integrator.state.ids == ["solo"]
    assert integrator.state.step_count == 0
    assert integrator.state.time == 0.0
    assert integrator.state.attractor.mass == 500.0


def test_tick_advances_time():
    """Time and step count track successful ticks only."""
    integrator = BodyIntegrator()
    integrator.initialize(make_bodies(), make_sun())
    integrator.tick(0.01)
    integrator.tick(0.02)
    integrator.tick(0)

    assert integrator.state.step_count == 2
    assert abs(integrator.state.time - 0.03) < 1e-12


def test_attractor_never_moves():
    """The attractor's position and velocity are fixed."""
    integrator = BodyIntegrator()
    sun = Attractor(id="sun", mass=1000.0, position=Vector3(1.0, 2.0, 3.0), velocity=Vector3(0.5, 0.0, 0.0))
    integrator.initialize(make_bodies(), sun)
    for _ in range(10):
        integrator.tick(0.05)

    assert integrator.state.attractor.position == Vector3(1.0, 2.0, 3.0)
    assert integrator.state.attractor.velocity == Vector3(0.5, 0.0, 0.0)


def test_reset_returns_to_uninitialized():
    """reset() drops all state."""
    integrator = BodyIntegrator()
    integrator.initialize(make_bodies(), make_sun())
    integrator.reset()

    assert not integrator.is_initialized
    assert integrator.tick(0.01) is None


@pytest.mark.parametrize("bodies, sun, match", [
    ([], make_sun(), "At least one body"),
    (make_bodies(), None, "attractor is required"),
    ([Body(id="a", mass=0.0)], make_sun(), "positive finite mass"),
    ([Body(id="a", mass=-1.0)], make_sun(), "positive finite mass"),
    ([Body(id="a", mass=float('nan'))], make_sun(), "positive finite mass"),
    ([Body(id="a", mass=1.0, position=Vector3(float('inf'), 0.0, 0.0))], make_sun(), "non-finite position"),
    ([Body(id="a", mass=1.0), Body(id="a", mass=2.0)], make_sun(), "Duplicate body id"),
    ([Body(id="sun", mass=1.0)], make_sun(), "attractor's id"),
    ([Body(id="", mass=1.0)], make_sun(), "non-empty string"),
    (make_bodies(), make_sun(0.0), "positive finite mass"),
])
def test_initialize_rejects_malformed_input(bodies, sun, match):
    """Malformed init input raises ConfigurationError."""
    integrator = BodyIntegrator()
    with pytest.raises(ConfigurationError, match=match):
        integrator.initialize(bodies, sun)
    assert not integrator.is_initialized


def test_failed_initialize_keeps_previous_state():
    """A rejected re-initialize leaves the running simulation untouched."""
    integrator = BodyIntegrator()
    integrator.initialize(make_bodies(), make_sun())
    integrator.tick(0.01)
    before = integrator.state.positions.copy()

    with pytest.raises(ConfigurationError):
        integrator.initialize([], make_sun())

    assert np.array_equal(integrator.state.positions, before)
    assert integrator.state.step_count == 1


def test_handle_dispatches_requests():
    """handle() routes InitRequest and TickRequest."""
    integrator = BodyIntegrator()

    assert integrator.handle(InitRequest(bodies=make_bodies(), sun=make_sun())) is None
    response = integrator.handle(TickRequest(dt=0.02))

    assert isinstance(response, UpdateResponse)
    assert len(response.bodies) == 3


def test_handle_rejects_unknown_message():
    """Anything other than a request raises MessageError."""
    integrator = BodyIntegrator()
    with pytest.raises(MessageError):
        integrator.handle({"type": "tick", "payload": {"dt": 0.1}})
    with pytest.raises(MessageError):
        integrator.handle(UpdateResponse())


def test_all_pairs_mode_changes_trajectories():
    """Pairwise gravity perturbs bodies relative to Sun-only."""
    bodies = [
        Body(id="a", mass=1.0, position=Vector3(10.0, 0.0, 0.0)),
        Body(id="b", mass=1.0, position=Vector3(11.0, 0.0, 0.0)),
    ]
    sun_only = BodyIntegrator(IntegratorConfig(attraction_mode=AttractionMode.SUN_ONLY))
    all_pairs = BodyIntegrator(IntegratorConfig(attraction_mode=AttractionMode.ALL_PAIRS))
    sun_only.initialize(bodies, make_sun())
    all_pairs.initialize(bodies, make_sun())

    for _ in range(20):
        sun_only.tick(0.05)
        all_pairs.tick(0.05)

    assert not np.allclose(sun_only.state.positions, all_pairs.state.positions)
    # the pair pulls a and b toward each other
    gap_sun_only = np.linalg.norm(sun_only.state.positions[1] - sun_only.state.positions[0])
    gap_all_pairs = np.linalg.norm(all_pairs.state.positions[1] - all_pairs.state.positions[0])
    assert gap_all_pairs < gap_sun_only


def test_input_bodies_are_not_mutated():
    """The caller's Body objects keep their initial values after ticking."""
    integrator = BodyIntegrator()
    bodies = make_bodies()
    integrator.initialize(bodies, make_sun())
    for _ in range(10):
        integrator.tick(0.05)

    assert bodies[0].position == Vector3(5.0, 0.0, 0.0)
    assert bodies[0].velocity == Vector3(0.0, 0.0, -1.0)


def test_state_round_trips_to_bodies():
    """to_bodies() and index_of() reflect the current state by id."""
    integrator = BodyIntegrator()
    bodies = make_bodies()
    integrator.initialize(bodies, make_sun())
    update = integrator.tick(0.05)

    state = integrator.state
    current = state.to_bodies()

    assert [b.id for b in current] == ["p", "q", "r"]
    assert [b.mass for b in current] == [1.0, 2.0, 0.5]
    assert state.index_of("q") == 1
    assert current[1].position == update.by_id()["q"].position
    with pytest.raises(ValueError):
        state.index_of("sun")


@pytest.mark.parametrize("dt", [np.float32(0.1), np.float64(0.1), np.int64(1)])
def test_numpy_scalar_dt_ticks(dt):
    """NumPy scalar time steps are accepted like Python numbers."""
    integrator = BodyIntegrator()
    integrator.initialize(make_bodies(), make_sun())

    update = integrator.tick(dt)

    assert isinstance(update, UpdateResponse)
    assert integrator.state.step_count == 1
    assert abs(integrator.state.time - float(dt)) < 1e-12


def test_numpy_bool_dt_is_skipped():
    integrator = BodyIntegrator()
    integrator.initialize(make_bodies(), make_sun())
    assert integrator.tick(np.bool_(True)) is None


def test_body_accepts_sequence_vectors():
    """Bodies built from tuples or mappings hold Vector3 values."""
    body = Body(id="t", mass=1.0, position=(5, 0, 0), velocity={"z": -1})

    assert body.position == Vector3(5.0, 0.0, 0.0)
    assert body.velocity == Vector3(0.0, 0.0, -1.0)

    integrator = BodyIntegrator()
    integrator.initialize([body], make_sun())
    assert np.allclose(integrator.tick(0.1).bodies[0].position.to_array(), [4.96, 0.0, -0.1])


@pytest.mark.parametrize("position", [(1.0, 2.0), "far", 5.0])
def test_body_rejects_malformed_vectors(position):
    with pytest.raises(ConfigurationError, match="malformed vector"):
        Body(id="bad", mass=1.0, position=position)
