"""Helpers shared by presets for seeding orbits."""

from solar_sim.physics import vector
from solar_sim.physics.diagnostics import circular_speed
from solar_sim.physics.vector import Vector3

MIN_SEED_RADIUS = 0.01


def tangential_velocity(position: Vector3, G: float, M: float, boost: float = 1.0) -> Vector3:
    """Prograde velocity in the xz-plane for a circular orbit about the origin.

    The radius is measured in the orbital (xz) plane only, so a body's height
    does not change its seeded speed. Bodies within MIN_SEED_RADIUS of the
    axis start at rest.
    """
    r_vec = Vector3(position.x, 0.0, position.z)
    r = vector.length(r_vec)
    if r <= MIN_SEED_RADIUS:
        return vector.zero()
    tangent = vector.normalize(Vector3(-r_vec.z, 0.0, r_vec.x))
    return vector.scale(tangent, circular_speed(G, M, r) * boost)
