"""Shared physical constants (scaled simulation units).

G is read by both the force calculation and the orbit seeding in the presets;
seeded orbits are only circular when both sides use the same value.
"""

G = 0.1  # Gravitational constant (scaled)
DIST_FLOOR = 0.1  # Minimum squared distance used in the force denominator
REPULSION_DIST_SQ = 1.5 * 1.5  # Squared distance below which the Sun pushes back
REPULSION_STRENGTH = 0.05
MAX_DT = 0.05  # Largest step a driver should hand to a single tick (seconds)
SUN_MASS = 1000.0
ORBIT_SPEED_BOOST = 1.01  # Belt seeding runs slightly faster than circular
