"""Body data model: movable bodies, the fixed attractor and per-tick updates."""

import math
from dataclasses import dataclass, field
from typing import Any, Dict

from solar_sim.errors import ConfigurationError
from solar_sim.physics.vector import Vector3


@dataclass
class Body:
    """Movable point mass (planet or asteroid).

    Fields:
    - id: Correlation key, unique within the body list and stable across ticks
    - mass: Positive mass in simulation units
    - position: Position vector
    - velocity: Velocity vector
    """
    id: str
    mass: float
    position: Vector3 = field(default_factory=Vector3)
    velocity: Vector3 = field(default_factory=Vector3)

    def __post_init__(self):
        # Accept (x, y, z) sequences and {x, y, z} mappings as well as Vector3
        kind = type(self).__name__.lower()
        try:
            self.position = Vector3.coerce(self.position)
            self.velocity = Vector3.coerce(self.velocity)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"{kind} '{self.id}' has a malformed vector: {e}") from e

    def validate(self) -> None:
        """Raise ConfigurationError if this body cannot be simulated."""
        kind = type(self).__name__.lower()
        if not isinstance(self.id, str) or not self.id:
            raise ConfigurationError(f"{kind} id must be a non-empty string, got {self.id!r}")
        try:
            mass = float(self.mass)
        except (TypeError, ValueError):
            raise ConfigurationError(f"{kind} '{self.id}' has non-numeric mass {self.mass!r}")
        if not math.isfinite(mass) or mass <= 0:
            raise ConfigurationError(f"{kind} '{self.id}' must have positive finite mass, got {self.mass!r}")
        if not self.position.is_finite():
            raise ConfigurationError(f"{kind} '{self.id}' has non-finite position {self.position}")
        if not self.velocity.is_finite():
            raise ConfigurationError(f"{kind} '{self.id}' has non-finite velocity {self.velocity}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """Build from the wire shape ``{id, mass, position: {x,y,z}, velocity: {x,y,z}}``."""
        if not isinstance(data, dict):
            raise ConfigurationError(f"{cls.__name__.lower()} entry must be an object, got {type(data).__name__}")
        kind = cls.__name__.lower()
        if "mass" not in data:
            raise ConfigurationError(f"{kind} '{data.get('id')}' is missing a mass")
        try:
            position = Vector3.coerce(data.get("position"))
            velocity = Vector3.coerce(data.get("velocity"))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"{kind} '{data.get('id')}' has a malformed vector: {e}") from e
        return cls(id=data.get("id"), mass=data["mass"], position=position, velocity=velocity)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "mass": self.mass,
            "position": self.position.to_dict(),
            "velocity": self.velocity.to_dict(),
        }


@dataclass
class Attractor(Body):
    """The fixed central mass (Sun). Same shape as a Body, never integrated."""
    pass


@dataclass(frozen=True)
class BodyUpdate:
    """Kinematic state of one body after a tick (mass is unchanged and omitted)."""
    id: str
    position: Vector3
    velocity: Vector3

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BodyUpdate":
        return cls(
            id=data["id"],
            position=Vector3.from_dict(data["position"]),
            velocity=Vector3.from_dict(data["velocity"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "position": self.position.to_dict(),
            "velocity": self.velocity.to_dict(),
        }
