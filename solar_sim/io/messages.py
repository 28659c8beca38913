"""Request/response messages exchanged between a host driver and the integrator.

Wire envelope: ``{"type": <name>, "payload": {...}}``

- ``init``   -> ``{bodies: [{id, mass, position, velocity}, ...], sun: {id, mass, position, velocity}}``
- ``tick``   -> ``{dt: seconds}``
- ``update`` <- ``{bodies: [{id, position, velocity}, ...]}``
- ``error``  <- ``{error: message}``

Vectors travel as ``{x, y, z}`` objects.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from solar_sim.errors import ConfigurationError, MessageError
from solar_sim.physics.bodies import Attractor, Body, BodyUpdate


@dataclass
class InitRequest:
    """Replace the simulation with these bodies and this attractor."""
    bodies: List[Body]
    sun: Optional[Attractor]

    type = "init"

    def to_payload(self) -> Dict[str, Any]:
        return {
            "bodies": [b.to_dict() for b in self.bodies],
            "sun": self.sun.to_dict() if self.sun is not None else None,
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "InitRequest":
        bodies = payload.get("bodies")
        if not isinstance(bodies, list):
            raise ConfigurationError("init payload needs a 'bodies' list")
        sun = payload.get("sun")
        return cls(
            bodies=[Body.from_dict(b) for b in bodies],
            sun=Attractor.from_dict(sun) if sun is not None else None,
        )


@dataclass
class TickRequest:
    """Advance every body by ``dt`` seconds."""
    dt: float

    type = "tick"

    def to_payload(self) -> Dict[str, Any]:
        return {"dt": self.dt}

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "TickRequest":
        return cls(dt=payload.get("dt"))


@dataclass
class UpdateResponse:
    """Kinematic state of every body after a tick, in init order."""
    bodies: List[BodyUpdate] = field(default_factory=list)

    type = "update"

    def to_payload(self) -> Dict[str, Any]:
        return {"bodies": [b.to_dict() for b in self.bodies]}

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "UpdateResponse":
        try:
            return cls(bodies=[BodyUpdate.from_dict(b) for b in payload.get("bodies", [])])
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise MessageError(f"Malformed update payload: {e}") from e

    def by_id(self) -> Dict[str, BodyUpdate]:
        return {b.id: b for b in self.bodies}


@dataclass
class ErrorResponse:
    """A request could not be processed."""
    error: str

    type = "error"

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.error}

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ErrorResponse":
        return cls(error=str(payload.get("error", "")))


Request = Union[InitRequest, TickRequest]
Response = Union[UpdateResponse, ErrorResponse]
Message = Union[InitRequest, TickRequest, UpdateResponse, ErrorResponse]

MESSAGE_TYPES = {
    cls.type: cls for cls in (InitRequest, TickRequest, UpdateResponse, ErrorResponse)
}


def encode_message(message: Message) -> Dict[str, Any]:
    """Wrap a message in its ``{type, payload}`` envelope."""
    if type(message) not in MESSAGE_TYPES.values():
        raise MessageError(f"Cannot encode {type(message).__name__}")
    return {"type": message.type, "payload": message.to_payload()}


def decode_message(data: Dict[str, Any]) -> Message:
    """Parse a ``{type, payload}`` envelope into a typed message.

    Raises:
        MessageError: Unknown type or malformed envelope
        ConfigurationError: Malformed body inside an init payload
    """
    if not isinstance(data, dict):
        raise MessageError(f"Message must be an object, got {type(data).__name__}")
    msg_type = data.get("type")
    cls = MESSAGE_TYPES.get(msg_type)
    if cls is None:
        raise MessageError(f"Unknown message type {msg_type!r}. Available: {sorted(MESSAGE_TYPES)}")
    payload = data.get("payload")
    if not isinstance(payload, dict):
        raise MessageError(f"'{msg_type}' message needs an object payload")
    return cls.from_payload(payload)


def dumps(message: Message) -> str:
    return json.dumps(encode_message(message))


def loads(text: str) -> Message:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MessageError(f"Message is not valid JSON: {e}") from e
    return decode_message(data)
