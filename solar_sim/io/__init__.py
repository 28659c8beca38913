"""Message codecs for the integrator boundary."""

from solar_sim.io.messages import (
    InitRequest,
    TickRequest,
    UpdateResponse,
    ErrorResponse,
    encode_message,
    decode_message,
    dumps,
    loads,
)

__all__ = [
    "InitRequest",
    "TickRequest",
    "UpdateResponse",
    "ErrorResponse",
    "encode_message",
    "decode_message",
    "dumps",
    "loads",
]
