"""Exception hierarchy for the solar simulation."""


class SolarSimError(Exception):
    """Base class for all solar-sim errors."""
    pass


class ConfigurationError(SolarSimError):
    """Raised when bodies, the attractor or integrator settings are invalid.

    Malformed initialization input (empty body list, missing attractor,
    non-positive mass, duplicate ids) is rejected with this error before any
    state is touched, so NaN never gets a chance to enter the simulation.
    """
    pass


class MessageError(SolarSimError):
    """Raised for an unknown message type or a malformed message envelope."""
    pass
