"""Preset scenarios."""

from solar_sim.presets.base import Preset
from solar_sim.presets.asteroid_belt import AsteroidBelt
from solar_sim.presets.circular_orbit import CircularOrbit

PRESETS = {
    'asteroid_belt': AsteroidBelt,
    'circular': CircularOrbit,
}


def get_preset(name: str, **kwargs) -> Preset:
    """Get preset by name."""
    preset_class = PRESETS.get(name.lower())
    if preset_class is None:
        raise ValueError(f"Unknown preset: {name}. Available: {list(PRESETS.keys())}")
    return preset_class(**kwargs)


__all__ = [
    "Preset",
    "AsteroidBelt",
    "CircularOrbit",
    "PRESETS",
    "get_preset",
]
