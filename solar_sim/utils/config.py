"""Configuration management."""

import json
import math
from dataclasses import dataclass, asdict, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from solar_sim.errors import ConfigurationError
from solar_sim.physics import constants


class AttractionMode(str, Enum):
    """Which pairs of masses exert gravity on the movable bodies."""
    SUN_ONLY = "sun_only"
    ALL_PAIRS = "all_pairs"


@dataclass
class IntegratorConfig:
    """Physics settings for the body integrator.

    The same instance should be handed to the presets that seed orbital
    velocities, so both use one gravitational constant.
    """
    gravitational_constant: float = constants.G
    distance_floor: float = constants.DIST_FLOOR
    attraction_mode: AttractionMode = AttractionMode.SUN_ONLY
    repulsion_enabled: bool = True
    repulsion_distance_sq: float = constants.REPULSION_DIST_SQ
    repulsion_strength: float = constants.REPULSION_STRENGTH
    max_dt: float = constants.MAX_DT

    def __post_init__(self):
        if not isinstance(self.attraction_mode, AttractionMode):
            try:
                self.attraction_mode = AttractionMode(str(self.attraction_mode).lower())
            except ValueError:
                valid = [m.value for m in AttractionMode]
                raise ConfigurationError(
                    f"Unknown attraction_mode {self.attraction_mode!r}. Available: {valid}"
                )
        self.validate()

    def validate(self):
        """Check value ranges; raise ConfigurationError on the first problem."""
        positive = {
            "gravitational_constant": self.gravitational_constant,
            "distance_floor": self.distance_floor,
            "max_dt": self.max_dt,
        }
        for name, value in positive.items():
            if not _is_number(value) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive number, got {value!r}")
        non_negative = {
            "repulsion_distance_sq": self.repulsion_distance_sq,
            "repulsion_strength": self.repulsion_strength,
        }
        for name, value in non_negative.items():
            if not _is_number(value) or value < 0:
                raise ConfigurationError(f"{name} must be a non-negative number, got {value!r}")

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["attraction_mode"] = self.attraction_mode.value
        return data


@dataclass
class Config:
    """Run configuration for the headless host."""
    # Scenario
    preset: str = "asteroid_belt"
    n_bodies: int = 500
    seed: Optional[int] = None

    # Run loop
    steps: int = 1000
    dt: float = 0.016
    threaded: bool = False
    debug_every: int = 100
    log_level: str = "INFO"

    integrator: IntegratorConfig = field(default_factory=IntegratorConfig)

    def __post_init__(self):
        if self.integrator is None:
            self.integrator = IntegratorConfig()
        elif isinstance(self.integrator, dict):
            self.integrator = IntegratorConfig(**self.integrator)
        if not isinstance(self.n_bodies, int) or self.n_bodies < 1:
            raise ConfigurationError(f"n_bodies must be a positive integer, got {self.n_bodies!r}")
        if not isinstance(self.steps, int) or self.steps < 0:
            raise ConfigurationError(f"steps must be a non-negative integer, got {self.steps!r}")
        if not _is_number(self.dt) or self.dt <= 0:
            raise ConfigurationError(f"dt must be a positive number, got {self.dt!r}")

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["integrator"] = self.integrator.to_dict()
        return data


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def load_config(config_path: Union[str, Path]) -> Config:
    """Load configuration from file.

    Args:
        config_path: Path to config file (.json or .yaml)

    Returns:
        Config object
    """
    config_path = Path(config_path)

    with open(config_path, 'r') as f:
        if config_path.suffix in ('.yaml', '.yml'):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping at the top level")
    try:
        return Config(**data)
    except TypeError as e:
        raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e


def save_config(config: Config, output_path: Union[str, Path]):
    """Save configuration to file.

    Args:
        config: Config object
        output_path: Output file path (.json or .yaml)
    """
    output_path = Path(output_path)
    data = config.to_dict()

    with open(output_path, 'w') as f:
        if output_path.suffix in ('.yaml', '.yml'):
            yaml.safe_dump(data, f, default_flow_style=False)
        else:
            json.dump(data, f, indent=2)
