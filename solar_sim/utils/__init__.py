"""Utility functions for configuration, logging and reproducibility."""

from solar_sim.utils.config import AttractionMode, Config, IntegratorConfig, load_config, save_config
from solar_sim.utils.logging_setup import configure_logging
from solar_sim.utils.reproducibility import set_all_seeds, make_rng

__all__ = [
    "AttractionMode",
    "Config",
    "IntegratorConfig",
    "load_config",
    "save_config",
    "configure_logging",
    "set_all_seeds",
    "make_rng",
]
