"""Logging setup shared by the CLI and examples."""

import logging
from typing import Union

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(module)s - %(message)s'


def configure_logging(level: Union[str, int] = logging.INFO) -> None:
    """Configure root logging once for a host process.

    Args:
        level: Level name ('DEBUG', 'INFO', ...) or numeric level
    """
    if isinstance(level, str):
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level: {level}")
        level = numeric
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
