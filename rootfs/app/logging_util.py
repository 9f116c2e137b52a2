"""Simple logging utility for Farm Catalog."""

import logging
import sys

logging.basicConfig(
    stream=sys.stdout,
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)
_logger = logging.getLogger("farm_catalog")


def log(level: str, msg: str):
    getattr(_logger, level, _logger.info)(msg)


def set_level(level: str):
    """Change the threshold of the catalog logger, e.g. ``"debug"``."""
    _logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
