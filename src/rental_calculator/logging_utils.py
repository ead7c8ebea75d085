import sys

from loguru import logger

from rental_calculator.config import config

_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level> | {extra}"
)


def configure_logging(level: str | None = None) -> None:
    """Replace loguru's default sink with a single stderr sink at `level`."""
    logger.remove()
    logger.add(sys.stderr, level=level or config.LOG_LEVEL, format=_FORMAT)
