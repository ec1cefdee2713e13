import sys

from loguru import logger

from common.config import config


def configure_logging(level: str | None = None) -> None:
    """(Re)install the stderr sink, optionally overriding the configured level."""
    logger.remove()
    logger.add(sys.stderr, format=config.log_format, level=level or config.log_level, colorize=True)


configure_logging()


def get_logger(name: str | None = None):
    return logger.bind(name=name) if name else logger
