"""Console logging setup for the CLI."""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger("meterbill")


def init_console_logging(level: str = "WARNING") -> None:
    """Attach a console handler to the ``meterbill`` logger.

    Parameters
    ----------
    level : str, optional
        Log level name, by default "WARNING"
    """
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    logger.propagate = False
