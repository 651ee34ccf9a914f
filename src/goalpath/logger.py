"""Logging setup for goalpath."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Send goalpath's log records to stderr at ``level``.

    Safe to call more than once; later calls only change the level.
    """
    logger = logging.getLogger("goalpath")
    logger.setLevel(level.upper())

    if not any(getattr(h, "_goalpath", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._goalpath = True
        logger.addHandler(handler)
