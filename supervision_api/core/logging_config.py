import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_ROOT_LOGGER = "supervision_api"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a single stream handler to the package logger.
    Safe to call more than once (e.g. app reloads in tests).
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel(level)

    if not any(getattr(h, "_supervision_api", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._supervision_api = True
        logger.addHandler(handler)

    return logger
