"""Logging configuration helpers."""

import logging

_FORMAT = "%(levelname)s: %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Set the ``photo_kiosk`` log level and install one stream handler.

    Repeated calls only adjust the level, so app factories built in tests do
    not stack handlers.
    """
    logger = logging.getLogger("photo_kiosk")
    logger.setLevel(level.upper())
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
