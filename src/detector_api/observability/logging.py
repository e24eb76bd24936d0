from __future__ import annotations

import logging

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
HTTP_LIBRARY_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the client and its command line.

    ``detector_api.transport`` traces every exchange at DEBUG. httpx logs each
    request at INFO on its own, so the HTTP library loggers stay at WARNING
    unless ``level`` is DEBUG.
    """

    level = level.upper()
    logging.basicConfig(level=level, format=DEFAULT_FORMAT)
    library_level = logging.DEBUG if level == "DEBUG" else logging.WARNING
    for name in HTTP_LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)


__all__ = ["configure_logging"]
