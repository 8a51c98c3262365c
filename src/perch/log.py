"""Logging setup for perch.

Modules log through named standard-library loggers (``perch.server``,
``perch.routing``, ``perch.middleware``). ``configure_logging()`` attaches
a single stream handler to the ``perch`` parent logger so those records
reach the terminal when no host application has configured logging.
"""

import logging

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_LEVELS = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def configure_logging(level: str = "info") -> logging.Logger:
    """Attach a stream handler to the ``perch`` logger and set its level.

    Safe to call more than once: the handler is installed only on the
    first call, later calls just adjust the level.

    Raises:
        ValueError: If *level* is not a known level name.
    """
    try:
        numeric = _LEVELS[level.lower()]
    except KeyError:
        msg = f"Unknown log level {level!r}. Expected one of: {', '.join(_LEVELS)}"
        raise ValueError(msg) from None

    logger = logging.getLogger("perch")
    if not any(getattr(h, "_perch_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._perch_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    logger.setLevel(numeric)
    return logger
