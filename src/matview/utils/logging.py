"""Project-wide logger for matview.

The ``matview`` logger is silent by default (a ``NullHandler`` is installed);
every module logs through a child of it (``matview.view.extract``,
``matview.histogram.detect``...). :func:`configure_logging` turns the output
on or off globally.
"""

import logging


logger = logging.getLogger("matview")
logger.addHandler(logging.NullHandler())


def configure_logging(enabled: bool = True, level: int = logging.INFO) -> None:
    """Configure the global ``matview`` logger.

    Parameters
    ----------
    enabled:
        If ``True`` (default) a ``StreamHandler`` is installed. If ``False``
        logging output is suppressed.
    level:
        Logging level used when enabling the handler. Per-call details such as
        thresholds and extraction offsets are emitted at ``DEBUG`` level.
    """

    # calls are idempotent
    logger.handlers.clear()

    if enabled:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(handler)
        logger.setLevel(level)
    else:
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.CRITICAL + 1)


__all__ = ["logger", "configure_logging"]
