import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(
    log_file: Optional[str] = None,
    *,
    quiet: bool = False,
    debug: bool = False,
) -> logging.Logger:
    """Attach handlers to the shared `clothsim` logger and return it.

    Handlers from an earlier call are replaced, so a driver may call this more
    than once. Nothing is written to disk unless `log_file` is given.
    """
    logger = logging.getLogger("clothsim")
    level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = []
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w"))
    if not quiet:
        handlers.append(logging.StreamHandler())

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
