"""Logger setup for the loxc command line tools."""

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(level=logging.WARNING, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the ``loxc`` logger hierarchy.

    Existing handlers on the ``loxc`` logger are replaced, so calling this
    twice does not duplicate output. Library modules only create child
    loggers and never call this themselves.
    """
    logger = logging.getLogger("loxc")
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    return logger
