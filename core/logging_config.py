# core/logging_config.py

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | int = logging.INFO) -> logging.Logger:
    """
    Set up logging configuration for the application.

    Installs a single stdout handler on the root logger. Calling this more than
    once only updates the level.
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    if not any(getattr(h, "_gradebook_handler", False) for h in logger.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        console_handler._gradebook_handler = True  # type: ignore[attr-defined]
        logger.addHandler(console_handler)

    return logger
