"""Centralized logging configuration."""

import logging

from cwa_forecast.config import LOG_LEVEL


def configure_logging(level: str = LOG_LEVEL):
    """
    Configure one console format for the relay and the libraries it runs on.

    Args:
        level: Log level name, e.g. "INFO" or "DEBUG"
    """
    # Shared line format for every handler below
    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Root logger carries the relay's own module loggers
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Drop handlers installed by earlier calls or by the host process
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Console output only
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Server and client libraries log through their own loggers
    for logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error", "httpx", "fastapi"):
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)

        # uvicorn attaches its own handlers at import
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

        # Root handler would print these twice
        logger.propagate = False

        # Same format as the relay's own lines
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        logger.addHandler(handler)
