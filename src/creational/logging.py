"""Logging configuration for the creational core."""

import logging
import sys

from loguru import logger

PACKAGE_NAME = "creational"


class InterceptHandler(logging.Handler):
    """Intercept standard logging messages toward loguru."""

    def emit(self, record):
        # Get corresponding loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the logged message originated
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(log_level: str | None = None):
    """Configure loguru logging for applications embedding the library.

    The package disables its own loguru output on import; this enables it
    again with a stderr sink at the requested level.

    Args:
        log_level: Log level to use. Defaults to the configured ``log_level`` setting.
    """
    if log_level is None:
        from creational.settings import get_settings

        log_level = get_settings().log_level

    log_level = log_level.upper()

    logger.remove()  # Remove default handler
    logger.add(
        sys.stderr,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{thread.name}</cyan> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
            "<level>{message}</level>"
        ),
        level=log_level,
        colorize=True,
    )
    logger.enable(PACKAGE_NAME)

    logger.info(f"Log level set to: {log_level}")

    # Redirect all standard logging to loguru
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    # stdlib has no TRACE level
    logging.getLogger(PACKAGE_NAME).setLevel(logging.DEBUG if log_level == "TRACE" else log_level)
