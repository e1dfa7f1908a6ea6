"""Logging configuration for service readiness probes."""

import logging
import sys

from loguru import logger

CLI_FORMAT = "<level>{level: <8}</level> | <level>{message}</level>"


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


def setup_logging(log_level: str, log_format: str | None = None):
    """Configure loguru logging for the whole process.

    Args:
        log_level: Log level to use (from settings or the --log-level option)
        log_format: Optional loguru format; the CLI passes a compact one
    """
    log_level = log_level.upper()

    logger.remove()  # Remove default handler
    options = {"level": log_level, "colorize": True}
    if log_format is not None:
        options["format"] = log_format
    logger.add(sys.stderr, **options)

    logger.debug("Log level set to: {}", log_level)

    # Redirect all standard logging to loguru
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    # httpx logs every request at INFO; a poll loop would drown the output
    for noisy_logger in ("httpcore", "httpx", "asyncio"):
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)
