import logging
import sys

from loguru import logger

from inventory_api.core.config import get_settings


class InterceptHandler(logging.Handler):
    """Intercept standard logging messages toward Loguru sinks."""

    def emit(self, record: logging.LogRecord):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(service_name: str = "inventory-api"):
    """Configure Loguru logger and route stdlib logging (uvicorn, motor) into it."""
    logger.remove()
    log_level = get_settings().LOG_LEVEL.upper()
    logger.add(sys.stderr, level=log_level, enqueue=True, backtrace=True, diagnose=False)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logger.info(f"Logging configured for service '{service_name}' at level {log_level}")
