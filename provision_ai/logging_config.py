"""Configure logging for the provision_ai application."""

import sys
import os
import logging
from datetime import datetime
from typing import Optional

from loguru import logger

from provision_ai.settings import settings

# Client libraries that log every outbound request
NOISY_LOGGERS = [
    "asyncio",
    "httpx",
    "httpcore",
    "urllib3",
    "grpc",
    "google.auth",
    "openai",
]


def _is_noisy(name: str) -> bool:
    return any(name == noisy or name.startswith(f"{noisy}.") for noisy in NOISY_LOGGERS)


def configure_loguru(
    sink=sys.stdout,
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    rotation: str = "20 MB",
    retention: str = "1 week",
    format_string: Optional[str] = None,
    serialize: bool = False,
) -> None:
    """
    Configure Loguru logger with given parameters.

    :param sink: Output sink (default: stdout)
    :param level: Log level (default: from settings)
    :param log_file: Optional file path to write logs to
    :param rotation: When to rotate logs (size or time)
    :param retention: How long to keep logs
    :param format_string: Log format string
    :param serialize: Whether to serialize logs as JSON
    """
    # Remove default handlers
    logger.remove()

    if level is None:
        level = settings.log_level.value

    if format_string is None:
        format_string = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )

    warning_no = logger.level("WARNING").no

    def filter_noisy_loggers(record):
        # Client libraries only get through with warnings and above
        if record["level"].no >= warning_no:
            return True
        return not _is_noisy(record["name"] or "")

    logger.add(
        sink=sink,
        level=level,
        format=format_string,
        colorize=True,
        backtrace=True,
        diagnose=True,
        filter=filter_noisy_loggers,
    )

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        logger.add(
            sink=log_file,
            level=level,
            format=format_string,
            rotation=rotation,
            retention=retention,
            compression="zip",
            serialize=serialize,
            backtrace=True,
            diagnose=True,
            filter=filter_noisy_loggers,
        )

    logger.debug(f"Configured Loguru with level: {level}")


def configure_logging():
    """Configures the application logging."""
    for logger_name in NOISY_LOGGERS:
        module_logger = logging.getLogger(logger_name)
        module_logger.setLevel(logging.WARNING)

    level = settings.log_level.value

    log_file = None
    if settings.enable_file_logging:
        logs_dir = settings.logs_dir or "logs"
        os.makedirs(logs_dir, exist_ok=True)
        date_str = datetime.now().strftime("%Y-%m-%d")
        log_file = os.path.join(logs_dir, f"provision_ai_{date_str}.log")

    configure_loguru(
        level=level,
        log_file=log_file,
        serialize=settings.structured_logging,
    )

    # Route standard library logs (uvicorn, google clients) through loguru
    intercept_handler = InterceptHandler()
    intercept_handler.intercept_all_loggers()

    logger.info(f"Logging configured with level {level}")
    if log_file:
        logger.info(f"Logging to file: {log_file}")


class InterceptHandler(logging.Handler):
    """
    Intercepts standard library logging and redirects to loguru.

    This handler is needed to capture logs from libraries that use
    the standard logging module.
    """

    def __init__(self):
        super().__init__()
        self.handled_loggers = set()

    def intercept_all_loggers(self):
        """Intercept all existing loggers."""
        root_logger = logging.getLogger()

        for handler in root_logger.handlers[:]:
            if not isinstance(handler, InterceptHandler):
                root_logger.removeHandler(handler)

        if not any(isinstance(h, InterceptHandler) for h in root_logger.handlers):
            root_logger.addHandler(self)
        root_logger.setLevel(logging.INFO)

        for logger_name in list(logging.root.manager.loggerDict):
            if _is_noisy(logger_name):
                continue
            self._intercept_logger(logger_name)

        # uvicorn installs its own handlers, replace them
        for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
            ulogger = logging.getLogger(logger_name)
            for handler in ulogger.handlers[:]:
                ulogger.removeHandler(handler)
            ulogger.addHandler(self)
            ulogger.propagate = False
            if logger_name == "uvicorn.access":
                ulogger.setLevel(logging.WARNING)
            else:
                ulogger.setLevel(logging.INFO)

        logger.debug("Intercepted all standard library loggers")

    def _intercept_logger(self, logger_name: str):
        """Intercept a specific logger."""
        if logger_name in self.handled_loggers:
            return

        log = logging.getLogger(logger_name)
        for handler in log.handlers[:]:
            log.removeHandler(handler)
        log.propagate = True
        self.handled_loggers.add(logger_name)

    def emit(self, record):
        """
        Emit a record - standard logging Handler interface.

        :param record: standard library log record
        """
        if _is_noisy(record.name) and record.levelno < logging.WARNING:
            return

        # Get corresponding Loguru level
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )
