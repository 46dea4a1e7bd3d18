import os
import logging
import structlog
from logging.handlers import RotatingFileHandler
from typing import Optional

from iaas_provisioner.config.schemas import LoggingConfig


class DetailedFormatter(logging.Formatter):
    """Formatter that adds caller information to every record."""

    def format(self, record):
        record.caller_info = f"{record.module}.{record.funcName}:{record.lineno}"
        return super().format(record)


def setup_logging(logging_config: Optional[LoggingConfig] = None) -> structlog.stdlib.BoundLogger:
    """
    Set up structured logging for the application using structlog.

    Args:
        logging_config: Logging section of the application configuration.
                        If None, defaults are used.
    Returns:
        Configured structlog logger instance.
    """
    if logging_config is None:
        logging_config = LoggingConfig()

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, logging_config.level.upper()))

    handlers = []

    if logging_config.destination in ("file", "both"):
        log_file = os.path.expandvars(logging_config.file_path)
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=logging_config.max_size_mb * 1024 * 1024,
            backupCount=logging_config.backup_count
        )
        file_handler.setFormatter(DetailedFormatter(logging_config.format))
        handlers.append(file_handler)

    if logging_config.destination in ("stdout", "both"):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(DetailedFormatter(logging_config.format))
        handlers.append(console_handler)

    # Remove any existing handlers and add new ones
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    for handler in handlers:
        root_logger.addHandler(handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logger = get_logger("iaas_provisioner")
    logger.debug(
        "Logging configured",
        log_level=logging_config.level,
        log_destination=logging_config.destination,
    )
    return logger


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger bound to the given stdlib logger name."""
    return structlog.get_logger(name)
