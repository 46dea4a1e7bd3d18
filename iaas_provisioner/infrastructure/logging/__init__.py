"""Logging setup."""

from .logger import DetailedFormatter, get_logger, setup_logging

__all__ = ["DetailedFormatter", "get_logger", "setup_logging"]
