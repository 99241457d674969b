"""Logging infrastructure with per-request context."""
import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional

_request_id: ContextVar[Optional[str]] = ContextVar("finscan_request_id", default=None)


class RequestContextFilter(logging.Filter):
    """Add upload request context to log records."""

    def filter(self, record):
        """Add request_id to record."""
        record.request_id = _request_id.get() or "system"
        return True


class FinScanLogger:
    """Centralized logging manager."""

    def __init__(
        self,
        log_level: str = "INFO",
        log_file: Optional[Path] = None,
        max_file_size_mb: int = 10,
        backup_count: int = 30,
    ):
        self.log_file = log_file
        self.request_filter = RequestContextFilter()

        # Configure package logger
        self.logger = logging.getLogger("finscan")
        self.logger.setLevel(getattr(logging, log_level.upper()))
        self.logger.propagate = False

        # Remove existing handlers
        self.logger.handlers.clear()

        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [request:%(request_id)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(self.request_filter)
        self.logger.addHandler(console_handler)

        if log_file is not None:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=max_file_size_mb * 1024 * 1024,
                backupCount=backup_count,
                encoding="utf-8"
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            file_handler.addFilter(self.request_filter)
            self.logger.addHandler(file_handler)

    def get_logger(self) -> logging.Logger:
        """Get the configured logger."""
        return self.logger


# Global logger instance
_logger_instance: Optional[FinScanLogger] = None


def get_logger(log_level: str = "INFO") -> logging.Logger:
    """Get or create global logger instance."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = FinScanLogger(log_level)
    return _logger_instance.get_logger()


def configure_logging(settings) -> logging.Logger:
    """Rebuild the global logger from application settings.

    Called once by entry points; library modules only call get_logger().
    """
    global _logger_instance
    log_file = Path(settings.log_file).expanduser() if settings.log_file else None
    _logger_instance = FinScanLogger(
        settings.log_level,
        log_file=log_file,
        max_file_size_mb=settings.log_max_file_size_mb,
        backup_count=settings.log_backup_count,
    )
    return _logger_instance.get_logger()


def set_request_context(request_id: Optional[str]):
    """Set current upload request context for logging."""
    _request_id.set(request_id)
