"""Logging infrastructure with session context."""
import logging
import os
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional


def get_home_dir() -> Path:
    """Directory for SmartSpend runtime files (logs)."""
    return Path(os.getenv("SMARTSPEND_HOME", Path.home() / ".smartspend"))


class SessionContextFilter(logging.Filter):
    """Add session context to log records."""

    def __init__(self):
        super().__init__()
        self.session_id: Optional[str] = None

    def filter(self, record):
        """Add session_id to record."""
        record.session_id = self.session_id or "system"
        return True


class SmartSpendLogger:
    """Centralized logging manager."""

    def __init__(self, log_level: str = "INFO", max_file_size_mb: int = 10, backup_count: int = 5):
        self.log_dir = get_home_dir() / "logs"
        self.log_file = self.log_dir / "smartspend.log"
        self.session_filter = SessionContextFilter()

        self.logger = logging.getLogger("smartspend")
        self.logger.setLevel(getattr(logging, log_level.upper()))
        self.logger.propagate = False

        # Remove existing handlers
        for handler in list(self.logger.handlers):
            handler.close()
        self.logger.handlers.clear()

        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [session:%(session_id)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(self.session_filter)
        self.logger.addHandler(console_handler)

        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                self.log_file,
                maxBytes=max_file_size_mb * 1024 * 1024,
                backupCount=backup_count,
                encoding="utf-8"
            )
        except OSError as e:
            self.logger.warning(f"File logging disabled, cannot write to {self.log_dir}: {e}")
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            file_handler.addFilter(self.session_filter)
            self.logger.addHandler(file_handler)

    def set_session_context(self, session_id: Optional[str]):
        """Set current session context for logging."""
        self.session_filter.session_id = session_id

    def get_logger(self) -> logging.Logger:
        """Get the configured logger."""
        return self.logger


# Global logger instance
_logger_instance: Optional[SmartSpendLogger] = None


def get_logger(log_level: str = "INFO") -> logging.Logger:
    """Get or create global logger instance."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = SmartSpendLogger(log_level)
    return _logger_instance.get_logger()


def set_session_context(session_id: Optional[str]):
    """Set session context for logging."""
    global _logger_instance
    if _logger_instance:
        _logger_instance.set_session_context(session_id)


def configure_logging(settings) -> logging.Logger:
    """Rebuild the global logger from application settings, keeping the session context."""
    global _logger_instance
    session_id = _logger_instance.session_filter.session_id if _logger_instance else None
    _logger_instance = SmartSpendLogger(
        settings.log_level,
        max_file_size_mb=settings.log_max_file_size_mb,
        backup_count=settings.log_backup_count
    )
    _logger_instance.set_session_context(session_id)
    return _logger_instance.get_logger()
