"""Logging infrastructure with run context."""
import logging
import os
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional


def get_app_home() -> Path:
    """Return the Rupiya data directory ($RUPIYA_HOME or ~/.rupiya)."""
    home = os.getenv("RUPIYA_HOME")
    if home:
        return Path(home)
    return Path.home() / ".rupiya"


class RunContextFilter(logging.Filter):
    """Add pipeline run context to log records."""

    def __init__(self):
        super().__init__()
        self.run_id: Optional[str] = None

    def filter(self, record):
        """Add run_id to record."""
        record.run_id = self.run_id or "system"
        return True


class RupiyaLogger:
    """Centralized logging manager."""

    def __init__(self, log_level: str = "INFO", max_bytes: int = 10 * 1024 * 1024, backup_count: int = 30):
        self.log_dir = get_app_home() / "logs"
        self.log_file = self.log_dir / "service.log"
        self.run_filter = RunContextFilter()

        self.logger = logging.getLogger("rupiya")
        self.logger.setLevel(getattr(logging, log_level.upper()))

        # Remove existing handlers
        self.logger.handlers.clear()

        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [run:%(run_id)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

        # Console handler with UTF-8 encoding
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(self.run_filter)
        self.logger.addHandler(console_handler)

        # File handler with rotation; console only if the directory is not writable
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                self.log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8"
            )
        except OSError as e:
            self.logger.warning(f"File logging disabled ({self.log_file}): {e}")
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            file_handler.addFilter(self.run_filter)
            self.logger.addHandler(file_handler)

    def set_run_context(self, run_id: Optional[str]):
        """Set current run context for logging."""
        self.run_filter.run_id = run_id

    def get_logger(self) -> logging.Logger:
        """Get the configured logger."""
        return self.logger


# Global logger instance
_logger_instance: Optional[RupiyaLogger] = None


def get_logger(log_level: str = "INFO") -> logging.Logger:
    """Get or create global logger instance."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = RupiyaLogger(log_level)
    return _logger_instance.get_logger()


def set_run_context(run_id: Optional[str]):
    """Set run context for logging."""
    if _logger_instance:
        _logger_instance.set_run_context(run_id)
