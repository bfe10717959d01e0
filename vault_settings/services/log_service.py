"""Logging service"""

import logging
from collections import deque
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, List

from ..config import settings

# One log file per category, each written at its own level
LOG_LEVELS = {
    "error": logging.ERROR,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}
LOG_TYPES = tuple(LOG_LEVELS)
LOG_TYPE_PATTERN = f"^({'|'.join(LOG_TYPES)})$"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 3


class LogService:
    """Settings store logs: failures, writes and values read by triggers"""

    def __init__(self, log_dir: Path = None):
        self.log_dir = log_dir or settings.LOGS_DIR
        self.log_dir.mkdir(exist_ok=True, parents=True)
        self.loggers: Dict[str, logging.Logger] = {
            category: self._setup_logger(category, level)
            for category, level in LOG_LEVELS.items()
        }

    def _setup_logger(self, category: str, level: int) -> logging.Logger:
        logger = logging.getLogger(f"vaultsettings.{category}")
        logger.setLevel(level)

        # Module reloads must not stack handlers
        if logger.handlers:
            return logger

        handler = RotatingFileHandler(
            self.get_log_file_path(category),
            maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUPS,
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        return logger

    def error(self, message: str, **kwargs):
        """Remote call failures, rejected writes, storage errors"""
        self.loggers["error"].error(message, extra=kwargs)

    def info(self, message: str, **kwargs):
        """Default creation and saved settings"""
        self.loggers["info"].info(message, extra=kwargs)

    def debug(self, message: str, **kwargs):
        """Settings values read by triggers"""
        self.loggers["debug"].debug(message, extra=kwargs)

    def get_logs(self, log_type: str = "error", limit: int = 100) -> List[str]:
        """Last limit lines of a category's log file"""
        log_file = self.get_log_file_path(log_type)
        if not log_file.exists():
            return []

        try:
            with open(log_file, "r") as f:
                return [line.rstrip("\n") for line in deque(f, maxlen=limit)]
        except OSError as e:
            self.error(f"Failed to read log file {log_type}: {e}")
            return []

    def get_log_file_path(self, log_type: str) -> Path:
        if log_type not in LOG_LEVELS:
            raise ValueError(f"Unknown log type: {log_type}")
        return self.log_dir / f"{log_type}.log"


# Global log service instance
log_service = LogService()
