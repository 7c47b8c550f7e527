"""
Logging setup for PromptHelper: a rotating log file in the user's logs folder
plus console output, with per-package levels.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Dict, Optional

from .paths import app_logs_dir

LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5

FILE_FORMAT = (
    '%(asctime)s - %(name)s - %(levelname)s - '
    '[%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s'
)
CONSOLE_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

VERBOSE_PACKAGES = (
    'prompthelper',
    'prompthelper.core.store',
    'prompthelper.core.placeholders',
)
QUIET_PACKAGES = (
    'prompthelper.config',
)


class ApplicationLogger:
    """Install the application's log handlers on the root logger."""

    def __init__(self, app_name="prompthelper", log_dir: Optional[Path] = None):
        self.app_name = app_name
        self.log_dir = Path(log_dir) if log_dir else app_logs_dir()
        self.log_dir.mkdir(parents=True, exist_ok=True)

    @property
    def log_file(self) -> Path:
        return self.log_dir / f"{self.app_name}.log"

    def setup(self, debug=False):
        """Replace the root handlers with file and console handlers."""
        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()

        root_logger.addHandler(self._file_handler())
        root_logger.addHandler(self._console_handler(debug))

        for name, level in self.module_levels(debug).items():
            logging.getLogger(name).setLevel(level)

        root_logger.info(f"Logging initialized - Debug: {debug}, Log file: {self.log_file}")

    def _file_handler(self) -> logging.Handler:
        handler = logging.handlers.RotatingFileHandler(
            self.log_file,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding='utf-8',
        )
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        return handler

    def _console_handler(self, debug) -> logging.Handler:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(logging.DEBUG if debug else logging.INFO)
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
        return handler

    @staticmethod
    def module_levels(debug) -> Dict[str, int]:
        """Levels applied to the package loggers."""
        verbose = logging.DEBUG if debug else logging.INFO
        levels = {name: verbose for name in VERBOSE_PACKAGES}
        levels.update({name: logging.INFO for name in QUIET_PACKAGES})
        return levels
