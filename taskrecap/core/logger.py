"""
Logging setup
Handlers hang off the "taskrecap" package logger so an embedding application keeps its own root configuration
"""

import logging
import logging.handlers
from pathlib import Path
from typing import List, Optional

from taskrecap.config.loader import ConfigLoader, get_config

PACKAGE_LOGGER = "taskrecap"

_SIZE_UNITS = {"KB": 1024, "MB": 1024**2, "GB": 1024**3}

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"


def parse_size(value) -> int:
    """Parse "10MB" style sizes into bytes, bare numbers are bytes"""
    text = str(value).strip().upper()
    for suffix, factor in _SIZE_UNITS.items():
        if text.endswith(suffix):
            return int(text[: -len(suffix)]) * factor
    return int(text)


def _level(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


class LoggerManager:
    """Owns the console, main file and error file handlers of the package logger"""

    def __init__(self, config: Optional[ConfigLoader] = None, debug: Optional[bool] = None):
        self._handlers: List[logging.Handler] = []
        self.configure(config, debug)

    @property
    def handlers(self) -> List[logging.Handler]:
        return list(self._handlers)

    def configure(self, config: Optional[ConfigLoader] = None, debug: Optional[bool] = None) -> None:
        """(Re)install handlers from the [logging] and [server] sections

        Args:
            config: Loader to read, defaults to the global configuration
            debug: Force debug console output, None reads server.debug
        """
        config = config or get_config()
        if debug is None:
            debug = bool(config.get("server.debug", False))

        level = logging.DEBUG if debug else _level(config.get("logging.level", "INFO"))
        logs_dir = Path(config.get("logging.logs_dir", "./logs"))
        max_bytes = parse_size(config.get("logging.max_file_size", "10MB"))
        backup_count = int(config.get("logging.backup_count", 5))

        package_logger = logging.getLogger(PACKAGE_LOGGER)
        for handler in self._handlers:
            package_logger.removeHandler(handler)
            handler.close()
        self._handlers = []

        logs_dir.mkdir(parents=True, exist_ok=True)
        package_logger.setLevel(level)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

        file_format = logging.Formatter(FILE_FORMAT)
        file_handler = logging.handlers.RotatingFileHandler(
            logs_dir / "taskrecap.log",
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(file_format)

        error_handler = logging.handlers.RotatingFileHandler(
            logs_dir / "error.log",
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(file_format)

        for handler in (console_handler, file_handler, error_handler):
            package_logger.addHandler(handler)
            self._handlers.append(handler)


# Created on first use to avoid importing config at module load time
_logger_manager: Optional[LoggerManager] = None


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, installing package handlers on first call"""
    global _logger_manager

    if _logger_manager is None:
        _logger_manager = LoggerManager()

    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(config: Optional[ConfigLoader] = None, debug: Optional[bool] = None) -> LoggerManager:
    """Apply logging settings again, e.g. after loading another config file"""
    global _logger_manager

    if _logger_manager is None:
        _logger_manager = LoggerManager(config, debug)
    else:
        _logger_manager.configure(config, debug)
    return _logger_manager
