"""Logging utility for radiomail"""

import json
import logging
from datetime import datetime, timezone
from functools import wraps
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .paths import LOGS_DIR

_LOG_DIR: Optional[Path] = None


def _get_log_dir() -> Path:
    """Get log directory, creating it on first access."""

    from .errors import FileSystemError

    global _LOG_DIR

    if _LOG_DIR is None:
        try:
            LOGS_DIR.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileSystemError(f"Failed to create log directory: {LOGS_DIR}") from e
        _LOG_DIR = LOGS_DIR

    return _LOG_DIR


## Custom JSON Formatter


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for log records."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "event_type"):
            log_entry["event_type"] = record.event_type

        if hasattr(record, "context"):
            log_entry["context"] = record.context

        return json.dumps(log_entry, default=str)


## Main Log Manager


class LogManager:
    """Manages logging configuration and provides logger instances."""

    def __init__(self, log_level: str = "WARNING", file_level: str = "DEBUG",
                 max_file_size: int = 1_048_576, backup_count: int = 3):
        self.log_level = self._parse_level(log_level)
        self.file_level = self._parse_level(file_level)
        self.max_file_size = max_file_size
        self.backup_count = backup_count
        self.root_logger = logging.getLogger("radiomail")
        self.root_logger.setLevel(logging.DEBUG)
        self.root_logger.propagate = False
        self.console_handler: Optional[logging.Handler] = None
        self._setup_handlers()

    @staticmethod
    def _parse_level(level: str) -> int:
        try:
            return getattr(logging, level.upper())
        except AttributeError as e:
            raise ValueError(f"Invalid logging level: {level}") from e

    def _setup_handlers(self) -> None:
        """Setup console and file handlers."""

        from .errors import FileSystemError

        for handler in list(self.root_logger.handlers):
            handler.close()
        self.root_logger.handlers.clear()

        console_handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        console_handler.setLevel(self.log_level)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        self.root_logger.addHandler(console_handler)
        self.console_handler = console_handler

        try:
            log_dir = _get_log_dir()
            app_handler = RotatingFileHandler(
                log_dir / "app.log",
                maxBytes=self.max_file_size,
                backupCount=self.backup_count,
                encoding="utf-8",
            )

        except (FileSystemError, OSError) as e:
            # Console-only logging keeps compose usable on read-only homes
            self.root_logger.warning(f"File logging disabled: {e}")
            return

        app_handler.setLevel(self.file_level)
        app_handler.setFormatter(JSONFormatter())
        self.root_logger.addHandler(app_handler)

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        """Get a logger namespaced under radiomail."""

        if name and name.startswith("radiomail"):
            logger = logging.getLogger(name)
        else:
            logger = logging.getLogger(f"radiomail.{name}" if name else "radiomail")

        return logger

    def set_level(self, level: str):
        """Set console logging level at runtime"""

        self.log_level = self._parse_level(level)
        if self.console_handler is not None:
            self.console_handler.setLevel(self.log_level)

    def log_event(self, event_type: str, message: str, level: str = "INFO", **extra):
        """Log an event with specific type and extra context."""

        log_level = self._parse_level(level)
        self.root_logger.log(
            log_level, message, extra={"event_type": event_type, "context": extra}
        )


## Decorators for Logging


def log_call(func):
    """Decorator to log function calls with timing at debug level."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        logger = logging.getLogger("radiomail")
        func_name = f"{func.__module__}.{func.__qualname__}"
        logger.debug(f"-> Entering {func_name}")
        start_time = datetime.now()

        try:
            result = func(*args, **kwargs)
            duration = (datetime.now() - start_time).total_seconds()
            logger.debug(f"<- Exiting {func_name} (Duration: {duration:.3f}s)")
            return result

        except Exception as e:
            duration = (datetime.now() - start_time).total_seconds()
            logger.debug(f"<- Error in {func_name} after {duration:.3f}s: {e}")
            raise

    return wrapper


## Module-level LogManager Instance and Helper Functions

_log_manager: Optional[LogManager] = None


def init_logging(log_level: str = "WARNING", **options) -> LogManager:
    """Initialize logging system and return LogManager instance."""

    global _log_manager

    if _log_manager is None or options:
        _log_manager = LogManager(log_level, **options)
    else:
        _log_manager.set_level(log_level)

    return _log_manager


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance."""

    global _log_manager
    if _log_manager is None:
        _log_manager = init_logging()

    return _log_manager.get_logger(name)


def log_event(event_type: str, message: str, **extra):
    """Log an event with specific type and extra context (module-level wrapper)."""

    global _log_manager
    if _log_manager is None:
        _log_manager = init_logging()

    return _log_manager.log_event(event_type, message, **extra)
