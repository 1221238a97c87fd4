"""
Unified logging system for d2r-tools.

Provides:
- Structured logging with levels (DEBUG, INFO, WARNING, ERROR)
- Rich console output and optional file output
- Phase timing utility
- Custom exception hierarchy
"""

from __future__ import annotations

import functools
import logging
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

from rich.logging import RichHandler

F = TypeVar('F', bound=Callable[..., Any])


# ========================================
# Exception hierarchy
# ========================================

class D2RToolsError(Exception):
    """Base error of the compiler."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(D2RToolsError):
    """Missing or invalid configuration (game path not set, bad value)."""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        details = {"config_key": config_key, **kwargs}
        super().__init__(message, details)
        self.config_key = config_key


class FileOperationError(D2RToolsError):
    """File read/write failure."""

    def __init__(self, message: str, file_path: Optional[Path] = None, **kwargs):
        details = {"file_path": str(file_path) if file_path else None, **kwargs}
        super().__init__(message, details)
        self.file_path = file_path


class LocaleReadError(FileOperationError):
    """A required locale file is missing or unreadable."""


class LocaleParseError(FileOperationError):
    """A locale file does not hold a JSON array of records."""


class WritePermissionError(FileOperationError):
    """Writing failed after every retry and the permission fix-up."""

    def __str__(self) -> str:
        # The message already carries the user-facing suggestion
        return self.message


class ApplyError(D2RToolsError):
    """Unexpected failure during an apply cycle."""


class LoadError(D2RToolsError):
    """Unexpected failure while reading settings back from the game files."""


# ========================================
# Logger
# ========================================


class ToolsLogger:
    """Configures the package logger; ``logger`` is the underlying logging.Logger."""

    def __init__(
        self,
        name: str = "d2r_tools",
        level: int = logging.INFO,
        log_file: Optional[Path] = None,
        use_rich: bool = True
    ):
        """
        Initialize logger.

        Args:
            name: Logger name
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Optional file path for log output
            use_rich: Use rich console formatting
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        self.logger.handlers = []  # Clear existing handlers

        if use_rich:
            console_handler: logging.Handler = RichHandler(
                rich_tracebacks=True,
                markup=False,
                show_time=True,
                show_path=False
            )
        else:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))

        console_handler.setLevel(level)
        self.logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            file_handler.setLevel(logging.DEBUG)  # Log everything to file
            self.logger.addHandler(file_handler)

    @contextmanager
    def timer(self, operation: str, level: int = logging.INFO):
        """
        Context manager for timing operations.

        Usage:
            with logger.timer("Writing locale files"):
                ...
        """
        start = time.time()
        self.logger.log(level, f"Starting: {operation}")
        try:
            yield
        finally:
            elapsed = time.time() - start
            self.logger.log(level, f"Completed: {operation} (took {elapsed:.2f}s)")


def log_exceptions(
    logger_instance: Optional[ToolsLogger] = None,
    reraise: bool = True,
    default_return: Any = None
) -> Callable[[F], F]:
    """
    Decorator: log any exception raised by the wrapped function.

    Usage:
        @log_exceptions()
        def apply_all(...):
            ...
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            log = logger_instance or get_logger()
            try:
                return func(*args, **kwargs)
            except D2RToolsError as e:
                log.logger.error(f"{func.__name__} failed: {e}")
                if reraise:
                    raise
                return default_return
            except Exception as e:
                log.logger.exception(f"{func.__name__} unexpected error: {e}")
                if reraise:
                    raise
                return default_return
        return wrapper  # type: ignore
    return decorator


# Global logger instance
_default_logger: Optional[ToolsLogger] = None


def get_logger(
    name: str = "d2r_tools",
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    use_rich: bool = True
) -> ToolsLogger:
    """Get or create the global logger instance."""
    global _default_logger
    if _default_logger is None:
        _default_logger = ToolsLogger(
            name=name,
            level=level,
            log_file=log_file,
            use_rich=use_rich
        )
    return _default_logger


def setup_logger(
    name: str = "d2r_tools",
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    use_rich: bool = True
) -> ToolsLogger:
    """Replace the global logger with a freshly configured one."""
    global _default_logger
    _default_logger = ToolsLogger(
        name=name,
        level=level,
        log_file=log_file,
        use_rich=use_rich
    )
    return _default_logger
