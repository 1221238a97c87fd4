from .common import (
    SUPPORTED_LOCALES, DEFAULT_LOCALE, GamePaths,
    empty_locales, normalize_locales, localized, filter_locales, resolve_home_directory,
)
from .io import (
    FileSystem, LocalFileSystem, RetryPolicy, EnsureWritableResult,
    read_locale_file, dump_locale_records, ensure_writable, write_with_retry,
)
from .ui import StatusMessage, error_title, show_highlight_states, show_config
from .config import AppConfig, ConfigManager, get_config
from .logger import (
    ToolsLogger, get_logger, setup_logger,
    D2RToolsError, ConfigurationError, FileOperationError,
    LocaleReadError, LocaleParseError, WritePermissionError, ApplyError, LoadError,
)

__all__ = [
    # common
    "SUPPORTED_LOCALES",
    "DEFAULT_LOCALE",
    "GamePaths",
    "empty_locales",
    "normalize_locales",
    "localized",
    "filter_locales",
    "resolve_home_directory",
    # io
    "FileSystem",
    "LocalFileSystem",
    "RetryPolicy",
    "EnsureWritableResult",
    "read_locale_file",
    "dump_locale_records",
    "ensure_writable",
    "write_with_retry",
    # ui
    "StatusMessage",
    "error_title",
    "show_highlight_states",
    "show_config",
    # config
    "AppConfig",
    "ConfigManager",
    "get_config",
    # logger
    "ToolsLogger",
    "get_logger",
    "setup_logger",
    "D2RToolsError",
    "ConfigurationError",
    "FileOperationError",
    "LocaleReadError",
    "LocaleParseError",
    "WritePermissionError",
    "ApplyError",
    "LoadError",
]
