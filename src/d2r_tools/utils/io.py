"""
File I/O helpers

Provides:
- UTF-8 text reads and atomic writes
- Locale file parsing and serialization
- Write retry with exponential backoff and a permission fix-up step
"""

from __future__ import annotations

import getpass
import json
import logging
import os
import stat
import subprocess
import sys
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Protocol

from .logger import LocaleParseError, LocaleReadError, WritePermissionError

logger = logging.getLogger(__name__)

WRITE_PERMISSION_SUGGESTION = (
    "Could not write the file. Try running the app as Administrator "
    "or move the game to a folder where you have write permissions."
)


class FileSystem(Protocol):
    """Text file access used by the compiler."""

    def read_text(self, path: str | Path) -> str: ...

    def write_text(self, path: str | Path, text: str) -> None: ...


def ensure_parent_dir(path: str | Path) -> Path:
    """Make sure the parent directory exists."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    return p


def read_text_file(path: str | Path, encoding: str = 'utf-8-sig') -> str:
    """Read a text file; a UTF-8 BOM is accepted and dropped."""
    return Path(path).read_text(encoding=encoding)


def write_text_file(
    path: str | Path,
    text: str,
    encoding: str = 'utf-8',
    atomic: bool = True
) -> None:
    """Write a text file

    Args:
        path: File path
        text: File content
        encoding: Encoding
        atomic: Write a temp file next to the target and rename it over
    """
    p = ensure_parent_dir(path)

    if atomic:
        fd, tmp_path = tempfile.mkstemp(
            dir=p.parent,
            prefix=f".{p.name}.",
            suffix=".tmp"
        )
        try:
            with os.fdopen(fd, 'w', encoding=encoding, newline='') as f:
                f.write(text)
            os.replace(tmp_path, p)
        except Exception:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
    else:
        p.write_text(text, encoding=encoding)


class LocalFileSystem:
    """FileSystem backed by the local disk."""

    def __init__(self, atomic: bool = True):
        self.atomic = atomic

    def read_text(self, path: str | Path) -> str:
        return read_text_file(path)

    def write_text(self, path: str | Path, text: str) -> None:
        write_text_file(path, text, atomic=self.atomic)


# ========================================
# Locale files
# ========================================

def parse_locale_records(text: str, path: str | Path) -> list[dict[str, Any]]:
    """Parse the content of a locale file into its record list."""
    try:
        data = json.loads(text) if text.strip() else []
    except json.JSONDecodeError as e:
        raise LocaleParseError(
            f"Malformed JSON in {path}: {e}", file_path=Path(path)
        ) from e
    if not isinstance(data, list) or not all(isinstance(row, dict) for row in data):
        raise LocaleParseError(
            f"Expected a JSON array of records in {path}", file_path=Path(path)
        )
    return data


def read_locale_file(
    fs: FileSystem,
    path: str | Path,
    required: bool = True
) -> list[dict[str, Any]]:
    """Read and parse one locale file.

    An optional file that cannot be read yields an empty list. A required
    file that cannot be read raises LocaleReadError. Malformed content
    raises LocaleParseError either way.
    """
    try:
        text = fs.read_text(path)
    except OSError as e:
        if not required:
            logger.info(f"Optional locale file not available, using empty list: {path} ({e})")
            return []
        raise LocaleReadError(
            f"Cannot read required locale file {path}: {e}", file_path=Path(path)
        ) from e
    return parse_locale_records(text, path)


def dump_locale_records(records: list[dict[str, Any]]) -> str:
    """Serialize records the way the game ships them (2-space JSON)."""
    return json.dumps(records, ensure_ascii=False, indent=2)


# ========================================
# Permission fix-up
# ========================================

@dataclass
class EnsureWritableResult:
    path: str
    is_readonly: bool = False
    removed_readonly: bool = False
    granted_acl: bool = False
    writable: bool = False
    error: Optional[str] = None


def _run_quiet(args: list[str]) -> bool:
    try:
        completed = subprocess.run(args, capture_output=True, check=False)
    except OSError as e:
        logger.debug(f"{args[0]} failed to start: {e}")
        return False
    return completed.returncode == 0


def ensure_writable(path: str | Path) -> EnsureWritableResult:
    """Try to make ``path`` writable.

    Clears the read-only flag of the file (or of its parent directory when
    the file does not exist yet), falling back to ``attrib -R`` on Windows,
    then on Windows grants the current user full control with ``icacls``.
    """
    p = Path(path)
    target = p if p.exists() else p.parent
    result = EnsureWritableResult(path=str(p))

    try:
        mode = target.stat().st_mode
        result.is_readonly = not (mode & stat.S_IWRITE)
        if result.is_readonly:
            try:
                os.chmod(target, mode | stat.S_IWRITE)
                result.removed_readonly = True
            except OSError as e:
                logger.debug(f"chmod failed for {target}: {e}")
                if sys.platform == "win32":
                    result.removed_readonly = _run_quiet(["attrib", "-R", str(target)])

        if sys.platform == "win32":
            user = os.environ.get("USERNAME") or getpass.getuser()
            result.granted_acl = _run_quiet(["icacls", str(target), "/grant", f"{user}:F", "/C", "/Q"])
    except OSError as e:
        result.error = str(e)

    result.writable = os.access(target, os.W_OK)
    return result


# ========================================
# Write with retry
# ========================================

@dataclass(frozen=True)
class RetryPolicy:
    """Bounded exponential backoff for writes."""

    max_attempts: int = 10
    base_delay_ms: int = 100
    max_delay_ms: int = 1000

    def delay_ms(self, attempt: int) -> int:
        """Delay after the failed 0-based ``attempt``."""
        return min(self.max_delay_ms, self.base_delay_ms * 2 ** attempt)


def write_with_retry(
    path: str | Path,
    content: str,
    write: Callable[[str | Path, str], None],
    policy: Optional[RetryPolicy] = None,
    sleep: Callable[[float], None] = time.sleep,
    remediate: Callable[[str | Path], Any] = ensure_writable
) -> None:
    """Write ``content`` to ``path`` through ``write``.

    1. Up to ``policy.max_attempts`` direct writes, backing off between them.
    2. One ``remediate(path)`` call (read-only flag / ACL repair).
    3. One final write; its failure raises WritePermissionError carrying
       a user-facing suggestion.
    """
    policy = policy or RetryPolicy()

    for attempt in range(policy.max_attempts):
        try:
            write(path, content)
            return
        except OSError as e:
            logger.warning(
                f"Write attempt {attempt + 1}/{policy.max_attempts} failed for {path}: {e}"
            )
            if attempt < policy.max_attempts - 1:
                sleep(policy.delay_ms(attempt) / 1000)

    try:
        outcome = remediate(path)
        logger.warning(f"Attempted to make {path} writable: {outcome}")
    except Exception as e:
        logger.warning(f"Permission fix-up failed for {path}: {e}")

    try:
        write(path, content)
    except OSError as e:
        raise WritePermissionError(
            f"{e}\n{WRITE_PERMISSION_SUGGESTION}", file_path=Path(path)
        ) from e
