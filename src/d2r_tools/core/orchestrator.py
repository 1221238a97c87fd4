"""
Apply-all orchestrator

One apply cycle:
1. Resolve the game paths (fails before any I/O without a home directory)
2. Read the four shared locale files concurrently
3. Run every category pass over the shared stores
4. Write each touched store once, with retry
5. Write the rune highlight definitions

The load cycle shares steps 1 and 2, then rebuilds a settings snapshot
from the stores and the highlight files instead of writing.
"""

from __future__ import annotations

import concurrent.futures as cf
import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Sequence

from ..data.items import ITEM_BASES, ItemBase, LocaleFile
from ..data.runes import RUNE_ORDER, RUNE_TO_ID
from ..utils.common import GamePaths, filter_locales, resolve_home_directory
from ..utils.config import AppConfig
from ..utils.io import (
    FileSystem,
    LocalFileSystem,
    RetryPolicy,
    dump_locale_records,
    ensure_writable,
    read_locale_file,
    write_with_retry,
)
from ..utils.logger import (
    ApplyError,
    ConfigurationError,
    D2RToolsError,
    LoadError,
    get_logger,
)
from .categories import (
    apply_common_items,
    apply_gems,
    apply_item_names,
    apply_quality_prefixes,
    apply_runes,
)
from .highlight import build_rune_highlight, highlight_file_name, is_highlighted_document
from .loader import load_settings
from .merger import LocaleStore
from .settings import AppSettings

logger = logging.getLogger(__name__)

# Read order; the first required failure in this order is reported
LOCALE_FILES: tuple[LocaleFile, ...] = (
    LocaleFile.ITEM_NAMES,
    LocaleFile.NAME_AFFIXES,
    LocaleFile.MODIFIERS,
    LocaleFile.RUNES,
)
REQUIRED_FILES = frozenset({LocaleFile.ITEM_NAMES, LocaleFile.NAME_AFFIXES})


@dataclass
class ApplyReport:
    """Outcome of a successful apply cycle."""

    files_written: list[Path] = field(default_factory=list)
    highlight_files: list[Path] = field(default_factory=list)
    updates: int = 0


class ApplyAllOrchestrator:
    """Compile a settings snapshot into the game's locale files."""

    def __init__(
        self,
        fs: Optional[FileSystem] = None,
        config: Optional[AppConfig] = None,
        policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
        remediate: Callable[[Any], Any] = ensure_writable,
        item_bases: Iterable[ItemBase] = ITEM_BASES
    ):
        """
        Args:
            fs: File access, local disk by default
            config: Application config (home directory, locales, retry policy)
            policy: Write retry policy, derived from ``config`` when omitted
            sleep: Backoff sleep, replaceable in tests
            remediate: Permission fix-up run after the retries are exhausted
            item_bases: Item base table used by the item name pass
        """
        self.fs = fs or LocalFileSystem()
        self.config = config or AppConfig()
        self.policy = policy or RetryPolicy(
            max_attempts=self.config.max_write_attempts,
            base_delay_ms=self.config.base_delay_ms,
            max_delay_ms=self.config.max_delay_ms,
        )
        self.sleep = sleep
        self.remediate = remediate
        self.item_bases = tuple(item_bases)

    # ----------------------------------------
    # Paths
    # ----------------------------------------

    def resolve_paths(self, home_directory: Optional[str] = None) -> GamePaths:
        raw = home_directory or self.config.home_directory or ""
        if not resolve_home_directory(raw):
            raise ConfigurationError(
                "Game path is not set. Choose the Diablo II: Resurrected folder first.",
                config_key="home_directory",
            )
        return GamePaths.from_home(raw, self.config.mod_root)

    # ----------------------------------------
    # Phases
    # ----------------------------------------

    def read_stores(self, paths: GamePaths) -> dict[LocaleFile, LocaleStore]:
        """Read every locale file concurrently.

        All reads run to completion; the first failure in file order is
        raised afterwards.
        """
        with cf.ThreadPoolExecutor(max_workers=self.config.read_workers) as executor:
            futures = {
                locale_file: executor.submit(
                    read_locale_file,
                    self.fs,
                    paths.locale_file(locale_file.file_name),
                    locale_file in REQUIRED_FILES,
                )
                for locale_file in LOCALE_FILES
            }
            cf.wait(futures.values())

        stores: dict[LocaleFile, LocaleStore] = {}
        for locale_file in LOCALE_FILES:
            error = futures[locale_file].exception()
            if error is not None:
                raise error
            records = futures[locale_file].result()
            stores[locale_file] = LocaleStore(locale_file.value, records)
            logger.debug(f"Loaded {locale_file.file_name}: {len(records)} records")
        return stores

    def transform(
        self,
        settings: AppSettings,
        locales: Sequence[str],
        stores: dict[LocaleFile, LocaleStore]
    ) -> int:
        updates = 0
        updates += apply_common_items(settings.common, locales, stores)
        updates += apply_gems(settings.gems, locales, stores)
        updates += apply_item_names(settings.items, locales, stores, self.item_bases)
        updates += apply_quality_prefixes(settings.items, locales, stores)
        updates += apply_runes(settings.runes, locales, stores)
        return updates

    def _write(self, path: Path, content: str) -> None:
        write_with_retry(
            path,
            content,
            self.fs.write_text,
            policy=self.policy,
            sleep=self.sleep,
            remediate=self.remediate,
        )

    def write_stores(
        self,
        paths: GamePaths,
        stores: dict[LocaleFile, LocaleStore]
    ) -> list[Path]:
        written = []
        for locale_file in LOCALE_FILES:
            store = stores[locale_file]
            if not store.dirty:
                continue
            path = paths.locale_file(locale_file.file_name)
            self._write(path, dump_locale_records(store.records))
            logger.info(f"Saved {path} ({store.updates} updates)")
            written.append(path)
        return written

    def write_highlights(self, paths: GamePaths, settings: AppSettings) -> list[Path]:
        written = []
        for rune, rune_settings in settings.runes.items():
            if rune not in RUNE_TO_ID:
                continue
            document = build_rune_highlight(rune, rune_settings.is_highlighted)
            path = paths.rune_highlight_dir / highlight_file_name(rune)
            self._write(path, json.dumps(document, indent=2))
            written.append(path)
        if written:
            logger.info(f"Saved {len(written)} rune highlight files")
        return written

    # ----------------------------------------
    # Entry points
    # ----------------------------------------

    def apply_all(
        self,
        settings: AppSettings,
        selected_locales: Optional[Iterable[str]] = None,
        home_directory: Optional[str] = None
    ) -> ApplyReport:
        """Run one apply cycle.

        Raises:
            ConfigurationError: No game path configured
            LocaleReadError: A required locale file cannot be read
            LocaleParseError: A locale file is malformed
            WritePermissionError: A file stayed unwritable after every retry
            ApplyError: Any other failure
        """
        try:
            paths = self.resolve_paths(home_directory)
            locales = filter_locales(
                selected_locales if selected_locales is not None else self.config.selected_locales
            )

            with get_logger().timer("Applying settings"):
                stores = self.read_stores(paths)
                updates = self.transform(settings, locales, stores)
                files = self.write_stores(paths, stores)
                highlights = self.write_highlights(paths, settings)
        except D2RToolsError as e:
            logger.error(f"Apply failed: {e}")
            raise
        except Exception as e:
            logger.exception(f"Apply failed unexpectedly: {e}")
            raise ApplyError(str(e)) from e

        return ApplyReport(files_written=files, highlight_files=highlights, updates=updates)

    def load_all(
        self,
        current: Optional[AppSettings] = None,
        selected_locales: Optional[Iterable[str]] = None,
        home_directory: Optional[str] = None
    ) -> AppSettings:
        """Read the settings back from the game's files.

        ``current`` fills in what the files do not hold. Nothing is written.

        Raises:
            ConfigurationError: No game path configured
            LocaleReadError: A required locale file cannot be read
            LocaleParseError: A locale file is malformed
            LoadError: Any other failure
        """
        try:
            paths = self.resolve_paths(home_directory)
            locales = filter_locales(
                selected_locales if selected_locales is not None else self.config.selected_locales
            )

            with get_logger().timer("Loading settings"):
                stores = self.read_stores(paths)
                states = self.read_highlights(paths)
                settings = load_settings(stores, locales, current, states, self.item_bases)
        except D2RToolsError as e:
            logger.error(f"Load failed: {e}")
            raise
        except Exception as e:
            logger.exception(f"Load failed unexpectedly: {e}")
            raise LoadError(str(e)) from e

        return settings

    def read_highlights(self, paths: GamePaths, runes: Optional[Iterable[str]] = None) -> dict[str, bool]:
        """Highlight state of each rune as found on disk.

        Missing or unreadable files are skipped.
        """
        states: dict[str, bool] = {}
        for rune in runes if runes is not None else RUNE_ORDER:
            path = paths.rune_highlight_dir / highlight_file_name(rune)
            try:
                document = json.loads(self.fs.read_text(path))
            except FileNotFoundError:
                logger.debug(f"No highlight file for {rune}: {path}")
                continue
            except OSError as e:
                logger.warning(f"Highlight file not available: {path} ({e})")
                continue
            except json.JSONDecodeError as e:
                logger.warning(f"Malformed highlight file: {path} ({e})")
                continue
            states[rune] = isinstance(document, dict) and is_highlighted_document(document)
        return states

    def read_highlight_states(
        self,
        runes: Optional[Iterable[str]] = None,
        home_directory: Optional[str] = None
    ) -> dict[str, bool]:
        """Highlight states under the configured (or given) game folder."""
        return self.read_highlights(self.resolve_paths(home_directory), runes)
