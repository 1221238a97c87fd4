#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Shared helpers: supported locales, per-locale text maps and game paths.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping, Optional

# ========================================
# Locales
# ========================================

# Order matches the column order of the game's locale files
SUPPORTED_LOCALES: tuple[str, ...] = (
    "enUS",
    "ruRU",
    "zhTW",
    "deDE",
    "esES",
    "frFR",
    "itIT",
    "koKR",
    "plPL",
    "esMX",
    "jaJP",
    "ptBR",
    "zhCN",
)

DEFAULT_LOCALE = "enUS"


def empty_locales() -> dict[str, str]:
    """A text map with every supported locale set to ``""``."""
    return {locale: "" for locale in SUPPORTED_LOCALES}


def normalize_locales(values: Optional[Mapping[str, object]]) -> dict[str, str]:
    """Return a text map carrying exactly the supported locale keys.

    Missing or ``None`` values become ``""``; unknown keys are dropped.
    """
    result = empty_locales()
    if not values:
        return result
    for locale in SUPPORTED_LOCALES:
        value = values.get(locale)
        if value is not None:
            result[locale] = str(value)
    return result


def localized(values: Mapping[str, str], locale: str) -> str:
    """Text for ``locale``, falling back to enUS, then to ``""``."""
    return values.get(locale) or values.get(DEFAULT_LOCALE) or ""


def filter_locales(selected: Optional[Iterable[str]]) -> list[str]:
    """Keep supported locales only, in the given order, without duplicates."""
    result: list[str] = []
    for locale in selected or ():
        if locale in SUPPORTED_LOCALES and locale not in result:
            result.append(locale)
    return result


# ========================================
# Game paths
# ========================================

DEFAULT_MOD_ROOT = "mods/D2RMOD/D2RMOD.mpq/data"
LOCALES_SUBDIR = ("local", "lng", "strings")
RUNE_HIGHLIGHT_SUBDIR = ("hd", "items", "misc", "rune")

_TRAILING_SEP_RE = re.compile(r"[/\\]+$")


def resolve_home_directory(raw: str) -> str:
    """Normalize the stored game path.

    Trailing separators are removed, and a trailing executable component
    (``...\\D2R.exe``) is cut off so the result is the install directory.
    """
    home = _TRAILING_SEP_RE.sub("", raw.strip())
    if home.lower().endswith(".exe"):
        cut = max(home.rfind("/"), home.rfind("\\"))
        home = home[:cut] if cut > 0 else ""
    return home


def _split_parts(path: str) -> list[str]:
    return [part for part in re.split(r"[/\\]+", path) if part]


@dataclass(frozen=True)
class GamePaths:
    """Directories the compiler reads and writes inside a game install."""

    home: Path
    locales_dir: Path
    rune_highlight_dir: Path

    @classmethod
    def from_home(cls, home_directory: str, mod_root: str = DEFAULT_MOD_ROOT) -> "GamePaths":
        home = Path(resolve_home_directory(home_directory))
        root = home.joinpath(*_split_parts(mod_root))
        return cls(
            home=home,
            locales_dir=root.joinpath(*LOCALES_SUBDIR),
            rune_highlight_dir=root.joinpath(*RUNE_HIGHLIGHT_SUBDIR),
        )

    def locale_file(self, file_name: str) -> Path:
        return self.locales_dir / file_name
