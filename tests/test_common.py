"""
Locale and game path helper tests
"""

from pathlib import Path

import pytest

from d2r_tools.utils.common import (
    GamePaths,
    filter_locales,
    localized,
    resolve_home_directory,
)


@pytest.mark.parametrize("raw,expected", [
    ("C:\\Games\\D2R\\", "C:\\Games\\D2R"),
    ("C:\\Games\\D2R\\D2R.exe", "C:\\Games\\D2R"),
    ("/games/d2r//", "/games/d2r"),
    ("/games/d2r/D2R.EXE", "/games/d2r"),
    ("", ""),
    ("D2R.exe", ""),
])
def test_resolve_home_directory(raw, expected):
    assert resolve_home_directory(raw) == expected


def test_game_paths():
    paths = GamePaths.from_home("/games/d2r/")
    root = Path("/games/d2r/mods/D2RMOD/D2RMOD.mpq/data")

    assert paths.locales_dir == root / "local" / "lng" / "strings"
    assert paths.rune_highlight_dir == root / "hd" / "items" / "misc" / "rune"
    assert paths.locale_file("item-names.json") == paths.locales_dir / "item-names.json"


def test_filter_locales_keeps_order():
    assert filter_locales(["ruRU", "xxXX", "enUS", "ruRU"]) == ["ruRU", "enUS"]
    assert filter_locales(None) == []


def test_localized_fallback():
    assert localized({"enUS": "a", "ruRU": ""}, "ruRU") == "a"
    assert localized({}, "ruRU") == ""
