"""
In-game color markup.

Diablo II colors text inline: ``ÿc`` followed by one code character switches
the color for everything after it on the line.
"""

from __future__ import annotations

import re

COLOR_PREFIX = "ÿc"

# Palette names offered by the editor -> escape sequence
COLOR_CODES: dict[str, str] = {
    "white1": "ÿc0",
    "white2": "ÿcG",
    "gray1": "ÿc5",
    "gray2": "ÿcI",
    "gray3": "ÿcK",
    "black1": "ÿc6",
    "black2": "ÿcH",
    "lightred": "ÿc1",
    "red1": "ÿcU",
    "red2": "ÿcS",
    "darkred": "ÿcB",
    "orange1": "ÿc@",
    "orange2": "ÿc8",
    "orange3": "ÿcL",
    "orange4": "ÿcJ",
    "lightgold1": "ÿc7",
    "lightgold2": "ÿcM",
    "gold1": "ÿc4",
    "gold2": "ÿcD",
    "yellow1": "ÿc9",
    "yellow2": "ÿcR",
    "green1": "ÿc2",
    "green2": "ÿcQ",
    "green3": "ÿcC",
    "green4": "ÿc<",
    "darkgreen1": "ÿcA",
    "darkgreen2": "ÿc:",
    "turquoise": "ÿcN",
    "skyblue": "ÿcT",
    "lightblue1": "ÿcF",
    "lightblue2": "ÿcE",
    "blue1": "ÿc3",
    "blue2": "ÿcP",
    "lightpink": "ÿc=",
    "pink": "ÿcO",
    "purple": "ÿc;",
}

# Short names stored by older profiles
LEGACY_COLOR_CODES: dict[str, str] = {
    "white": "ÿc0",
    "gray": "ÿc5",
    "black": "ÿc6",
    "beige": "ÿcM",
    "red": "ÿcU",
    "dimred": "ÿcS",
    "orange": "ÿc@",
    "lightgold": "ÿc7",
    "yellow": "ÿc9",
    "green": "ÿc2",
    "dimgreen": "ÿcA",
    "indigo": "ÿc3",
    "lightindigo": "ÿcP",
    "lightblue": "ÿcT",
}

COLOR_CODE_RE = re.compile(r"ÿc[0-9a-zA-Z@:;<=>]")


def color_code(name: str | None) -> str:
    """Escape sequence for a color name, ``""`` when unknown."""
    if not name:
        return ""
    return COLOR_CODES.get(name) or LEGACY_COLOR_CODES.get(name, "")


def strip_color_codes(text: str | None) -> str:
    """Remove every color escape from ``text``."""
    if not text:
        return ""
    return COLOR_CODE_RE.sub("", text)


# First palette name wins for codes shared by several names
_CODE_TO_NAME: dict[str, str] = {}
for _name, _code in COLOR_CODES.items():
    _CODE_TO_NAME.setdefault(_code, _name)


def color_name(code: str | None) -> str:
    """Palette name of an escape sequence, ``""`` when not in the palette."""
    if not code:
        return ""
    return _CODE_TO_NAME.get(code, "")
