"""
Name generators

Each generator renders one settings record into the string the game shows
for one locale. They are pure and never raise on well-formed settings.
"""

from __future__ import annotations

import re
from typing import Iterable, Mapping, Optional

from ..data.colors import color_code
from ..data.runes import RUNE_NUMBERS, rune_base_name
from ..utils.common import localized
from .settings import (
    BOX_SPACES_LIMITER,
    GroupSettings,
    ItemSettings,
    LevelSettings,
    RuneAutoSettings,
    RuneSettings,
)

# Spaces added on each side per box size
BOX_PADDING = {0: 0, 1: 4, 2: 8}

_LINE_BREAK_RE = re.compile(r"\r?\n")


def _with_numbering(colored_name: str, number: int, settings: RuneAutoSettings) -> str:
    numbering = settings.numbering
    dc = color_code(numbering.divider_color)
    colored_number = f"{color_code(numbering.number_color)}{number}"

    if numbering.divider_type == "parentheses":
        return f"{colored_name} {dc}({colored_number}{dc})"
    if numbering.divider_type == "brackets":
        return f"{colored_name} {dc}[{colored_number}{dc}]"
    if numbering.divider_type == "pipe":
        return f"{colored_name} {dc}| {colored_number}"
    return colored_name


def _with_box(name: str, settings: RuneAutoSettings) -> str:
    padding = BOX_PADDING.get(settings.box_size, 0)
    if not padding:
        return name

    spaces = " " * padding
    boxed = f"{spaces}{name}{spaces}"
    if settings.box_limiters == BOX_SPACES_LIMITER:
        return boxed

    limiter = f"{color_code(settings.box_limiters_color)}{settings.box_limiters}"
    return f"{limiter}{boxed}{limiter}"


def generate_rune_name(rune: str, settings: RuneAutoSettings, locale: str) -> str:
    """Render a rune name in auto mode.

    Color, then numbering, then box decoration, e.g.
    ``ÿc0~    ÿc0Zod Rune ÿc0(ÿc933ÿc0)    ÿc0~``.
    """
    name = f"{color_code(settings.color)}{rune_base_name(rune, locale)}"

    if settings.numbering.show and rune in RUNE_NUMBERS:
        name = _with_numbering(name, RUNE_NUMBERS[rune], settings)

    return _with_box(name, settings)


def generate_manual_rune_name(manual_locales: Mapping[str, str], locale: str) -> str:
    """User text for a rune in manual mode, with its lines in reverse order."""
    text = localized(manual_locales, locale)
    return "\n".join(reversed(_LINE_BREAK_RE.split(text)))


def generate_rune_text(rune: str, settings: RuneSettings, locale: str) -> str:
    if settings.is_manual:
        return generate_manual_rune_name(settings.manual_locales, locale)
    return generate_rune_name(rune, settings.auto_settings, locale)


def generate_level_name(level: LevelSettings, locale: str) -> str:
    """Potion, gem or common item text: the user's string when enabled."""
    if not level.enabled:
        return ""
    return localized(level.locales, locale)


# ========================================
# Item bases
# ========================================

def marker_texts(markers: GroupSettings, locale: str) -> list[str]:
    """Non-blank difficulty markers of every level for ``locale``."""
    texts = []
    for level in markers.levels:
        text = level.locales.get(locale, "")
        if text and text.strip():
            texts.append(text)
    return texts


def strip_difficulty_markers(value: str, markers: Iterable[str]) -> str:
    """Remove previously appended ``" <marker>"`` suffixes."""
    result = value
    for marker in markers:
        suffix = f" {marker}"
        if result.endswith(suffix):
            result = result[:-len(suffix)]
    return result


def generate_item_name(
    item: ItemSettings,
    locale: str,
    current_value: str,
    markers: GroupSettings,
    difficulty_level: int,
) -> str:
    """Item base name with an optional difficulty class marker.

    Custom text wins; blank custom text keeps what the file already holds.
    Markers appended by earlier runs are stripped first, so applying twice
    gives the same result.
    """
    if not item.enabled:
        return ""

    custom = item.locales.get(locale, "")
    base = custom if custom.strip() else (current_value or localized(item.locales, locale))
    base = strip_difficulty_markers(base, marker_texts(markers, locale))

    if item.show_difficulty_class_marker and base.strip():
        marker_level: Optional[LevelSettings] = markers.level(difficulty_level)
        marker = marker_level.locales.get(locale, "") if marker_level else ""
        if marker.strip():
            base = f"{base} {marker}"

    return base
