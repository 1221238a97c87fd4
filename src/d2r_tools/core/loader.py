"""
Settings read-back

Rebuilds a settings snapshot from the locale files already in the game
folder, the inverse of the category passes:
- Gem and common item levels keep their text as is (color codes included)
- Quality prefixes and item base names are read without color codes
- Item base names lose their difficulty class marker, which turns the
  marker flag on instead
- Rune names are parsed back into auto settings when they match the
  generated layout, otherwise they become manual text

Rows missing from the files keep whatever the current snapshot holds.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..data.colors import COLOR_CODE_RE, color_name, strip_color_codes
from ..data.items import (
    COMMON_ITEM_GROUPS,
    COMMON_ITEM_TO_ID,
    COMMON_SIMPLE_ITEMS,
    GEM_GROUPS,
    GEM_TO_ID,
    ITEM_BASES,
    LOW_QUALITY_IDS,
    SUPERIOR_ID,
    ItemBase,
    ItemRef,
    LocaleFile,
)
from ..data.runes import RUNE_NUMBERS, RUNE_ORDER, RUNE_TO_ID, rune_base_name
from ..utils.common import DEFAULT_LOCALE, SUPPORTED_LOCALES, normalize_locales
from .generators import BOX_PADDING, marker_texts
from .merger import LocaleRecord, LocaleStore
from .settings import (
    BOX_SPACES_LIMITER,
    AppSettings,
    GroupSettings,
    ItemSettings,
    ItemsSettings,
    LevelSettings,
    RuneAutoSettings,
    RuneNumbering,
    RuneSettings,
)

logger = logging.getLogger(__name__)

Stores = Mapping[LocaleFile, LocaleStore]

_CODE = COLOR_CODE_RE.pattern
_OPT_CODE = rf"(?:{_CODE})?"
_LINE_BREAK_RE = re.compile(r"\r?\n")

# Widest padding first so a size 2 box is not read as size 1
_BOXED_RE = re.compile(
    rf"^(?P<lc>{_OPT_CODE})(?P<lim>\S+?)(?P<pad> {{8}}| {{4}})(?P<body>.*)(?P=pad)(?P=lc)(?P=lim)$",
    re.S,
)
_PADDED_RE = re.compile(r"^(?P<pad> {8}| {4})(?P<body>.*)(?P=pad)$", re.S)
_NUMBERED_RE = {
    "parentheses": re.compile(
        rf"^(?P<name>.*) (?P<dc>{_OPT_CODE})\((?P<nc>{_OPT_CODE})(?P<num>\d+)(?P=dc)\)$", re.S
    ),
    "brackets": re.compile(
        rf"^(?P<name>.*) (?P<dc>{_OPT_CODE})\[(?P<nc>{_OPT_CODE})(?P<num>\d+)(?P=dc)\]$", re.S
    ),
    "pipe": re.compile(
        rf"^(?P<name>.*) (?P<dc>{_OPT_CODE})\| (?P<nc>{_OPT_CODE})(?P<num>\d+)$", re.S
    ),
}
_COLORED_RE = re.compile(rf"^(?P<code>{_OPT_CODE})(?P<text>.*)$", re.S)

_PADDING_TO_BOX = {padding: size for size, padding in BOX_PADDING.items() if padding}


# ========================================
# Levels and groups
# ========================================

def read_level(record: Mapping[str, Any], current: Optional[LevelSettings] = None) -> LevelSettings:
    """Level settings from one row; enabled when the enUS text is not blank."""
    locales = normalize_locales(record)
    return LevelSettings(
        enabled=bool(locales[DEFAULT_LOCALE].strip()),
        locales=locales,
        highlight=current.highlight if current else False,
    )


def _find(stores: Stores, ref: ItemRef) -> Optional[LocaleRecord]:
    return stores[ref.file].get(ref.id)


def _load_group(
    codes: Sequence[str],
    refs: Mapping[str, ItemRef],
    stores: Stores,
    current: Optional[GroupSettings]
) -> Optional[GroupSettings]:
    levels = []
    found = False
    for index, code in enumerate(codes):
        current_level = current.level(index) if current else None
        record = _find(stores, refs[code])
        if record is None:
            levels.append(current_level or LevelSettings())
            continue
        found = True
        levels.append(read_level(record, current_level))

    if not found:
        return current
    enabled = current.enabled if current else any(level.enabled for level in levels)
    return GroupSettings(enabled=enabled, levels=tuple(levels))


def load_gems(stores: Stores, current: Mapping[str, GroupSettings]) -> dict[str, GroupSettings]:
    gems = dict(current)
    for settings_key, gem_list in GEM_GROUPS.items():
        group = _load_group(gem_list, GEM_TO_ID, stores, current.get(settings_key))
        if group is not None:
            gems[settings_key] = group
    return gems


def load_common_items(stores: Stores, current: Mapping[str, Any]) -> dict[str, Any]:
    common = dict(current)
    for settings_key, code in COMMON_SIMPLE_ITEMS.items():
        record = _find(stores, COMMON_ITEM_TO_ID[code])
        if record is None:
            continue
        previous = current.get(settings_key)
        common[settings_key] = read_level(record, previous if isinstance(previous, LevelSettings) else None)

    for settings_key, codes in COMMON_ITEM_GROUPS.items():
        previous = current.get(settings_key)
        group = _load_group(
            codes,
            COMMON_ITEM_TO_ID,
            stores,
            previous if isinstance(previous, GroupSettings) else None,
        )
        if group is not None:
            common[settings_key] = group
    return common


# ========================================
# Quality prefixes and item bases
# ========================================

def _uncolored_locales(record: Mapping[str, Any]) -> dict[str, str]:
    return {locale: strip_color_codes(value) for locale, value in normalize_locales(record).items()}


def read_quality_prefix(
    records: Sequence[Mapping[str, Any]],
    locales: Sequence[str],
    current: Optional[LevelSettings] = None
) -> LevelSettings:
    """One quality prefix level, always enabled.

    A level can span several rows (the four low quality ids). A selected
    locale whose rows disagree is left blank.
    """
    rows = [_uncolored_locales(record) for record in records]
    values = dict(rows[0])
    for locale in locales:
        if len({row[locale] for row in rows}) > 1:
            values[locale] = ""
    return LevelSettings(
        enabled=True,
        locales=values,
        highlight=current.highlight if current else False,
    )


def load_quality_prefixes(
    store: LocaleStore,
    locales: Sequence[str],
    current: GroupSettings
) -> GroupSettings:
    levels = list(current.levels)
    while len(levels) < 2:
        levels.append(LevelSettings())

    low = [store.get(record_id) for record_id in LOW_QUALITY_IDS if record_id in store]
    if low:
        levels[0] = read_quality_prefix(low, locales, current.level(0))
    superior = store.get(SUPERIOR_ID)
    if superior is not None:
        levels[1] = read_quality_prefix([superior], locales, current.level(1))

    found = bool(low) or superior is not None
    return GroupSettings(enabled=current.enabled or found, levels=tuple(levels))


def split_difficulty_marker(value: str, markers: Iterable[str]) -> tuple[str, bool]:
    """Remove a trailing marker; returns the name and whether one was found."""
    for marker in markers:
        if marker.strip() and value.endswith(marker):
            return value[:-len(marker)].rstrip(), True
    return value, False


def load_item_names(
    store: LocaleStore,
    locales: Sequence[str],
    markers: GroupSettings,
    current: Mapping[str, ItemSettings],
    bases: Iterable[ItemBase] = ITEM_BASES
) -> dict[str, ItemSettings]:
    items = dict(current)
    for base in bases:
        record = store.get(base.id)
        if record is None:
            continue

        values = _uncolored_locales(record)
        show_marker = False
        for locale in SUPPORTED_LOCALES:
            values[locale], found = split_difficulty_marker(values[locale], marker_texts(markers, locale))
            if found and locale in locales:
                show_marker = True

        previous = current.get(base.key)
        items[base.key] = ItemSettings(
            enabled=any(values[locale].strip() for locale in locales),
            show_difficulty_class_marker=show_marker,
            locales=values,
            preserved_locales=previous.preserved_locales if previous else None,
        )
    return items


# ========================================
# Runes
# ========================================

def parse_rune_text(rune: str, text: str, locale: str = DEFAULT_LOCALE) -> Optional[RuneAutoSettings]:
    """Auto settings that render ``text`` for ``rune``, or None.

    None means the text is not a decorated base name of the rune, i.e. it
    was written in manual mode or by hand.
    """
    box_size, limiters, limiters_color, body = 0, "~", "white1", text

    boxed = _BOXED_RE.match(text)
    padded = _PADDED_RE.match(text)
    if boxed:
        box_size = _PADDING_TO_BOX[len(boxed.group("pad"))]
        limiters = boxed.group("lim")
        limiters_color = color_name(boxed.group("lc"))
        body = boxed.group("body")
    elif padded:
        box_size = _PADDING_TO_BOX[len(padded.group("pad"))]
        limiters = BOX_SPACES_LIMITER
        body = padded.group("body")

    numbering = RuneNumbering()
    for divider_type, pattern in _NUMBERED_RE.items():
        numbered = pattern.match(body)
        if numbered and int(numbered.group("num")) == RUNE_NUMBERS.get(rune):
            numbering = RuneNumbering(
                show=True,
                divider_type=divider_type,
                divider_color=color_name(numbered.group("dc")),
                number_color=color_name(numbered.group("nc")),
            )
            body = numbered.group("name")
            break

    colored = _COLORED_RE.match(body)
    if colored is None or colored.group("text") != rune_base_name(rune, locale):
        return None

    return RuneAutoSettings(
        color=color_name(colored.group("code")),
        box_size=box_size,
        box_limiters=limiters,
        box_limiters_color=limiters_color,
        numbering=numbering,
    )


def _unreverse_lines(text: str) -> str:
    return "\n".join(reversed(_LINE_BREAK_RE.split(text)))


def load_runes(
    store: LocaleStore,
    current: Mapping[str, RuneSettings],
    highlight_states: Optional[Mapping[str, bool]] = None
) -> dict[str, RuneSettings]:
    highlight_states = highlight_states or {}
    runes = dict(current)
    for rune in RUNE_ORDER:
        previous = current.get(rune) or RuneSettings()
        highlighted = highlight_states.get(rune, previous.is_highlighted)

        record = store.get(RUNE_TO_ID[rune])
        locale = DEFAULT_LOCALE
        text = str(record.get(locale) or "") if record else ""
        if record and not text:
            locale = "ruRU"
            text = str(record.get(locale) or "")
        if not text.strip():
            if rune in highlight_states:
                runes[rune] = RuneSettings(
                    mode=previous.mode,
                    is_highlighted=highlighted,
                    auto_settings=previous.auto_settings,
                    manual_locales=previous.manual_locales,
                )
            continue

        auto_settings = parse_rune_text(rune, text, locale)
        if auto_settings is not None:
            runes[rune] = RuneSettings(
                mode="auto",
                is_highlighted=highlighted,
                auto_settings=auto_settings,
                manual_locales=previous.manual_locales,
            )
        else:
            logger.debug(f"Rune {rune} text is not generated, reading it as manual")
            runes[rune] = RuneSettings(
                mode="manual",
                is_highlighted=highlighted,
                auto_settings=previous.auto_settings,
                manual_locales={
                    loc: _unreverse_lines(value) if value else ""
                    for loc, value in normalize_locales(record).items()
                },
            )
    return runes


# ========================================
# Whole snapshot
# ========================================

def load_settings(
    stores: Stores,
    locales: Sequence[str],
    current: Optional[AppSettings] = None,
    highlight_states: Optional[Mapping[str, bool]] = None,
    bases: Iterable[ItemBase] = ITEM_BASES
) -> AppSettings:
    """Settings snapshot read back from the locale stores.

    ``current`` supplies what the files do not hold (difficulty markers,
    preserved item text) and the values for rows missing from the files.
    """
    current = current or AppSettings()
    markers = current.items.difficulty_class_markers
    return AppSettings(
        runes=load_runes(stores[LocaleFile.RUNES], current.runes, highlight_states),
        common=load_common_items(stores, current.common),
        gems=load_gems(stores, current.gems),
        items=ItemsSettings(
            difficulty_class_markers=markers,
            quality_prefixes=load_quality_prefixes(
                stores[LocaleFile.NAME_AFFIXES], locales, current.items.quality_prefixes
            ),
            items=load_item_names(
                stores[LocaleFile.ITEM_NAMES], locales, markers, current.items.items, bases
            ),
        ),
    )
