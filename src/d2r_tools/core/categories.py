"""
Per-category passes

Each pass runs its generator over every setting of one category and every
selected locale, merging the result into the shared stores. Disabled
settings clear their locales through the same path.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence

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
    LocaleFile,
)
from ..data.runes import RUNE_TO_ID, rune_key
from ..utils.common import SUPPORTED_LOCALES
from .generators import generate_item_name, generate_level_name, generate_rune_text
from .merger import LocaleStore
from .settings import GroupSettings, ItemsSettings, LevelSettings, RuneSettings

logger = logging.getLogger(__name__)

Stores = Mapping[LocaleFile, LocaleStore]


def _apply_level(
    store: LocaleStore,
    record_id: int,
    key: str,
    level: LevelSettings,
    locales: Sequence[str]
) -> int:
    values = {locale: generate_level_name(level, locale) for locale in locales}
    return store.apply_values(record_id, values, locales, key)


def apply_runes(
    runes: Mapping[str, RuneSettings],
    locales: Sequence[str],
    stores: Stores
) -> int:
    """Rune names into ``item-runes``."""
    store = stores[LocaleFile.RUNES]
    count = 0
    for rune, settings in runes.items():
        record_id = RUNE_TO_ID.get(rune)
        if record_id is None:
            logger.debug(f"Unknown rune in settings: {rune}")
            continue
        values = {locale: generate_rune_text(rune, settings, locale) for locale in locales}
        count += store.apply_values(record_id, values, locales, rune_key(rune))
    return count


def apply_gems(
    gems: Mapping[str, GroupSettings],
    locales: Sequence[str],
    stores: Stores
) -> int:
    """Gem levels into ``item-names`` / ``item-nameaffixes``."""
    count = 0
    for settings_key, gem_list in GEM_GROUPS.items():
        group = gems.get(settings_key)
        if group is None:
            continue
        for index, gem in enumerate(gem_list):
            level = group.level(index)
            if level is None:
                continue
            ref = GEM_TO_ID[gem]
            count += _apply_level(stores[ref.file], ref.id, gem, level, locales)
    return count


def apply_common_items(
    common: Mapping[str, object],
    locales: Sequence[str],
    stores: Stores
) -> int:
    """Simple common items, then grouped ones (potions, scrolls, keys...)."""
    count = 0
    for settings_key, code in COMMON_SIMPLE_ITEMS.items():
        item = common.get(settings_key)
        if not isinstance(item, LevelSettings):
            continue
        ref = COMMON_ITEM_TO_ID[code]
        count += _apply_level(stores[ref.file], ref.id, code, item, locales)

    for settings_key, codes in COMMON_ITEM_GROUPS.items():
        group = common.get(settings_key)
        if not isinstance(group, GroupSettings):
            continue
        for index, code in enumerate(codes):
            level = group.level(index)
            if level is None:
                continue
            ref = COMMON_ITEM_TO_ID[code]
            count += _apply_level(stores[ref.file], ref.id, code, level, locales)
    return count


def apply_item_names(
    items: ItemsSettings,
    locales: Sequence[str],
    stores: Stores,
    bases: Iterable[ItemBase] = ITEM_BASES
) -> int:
    """Item base names with difficulty class markers into ``item-names``.

    Only rows already present in the file are rewritten.
    """
    store = stores[LocaleFile.ITEM_NAMES]
    by_key = {base.key: base for base in bases}
    count = 0
    for key, item in items.items.items():
        base = by_key.get(key)
        if base is None:
            continue
        if base.id not in store:
            logger.debug(f"Item base {key} ({base.id}) not in {store.name}, skipped")
            continue
        values = {
            locale: generate_item_name(
                item,
                locale,
                store.value(base.id, locale),
                items.difficulty_class_markers,
                base.difficulty_level,
            )
            for locale in locales
        }
        count += store.apply_values(base.id, values, locales, key)
    return count


def low_quality_rows_differ(store: LocaleStore) -> bool:
    """True when the four low quality rows disagree in at least one locale.

    Rows that are identical everywhere are taken as already uniform, which
    the apply treats as "leave as is".
    """
    for locale in SUPPORTED_LOCALES:
        values = {store.value(record_id, locale) for record_id in LOW_QUALITY_IDS}
        if len(values) > 1:
            return True
    return False


def apply_quality_prefixes(
    items: ItemsSettings,
    locales: Sequence[str],
    stores: Stores
) -> int:
    """Low quality (four ids) and Superior (one id) into ``item-nameaffixes``."""
    store = stores[LocaleFile.NAME_AFFIXES]
    low = items.quality_prefixes.level(0)
    superior = items.quality_prefixes.level(1)
    count = 0

    if superior is not None:
        for locale in locales:
            if not superior.enabled:
                store.apply_update(SUPERIOR_ID, locale, "", "Superior")
                count += 1
            elif superior.locales.get(locale, "").strip():
                store.apply_update(SUPERIOR_ID, locale, superior.locales[locale], "Superior")
                count += 1

    if low is not None:
        if not low.enabled:
            for record_id in LOW_QUALITY_IDS:
                count += store.apply_values(record_id, {}, locales, str(record_id))
        elif any(low.locales.get(locale, "").strip() for locale in locales):
            if low_quality_rows_differ(store):
                for record_id in LOW_QUALITY_IDS:
                    for locale in locales:
                        value = low.locales.get(locale, "")
                        if value.strip():
                            store.apply_update(record_id, locale, value, str(record_id))
                            count += 1
            else:
                logger.info("Low quality prefixes are uniform, leaving them unchanged")
    return count
