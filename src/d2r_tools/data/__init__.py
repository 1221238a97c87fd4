"""
Static game tables: color markup and numeric id mappings.
"""

from .colors import COLOR_CODES, color_code, color_name, strip_color_codes
from .items import (
    LocaleFile, ItemRef, ItemBase,
    GEM_TO_ID, ID_TO_GEM, GEM_GROUPS,
    COMMON_ITEM_TO_ID, ID_TO_COMMON_ITEM, COMMON_SIMPLE_ITEMS, COMMON_ITEM_GROUPS,
    ITEM_BASES, LOW_QUALITY_IDS, SUPERIOR_ID,
)
from .runes import RUNES, RUNE_ORDER, RUNE_TO_ID, ID_TO_RUNE, RUNE_NUMBERS, rune_key, rune_base_name

__all__ = [
    "COLOR_CODES",
    "color_code",
    "color_name",
    "strip_color_codes",
    "LocaleFile",
    "ItemRef",
    "ItemBase",
    "GEM_TO_ID",
    "ID_TO_GEM",
    "GEM_GROUPS",
    "COMMON_ITEM_TO_ID",
    "ID_TO_COMMON_ITEM",
    "COMMON_SIMPLE_ITEMS",
    "COMMON_ITEM_GROUPS",
    "ITEM_BASES",
    "LOW_QUALITY_IDS",
    "SUPERIOR_ID",
    "RUNES",
    "RUNE_ORDER",
    "RUNE_TO_ID",
    "ID_TO_RUNE",
    "RUNE_NUMBERS",
    "rune_key",
    "rune_base_name",
]
