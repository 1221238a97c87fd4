"""
Gem, common item, item base and quality prefix tables.

Each table is one canonical list; reverse lookups are derived from it.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class LocaleFile(str, Enum):
    """Shared locale files under ``local/lng/strings``."""

    ITEM_NAMES = "item-names"
    NAME_AFFIXES = "item-nameaffixes"
    MODIFIERS = "item-modifiers"
    RUNES = "item-runes"

    @property
    def file_name(self) -> str:
        return f"{self.value}.json"


class ItemRef(NamedTuple):
    id: int
    file: LocaleFile


# ========================================
# Gems
# ========================================

# settings key, gem prefix, first id, file override per level
_GEM_TABLE = (
    ("amethysts", "amethyst", 2236, {}),
    ("topazes", "topaz", 2241, {}),
    ("sapphires", "sapphire", 2246, {3: LocaleFile.NAME_AFFIXES}),
    ("emeralds", "emerald", 2251, {3: LocaleFile.NAME_AFFIXES}),
    ("rubies", "ruby", 2256, {3: LocaleFile.NAME_AFFIXES}),
    ("diamonds", "diamond", 2261, {3: LocaleFile.NAME_AFFIXES}),
    ("skulls", "skull", 2277, {}),
)

GEM_LEVELS = 5


def _build_gems() -> tuple[dict[str, ItemRef], dict[str, tuple[str, ...]]]:
    gems: dict[str, ItemRef] = {}
    groups: dict[str, tuple[str, ...]] = {}
    for settings_key, prefix, first_id, overrides in _GEM_TABLE:
        names = []
        for level in range(1, GEM_LEVELS + 1):
            gem = f"{prefix}{level}"
            file = overrides.get(level, LocaleFile.ITEM_NAMES)
            gems[gem] = ItemRef(first_id + level - 1, file)
            names.append(gem)
        groups[settings_key] = tuple(names)
    return gems, groups


GEM_TO_ID, GEM_GROUPS = _build_gems()
ID_TO_GEM: dict[int, str] = {ref.id: gem for gem, ref in GEM_TO_ID.items()}


# ========================================
# Common items
# ========================================

_N = LocaleFile.ITEM_NAMES
_A = LocaleFile.NAME_AFFIXES
_M = LocaleFile.MODIFIERS

# item code, id, file
_COMMON_ITEM_TABLE = (
    ("aqv", 2068, _N),   # arrows
    ("cqv", 2070, _N),   # bolts
    ("vps", 2220, _N),   # stamina potion
    ("yps", 2221, _N),   # antidote potion
    ("wms", 2222, _N),   # thawing potion
    ("amu", 2214, _N),
    ("rin", 2215, _N),
    ("jew", 2282, _N),
    ("cm1", 2285, _N),
    ("cm2", 2286, _N),
    ("cm3", 2287, _N),
    ("gld", 3986, _M),   # gold
    ("key", 2225, _N),
    ("hp1", 2226, _N),
    ("hp2", 2227, _N),
    ("hp3", 2228, _N),
    ("hp4", 2229, _N),
    ("hp5", 2230, _N),
    ("mp1", 2231, _N),
    ("mp2", 2232, _N),
    ("mp3", 2233, _N),
    ("mp4", 2234, _N),
    ("mp5", 2235, _N),
    ("rvs", 2223, _N),
    ("rvl", 2224, _N),
    ("isc", 2216, _N),
    ("ibk", 2217, _N),
    ("tsc", 2218, _N),
    ("tbk", 2219, _N),
    ("pk1", 20429, _N),  # key of terror
    ("pk2", 20430, _N),  # key of hate
    ("pk3", 20431, _N),  # key of destruction
    ("tes", 20437, _A),  # twisted essence of suffering
    ("ceh", 20438, _A),  # charged essence of hatred
    ("bet", 20439, _A),  # burning essence of terror
    ("fed", 20440, _A),  # festering essence of destruction
    ("toa", 20441, _N),  # token of absolution
    ("gps", 2206, _N),   # rancid gas potion
    ("gpm", 2207, _N),   # choking gas potion
    ("gpl", 2208, _N),   # strangling gas potion
    ("ops", 2209, _N),   # oil potion
    ("opm", 2210, _N),   # exploding potion
    ("opl", 2211, _N),   # fulminating potion
)

COMMON_ITEM_TO_ID: dict[str, ItemRef] = {
    code: ItemRef(item_id, file) for code, item_id, file in _COMMON_ITEM_TABLE
}
ID_TO_COMMON_ITEM: dict[int, str] = {
    ref.id: code for code, ref in COMMON_ITEM_TO_ID.items()
}

# settings key -> single item
COMMON_SIMPLE_ITEMS: dict[str, str] = {
    "arrows": "aqv",
    "bolts": "cqv",
    "staminaPotions": "vps",
    "antidotes": "yps",
    "thawingPotions": "wms",
    "amulets": "amu",
    "rings": "rin",
    "jewels": "jew",
    "smallCharms": "cm1",
    "largeCharms": "cm2",
    "grandCharms": "cm3",
    "gold": "gld",
    "keys": "key",
}

# settings key -> one item per level
COMMON_ITEM_GROUPS: dict[str, tuple[str, ...]] = {
    "healthPotions": ("hp1", "hp2", "hp3", "hp4", "hp5"),
    "manaPotions": ("mp1", "mp2", "mp3", "mp4", "mp5"),
    "rejuvenationPotions": ("rvs", "rvl"),
    "identify": ("isc", "ibk"),
    "portal": ("tsc", "tbk"),
    "uberKeys": ("pk1", "pk2", "pk3"),
    "essences": ("tes", "ceh", "bet", "fed", "toa"),
    "poisonPotions": ("gps", "gpm", "gpl"),
    "firePotions": ("ops", "opm", "opl"),
}


# ========================================
# Item bases (difficulty markers)
# ========================================

DIFFICULTY_CLASSES = ("normal", "exceptional", "elite")


class ItemBase(NamedTuple):
    key: str
    id: int
    difficulty_class: str

    @property
    def difficulty_level(self) -> int:
        """Marker level: normal 0, exceptional 1, anything else elite 2."""
        if self.difficulty_class == "normal":
            return 0
        if self.difficulty_class == "exceptional":
            return 1
        return 2


ITEM_BASES: tuple[ItemBase, ...] = (
    ItemBase("cap", 1528, "normal"),
    ItemBase("xap", 1573, "exceptional"),
    ItemBase("uap", 1618, "elite"),
    ItemBase("skp", 1529, "normal"),
    ItemBase("xkp", 1574, "exceptional"),
    ItemBase("ukp", 1619, "elite"),
    ItemBase("lrg", 1555, "normal"),
    ItemBase("xrg", 1600, "exceptional"),
    ItemBase("uit", 1645, "elite"),
    ItemBase("mpi", 1417, "normal"),
    ItemBase("9mp", 1462, "exceptional"),
    ItemBase("7mp", 1507, "elite"),
    ItemBase("bsw", 1383, "normal"),
    ItemBase("9bs", 1428, "exceptional"),
    ItemBase("7bs", 1473, "elite"),
    ItemBase("ci0", 2293, "normal"),
    ItemBase("ci2", 2295, "exceptional"),
    ItemBase("ci3", 2296, "elite"),
)


# ========================================
# Quality prefixes (item-nameaffixes)
# ========================================

LOW_QUALITY_IDS: tuple[int, ...] = (1723, 1724, 1725, 20910)
SUPERIOR_ID = 1727
