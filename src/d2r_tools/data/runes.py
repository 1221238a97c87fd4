"""
Rune tables.

Everything is derived from ``_RUNE_TABLE``: ladder order gives the rune
number (1..33), the id is the row id in ``item-runes.json``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..utils.common import SUPPORTED_LOCALES
from .colors import strip_color_codes

# rune, id, display name, ruRU, koKR
_RUNE_TABLE = (
    ("el", 2103, "El", "Эл", "엘"),
    ("eld", 2104, "Eld", "Элд", "엘드"),
    ("tir", 2105, "Tir", "Тир", "티르"),
    ("nef", 2106, "Nef", "Нэф", "네프"),
    ("eth", 2107, "Eth", "Эт", "에드"),
    ("ith", 2108, "Ith", "Ит", "이드"),
    ("tal", 2109, "Tal", "Тал", "탈"),
    ("ral", 2110, "Ral", "Рал", "랄"),
    ("ort", 2111, "Ort", "Орт", "오르트"),
    ("thul", 2112, "Thul", "Тул", "술"),
    ("amn", 2113, "Amn", "Амн", "암"),
    ("sol", 2114, "Sol", "Сол", "솔"),
    ("shael", 2115, "Shael", "Шаэль", "샤엘"),
    ("dol", 2116, "Dol", "Дол", "돌"),
    ("hel", 2117, "Hel", "Хел", "헬"),
    ("io", 2118, "Io", "Ио", "이오"),
    ("lum", 2119, "Lum", "Лум", "룸"),
    ("ko", 2120, "Ko", "Ко", "코"),
    ("fal", 2121, "Fal", "Фал", "팔"),
    ("lem", 2122, "Lem", "Лем", "렘"),
    ("pul", 2123, "Pul", "Пул", "풀"),
    ("um", 2124, "Um", "Ум", "움"),
    ("mal", 2125, "Mal", "Мал", "말"),
    ("ist", 2126, "Ist", "Ист", "이스트"),
    ("gul", 2127, "Gul", "Гул", "굴"),
    ("vex", 2128, "Vex", "Векс", "벡스"),
    ("ohm", 2129, "Ohm", "Ом", "옴"),
    ("lo", 2130, "Lo", "Ло", "로"),
    ("sur", 2131, "Sur", "Сур", "수르"),
    ("ber", 2132, "Ber", "Бер", "베르"),
    ("jah", 2133, "Jah", "Джа", "자"),
    ("cham", 2134, "Cham", "Чам", "참"),
    ("zod", 2135, "Zod", "Зод", "조드"),
)

# How each locale spells "<name> Rune"; locales without an entry use enUS.
# zhTW, zhCN and jaJP have no rune name table here and show the English name.
_NAME_PATTERNS = {
    "enUS": "{name} Rune",
    "deDE": "{name}-Rune",
    "esES": "Runa {name}",
    "esMX": "Runa {name}",
    "frFR": "Rune {name}",
    "itIT": "Runa {name}",
    "plPL": "Runa {name}",
    "ptBR": "Runa {name}",
    "ruRU": "Руна {ru}",
    "koKR": "{ko} 룬",
}


@dataclass(frozen=True)
class RuneInfo:
    rune: str
    number: int
    id: int
    key: str
    names: dict[str, str] = field(default_factory=dict)


def _build_runes() -> tuple[RuneInfo, ...]:
    runes = []
    for number, (rune, rune_id, name, ru, ko) in enumerate(_RUNE_TABLE, 1):
        names = {
            locale: pattern.format(name=name, ru=ru, ko=ko)
            for locale, pattern in _NAME_PATTERNS.items()
        }
        runes.append(RuneInfo(rune, number, rune_id, f"r{number:02d}", names))
    return tuple(runes)


RUNES: tuple[RuneInfo, ...] = _build_runes()
RUNE_ORDER: tuple[str, ...] = tuple(info.rune for info in RUNES)
RUNE_INFO: dict[str, RuneInfo] = {info.rune: info for info in RUNES}
RUNE_TO_ID: dict[str, int] = {info.rune: info.id for info in RUNES}
ID_TO_RUNE: dict[int, str] = {info.id: info.rune for info in RUNES}
RUNE_NUMBERS: dict[str, int] = {info.rune: info.number for info in RUNES}


def rune_key(rune: str) -> str:
    """String-table key of a rune row (``r01`` .. ``r33``)."""
    return RUNE_INFO[rune].key


def rune_base_name(rune: str, locale: str) -> str:
    """Fixed, uncolored base name of ``rune`` in ``locale``."""
    info = RUNE_INFO.get(rune)
    if info is None:
        return ""
    if locale not in SUPPORTED_LOCALES:
        locale = "enUS"
    name = info.names.get(locale) or info.names.get("enUS", "")
    return strip_color_codes(name)
