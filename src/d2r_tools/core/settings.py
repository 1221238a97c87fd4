"""
Settings snapshot consumed by the compiler.

The editor stores profiles as camelCase JSON. ``AppSettings.from_dict``
turns one into immutable dataclasses; the compiler never mutates them.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional

from ..utils.common import empty_locales, normalize_locales

RUNE_MODES = ("auto", "manual")
DIVIDER_TYPES = ("parentheses", "brackets", "pipe")
BOX_SPACES_LIMITER = "spaces"


def _section(data: Optional[Mapping[str, Any]], key: str) -> Mapping[str, Any]:
    value = (data or {}).get(key)
    return value if isinstance(value, Mapping) else {}


@dataclass(frozen=True)
class RuneNumbering:
    show: bool = False
    divider_type: str = "parentheses"
    divider_color: str = "white1"
    number_color: str = "yellow1"

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "RuneNumbering":
        data = data or {}
        return cls(
            show=bool(data.get("show", False)),
            divider_type=str(data.get("dividerType") or "parentheses"),
            divider_color=str(data.get("dividerColor") or ""),
            number_color=str(data.get("numberColor") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "show": self.show,
            "dividerType": self.divider_type,
            "dividerColor": self.divider_color,
            "numberColor": self.number_color,
        }


@dataclass(frozen=True)
class RuneAutoSettings:
    color: str = "white1"
    box_size: int = 0
    box_limiters: str = "~"
    box_limiters_color: str = "white1"
    numbering: RuneNumbering = field(default_factory=RuneNumbering)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "RuneAutoSettings":
        data = data or {}
        try:
            box_size = int(data.get("boxSize") or 0)
        except (TypeError, ValueError):
            box_size = 0
        return cls(
            color=str(data.get("color") or ""),
            box_size=min(max(box_size, 0), 2),
            box_limiters=str(data.get("boxLimiters") or "~"),
            box_limiters_color=str(data.get("boxLimitersColor") or ""),
            numbering=RuneNumbering.from_dict(data.get("numbering")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "color": self.color,
            "boxSize": self.box_size,
            "boxLimiters": self.box_limiters,
            "boxLimitersColor": self.box_limiters_color,
            "numbering": self.numbering.to_dict(),
        }


@dataclass(frozen=True)
class RuneSettings:
    mode: str = "auto"
    is_highlighted: bool = False
    auto_settings: RuneAutoSettings = field(default_factory=RuneAutoSettings)
    manual_locales: dict[str, str] = field(default_factory=empty_locales)

    @property
    def is_manual(self) -> bool:
        return self.mode == "manual"

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "RuneSettings":
        data = data or {}
        mode = data.get("mode")
        if mode not in RUNE_MODES:
            mode = "auto"
        return cls(
            mode=mode,
            is_highlighted=bool(data.get("isHighlighted", False)),
            auto_settings=RuneAutoSettings.from_dict(data.get("autoSettings")),
            manual_locales=normalize_locales(_section(data.get("manualSettings"), "locales")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "mode": self.mode,
            "isHighlighted": self.is_highlighted,
            "autoSettings": self.auto_settings.to_dict(),
            "manualSettings": {"locales": dict(self.manual_locales)},
        }


@dataclass(frozen=True)
class LevelSettings:
    """One level of a potion, gem or common item group."""

    enabled: bool = False
    locales: dict[str, str] = field(default_factory=empty_locales)
    highlight: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "LevelSettings":
        data = data or {}
        return cls(
            enabled=bool(data.get("enabled", False)),
            locales=normalize_locales(data.get("locales")),
            highlight=bool(data.get("highlight", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"enabled": self.enabled, "locales": dict(self.locales), "highlight": self.highlight}


@dataclass(frozen=True)
class GroupSettings:
    enabled: bool = False
    levels: tuple[LevelSettings, ...] = ()

    def level(self, index: int) -> Optional[LevelSettings]:
        if 0 <= index < len(self.levels):
            return self.levels[index]
        return None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "GroupSettings":
        data = data or {}
        return cls(
            enabled=bool(data.get("enabled", False)),
            levels=tuple(LevelSettings.from_dict(level) for level in data.get("levels") or ()),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"enabled": self.enabled, "levels": [level.to_dict() for level in self.levels]}


@dataclass(frozen=True)
class ItemSettings:
    """Settings of one item base."""

    enabled: bool = False
    show_difficulty_class_marker: bool = False
    locales: dict[str, str] = field(default_factory=empty_locales)
    preserved_locales: Optional[dict[str, str]] = None

    def with_enabled(self, enabled: bool) -> "ItemSettings":
        """Toggle the item, remembering its text across the toggle.

        Disabling keeps the current text in ``preserved_locales``;
        enabling again restores it.
        """
        if enabled == self.enabled:
            return self
        if not enabled:
            return replace(self, enabled=False, preserved_locales=dict(self.locales))
        if self.preserved_locales is not None:
            return replace(
                self,
                enabled=True,
                locales=normalize_locales(self.preserved_locales),
                preserved_locales=None,
            )
        return replace(self, enabled=True)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ItemSettings":
        data = data or {}
        preserved = data.get("preservedLocales")
        return cls(
            enabled=bool(data.get("enabled", False)),
            show_difficulty_class_marker=bool(data.get("showDifficultyClassMarker", False)),
            locales=normalize_locales(data.get("locales")),
            preserved_locales=normalize_locales(preserved) if isinstance(preserved, Mapping) else None,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "enabled": self.enabled,
            "showDifficultyClassMarker": self.show_difficulty_class_marker,
            "locales": dict(self.locales),
        }
        if self.preserved_locales is not None:
            data["preservedLocales"] = dict(self.preserved_locales)
        return data


@dataclass(frozen=True)
class ItemsSettings:
    difficulty_class_markers: GroupSettings = field(default_factory=GroupSettings)
    quality_prefixes: GroupSettings = field(default_factory=GroupSettings)
    items: dict[str, ItemSettings] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ItemsSettings":
        data = data or {}
        return cls(
            difficulty_class_markers=GroupSettings.from_dict(data.get("difficultyClassMarkers")),
            quality_prefixes=GroupSettings.from_dict(data.get("qualityPrefixes")),
            items={
                str(key): ItemSettings.from_dict(value)
                for key, value in _section(data, "items").items()
            },
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "difficultyClassMarkers": self.difficulty_class_markers.to_dict(),
            "qualityPrefixes": self.quality_prefixes.to_dict(),
            "items": {key: item.to_dict() for key, item in self.items.items()},
        }


@dataclass(frozen=True)
class AppSettings:
    """Full settings tree of one profile."""

    runes: dict[str, RuneSettings] = field(default_factory=dict)
    # common settings key -> LevelSettings (simple item) or GroupSettings
    common: dict[str, Any] = field(default_factory=dict)
    gems: dict[str, GroupSettings] = field(default_factory=dict)
    items: ItemsSettings = field(default_factory=ItemsSettings)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "AppSettings":
        """Build from a settings tree or an exported profile."""
        data = data or {}
        if isinstance(data.get("settings"), Mapping):
            data = data["settings"]

        common: dict[str, Any] = {}
        for key, value in _section(data, "common").items():
            if not isinstance(value, Mapping):
                continue
            if "levels" in value:
                common[key] = GroupSettings.from_dict(value)
            else:
                common[key] = LevelSettings.from_dict(value)

        return cls(
            runes={
                str(rune): RuneSettings.from_dict(value)
                for rune, value in _section(data, "runes").items()
            },
            common=common,
            gems={
                str(key): GroupSettings.from_dict(value)
                for key, value in _section(data, "gems").items()
            },
            items=ItemsSettings.from_dict(_section(data, "items")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Settings tree in the editor's camelCase JSON shape."""
        return {
            "runes": {rune: settings.to_dict() for rune, settings in self.runes.items()},
            "common": {key: value.to_dict() for key, value in self.common.items()},
            "gems": {key: group.to_dict() for key, group in self.gems.items()},
            "items": self.items.to_dict(),
        }
