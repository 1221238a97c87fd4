"""
Settings snapshot tests
"""

from conftest import group, level
from d2r_tools.core.settings import (
    AppSettings,
    GroupSettings,
    ItemSettings,
    LevelSettings,
    RuneSettings,
)
from d2r_tools.utils.common import SUPPORTED_LOCALES, normalize_locales


class TestFromDict:

    def test_profile_wrapper_unwrapped(self):
        snapshot = AppSettings.from_dict({"name": "p", "settings": {"runes": {"el": {"mode": "manual"}}}})
        assert snapshot.runes["el"].is_manual

    def test_rune_auto_settings(self):
        rune = RuneSettings.from_dict({
            "mode": "auto",
            "isHighlighted": True,
            "autoSettings": {
                "color": "red1",
                "boxSize": 5,
                "boxLimiters": "spaces",
                "numbering": {"show": True, "dividerType": "pipe", "numberColor": "yellow1"},
            },
        })

        assert rune.is_highlighted
        assert rune.auto_settings.color == "red1"
        assert rune.auto_settings.box_size == 2
        assert rune.auto_settings.box_limiters == "spaces"
        assert rune.auto_settings.numbering.divider_type == "pipe"

    def test_unknown_mode_falls_back_to_auto(self):
        assert RuneSettings.from_dict({"mode": "weird"}).mode == "auto"

    def test_locales_normalized(self):
        lvl = LevelSettings.from_dict({"enabled": True, "locales": {"enUS": "a", "xxXX": "b"}})
        assert set(lvl.locales) == set(SUPPORTED_LOCALES)
        assert lvl.locales["enUS"] == "a"
        assert lvl.locales["ruRU"] == ""

    def test_common_split_into_groups_and_items(self):
        snapshot = AppSettings.from_dict({"common": {
            "healthPotions": group(level(enUS="HP1")),
            "gold": level(enUS="G"),
            "broken": 5,
        }})

        assert isinstance(snapshot.common["healthPotions"], GroupSettings)
        assert isinstance(snapshot.common["gold"], LevelSettings)
        assert "broken" not in snapshot.common

    def test_empty_tree(self):
        snapshot = AppSettings.from_dict(None)
        assert snapshot.runes == {}
        assert snapshot.items.items == {}


class TestItemToggle:

    def test_disable_preserves_text(self):
        item = ItemSettings(enabled=True, locales=normalize_locales({"enUS": "Shako"}))
        disabled = item.with_enabled(False)

        assert not disabled.enabled
        assert disabled.preserved_locales["enUS"] == "Shako"

    def test_enable_restores_text(self):
        item = ItemSettings(enabled=True, locales=normalize_locales({"enUS": "Shako"}))
        restored = item.with_enabled(False).with_enabled(True)

        assert restored.enabled
        assert restored.locales["enUS"] == "Shako"
        assert restored.preserved_locales is None

    def test_same_state_is_noop(self):
        item = ItemSettings(enabled=True)
        assert item.with_enabled(True) is item


class TestToDict:

    def test_editor_shape(self):
        snapshot = AppSettings.from_dict({
            "runes": {"ber": {"mode": "auto", "autoSettings": {"color": "orange1", "boxSize": 1}}},
            "common": {"healthPotions": group(level(enUS="HP1")), "gold": level(enUS="G")},
            "items": {"items": {"cap": {"enabled": False, "preservedLocales": {"enUS": "Cap"}}}},
        })

        data = snapshot.to_dict()

        assert data["runes"]["ber"]["autoSettings"]["boxSize"] == 1
        assert data["runes"]["ber"]["manualSettings"]["locales"]["enUS"] == ""
        assert data["common"]["healthPotions"]["levels"][0]["locales"]["enUS"] == "HP1"
        assert "levels" not in data["common"]["gold"]
        assert data["items"]["items"]["cap"]["preservedLocales"]["enUS"] == "Cap"
        assert AppSettings.from_dict({"settings": data}) == snapshot
