"""
Settings read-back tests

Levels, common items, gems, quality prefixes, item bases with difficulty
markers, and rune names parsed back into auto settings.
"""

import pytest

from conftest import group, level
from d2r_tools.core.generators import generate_rune_name
from d2r_tools.core.loader import (
    load_common_items,
    load_gems,
    load_item_names,
    load_quality_prefixes,
    load_runes,
    load_settings,
    parse_rune_text,
    read_level,
    split_difficulty_marker,
)
from d2r_tools.core.merger import LocaleStore
from d2r_tools.core.settings import (
    AppSettings,
    GroupSettings,
    ItemSettings,
    LevelSettings,
    RuneAutoSettings,
    RuneNumbering,
    RuneSettings,
)
from d2r_tools.data.items import COMMON_ITEM_TO_ID, GEM_TO_ID, LOW_QUALITY_IDS, SUPERIOR_ID, LocaleFile
from d2r_tools.data.runes import RUNE_TO_ID

HP1 = COMMON_ITEM_TO_ID["hp1"].id
AMULET = COMMON_ITEM_TO_ID["amu"].id


def make_stores(**records):
    """Stores for every file; ``records`` keyed by LocaleFile name."""
    return {
        locale_file: LocaleStore(locale_file.value, list(records.get(locale_file.name, [])))
        for locale_file in LocaleFile
    }


def markers():
    return GroupSettings.from_dict(group(level(enUS="[N]", ruRU="[Н]"), level(enUS="[X]"), level(enUS="[E]")))


class TestLevels:

    def test_color_codes_kept(self, record):
        result = read_level(record(HP1, "hp1", enUS="ÿc1HP1", ruRU="ЛЗ1"))
        assert result.enabled
        assert result.locales["enUS"] == "ÿc1HP1"
        assert result.locales["ruRU"] == "ЛЗ1"

    def test_blank_english_is_disabled(self, record):
        assert not read_level(record(HP1, "hp1", enUS="  ", ruRU="ЛЗ1")).enabled

    def test_highlight_kept_from_current(self, record):
        current = LevelSettings(highlight=True)
        assert read_level(record(HP1, "hp1", enUS="HP1"), current).highlight


class TestCommonItems:

    def test_groups_and_simple_items(self, record):
        stores = make_stores(ITEM_NAMES=[
            record(HP1, "hp1", enUS="HP1"),
            record(AMULET, "amu", enUS="ÿc4Amulet"),
        ])

        common = load_common_items(stores, {})

        potions = common["healthPotions"]
        assert potions.enabled
        assert potions.levels[0].locales["enUS"] == "HP1"
        assert potions.levels[1] == LevelSettings()
        assert common["amulets"].locales["enUS"] == "ÿc4Amulet"
        assert "manaPotions" not in common

    def test_missing_rows_keep_current(self, record):
        stores = make_stores(ITEM_NAMES=[record(HP1, "hp1", enUS="New")])
        current = {
            "healthPotions": GroupSettings.from_dict(group(level(enUS="Old1"), level(enUS="Old2"), enabled=False)),
            "rings": LevelSettings.from_dict(level(enUS="Ring")),
        }

        common = load_common_items(stores, current)

        assert not common["healthPotions"].enabled
        assert [lvl.locales["enUS"] for lvl in common["healthPotions"].levels[:2]] == ["New", "Old2"]
        assert common["rings"] is current["rings"]


class TestGems:

    def test_levels_read_from_their_file(self, record):
        sapphire4 = GEM_TO_ID["sapphire4"]
        stores = make_stores(
            ITEM_NAMES=[record(GEM_TO_ID["sapphire1"].id, "gcb", enUS="ÿc3Chipped")],
            NAME_AFFIXES=[record(sapphire4.id, "gsb", enUS="ÿc3Flawless")],
        )

        gems = load_gems(stores, {})

        assert sapphire4.file is LocaleFile.NAME_AFFIXES
        assert gems["sapphires"].levels[0].locales["enUS"] == "ÿc3Chipped"
        assert gems["sapphires"].levels[3].locales["enUS"] == "ÿc3Flawless"
        assert "rubies" not in gems


class TestQualityPrefixes:

    def low_rows(self, record, *values):
        return [record(record_id, str(record_id), enUS=value)
                for record_id, value in zip(LOW_QUALITY_IDS, values)]

    def test_uniform_rows_read_without_colors(self, record):
        rows = self.low_rows(record, "ÿc5Crude", "ÿc5Crude", "ÿc5Crude", "ÿc5Crude")
        rows.append(record(SUPERIOR_ID, "Hiquality", enUS="ÿc0Superior", ruRU="Превосходный"))
        store = LocaleStore("item-nameaffixes", rows)

        prefixes = load_quality_prefixes(store, ["enUS", "ruRU"], GroupSettings())

        assert prefixes.enabled
        assert prefixes.levels[0].enabled
        assert prefixes.levels[0].locales["enUS"] == "Crude"
        assert prefixes.levels[1].locales["enUS"] == "Superior"
        assert prefixes.levels[1].locales["ruRU"] == "Превосходный"

    def test_disagreeing_rows_left_blank(self, record):
        store = LocaleStore("item-nameaffixes", self.low_rows(record, "Crude", "Cracked", "Damaged", "Low Quality"))

        prefixes = load_quality_prefixes(store, ["enUS"], GroupSettings())

        assert prefixes.levels[0].locales["enUS"] == ""
        assert prefixes.levels[0].enabled

    def test_absent_rows_keep_current(self):
        current = GroupSettings.from_dict(group(level(enUS="Low"), level(enUS="Sup"), enabled=False))
        prefixes = load_quality_prefixes(LocaleStore("item-nameaffixes", []), ["enUS"], current)
        assert prefixes == current


class TestItemNames:

    def test_marker_detected_and_removed(self, record):
        store = LocaleStore("item-names", [record(1528, "cap", enUS="ÿc0Cap [N]", ruRU="Шапка [Н]")])

        items = load_item_names(store, ["enUS", "ruRU"], markers(), {})

        cap = items["cap"]
        assert cap.enabled
        assert cap.show_difficulty_class_marker
        assert cap.locales["enUS"] == "Cap"
        assert cap.locales["ruRU"] == "Шапка"

    def test_marker_in_unselected_locale_only(self, record):
        store = LocaleStore("item-names", [record(1528, "cap", enUS="Cap", ruRU="Шапка [Н]")])

        cap = load_item_names(store, ["enUS"], markers(), {})["cap"]

        assert not cap.show_difficulty_class_marker
        assert cap.locales["ruRU"] == "Шапка"

    def test_blank_selected_locales_disable(self, record):
        store = LocaleStore("item-names", [record(1528, "cap", ruRU="Шапка")])
        assert not load_item_names(store, ["enUS"], markers(), {})["cap"].enabled

    def test_bases_without_row_skipped(self, record):
        current = {"xap": ItemSettings(enabled=True)}
        store = LocaleStore("item-names", [record(1528, "cap", enUS="Cap")])

        items = load_item_names(store, ["enUS"], markers(), current)

        assert items["xap"] is current["xap"]
        assert "uap" not in items

    def test_preserved_text_kept(self, record):
        current = {"cap": ItemSettings(preserved_locales={"enUS": "My Cap"})}
        store = LocaleStore("item-names", [record(1528, "cap", enUS="Cap")])
        assert load_item_names(store, ["enUS"], markers(), current)["cap"].preserved_locales == {"enUS": "My Cap"}

    @pytest.mark.parametrize("value,expected", [
        ("Cap [N]", ("Cap", True)),
        ("Cap", ("Cap", False)),
        ("[N]", ("", True)),
    ])
    def test_split_marker(self, value, expected):
        assert split_difficulty_marker(value, ["[N]", "[X]", "[E]"]) == expected


def decorated(**overrides):
    values = dict(
        color="orange1",
        box_size=1,
        box_limiters="~",
        box_limiters_color="white1",
        numbering=RuneNumbering(show=True, divider_type="parentheses",
                                divider_color="white1", number_color="yellow1"),
    )
    values.update(overrides)
    return RuneAutoSettings(**values)


class TestRuneText:
    """Generated rune names parse back into the settings that made them"""

    @pytest.mark.parametrize("settings", [
        decorated(),
        decorated(box_size=2, box_limiters="*", box_limiters_color="gold1"),
        decorated(box_limiters="spaces"),
        decorated(box_size=0, box_limiters="~", box_limiters_color="white1",
                  numbering=RuneNumbering(show=True, divider_type="pipe",
                                          divider_color="gray1", number_color="red1")),
        decorated(box_size=0, numbering=RuneNumbering(show=True, divider_type="brackets",
                                                      divider_color="", number_color="")),
    ])
    def test_generated_text_parsed(self, settings):
        text = generate_rune_name("ber", settings, "enUS")
        assert parse_rune_text("ber", text) == settings

    def test_plain_name(self):
        parsed = parse_rune_text("zod", "Zod Rune")
        assert parsed.color == ""
        assert parsed.box_size == 0
        assert not parsed.numbering.show

    def test_russian_name(self):
        assert parse_rune_text("zod", "ÿc0Руна Зод", "ruRU").color == "white1"

    def test_other_rune_number_not_numbering(self):
        assert parse_rune_text("zod", "ÿc0Zod Rune ÿc0(ÿc932ÿc0)") is None

    def test_custom_text_not_parsed(self):
        assert parse_rune_text("zod", "ÿc1ZOD!!!") is None


class TestRunes:

    def test_generated_name_read_as_auto(self, record):
        zod = RUNE_TO_ID["zod"]
        store = LocaleStore("item-runes", [record(zod, "r33", enUS="ÿc@Zod Rune")])

        runes = load_runes(store, {}, {"zod": True})

        assert runes["zod"].mode == "auto"
        assert runes["zod"].auto_settings.color == "orange1"
        assert runes["zod"].is_highlighted

    def test_custom_text_read_as_manual(self, record):
        el = RUNE_TO_ID["el"]
        store = LocaleStore("item-runes", [record(el, "r01", enUS="Line2\nLine1", ruRU="Эл!")])

        runes = load_runes(store, {}, {})

        assert runes["el"].is_manual
        assert runes["el"].manual_locales["enUS"] == "Line1\nLine2"
        assert runes["el"].manual_locales["ruRU"] == "Эл!"

    def test_russian_text_used_when_english_blank(self, record):
        zod = RUNE_TO_ID["zod"]
        store = LocaleStore("item-runes", [record(zod, "r33", ruRU="ÿc9Руна Зод")])
        assert load_runes(store, {}, {})["zod"].auto_settings.color == "yellow1"

    def test_missing_row_keeps_current_with_disk_highlight(self):
        current = {"ber": RuneSettings(mode="manual", is_highlighted=False)}

        runes = load_runes(LocaleStore("item-runes", []), current, {"ber": True})

        assert runes["ber"].is_manual
        assert runes["ber"].is_highlighted
        assert "zod" not in runes


def test_load_settings_whole_snapshot(record):
    stores = make_stores(
        ITEM_NAMES=[record(HP1, "hp1", enUS="HP1"), record(1528, "cap", enUS="Cap [N]")],
        NAME_AFFIXES=[record(SUPERIOR_ID, "Hiquality", enUS="Superior")],
        RUNES=[record(RUNE_TO_ID["ber"], "r30", enUS="ÿc@Ber Rune")],
    )
    current = AppSettings.from_dict({"items": {"difficultyClassMarkers": group(level(enUS="[N]"))}})

    snapshot = load_settings(stores, ["enUS"], current, {"ber": True})

    assert snapshot.runes["ber"].is_highlighted
    assert snapshot.common["healthPotions"].levels[0].locales["enUS"] == "HP1"
    assert snapshot.items.items["cap"].show_difficulty_class_marker
    assert snapshot.items.quality_prefixes.levels[1].locales["enUS"] == "Superior"
    assert snapshot.items.difficulty_class_markers is current.items.difficulty_class_markers
    assert AppSettings.from_dict(snapshot.to_dict()) == snapshot
