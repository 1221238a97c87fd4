"""
Command line tests, against a game folder in tmp_path
"""

import json

import pytest

from d2r_tools.cli import load_profile, main, parse_config_value
from d2r_tools.utils.common import GamePaths
from d2r_tools.utils.logger import ConfigurationError


@pytest.fixture
def game_dir(tmp_path):
    home = tmp_path / "Diablo II Resurrected"
    paths = GamePaths.from_home(str(home))
    paths.locales_dir.mkdir(parents=True)
    (paths.locales_dir / "item-names.json").write_text("[]", encoding="utf-8")
    (paths.locales_dir / "item-nameaffixes.json").write_text("[]", encoding="utf-8")
    return home


@pytest.fixture
def profile_file(tmp_path):
    path = tmp_path / "profile.json"
    path.write_text(json.dumps({"settings": {
        "runes": {"ber": {"mode": "auto", "isHighlighted": True, "autoSettings": {"color": "orange1"}}},
    }}), encoding="utf-8")
    return path


@pytest.fixture
def config_file(tmp_path):
    return tmp_path / "config.json"


def test_apply(game_dir, profile_file, config_file):
    code = main(["--config", str(config_file), "apply", str(profile_file),
                 "--home", str(game_dir), "--locales", "enUS"])

    assert code == 0
    paths = GamePaths.from_home(str(game_dir))
    runes = json.loads((paths.locales_dir / "item-runes.json").read_text(encoding="utf-8"))
    assert runes[0]["enUS"] == "ÿc@Ber Rune"
    assert (paths.rune_highlight_dir / "ber_rune.json").exists()


def test_apply_without_home_fails(profile_file, config_file):
    assert main(["--config", str(config_file), "apply", str(profile_file)]) == 1


def test_highlights(game_dir, profile_file, config_file):
    main(["--config", str(config_file), "apply", str(profile_file), "--home", str(game_dir)])
    assert main(["--config", str(config_file), "highlights", str(profile_file), "--home", str(game_dir)]) == 0


def test_no_command_prints_help():
    assert main([]) == 1


def test_bad_profile(tmp_path):
    path = tmp_path / "profile.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_profile(path)


def test_load_writes_profile(game_dir, profile_file, config_file, tmp_path):
    main(["--config", str(config_file), "apply", str(profile_file), "--home", str(game_dir)])
    output = tmp_path / "out" / "current.json"

    code = main(["--config", str(config_file), "load", str(output),
                 "--profile", str(profile_file), "--home", str(game_dir), "--locales", "enUS"])

    assert code == 0
    ber = json.loads(output.read_text(encoding="utf-8"))["settings"]["runes"]["ber"]
    assert ber["mode"] == "auto"
    assert ber["isHighlighted"] is True
    assert ber["autoSettings"]["color"] == "orange1"
    assert load_profile(output).runes["ber"].auto_settings.color == "orange1"


def test_load_without_locale_files_fails(tmp_path, config_file):
    output = tmp_path / "current.json"
    code = main(["--config", str(config_file), "load", str(output), "--home", str(tmp_path / "empty")])
    assert code == 1
    assert not output.exists()


def test_config_set_and_show(config_file):
    assert main(["--config", str(config_file), "config", "selected_locales", '["enUS", "deDE"]']) == 0
    assert main(["--config", str(config_file), "config", "home_directory", "D:/Games/D2R"]) == 0
    assert main(["--config", str(config_file), "config"]) == 0

    stored = json.loads(config_file.read_text(encoding="utf-8"))
    assert stored["selected_locales"] == ["enUS", "deDE"]
    assert stored["home_directory"] == "D:/Games/D2R"


def test_config_bad_value(config_file):
    assert main(["--config", str(config_file), "config", "max_write_attempts", "many"]) == 1
    assert not config_file.exists()


@pytest.mark.parametrize("raw,expected", [
    ("5", 5),
    ('["enUS"]', ["enUS"]),
    ("null", None),
    ("D:/Games/D2R", "D:/Games/D2R"),
])
def test_parse_config_value(raw, expected):
    assert parse_config_value(raw) == expected
