# tests/config/test_config_loader.py
"""
chip8_tracer.config.loaderモジュールの単体テスト。
"""
import pytest

from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.models import EmulatorConfig, DEFAULT_KEYMAP


def test_empty_file_yields_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    config = ConfigLoader().load_from_file(str(path))
    assert config == EmulatorConfig()
    assert config.display.scale == 10
    assert config.timing.ticks_per_frame == 10
    assert config.timing.timer_hz == 60
    assert config.keymap == DEFAULT_KEYMAP
    assert config.seed is None


def test_load_yaml(tmp_path):
    path = tmp_path / "chip8.yaml"
    path.write_text(
        "display:\n"
        "  scale: 8\n"
        "  foreground: '#FFFFFF'\n"
        "timing:\n"
        "  ticks_per_frame: '0x0C'\n"
        "keymap:\n"
        "  up: 2\n"
        "  1: 0x1\n"
        "seed: 42\n"
    )
    config = ConfigLoader().load_from_file(str(path))
    assert config.display.scale == 8
    assert config.display.foreground == "#FFFFFF"
    assert config.display.background == "#101010"
    assert config.timing.ticks_per_frame == 12
    assert config.timing.timer_hz == 60
    assert config.keymap == {"up": 2, "1": 1}
    assert config.seed == 42


def test_keymap_names_keep_their_case():
    config = ConfigLoader().parse_config({"keymap": {"Space": 5, "Left": 4}})
    assert config.keymap == {"Space": 5, "Left": 4}


def test_default_keymap_is_not_shared():
    first = ConfigLoader().parse_config({})
    first.keymap["P"] = 3
    assert "P" not in ConfigLoader().parse_config({}).keymap


@pytest.mark.parametrize("data", [
    {"display": {"scale": 0}},
    {"timing": {"ticks_per_frame": -1}},
    {"timing": {"timer_hz": "fast"}},
    {"timing": {"timer_hz": True}},
    {"keymap": {"Q": 16}},
    {"keymap": ["Q"]},
    {"seed": 1.5},
])
def test_invalid_values(data):
    with pytest.raises(ValueError):
        ConfigLoader().parse_config(data)


def test_root_must_be_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError, match="mapping"):
        ConfigLoader().load_from_file(str(path))
