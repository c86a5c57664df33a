from pathlib import Path
import pytest

from webcam.config import Config, ConfigError, load_config

PROJECT_ROOT = Path(__file__).parent.parent


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "nope.yaml") == Config()


def test_shipped_config_matches_defaults():
    assert load_config(PROJECT_ROOT / "config.yaml") == Config()


def test_partial_config_and_unknown_keys(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "gestures:\n"
        "  click_threshold: 0.05\n"
        "  long_press_threshold: 0.8\n"
        "  no_such_key: 1\n"
        "actions:\n"
        "  back_keys: [ctrl, z]\n"
        "unknown_section:\n"
        "  foo: bar\n"
    )
    config = load_config(path)

    assert config.gestures.click_threshold == 0.05
    assert config.gestures.long_press_threshold == 0.8
    assert config.gestures.swipe_threshold == 0.06
    assert config.actions.back_keys == ["ctrl", "z"]
    assert config.camera.device_id == 0


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_config(path) == Config()


@pytest.mark.parametrize("text", [
    "gestures: [unclosed\n",
    "- just\n- a list\n",
    "gestures: 3\n",
])
def test_bad_config_raises(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text)
    with pytest.raises(ConfigError):
        load_config(path)
