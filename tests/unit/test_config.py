import json

import pytest

from utils.config import Config
from utils.globals import DeviceBackendType


def _write_config(tmp_path, values):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(values), encoding="utf-8")
    return str(path)


@pytest.mark.unit
class TestConfig:
    def test_values_are_read(self, tmp_path):
        config = Config(config_path=_write_config(tmp_path, {
            "device_backend": "pulseaudio",
            "default_hotkey_key": "f9",
            "default_hotkey_modifier_keys": "shift",
            "pactl_timeout_seconds": 3,
            "notify_on_switch": False,
        }))
        assert config.get_device_backend_type() == DeviceBackendType.PULSEAUDIO
        assert config.default_hotkey_key == "f9"
        assert config.default_hotkey_modifier_keys == "shift"
        assert config.pactl_timeout_seconds == 3
        assert config.notify_on_switch is False

    def test_missing_keys_keep_defaults(self, tmp_path):
        config = Config(config_path=_write_config(tmp_path, {}))
        assert config.device_backend == "auto"
        assert config.default_hotkey_key == "f11"
        assert config.default_hotkey_modifier_keys == "ctrl+alt"
        assert config.notify_on_switch is True
        assert config.switch_communications_role is False

    def test_invalid_backend_falls_back_to_auto(self, tmp_path):
        config = Config(config_path=_write_config(tmp_path, {"device_backend": "alsa"}))
        assert config.device_backend == DeviceBackendType.AUTO.value
        assert config.get_device_backend_type() != DeviceBackendType.AUTO

    def test_unreadable_config_keeps_defaults(self, tmp_path):
        config = Config(config_path=str(tmp_path / "missing.json"))
        assert config.pactl_timeout_seconds == 5

    def test_backend_type_lookup(self):
        assert DeviceBackendType.get("Windows") == DeviceBackendType.WINDOWS
        with pytest.raises(Exception):
            DeviceBackendType.get("coreaudio")
