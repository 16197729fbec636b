from enum import Enum
import sys


class AppInfo:
    APP_IDENTIFIER = "soundcycle"


class Globals:
    # Multi-character so that it does not collide with device names
    SELECTED_DEVICES_DELIMITER = ";;;"

    DEFAULT_HOTKEY_KEY = "f11"
    DEFAULT_HOTKEY_MODIFIER_KEYS = "ctrl+alt"

    # Persisted setting names
    class SettingsKeys:
        SELECTED_DEVICES = "SelectedDevices"
        LAST_ACTIVE_AUDIO_DEVICE = "LastActiveAudioDevice"
        HOTKEY_KEY = "HotkeyKey"
        HOTKEY_MODIFIER_KEYS = "HotkeyModifierKeys"


class DeviceBackendType(Enum):
    AUTO = "auto"
    WINDOWS = "windows"
    PULSEAUDIO = "pulseaudio"

    def resolve(self):
        if self != DeviceBackendType.AUTO:
            return self
        if sys.platform == "win32":
            return DeviceBackendType.WINDOWS
        return DeviceBackendType.PULSEAUDIO

    @staticmethod
    def get(name):
        for backend_type in DeviceBackendType:
            if backend_type.value == name.lower() or backend_type.name == name.upper():
                return backend_type
        raise Exception(f"Invalid device backend type: {name}")


class CycleOutcome(Enum):
    SWITCHED = "SWITCHED"
    DECLINED = "DECLINED"
    FAILED = "FAILED"
    NO_DEVICES = "NO_DEVICES"
    NOT_AVAILABLE = "NOT_AVAILABLE"

    def is_success(self):
        return self == CycleOutcome.SWITCHED

    def get_description(self):
        return {
            CycleOutcome.SWITCHED: "Audio device changed",
            CycleOutcome.DECLINED: "Audio device switch was declined",
            CycleOutcome.FAILED: "Failed to change audio device",
            CycleOutcome.NO_DEVICES: "No devices to select",
            CycleOutcome.NOT_AVAILABLE: "Audio device is not available",
        }[self]
