from utils.globals import Globals
from utils.logging_setup import get_logger

logger = get_logger(__name__)


class SwitcherSettings:
    """
    Persisted switcher state, loaded once at startup and saved on every mutation.

    Instances are shared by reference between the selection store, the cycling
    engine and the hotkey wiring, so that all of them see the same values.
    """
    CACHE_KEY = "switcher_settings"

    def __init__(self, cache):
        self._cache = cache
        self.selected_devices = ""
        self.last_active_audio_device = ""
        self.hotkey_key = ""
        self.hotkey_modifier_keys = ""

    def to_dict(self):
        return {
            Globals.SettingsKeys.SELECTED_DEVICES: self.selected_devices,
            Globals.SettingsKeys.LAST_ACTIVE_AUDIO_DEVICE: self.last_active_audio_device,
            Globals.SettingsKeys.HOTKEY_KEY: self.hotkey_key,
            Globals.SettingsKeys.HOTKEY_MODIFIER_KEYS: self.hotkey_modifier_keys,
        }

    def set_from_dict(self, _dict):
        self.selected_devices = _dict.get(Globals.SettingsKeys.SELECTED_DEVICES) or ""
        self.last_active_audio_device = _dict.get(Globals.SettingsKeys.LAST_ACTIVE_AUDIO_DEVICE) or ""
        self.hotkey_key = _dict.get(Globals.SettingsKeys.HOTKEY_KEY) or ""
        self.hotkey_modifier_keys = _dict.get(Globals.SettingsKeys.HOTKEY_MODIFIER_KEYS) or ""

    def load(self):
        """Load settings from the cache. Returns False if nothing was stored yet."""
        settings = self._cache.get(SwitcherSettings.CACHE_KEY, {})
        if not settings:
            logger.debug("No switcher settings found in cache")
            return False
        self.set_from_dict(settings)
        logger.info(f"Loaded switcher settings: selected devices={self.selected_devices!r}, "
                    f"last active device={self.last_active_audio_device!r}")
        return True

    def save(self):
        self._cache.set(SwitcherSettings.CACHE_KEY, self.to_dict())
        self._cache.store()
        logger.debug("Stored switcher settings to cache")
