from typing import List, Tuple

from lib.hotkeys import HotkeyHandler, validate_combination
from soundcycle.audio_device import AudioDevice
from soundcycle.available_devices import AvailableDevices
from soundcycle.cycling_engine import CycleResult, CyclingEngine
from soundcycle.selection_store import SelectionStore
from utils.globals import Globals
from utils.logging_setup import get_logger

logger = get_logger(__name__)


class Switcher:
    """
    Wires the selection store, the cycling engine and the hotkey together
    around one settings object and one device backend.
    """

    def __init__(self, settings, backend, app_actions, hotkey_handler=None,
                 default_hotkey_key=Globals.DEFAULT_HOTKEY_KEY,
                 default_hotkey_modifier_keys=Globals.DEFAULT_HOTKEY_MODIFIER_KEYS):
        self.settings = settings
        self.backend = backend
        self.app_actions = app_actions
        self.default_hotkey_key = default_hotkey_key
        self.default_hotkey_modifier_keys = default_hotkey_modifier_keys

        self.selection_store = SelectionStore(settings)
        self.available_devices = AvailableDevices(backend, self.selection_store)
        self.engine = CyclingEngine(backend, self.available_devices, settings, app_actions)
        self.selection_store.subscribe(app_actions.selection_changed)

        if hotkey_handler is None:
            hotkey_handler = HotkeyHandler(self.handle_hotkey_press, app_actions.error)
        self.hotkey_handler = hotkey_handler

    def list_devices(self) -> List[Tuple[AudioDevice, bool]]:
        """All devices the backend reports, each paired with whether it is selected."""
        selected = self.selection_store.list()
        return [(device, device.friendly_name in selected) for device in self.backend.enumerate()]

    def set_device_selection(self, device_name: str, selected: bool) -> bool:
        return self.selection_store.set_selected(device_name, selected)

    def cycle(self) -> CycleResult:
        return self.engine.cycle()

    def switch_to(self, device_name: str) -> CycleResult:
        return self.engine.switch_to(device_name)

    def get_hotkey_combination(self) -> Tuple[str, str]:
        if self.settings.hotkey_key:
            return self.settings.hotkey_key, self.settings.hotkey_modifier_keys
        return self.default_hotkey_key, self.default_hotkey_modifier_keys

    def set_hotkey_combination(self, key: str, modifier_keys: str) -> bool:
        """
        Persist a new hotkey and re-register it if a hotkey is currently registered.

        Raises ValueError for a combination that cannot be registered.
        """
        validate_combination(key, modifier_keys)
        self.settings.hotkey_key = key
        self.settings.hotkey_modifier_keys = modifier_keys
        self.settings.save()
        logger.info(f"Hotkey set to {modifier_keys}+{key}")
        if self.hotkey_handler.is_attached():
            return self.reattach_hotkey()
        return True

    def reattach_hotkey(self) -> bool:
        key, modifier_keys = self.get_hotkey_combination()
        return self.hotkey_handler.attach(key, modifier_keys)

    def handle_hotkey_press(self) -> CycleResult:
        return self.engine.cycle()

    def shutdown(self):
        self.hotkey_handler.detach()
        self.selection_store.unsubscribe(self.app_actions.selection_changed)
