from typing import Callable, List

from utils.globals import Globals
from utils.logging_setup import get_logger

logger = get_logger(__name__)


class SelectionStore:
    """
    The ordered, duplicate-free set of device names the user has opted into.

    The selection lives in the shared settings as a single delimited string.
    Every mutation is saved before subscribers are told about the new list.
    """

    def __init__(self, settings):
        self._settings = settings
        self._subscribers: List[Callable[[List[str]], None]] = []

    def list(self) -> List[str]:
        stored = self._settings.selected_devices or ""
        return [name for name in stored.split(Globals.SELECTED_DEVICES_DELIMITER) if name]

    def contains(self, device_name: str) -> bool:
        return device_name in self.list()

    def __contains__(self, device_name):
        return self.contains(device_name)

    def __len__(self):
        return len(self.list())

    def __iter__(self):
        return iter(self.list())

    def set_selected(self, device_name: str, selected: bool) -> bool:
        """
        Add or remove a device from the selection.

        Returns True if the selection changed. Selecting a device that is
        already selected, or deselecting one that is not, does nothing.
        Raises ValueError for an empty name or one containing the delimiter.
        """
        if not device_name:
            raise ValueError("No device name given")
        if Globals.SELECTED_DEVICES_DELIMITER in device_name:
            raise ValueError(f"Device name cannot contain {Globals.SELECTED_DEVICES_DELIMITER!r}: {device_name}")
        current = self.list()
        if selected and device_name not in current:
            current.append(device_name)
        elif not selected and device_name in current:
            current = [name for name in current if name != device_name]
        else:
            return False

        self._settings.selected_devices = Globals.SELECTED_DEVICES_DELIMITER.join(current)
        self._settings.save()
        logger.info(f"{'Selected' if selected else 'Deselected'} device: {device_name}")
        for callback in list(self._subscribers):
            callback(list(current))
        return True

    def subscribe(self, callback: Callable[[List[str]], None]) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[List[str]], None]) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)
