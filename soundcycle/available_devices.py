from typing import List, Optional

from soundcycle.audio_device import AudioDevice


class AvailableDevices:
    """Live view of the selected devices that the backend currently reports."""

    def __init__(self, backend, selection_store):
        self._backend = backend
        self._selection_store = selection_store

    def available(self) -> List[AudioDevice]:
        # Recomputed on every call, in backend enumeration order
        selected = set(self._selection_store.list())
        return [device for device in self._backend.enumerate() if device.friendly_name in selected]

    def find(self, friendly_name: str) -> Optional[AudioDevice]:
        for device in self.available():
            if device.friendly_name == friendly_name:
                return device
        return None
