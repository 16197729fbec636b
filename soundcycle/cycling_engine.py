from dataclasses import dataclass
import threading
from typing import List, Optional

from soundcycle.audio_device import AudioDevice
from utils.globals import CycleOutcome
from utils.logging_setup import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CycleResult:
    """Outcome of a cycle or an explicit switch."""
    kind: CycleOutcome
    device: Optional[AudioDevice] = None
    message: Optional[str] = None

    @property
    def success(self):
        return self.kind.is_success()

    def __bool__(self):
        return self.success


def find_anchor(devices: List[AudioDevice], last_active_device_name: str) -> AudioDevice:
    """
    The device treated as the current position in the cycle.

    What the OS reports as default wins over the device we last switched to,
    which wins over the first device in the list.
    """
    for device in devices:
        if device.is_default:
            return device
    if last_active_device_name:
        for device in devices:
            if device.friendly_name == last_active_device_name:
                return device
    return devices[0]


def next_device(devices: List[AudioDevice], anchor: AudioDevice) -> AudioDevice:
    for i, device in enumerate(devices):
        if device == anchor:
            if i + 1 < len(devices):
                return devices[i + 1]
            break
    return devices[0]


class CyclingEngine:
    """
    Picks and activates the next selected audio device.

    The engine is the error boundary for the device backend: backend failures
    are reported to the notification sink and returned as result kinds, never
    raised to the caller.
    """

    def __init__(self, backend, available_devices, settings, app_actions):
        self._backend = backend
        self._available_devices = available_devices
        self._settings = settings
        self._app_actions = app_actions
        # Hotkey presses arriving while a switch is in flight wait for it to finish
        self._lock = threading.Lock()

    def activate(self, device: AudioDevice) -> bool:
        """Attempt to make the device the default. Returns True if the switch succeeded."""
        return self._activate(device).success

    def cycle(self) -> CycleResult:
        """
        Switch to the device after the current one, wrapping around at the end.

        Returns a NO_DEVICES result without attempting a switch if none of the
        selected devices are present on the system.
        """
        with self._lock:
            devices, failure = self._get_available()
            if failure is not None:
                return failure
            if len(devices) == 0:
                message = CycleOutcome.NO_DEVICES.get_description()
                logger.warning(message)
                self._app_actions.no_devices_configured()
                return CycleResult(CycleOutcome.NO_DEVICES, message=message)

            anchor = find_anchor(devices, self._settings.last_active_audio_device)
            target = next_device(devices, anchor)
            logger.debug(f"Cycling from {anchor.friendly_name} to {target.friendly_name}")
            return self._activate(target)

    def switch_to(self, friendly_name: str) -> CycleResult:
        """Switch to a specific selected device by its friendly name."""
        with self._lock:
            devices, failure = self._get_available()
            if failure is not None:
                return failure
            for device in devices:
                if device.friendly_name == friendly_name:
                    return self._activate(device)
            message = f"{CycleOutcome.NOT_AVAILABLE.get_description()}: {friendly_name}"
            logger.warning(message)
            self._app_actions.error(message)
            return CycleResult(CycleOutcome.NOT_AVAILABLE, message=message)

    def _get_available(self):
        try:
            return self._available_devices.available(), None
        except Exception as e:
            message = f"Failed to list devices: {e}"
            logger.error(message)
            self._app_actions.error(message)
            return [], CycleResult(CycleOutcome.FAILED, message=message)

    def _activate(self, device: AudioDevice) -> CycleResult:
        try:
            switched = self._backend.set_default(device)
        except Exception as e:
            message = f"Failed to change device: {e}"
            logger.error(f"{message} ({device.friendly_name})")
            self._app_actions.error(message)
            return CycleResult(CycleOutcome.FAILED, device, message)

        if not switched:
            logger.warning(f"Backend declined switching to {device.friendly_name}")
            return CycleResult(CycleOutcome.DECLINED, device)

        logger.info(f"Audio device changed to {device.friendly_name}")
        self._app_actions.switch_succeeded(device.friendly_name)
        self._settings.last_active_audio_device = device.friendly_name
        self._settings.save()
        return CycleResult(CycleOutcome.SWITCHED, device)
