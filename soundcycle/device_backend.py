from typing import List

from soundcycle.audio_device import AudioDevice
from utils.globals import DeviceBackendType
from utils.logging_setup import get_logger

logger = get_logger(__name__)


class DeviceBackendError(RuntimeError):
    """Raised by a backend when the OS or a driver tool fails."""


class DeviceBackend:
    """
    Capability interface for enumerating output devices and changing the default one.

    Implementations may block on OS or driver latency. set_default returns False
    when the switch is declined and raises when the switch fails outright.
    """

    def enumerate(self) -> List[AudioDevice]:
        raise NotImplementedError

    def set_default(self, device: AudioDevice) -> bool:
        raise NotImplementedError


def get_device_backend(backend_type: DeviceBackendType, config=None) -> DeviceBackend:
    """Create the backend for the given type, resolving AUTO by platform."""
    backend_type = backend_type.resolve()
    logger.debug(f"Using device backend: {backend_type.value}")
    if backend_type == DeviceBackendType.WINDOWS:
        from soundcycle.windows_backend import WindowsDeviceBackend
        switch_communications_role = config.switch_communications_role if config is not None else False
        return WindowsDeviceBackend(switch_communications_role=switch_communications_role)
    if backend_type == DeviceBackendType.PULSEAUDIO:
        from soundcycle.pulseaudio_backend import PulseAudioDeviceBackend
        timeout_seconds = config.pactl_timeout_seconds if config is not None else 5
        return PulseAudioDeviceBackend(timeout_seconds=timeout_seconds)
    raise Exception(f"Unhandled device backend type {backend_type}")
