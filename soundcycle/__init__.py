"""
SoundCycle package for selecting audio output devices and cycling the system default among them.
"""

from .audio_device import AudioDevice
from .available_devices import AvailableDevices
from .cycling_engine import CycleResult, CyclingEngine
from .device_backend import DeviceBackend, DeviceBackendError, get_device_backend
from .selection_store import SelectionStore
from .switcher import Switcher
from .switcher_settings import SwitcherSettings

__all__ = [
    'AudioDevice',
    'AvailableDevices',
    'CycleResult',
    'CyclingEngine',
    'DeviceBackend',
    'DeviceBackendError',
    'SelectionStore',
    'Switcher',
    'SwitcherSettings',
    'get_device_backend',
]
