"""
Windows output device backend

Lists the active render endpoints through the Core Audio APIs and changes the
default endpoint through the PolicyConfig COM interface, which is what the
Windows sound control panel itself uses.

Dependencies:
    - pycaw: Python bindings for Windows Core Audio APIs
    - comtypes: For COM interface handling
"""

from contextlib import contextmanager
from typing import List, Optional

from soundcycle.audio_device import AudioDevice
from soundcycle.device_backend import DeviceBackend, DeviceBackendError
from utils.logging_setup import get_logger

logger = get_logger(__name__)

try:
    from ctypes import POINTER, c_longlong, c_void_p, wintypes
    from pycaw.pycaw import AudioUtilities
    import comtypes
    from comtypes import CLSCTX_ALL, COMMETHOD, GUID, HRESULT, IUnknown, CoCreateInstance
except ImportError as e:
    logger.warning(f"pycaw not available: {e}. Windows audio device switching will be unavailable.")
    AudioUtilities = None
    comtypes = None


# Endpoint ids of render devices start with this prefix, capture devices with {0.0.1.
RENDER_DEVICE_ID_PREFIX = "{0.0.0."
DEVICE_STATE_ACTIVE = 0x1

ROLE_CONSOLE = 0
ROLE_MULTIMEDIA = 1
ROLE_COMMUNICATIONS = 2

_POLICY_CONFIG_DEFS = None


def _get_policy_config_defs():
    # Interface definitions are created once, COM instances are created per call
    global _POLICY_CONFIG_DEFS
    if _POLICY_CONFIG_DEFS is not None:
        return _POLICY_CONFIG_DEFS

    class IPolicyConfigVista(IUnknown):
        _iid_ = GUID("{568B9108-44BF-40B4-9006-86AFE5B5A620}")
        _methods_ = (
            COMMETHOD([], HRESULT, 'GetMixFormat', (['in'], wintypes.LPCWSTR, 'wszDeviceId'), (['out'], POINTER(c_void_p), 'ppFormat')),
            COMMETHOD([], HRESULT, 'GetDeviceFormat', (['in'], wintypes.LPCWSTR, 'wszDeviceId'), (['in'], wintypes.BOOL, 'bDefault'), (['out'], POINTER(c_void_p), 'ppFormat')),
            COMMETHOD([], HRESULT, 'SetDeviceFormat', (['in'], wintypes.LPCWSTR, 'wszDeviceId'), (['in'], c_void_p, 'pEndpointFormat'), (['in'], c_void_p, 'mixFormat')),
            COMMETHOD([], HRESULT, 'GetProcessingPeriod', (['in'], wintypes.LPCWSTR, 'wszDeviceId'), (['in'], wintypes.BOOL, 'bDefault'), (['out'], POINTER(c_longlong), 'pmftDefaultPeriod'), (['out'], POINTER(c_longlong), 'pmftMinimumPeriod')),
            COMMETHOD([], HRESULT, 'SetProcessingPeriod', (['in'], wintypes.LPCWSTR, 'wszDeviceId'), (['in'], POINTER(c_longlong), 'pmftPeriod')),
            COMMETHOD([], HRESULT, 'GetShareMode', (['in'], wintypes.LPCWSTR, 'wszDeviceId'), (['out'], POINTER(c_void_p), 'pMode')),
            COMMETHOD([], HRESULT, 'SetShareMode', (['in'], wintypes.LPCWSTR, 'wszDeviceId'), (['in'], c_void_p, 'mode')),
            COMMETHOD([], HRESULT, 'GetPropertyValue', (['in'], wintypes.LPCWSTR, 'wszDeviceId'), (['in'], POINTER(c_void_p), 'key'), (['out'], POINTER(c_void_p), 'pv')),
            COMMETHOD([], HRESULT, 'SetPropertyValue', (['in'], wintypes.LPCWSTR, 'wszDeviceId'), (['in'], POINTER(c_void_p), 'key'), (['in'], POINTER(c_void_p), 'pv')),
            COMMETHOD([], HRESULT, 'SetDefaultEndpoint', (['in'], wintypes.LPCWSTR, 'wszDeviceId'), (['in'], wintypes.DWORD, 'role')),
            COMMETHOD([], HRESULT, 'SetEndpointVisibility', (['in'], wintypes.LPCWSTR, 'wszDeviceId'), (['in'], wintypes.BOOL, 'bVisible')),
        )

    CLSID_PolicyConfigVistaClient = GUID("{294935CE-F637-4E7C-A41B-AB255460B862}")
    _POLICY_CONFIG_DEFS = (IPolicyConfigVista, CLSID_PolicyConfigVistaClient)
    return _POLICY_CONFIG_DEFS


@contextmanager
def _com_context():
    # Hotkey callbacks arrive on a listener thread, which needs its own COM apartment
    comtypes.CoInitialize()
    try:
        yield
    finally:
        comtypes.CoUninitialize()


def _is_active(state):
    return getattr(state, 'value', state) == DEVICE_STATE_ACTIVE


class WindowsDeviceBackend(DeviceBackend):

    def __init__(self, switch_communications_role=False):
        if AudioUtilities is None:
            logger.error("pycaw library not available. Install with: pip install pycaw")
            raise ImportError("pycaw library is required for audio device management")
        self._roles = [ROLE_CONSOLE, ROLE_MULTIMEDIA]
        if switch_communications_role:
            self._roles.append(ROLE_COMMUNICATIONS)

    def enumerate(self) -> List[AudioDevice]:
        # COM pointers must be released inside the apartment, so the work happens in helpers
        with _com_context():
            try:
                return self._list_render_devices()
            except comtypes.COMError as e:
                raise DeviceBackendError(f"Error listing audio devices: {e}") from e

    def set_default(self, device: AudioDevice) -> bool:
        if not device.id:
            logger.warning(f"Device has no endpoint id: {device.friendly_name}")
            return False
        with _com_context():
            try:
                return self._set_default_endpoint(device)
            except comtypes.COMError as e:
                raise DeviceBackendError(f"{e}") from e

    def _list_render_devices(self) -> List[AudioDevice]:
        default_id = self._get_default_device_id()
        devices = []
        for device in AudioUtilities.GetAllDevices():
            device_id = getattr(device, 'id', None) or ''
            if not device_id.startswith(RENDER_DEVICE_ID_PREFIX):
                continue
            if not _is_active(getattr(device, 'state', None)):
                continue
            name = getattr(device, 'FriendlyName', '') or ''
            if not name:
                logger.debug(f"Skipping device without a friendly name: {device_id}")
                continue
            devices.append(AudioDevice(id=device_id, friendly_name=name, is_default=device_id == default_id))
        logger.debug(f"Found {len(devices)} active audio output devices")
        return devices

    def _get_default_device_id(self) -> Optional[str]:
        speakers = AudioUtilities.GetSpeakers()
        if speakers is None:
            return None
        # Newer pycaw versions wrap the endpoint, older ones return the raw IMMDevice
        device_id = getattr(speakers, 'id', None)
        if device_id is None and hasattr(speakers, 'GetId'):
            device_id = speakers.GetId()
        return device_id

    def _set_default_endpoint(self, device: AudioDevice) -> bool:
        # Unplugged or disabled endpoints are declined rather than attempted
        active_ids = {d.id for d in self._list_render_devices()}
        if device.id not in active_ids:
            logger.warning(f"Device is no longer active: {device.friendly_name}")
            return False

        IPolicyConfig, CLSID_PolicyConfigClient = _get_policy_config_defs()
        policy = CoCreateInstance(CLSID_PolicyConfigClient, interface=IPolicyConfig, clsctx=CLSCTX_ALL)
        for role in self._roles:
            policy.SetDefaultEndpoint(device.id, role)
        logger.info(f"Set default endpoint to {device.friendly_name}")
        return True
