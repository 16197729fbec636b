"""Utility modules for the SoundCycle application."""

from utils.app_info_cache import AppInfoCache
from utils.config import config
from utils.custom_formatter import CustomFormatter
from utils.globals import AppInfo, CycleOutcome, DeviceBackendType, Globals
from utils.logging_setup import get_logger

__all__ = [
    'AppInfo',
    'AppInfoCache',
    'config',
    'CustomFormatter',
    'CycleOutcome',
    'DeviceBackendType',
    'Globals',
    'get_logger',
]
