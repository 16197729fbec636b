"""UI package for the SoundCycle application."""

from ui.app_actions import AppActions

__all__ = [
    'AppActions',
]
