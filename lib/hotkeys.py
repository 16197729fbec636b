"""
Global hotkey handling for the device cycling trigger.

Uses pynput so the hotkey works on Windows, macOS and Linux even when no
window of ours has focus.
"""

import platform
from typing import Callable, Optional
from utils.logging_setup import get_logger

logger = get_logger(__name__)


MODIFIER_ALIASES = {
    "ctrl": "<ctrl>",
    "control": "<ctrl>",
    "alt": "<alt>",
    "shift": "<shift>",
    "win": "<cmd>",
    "windows": "<cmd>",
    "cmd": "<cmd>",
    "super": "<cmd>",
}


def to_pynput_combination(key: str, modifier_keys: str) -> str:
    """
    Build a pynput hotkey string from a key and "+" separated modifiers.

    to_pynput_combination("F11", "Ctrl+Alt") -> "<ctrl>+<alt>+<f11>"
    """
    if not key or not key.strip():
        raise ValueError("No hotkey key given")
    parts = []
    for modifier in (modifier_keys or "").split("+"):
        modifier = modifier.strip().lower()
        if not modifier:
            continue
        if modifier not in MODIFIER_ALIASES:
            raise ValueError(f"Unknown modifier key: {modifier}")
        if MODIFIER_ALIASES[modifier] not in parts:
            parts.append(MODIFIER_ALIASES[modifier])
    key = key.strip().lower()
    parts.append(key if len(key) == 1 else f"<{key}>")
    return "+".join(parts)


def validate_combination(key: str, modifier_keys: str) -> str:
    """
    Build the pynput combination and check that pynput can parse it.

    Without pynput installed only the modifier and key names are checked.
    Raises ValueError for an invalid combination.
    """
    combination = to_pynput_combination(key, modifier_keys)
    try:
        from pynput import keyboard
    except ImportError:
        logger.debug("pynput not installed, skipping hotkey parse check")
        return combination
    try:
        keyboard.HotKey.parse(combination)
    except Exception as e:
        raise ValueError(f"Invalid hotkey combination {modifier_keys}+{key}: {e}") from e
    return combination


def split_combination(combination: str):
    """Split "ctrl+alt+f11" into ("f11", "ctrl+alt")."""
    parts = [part.strip() for part in combination.split("+") if part.strip()]
    if len(parts) == 0:
        raise ValueError(f"Invalid hotkey combination: {combination!r}")
    return parts[-1], "+".join(parts[:-1])


class HotkeyHandler:
    """Runs a callback whenever the registered global hotkey is pressed."""

    def __init__(self, callback: Callable, error_callback: Optional[Callable[[str], None]] = None):
        """
        Args:
            callback: Function to call when the hotkey is pressed
            error_callback: Function called with a message when registration or the callback fails
        """
        self.callback = callback
        self.error_callback = error_callback
        self.combination = None
        self._listener = None

    def attach(self, key: str, modifier_keys: str) -> bool:
        """
        Register the hotkey, replacing any previously registered one.

        Returns:
            True if the listener was started, False otherwise
        """
        self.detach()
        try:
            combination = to_pynput_combination(key, modifier_keys)
            from pynput import keyboard
            keyboard.HotKey.parse(combination)
            self._listener = keyboard.GlobalHotKeys({combination: self._on_activate})
            self._listener.start()
            self.combination = combination
            logger.info(f"Hotkey {combination} registered for {platform.system()} (using pynput)")
            return True
        except ImportError:
            logger.warning("Hotkey support requires pynput library.")
            logger.warning("Install with: pip install pynput")
            self._report_error("Hotkey support requires the pynput library")
            return False
        except Exception as e:
            logger.warning(f"Failed to register hotkey {modifier_keys}+{key}: {e}")
            self._report_error(f"Failed to register hotkey: {e}")
            return False

    def detach(self):
        if self._listener is not None:
            self._listener.stop()
            self._listener = None
            logger.debug(f"Hotkey {self.combination} unregistered")
        self.combination = None

    def is_attached(self):
        return self._listener is not None and self._listener.is_alive()

    def join(self, timeout=None):
        """Block until the listener stops."""
        if self._listener is not None:
            self._listener.join(timeout)

    def _on_activate(self):
        try:
            self.callback()
        except Exception as e:
            logger.error(f"Error handling hotkey: {e}")
            self._report_error(str(e))

    def _report_error(self, message):
        if self.error_callback is not None:
            self.error_callback(message)
