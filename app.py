import argparse
import sys

from lib.hotkeys import split_combination
from soundcycle import Switcher, SwitcherSettings, DeviceBackendError, get_device_backend
from ui.app_actions import AppActions
from utils.app_info_cache import AppInfoCache
from utils.config import config
from utils.globals import DeviceBackendType
from utils.logger import set_debug
from utils.logging_setup import get_logger
from utils.persistent_data_manager import PersistentDataManager

logger = get_logger(__name__)


def build_console_app_actions(notify_on_switch=True):
    def switch_succeeded(friendly_name):
        if notify_on_switch:
            print(f"Audio device changed: {friendly_name}")

    def no_devices_configured():
        print("No devices to select. Select at least one connected device with: app.py select NAME")

    def error(message):
        print(f"Error: {message}", file=sys.stderr)

    def selection_changed(new_list):
        print("Selected devices: " + (", ".join(new_list) if new_list else "(none)"))

    return AppActions({
        "switch_succeeded": switch_succeeded,
        "no_devices_configured": no_devices_configured,
        "error": error,
        "selection_changed": selection_changed,
    })


def list_devices(switcher, args):
    try:
        devices = switcher.list_devices()
    except DeviceBackendError as e:
        switcher.app_actions.error(str(e))
        return 1
    if len(devices) == 0:
        print("No audio output devices found")
    for device, selected in devices:
        marker = "x" if selected else " "
        suffix = " (default)" if device.is_default else ""
        print(f"[{marker}] {device.friendly_name}{suffix}")
    return 0


def select_device(switcher, args):
    try:
        changed = switcher.set_device_selection(args.name, True)
    except ValueError as e:
        switcher.app_actions.error(str(e))
        return 1
    if not changed:
        print(f"Already selected: {args.name}")
    return 0


def deselect_device(switcher, args):
    try:
        changed = switcher.set_device_selection(args.name, False)
    except ValueError as e:
        switcher.app_actions.error(str(e))
        return 1
    if not changed:
        print(f"Not selected: {args.name}")
    return 0


def cycle_device(switcher, args):
    return 0 if switcher.cycle() else 1


def switch_device(switcher, args):
    return 0 if switcher.switch_to(args.name) else 1


def hotkey(switcher, args):
    if args.combination is None:
        key, modifier_keys = switcher.get_hotkey_combination()
        print(f"{modifier_keys}+{key}" if modifier_keys else key)
        return 0
    try:
        key, modifier_keys = split_combination(args.combination)
        switcher.set_hotkey_combination(key, modifier_keys)
    except ValueError as e:
        switcher.app_actions.error(str(e))
        return 1
    print(f"Hotkey set to {args.combination}")
    return 0


def listen(switcher, args):
    if not switcher.reattach_hotkey():
        return 1
    key, modifier_keys = switcher.get_hotkey_combination()
    print(f"Press {modifier_keys}+{key} to cycle audio devices. Press Ctrl+C to quit.")
    try:
        while switcher.hotkey_handler.is_attached():
            switcher.hotkey_handler.join(1.0)
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        switcher.shutdown()
        PersistentDataManager.store(switcher.settings)
    return 0


COMMANDS = {
    "list": list_devices,
    "select": select_device,
    "deselect": deselect_device,
    "cycle": cycle_device,
    "switch": switch_device,
    "hotkey": hotkey,
    "listen": listen,
}


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Select audio output devices and cycle the system default among them.")
    parser.add_argument("--backend", choices=[t.value for t in DeviceBackendType], default=None,
                        help="Device backend to use (defaults to the device_backend config value)")
    parser.add_argument("--cache", default=None, help="Path to the settings cache file")
    parser.add_argument("--debug", action="store_true", help="Log debug output to the console")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List output devices and whether they are selected")
    select_parser = subparsers.add_parser("select", help="Add a device to the cycle")
    select_parser.add_argument("name")
    deselect_parser = subparsers.add_parser("deselect", help="Remove a device from the cycle")
    deselect_parser.add_argument("name")
    subparsers.add_parser("cycle", help="Switch to the next selected device")
    switch_parser = subparsers.add_parser("switch", help="Switch to a selected device by name")
    switch_parser.add_argument("name")
    hotkey_parser = subparsers.add_parser("hotkey", help="Show or set the cycling hotkey, e.g. ctrl+alt+f11")
    hotkey_parser.add_argument("combination", nargs="?", default=None)
    subparsers.add_parser("listen", help="Cycle devices whenever the hotkey is pressed")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    set_debug(config.debug or args.debug)

    settings = SwitcherSettings(AppInfoCache(args.cache))
    PersistentDataManager.load(settings)
    app_actions = build_console_app_actions(config.notify_on_switch)

    backend_type = DeviceBackendType.get(args.backend) if args.backend else config.get_device_backend_type()
    try:
        backend = get_device_backend(backend_type, config)
    except ImportError as e:
        app_actions.error(str(e))
        return 1

    switcher = Switcher(
        settings,
        backend,
        app_actions,
        default_hotkey_key=config.default_hotkey_key,
        default_hotkey_modifier_keys=config.default_hotkey_modifier_keys,
    )
    return COMMANDS[args.command](switcher, args)


if __name__ == "__main__":
    sys.exit(main())
