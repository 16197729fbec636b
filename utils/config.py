import json
import os

from utils.globals import DeviceBackendType, Globals
from utils.logging_setup import get_logger

# Get logger for this module
logger = get_logger(__name__)


class Config:
    CONFIGS_DIR_LOC = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "configs")

    def __init__(self, config_path=None):
        self.dict = {}
        self.device_backend = DeviceBackendType.AUTO.value
        self.default_hotkey_key = Globals.DEFAULT_HOTKEY_KEY
        self.default_hotkey_modifier_keys = Globals.DEFAULT_HOTKEY_MODIFIER_KEYS
        self.notify_on_switch = True
        self.switch_communications_role = False
        self.pactl_timeout_seconds = 5
        self.debug = False

        self.config_path = config_path

        if self.config_path is None:
            configs = []
            if os.path.isdir(Config.CONFIGS_DIR_LOC):
                configs = [f.path for f in os.scandir(Config.CONFIGS_DIR_LOC) if f.is_file() and f.path.endswith(".json")]
            for c in configs:
                if os.path.basename(c) == "config.json":
                    self.config_path = c
                    break
                elif os.path.basename(c) != "config_example.json":
                    self.config_path = c

            if self.config_path is None:
                self.config_path = os.path.join(Config.CONFIGS_DIR_LOC, "config_example.json")

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                self.dict = json.load(f)
        except Exception as e:
            logger.error(e)
            logger.warning("Unable to load config. Ensure config.json file settings are correct.")

        self.set_values(str,
            "device_backend",
            "default_hotkey_key",
            "default_hotkey_modifier_keys",
        )
        self.set_values(int,
            "pactl_timeout_seconds",
        )
        self.set_values(bool,
            "notify_on_switch",
            "switch_communications_role",
            "debug",
        )

        try:
            DeviceBackendType.get(self.device_backend)
        except Exception as e:
            logger.warning(f"{e} - falling back to {DeviceBackendType.AUTO.value}")
            self.device_backend = DeviceBackendType.AUTO.value

    def get_device_backend_type(self):
        return DeviceBackendType.get(self.device_backend).resolve()

    def set_values(self, type, *names):
        for name in names:
            if name not in self.dict:
                continue
            if type:
                try:
                    setattr(self, name, type(self.dict[name]))
                except Exception as e:
                    logger.error(e)
                    logger.warning(f"Failed to set {name} from config.json file. Ensure the value is set and of the correct type.")
            else:
                setattr(self, name, self.dict[name])


config = Config()
