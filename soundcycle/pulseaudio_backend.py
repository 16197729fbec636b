"""
PulseAudio / PipeWire output device backend.

Uses the pactl command line tool, which is available on PulseAudio systems and
on PipeWire systems running pipewire-pulse. Sinks are identified by their sink
name and shown by their description.
"""

import json
import subprocess
from typing import List

from soundcycle.audio_device import AudioDevice
from soundcycle.device_backend import DeviceBackend, DeviceBackendError
from utils.logging_setup import get_logger

logger = get_logger(__name__)


class PulseAudioDeviceBackend(DeviceBackend):

    def __init__(self, timeout_seconds=5, pactl_path="pactl"):
        self._timeout_seconds = timeout_seconds
        self._pactl_path = pactl_path

    def enumerate(self) -> List[AudioDevice]:
        output = self._run_pactl(["--format=json", "list", "sinks"]).stdout
        try:
            sinks = json.loads(output) if output.strip() else []
        except json.JSONDecodeError as e:
            raise DeviceBackendError(f"Unable to parse pactl sink list: {e}") from e

        default_sink = self.get_default_sink_name()
        devices = []
        for sink in sinks:
            name = sink.get("name")
            if not name:
                continue
            devices.append(AudioDevice(
                id=name,
                friendly_name=sink.get("description") or name,
                is_default=name == default_sink,
            ))
        logger.debug(f"Found {len(devices)} PulseAudio sinks")
        return devices

    def get_default_sink_name(self):
        return self._run_pactl(["get-default-sink"]).stdout.strip() or None

    def set_default(self, device: AudioDevice) -> bool:
        result = self._run_pactl(["set-default-sink", device.id], check=False)
        if result.returncode != 0:
            logger.warning(f"pactl declined switching to {device.friendly_name}: {result.stderr.strip()}")
            return False
        logger.info(f"Set default sink to {device.id}")
        return True

    def _run_pactl(self, args, check=True):
        cmd = [self._pactl_path]
        cmd.extend(args)
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self._timeout_seconds,
            )
        except FileNotFoundError as e:
            raise DeviceBackendError(f"pactl not found: {self._pactl_path}") from e
        except subprocess.TimeoutExpired as e:
            raise DeviceBackendError(f"pactl timed out after {self._timeout_seconds}s: {' '.join(cmd)}") from e
        if check and result.returncode != 0:
            raise DeviceBackendError(f"pactl {' '.join(args)} failed: {result.stderr.strip()}")
        return result
