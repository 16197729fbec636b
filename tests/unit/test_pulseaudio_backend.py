import json
import subprocess

import pytest

from soundcycle.audio_device import AudioDevice
from soundcycle.device_backend import DeviceBackendError
from soundcycle.pulseaudio_backend import PulseAudioDeviceBackend

SINKS = [
    {"index": 47, "name": "alsa_output.pci-0000_00_1f.3.analog-stereo", "description": "Built-in Audio Analog Stereo"},
    {"index": 52, "name": "bluez_output.00_1B_66_AA_BB_CC.1", "description": "Headphones"},
    {"index": 60, "name": "null_sink"},
]


class FakePactl:
    """Stands in for subprocess.run, answering pactl invocations."""
    def __init__(self, sinks=None, default_sink="", set_returncode=0):
        self.sinks_output = json.dumps(sinks if sinks is not None else SINKS)
        self.default_sink = default_sink
        self.set_returncode = set_returncode
        self.calls = []

    def __call__(self, cmd, capture_output=True, text=True, timeout=None):
        self.calls.append(cmd)
        args = cmd[1:]
        if args == ["--format=json", "list", "sinks"]:
            return subprocess.CompletedProcess(cmd, 0, stdout=self.sinks_output, stderr="")
        if args == ["get-default-sink"]:
            return subprocess.CompletedProcess(cmd, 0, stdout=self.default_sink + "\n", stderr="")
        if args[0] == "set-default-sink":
            stderr = "" if self.set_returncode == 0 else "Failure: No such entity"
            return subprocess.CompletedProcess(cmd, self.set_returncode, stdout="", stderr=stderr)
        raise AssertionError(f"Unexpected pactl call: {cmd}")


@pytest.fixture
def pactl(monkeypatch):
    fake = FakePactl(default_sink="bluez_output.00_1B_66_AA_BB_CC.1")
    monkeypatch.setattr("soundcycle.pulseaudio_backend.subprocess.run", fake)
    return fake


@pytest.mark.unit
class TestPulseAudioDeviceBackend:
    def test_enumerate_sinks(self, pactl):
        devices = PulseAudioDeviceBackend().enumerate()
        assert [d.friendly_name for d in devices] == ["Built-in Audio Analog Stereo", "Headphones", "null_sink"]
        assert [d.is_default for d in devices] == [False, True, False]
        assert devices[1].id == "bluez_output.00_1B_66_AA_BB_CC.1"

    def test_sinks_without_name_are_skipped(self, monkeypatch):
        fake = FakePactl(sinks=[{"description": "Broken"}, {"name": "sink", "description": "Sink"}])
        monkeypatch.setattr("soundcycle.pulseaudio_backend.subprocess.run", fake)
        assert [d.friendly_name for d in PulseAudioDeviceBackend().enumerate()] == ["Sink"]

    def test_set_default(self, pactl):
        device = AudioDevice("null_sink", "null_sink")
        assert PulseAudioDeviceBackend(pactl_path="/usr/bin/pactl").set_default(device) is True
        assert pactl.calls[-1] == ["/usr/bin/pactl", "set-default-sink", "null_sink"]

    def test_set_default_declined(self, monkeypatch):
        fake = FakePactl(set_returncode=1)
        monkeypatch.setattr("soundcycle.pulseaudio_backend.subprocess.run", fake)
        assert PulseAudioDeviceBackend().set_default(AudioDevice("gone", "Gone")) is False

    def test_unparseable_sink_list(self, monkeypatch):
        fake = FakePactl()
        fake.sinks_output = "Sink #47"
        monkeypatch.setattr("soundcycle.pulseaudio_backend.subprocess.run", fake)
        with pytest.raises(DeviceBackendError):
            PulseAudioDeviceBackend().enumerate()

    def test_missing_pactl(self, monkeypatch):
        def run(*args, **kwargs):
            raise FileNotFoundError("pactl")
        monkeypatch.setattr("soundcycle.pulseaudio_backend.subprocess.run", run)
        with pytest.raises(DeviceBackendError, match="pactl not found"):
            PulseAudioDeviceBackend().enumerate()

    def test_pactl_timeout(self, monkeypatch):
        def run(cmd, **kwargs):
            raise subprocess.TimeoutExpired(cmd, kwargs.get("timeout"))
        monkeypatch.setattr("soundcycle.pulseaudio_backend.subprocess.run", run)
        with pytest.raises(DeviceBackendError, match="timed out"):
            PulseAudioDeviceBackend(timeout_seconds=2).set_default(AudioDevice("sink", "Sink"))

    def test_failed_listing(self, monkeypatch):
        def run(cmd, **kwargs):
            return subprocess.CompletedProcess(cmd, 1, stdout="", stderr="Connection failure")
        monkeypatch.setattr("soundcycle.pulseaudio_backend.subprocess.run", run)
        with pytest.raises(DeviceBackendError, match="Connection failure"):
            PulseAudioDeviceBackend().enumerate()
