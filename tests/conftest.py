import pytest
import sys
from pathlib import Path

# Add the project root directory to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from soundcycle.available_devices import AvailableDevices
from soundcycle.cycling_engine import CyclingEngine
from soundcycle.selection_store import SelectionStore
from soundcycle.switcher_settings import SwitcherSettings
from tests.utils.fakes import FakeDeviceBackend, RecordingAppActions
from utils.app_info_cache import AppInfoCache


@pytest.fixture
def cache_path(tmp_path):
    return str(tmp_path / "app_info_cache.json")


@pytest.fixture
def cache(cache_path):
    return AppInfoCache(cache_path)


@pytest.fixture
def settings(cache):
    return SwitcherSettings(cache)


@pytest.fixture
def selection_store(settings):
    return SelectionStore(settings)


@pytest.fixture
def backend():
    """Backend reporting devices A, B and C, none of them default."""
    return FakeDeviceBackend(["A", "B", "C"])


@pytest.fixture
def recorder():
    return RecordingAppActions()


@pytest.fixture
def app_actions(recorder):
    return recorder.as_app_actions()


@pytest.fixture
def available_devices(backend, selection_store):
    return AvailableDevices(backend, selection_store)


@pytest.fixture
def engine(backend, available_devices, settings, app_actions):
    return CyclingEngine(backend, available_devices, settings, app_actions)


@pytest.fixture
def select_all(selection_store):
    """Select A, B and C in that order."""
    for name in ["A", "B", "C"]:
        selection_store.set_selected(name, True)
    return selection_store
