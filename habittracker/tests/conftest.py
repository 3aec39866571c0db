import sys
from datetime import date
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from habittracker import create_app
from habittracker.core.errors import PersistenceError
from habittracker.core.store import HabitStore, JsonFileBackend

FIXED_TODAY = date(2024, 5, 15)


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (store, persistence, API)")


class MemoryBackend:
    """Backend that keeps the last snapshot in memory and can be told to fail."""

    def __init__(self, initial=None):
        self.saved = dict(initial or {})
        self.save_calls = 0
        self.fail = False

    def load(self):
        return dict(self.saved)

    def save(self, snapshot):
        self.save_calls += 1
        if self.fail:
            raise PersistenceError("disk full")
        self.saved = snapshot


@pytest.fixture()
def today():
    return FIXED_TODAY


@pytest.fixture()
def memory_backend():
    return MemoryBackend()


@pytest.fixture()
def store(memory_backend, today):
    return HabitStore(memory_backend, today=lambda: today)


@pytest.fixture()
def data_file(tmp_path):
    return tmp_path / "data.json"


@pytest.fixture()
def app(data_file, today):
    """Per-test app backed by a throwaway JSON snapshot and a fixed clock."""
    app = create_app("testing", HABITS_DATA_FILE=str(data_file))
    app.extensions["habit_store"].today = lambda: today
    yield app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def json_store(data_file, today):
    return HabitStore(JsonFileBackend(data_file), today=lambda: today)
