import os

import pytest

# Anything that builds the app from the environment stays off the real filesystem
os.environ.setdefault("PERSISTENCE_BACKEND", "memory")

from .helpers import RecordingStorage, ticking_clock  # noqa: E402


@pytest.fixture()
def storage() -> RecordingStorage:
    return RecordingStorage()


@pytest.fixture()
def clock():
    return ticking_clock()
