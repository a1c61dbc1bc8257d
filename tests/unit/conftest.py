import pytest

from fakes import FakeCatalog, RecordingDisplay


@pytest.fixture
def catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture
def display() -> RecordingDisplay:
    return RecordingDisplay()
