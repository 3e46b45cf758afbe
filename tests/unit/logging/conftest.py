import pytest

from mercury_p2p.logging import Entry, LogLevel


@pytest.fixture
def sample_entry() -> Entry:
    return Entry(
        message="Test log message",
        level=LogLevel.INFO,
    )
