import pytest

from games.tests.helpers import EntryRecorder


@pytest.fixture
def recorder() -> EntryRecorder:
    return EntryRecorder()
