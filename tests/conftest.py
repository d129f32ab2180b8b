import pytest

from govledger.events import RecordingSink
from govledger.state import Ledger


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def ledger(sink):
    """Fresh ledger constructed by alice."""
    return Ledger(owner="alice", sink=sink)
