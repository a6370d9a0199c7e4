from datetime import datetime
from typing import Dict, List, Optional, Tuple

import pytest

from ipwatch.diagnostics import DiagnosticLog
from ipwatch.history import LogStore
from ipwatch.monitor import IPMonitor
from ipwatch.network import NetworkSource


class FakeNetworkSource(NetworkSource):
    """In-memory network source; set `pairs`/`names` between calls."""

    def __init__(self, pairs: Optional[List[Tuple[int, str]]] = None,
                 names: Optional[Dict[int, str]] = None):
        self.pairs = pairs or []
        self.names = names or {}
        self.error: Optional[Exception] = None

    @property
    def name(self) -> str:
        return "fake"

    def list_addresses(self):
        if self.error:
            raise self.error
        return list(self.pairs)

    def interface_name(self, index):
        if index not in self.names:
            raise LookupError(index)
        return self.names[index]

    def set_snapshot(self, *records: Tuple[str, str]) -> None:
        """Replace the snapshot with (interface, ip) pairs."""
        self.names = {}
        self.pairs = []
        for i, (interface, ip) in enumerate(records, start=1):
            self.names[i] = interface
            self.pairs.append((i, ip))


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class RecordingDiagnostics(DiagnosticLog):
    def __init__(self):
        super().__init__(enabled=False)
        self.messages: List[str] = []

    def report(self, message, exc=None):
        self.messages.append(f"{message}: {exc}" if exc else message)


@pytest.fixture
def source():
    return FakeNetworkSource()


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 5, 1, 8, 30, 0))


@pytest.fixture
def diagnostics():
    return RecordingDiagnostics()


@pytest.fixture
def store(tmp_path, diagnostics):
    return LogStore(tmp_path / "logs", diagnostics=diagnostics)


@pytest.fixture
def monitor(source, store, diagnostics, clock):
    return IPMonitor(source=source, store=store, diagnostics=diagnostics, clock=clock)
