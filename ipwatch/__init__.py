"""
IPWatch - records changes to the host's IP address assignments.
"""

from .history import LogEntry, LogStore, LogStoreError
from .monitor import IPMonitor
from .network import UNKNOWN_INTERFACE, AddressRecord, NetworkSource, SnapshotError

__all__ = [
    "UNKNOWN_INTERFACE",
    "AddressRecord",
    "IPMonitor",
    "LogEntry",
    "LogStore",
    "LogStoreError",
    "NetworkSource",
    "SnapshotError",
]
