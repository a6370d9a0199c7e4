"""
IPWatch Network Package

Reads the host's current IP address assignments.
"""

from .base import UNKNOWN_INTERFACE, AddressRecord, NetworkSource
from .psutil_source import PsutilNetworkSource
from .snapshot import SnapshotError, is_interesting, read_snapshot

__all__ = [
    "UNKNOWN_INTERFACE",
    "AddressRecord",
    "NetworkSource",
    "PsutilNetworkSource",
    "SnapshotError",
    "is_interesting",
    "read_snapshot",
]
