"""
IPWatch Snapshot Reader

Produces the current set of "interesting" addresses on the host.
"""

import logging
from typing import List

from .base import UNKNOWN_INTERFACE, AddressRecord, NetworkSource

logger = logging.getLogger(__name__)


class SnapshotError(Exception):
    """Exception raised when the host's addresses cannot be enumerated."""
    pass


def is_interesting(ip_address: str) -> bool:
    """
    Check whether an address should be tracked.

    Link-local IPv6 (fe80::/10), IPv6 loopback and IPv4 loopback (127.x)
    are excluded by textual match.
    """
    lowered = ip_address.lower()
    if lowered.startswith("fe80"):
        return False
    if lowered == "::1":
        return False
    if lowered.startswith("127."):
        return False
    return True


def read_snapshot(source: NetworkSource) -> List[AddressRecord]:
    """
    Read the current addresses from a network source.

    Unresolvable adapters become UNKNOWN_INTERFACE; only a failure of the
    enumeration itself raises SnapshotError.
    """
    try:
        pairs = source.list_addresses()
    except Exception as e:
        raise SnapshotError(f"Failed to enumerate IP addresses via {source.name}: {e}") from e

    records = []
    for index, ip_address in pairs:
        if not is_interesting(ip_address):
            continue

        try:
            interface = source.interface_name(index) or UNKNOWN_INTERFACE
        except Exception as e:
            logger.debug(f"Could not resolve adapter {index} for {ip_address}: {e}")
            interface = UNKNOWN_INTERFACE

        records.append(AddressRecord(interface=interface, ip_address=ip_address))

    return records
