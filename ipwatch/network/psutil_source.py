"""
IPWatch psutil Network Source

Reads interface addresses through psutil.
"""

import logging
import socket
from typing import Dict, List, Tuple

import psutil

from .base import NetworkSource

logger = logging.getLogger(__name__)


class PsutilNetworkSource(NetworkSource):
    """Network source backed by psutil.net_if_addrs()."""

    def __init__(self):
        self._names: Dict[int, str] = {}

    @property
    def name(self) -> str:
        return "psutil"

    def _index_for(self, interface: str, fallback: int) -> int:
        """OS interface index, or a negative placeholder when the OS has none."""
        try:
            return socket.if_nametoindex(interface)
        except (OSError, AttributeError):
            return -fallback

    def list_addresses(self) -> List[Tuple[int, str]]:
        """Enumerate AF_INET/AF_INET6 addresses of every adapter."""
        addresses = []
        self._names = {}

        for position, (interface, snics) in enumerate(psutil.net_if_addrs().items(), start=1):
            index = self._index_for(interface, position)
            self._names[index] = interface

            for snic in snics:
                if snic.family not in (socket.AF_INET, socket.AF_INET6):
                    continue
                # Drop the zone suffix psutil appends to scoped IPv6 addresses
                address = snic.address.split("%", 1)[0]
                addresses.append((index, address))

        logger.debug(f"Enumerated {len(addresses)} address(es) on {len(self._names)} adapter(s)")
        return addresses

    def interface_name(self, index: int) -> str:
        """Resolve an adapter index seen during the last enumeration."""
        try:
            return self._names[index]
        except KeyError:
            raise LookupError(f"No adapter with index {index}")
