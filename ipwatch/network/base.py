"""
IPWatch Network Base

Address record type and the abstract interface for querying the host's
network configuration.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Tuple

UNKNOWN_INTERFACE = "<Unknown Interface>"


@dataclass(frozen=True)
class AddressRecord:
    """One observed (interface, address) pair."""
    interface: str
    ip_address: str

    def to_dict(self) -> dict:
        return {"interface": self.interface, "ipAddress": self.ip_address}

    @classmethod
    def from_dict(cls, data: dict) -> "AddressRecord":
        """Build a record from its stored form. Raises ValueError on a bad shape."""
        if not isinstance(data, dict):
            raise ValueError(f"Address must be an object, got {type(data).__name__}")

        interface = data.get("interface") or UNKNOWN_INTERFACE
        ip_address = data.get("ipAddress", "")
        if not isinstance(interface, str) or not isinstance(ip_address, str):
            raise ValueError(f"Address fields must be strings: {data!r}")

        return cls(interface=interface, ip_address=ip_address)

    def __str__(self) -> str:
        return f"{self.interface}: {self.ip_address}"


class NetworkSource(ABC):
    """
    Abstract source of the host's assigned IP addresses.

    Implementations enumerate addresses together with the index of the
    adapter that owns them, and resolve adapter indexes to display names.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of this source (e.g., 'psutil')."""
        pass

    @abstractmethod
    def list_addresses(self) -> List[Tuple[int, str]]:
        """
        List all assigned IPv4/IPv6 addresses.

        Returns:
            (interface_index, address) pairs in OS enumeration order

        Raises:
            Any exception if the OS enumeration itself fails.
        """
        pass

    @abstractmethod
    def interface_name(self, index: int) -> str:
        """
        Resolve an adapter index to its display name.

        Raises:
            LookupError if the adapter no longer exists.
        """
        pass
