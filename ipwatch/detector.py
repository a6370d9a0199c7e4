"""
IPWatch Change Detector

Compares snapshots independently of enumeration order.
"""

import json
from typing import Sequence

from .network import AddressRecord


def canonical_form(addresses: Sequence[AddressRecord]) -> str:
    """Compact, order-independent serialization of a snapshot."""
    ordered = sorted(addresses, key=lambda record: (record.interface, record.ip_address))
    return json.dumps([record.to_dict() for record in ordered], separators=(",", ":"))


def has_changed(current: Sequence[AddressRecord], previous: Sequence[AddressRecord]) -> bool:
    """True if the two snapshots hold different (interface, address) pairs."""
    return canonical_form(current) != canonical_form(previous)
