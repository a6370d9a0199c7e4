"""
IPWatch Formatter

Renders address snapshots as a table with well-known adapters first.
"""

from typing import Dict, List, Optional, Sequence

from .network import UNKNOWN_INTERFACE, AddressRecord

DEFAULT_PRIORITY = 4
UNKNOWN_PRIORITY = 5


def build_priorities(wlan_name: str = "WLAN",
                     ethernet_name: str = "Ethernet",
                     vswitch_name: str = "vEthernet (Default Switch)") -> Dict[str, int]:
    """Priority map for the well-known adapter names."""
    return {
        wlan_name: 1,
        ethernet_name: 2,
        vswitch_name: 3,
        UNKNOWN_INTERFACE: UNKNOWN_PRIORITY,
    }


DEFAULT_PRIORITIES = build_priorities()


def display_name(interface: str) -> str:
    return interface if interface and interface.strip() else UNKNOWN_INTERFACE


def interface_priority(interface: str, priorities: Optional[Dict[str, int]] = None) -> int:
    """Sort priority of an adapter; unlisted names get DEFAULT_PRIORITY."""
    priorities = DEFAULT_PRIORITIES if priorities is None else priorities
    return priorities.get(display_name(interface), DEFAULT_PRIORITY)


def sort_for_display(addresses: Sequence[AddressRecord],
                     priorities: Optional[Dict[str, int]] = None) -> List[AddressRecord]:
    """Return a new list ordered by adapter priority (stable within a bucket)."""
    return sorted(addresses, key=lambda record: interface_priority(record.interface, priorities))


def render_table(addresses: Sequence[AddressRecord],
                 priorities: Optional[Dict[str, int]] = None) -> str:
    """Format addresses as a two-column text table."""
    rows = [(display_name(r.interface), r.ip_address) for r in sort_for_display(addresses, priorities)]

    headers = ("Interface", "IP Address")
    iface_width = max([len(headers[0])] + [len(name) for name, _ in rows])
    ip_width = max([len(headers[1])] + [len(ip) for _, ip in rows])

    lines = [
        f"{headers[0]:<{iface_width}}  {headers[1]:<{ip_width}}",
        f"{'-' * iface_width}  {'-' * ip_width}",
    ]
    for name, ip_address in rows:
        lines.append(f"{name:<{iface_width}}  {ip_address:<{ip_width}}")

    return "\n".join(line.rstrip() for line in lines)
