from ipwatch.formatter import (
    DEFAULT_PRIORITY,
    UNKNOWN_PRIORITY,
    build_priorities,
    interface_priority,
    render_table,
    sort_for_display,
)
from ipwatch.network import UNKNOWN_INTERFACE, AddressRecord


def test_priorities_of_well_known_names():
    assert interface_priority("WLAN") == 1
    assert interface_priority("Ethernet") == 2
    assert interface_priority("vEthernet (Default Switch)") == 3
    assert interface_priority("Tailscale") == DEFAULT_PRIORITY
    assert interface_priority(UNKNOWN_INTERFACE) == UNKNOWN_PRIORITY


def test_blank_name_sorts_as_unknown():
    assert interface_priority("  ") == UNKNOWN_PRIORITY


def test_sort_order_and_input_untouched():
    addresses = [
        AddressRecord(UNKNOWN_INTERFACE, "10.9.9.9"),
        AddressRecord("Tailscale", "100.64.0.1"),
        AddressRecord("vEthernet (Default Switch)", "172.20.0.1"),
        AddressRecord("Ethernet", "10.0.0.7"),
        AddressRecord("WLAN", "192.168.1.5"),
    ]
    original = list(addresses)

    ordered = sort_for_display(addresses)

    assert [r.interface for r in ordered] == [
        "WLAN", "Ethernet", "vEthernet (Default Switch)", "Tailscale", UNKNOWN_INTERFACE,
    ]
    assert addresses == original


def test_custom_priority_names():
    priorities = build_priorities(wlan_name="Wi-Fi", ethernet_name="eth0", vswitch_name="virbr0")
    addresses = [AddressRecord("virbr0", "192.168.122.1"), AddressRecord("eth0", "10.0.0.7"),
                 AddressRecord("Wi-Fi", "192.168.1.5")]

    ordered = sort_for_display(addresses, priorities)

    assert [r.interface for r in ordered] == ["Wi-Fi", "eth0", "virbr0"]


def test_render_table():
    table = render_table([AddressRecord("", "10.9.9.9"), AddressRecord("WLAN", "192.168.1.5")])

    lines = table.splitlines()
    assert lines[0].split() == ["Interface", "IP", "Address"]
    assert lines[2].split() == ["WLAN", "192.168.1.5"]
    assert lines[3].startswith(UNKNOWN_INTERFACE)
    assert lines[3].endswith("10.9.9.9")


def test_render_empty_table_has_headers_only():
    assert len(render_table([]).splitlines()) == 2
