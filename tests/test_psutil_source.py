import socket
from types import SimpleNamespace
from unittest import mock

import pytest

from ipwatch.network import PsutilNetworkSource


def _snic(family, address):
    return SimpleNamespace(family=family, address=address, netmask=None, broadcast=None, ptp=None)


@pytest.fixture
def fake_addrs():
    return {
        "WLAN": [
            _snic(socket.AF_INET, "192.168.1.5"),
            _snic(socket.AF_INET6, "fe80::1%12"),
            _snic(-1, "aa:bb:cc:dd:ee:ff"),
        ],
        "Ethernet": [_snic(socket.AF_INET, "10.0.0.7")],
    }


def test_list_addresses_keeps_only_ip_families(fake_addrs):
    source = PsutilNetworkSource()
    with mock.patch("ipwatch.network.psutil_source.psutil.net_if_addrs", return_value=fake_addrs), \
            mock.patch("ipwatch.network.psutil_source.socket.if_nametoindex", side_effect=[12, 3]):
        pairs = source.list_addresses()

    assert pairs == [(12, "192.168.1.5"), (12, "fe80::1"), (3, "10.0.0.7")]
    assert source.interface_name(12) == "WLAN"
    assert source.interface_name(3) == "Ethernet"


def test_interface_without_os_index_gets_placeholder(fake_addrs):
    source = PsutilNetworkSource()
    with mock.patch("ipwatch.network.psutil_source.psutil.net_if_addrs", return_value=fake_addrs), \
            mock.patch("ipwatch.network.psutil_source.socket.if_nametoindex", side_effect=OSError):
        pairs = source.list_addresses()

    assert pairs[-1] == (-2, "10.0.0.7")
    assert source.interface_name(-2) == "Ethernet"


def test_unknown_index_raises_lookup_error():
    with pytest.raises(LookupError):
        PsutilNetworkSource().interface_name(42)
