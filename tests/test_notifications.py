from unittest import mock

import pytest
import requests

from ipwatch.network import AddressRecord
from ipwatch.notifications import Notifier

ADDRESSES = [AddressRecord("WLAN", "192.168.1.6")]


@pytest.mark.parametrize("url, expected", [
    ("https://discord.com/api/webhooks/1/abc", "discord"),
    ("https://hooks.slack.com/services/T/B/X", "slack"),
    ("https://example.com/hook", "generic"),
])
def test_detects_webhook_type(url, expected):
    assert Notifier(url).webhook_type == expected


def test_generic_payload():
    notifier = Notifier("https://example.com/hook")

    with mock.patch("ipwatch.notifications.requests.post") as post:
        post.return_value.status_code = 200
        assert notifier.notify_ip_changed("host1", ADDRESSES) is True

    body = post.call_args.kwargs["json"]
    assert body["event"] == "ip_changed"
    assert body["addresses"] == [{"interface": "WLAN", "ipAddress": "192.168.1.6"}]
    assert post.call_args.kwargs["timeout"] == 10


def test_discord_payload_lists_addresses():
    notifier = Notifier("https://discord.com/api/webhooks/1/abc")

    with mock.patch("ipwatch.notifications.requests.post") as post:
        post.return_value.status_code = 204
        assert notifier.notify_ip_changed("host1", ADDRESSES) is True

    embed = post.call_args.kwargs["json"]["embeds"][0]
    assert "192.168.1.6" in embed["fields"][0]["value"]


def test_slack_error_payload():
    notifier = Notifier("https://hooks.slack.com/services/T/B/X")

    with mock.patch("ipwatch.notifications.requests.post") as post:
        post.return_value.status_code = 200
        notifier.notify_error("host1", "enumeration failed")

    blocks = post.call_args.kwargs["json"]["blocks"]
    assert "enumeration failed" in blocks[-1]["text"]["text"]


def test_rejected_status_returns_false():
    notifier = Notifier("https://example.com/hook")

    with mock.patch("ipwatch.notifications.requests.post") as post:
        post.return_value.status_code = 500
        assert notifier.notify_ip_changed("host1", ADDRESSES) is False


def test_network_error_is_swallowed():
    notifier = Notifier("https://example.com/hook")

    with mock.patch("ipwatch.notifications.requests.post", side_effect=requests.ConnectionError("down")):
        assert notifier.notify_ip_changed("host1", ADDRESSES) is False
