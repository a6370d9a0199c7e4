"""
IPWatch Notifications

Optional webhook notifications for IP address changes.
Supports Discord, Slack, and generic JSON webhooks.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Sequence

import requests

from .network import AddressRecord

logger = logging.getLogger(__name__)


class NotificationType(Enum):
    """Type of notification event."""
    IP_CHANGED = "ip_changed"
    ERROR = "error"


@dataclass
class NotificationPayload:
    """Payload for a notification."""
    type: NotificationType
    title: str
    message: str
    addresses: List[AddressRecord] = field(default_factory=list)
    error: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)


class Notifier:
    """
    Sends webhook notifications for IPWatch events.
    
    Auto-detects webhook type based on URL:
    - Discord: discord.com/api/webhooks
    - Slack: hooks.slack.com
    - Generic: any other URL (sends JSON)
    """
    
    def __init__(self, webhook_url: str, timeout: float = 10):
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.webhook_type = self._detect_webhook_type()
        logger.debug(f"Notifications enabled ({self.webhook_type})")
    
    def _detect_webhook_type(self) -> str:
        """Detect webhook type from URL."""
        url_lower = self.webhook_url.lower()
        
        if "discord.com/api/webhooks" in url_lower:
            return "discord"
        elif "hooks.slack.com" in url_lower:
            return "slack"
        else:
            return "generic"
    
    def send(self, payload: NotificationPayload) -> bool:
        """Send a notification. Never raises."""
        try:
            if self.webhook_type == "discord":
                data = self._discord_body(payload)
                ok_codes = (200, 204)
            elif self.webhook_type == "slack":
                data = self._slack_body(payload)
                ok_codes = (200,)
            else:
                data = self._generic_body(payload)
                ok_codes = (200, 201, 204)
            
            response = requests.post(self.webhook_url, json=data, timeout=self.timeout)
            if response.status_code not in ok_codes:
                logger.warning(f"Notification rejected with HTTP {response.status_code}")
                return False
            return True
                
        except Exception as e:
            logger.error(f"Failed to send notification: {e}")
            return False
    
    @staticmethod
    def _address_lines(addresses: Sequence[AddressRecord]) -> str:
        return "\n".join(f"{a.interface}: {a.ip_address}" for a in addresses) or "(none)"
    
    def _discord_body(self, payload: NotificationPayload) -> dict:
        color = 0xFF0000 if payload.type == NotificationType.ERROR else 0x0099FF
        embed = {
            "title": payload.title,
            "description": payload.message,
            "color": color,
            "timestamp": payload.timestamp.isoformat(),
            "footer": {"text": "IPWatch"}
        }
        
        fields = []
        if payload.addresses:
            fields.append({
                "name": "Addresses",
                "value": f"```{self._address_lines(payload.addresses)[:1000]}```",
                "inline": False
            })
        if payload.error:
            fields.append({
                "name": "Error",
                "value": f"```{payload.error[:500]}```",
                "inline": False
            })
        if fields:
            embed["fields"] = fields
        
        return {"embeds": [embed]}
    
    def _slack_body(self, payload: NotificationPayload) -> dict:
        blocks = [
            {
                "type": "header",
                "text": {"type": "plain_text", "text": payload.title}
            },
            {
                "type": "section",
                "text": {"type": "mrkdwn", "text": payload.message}
            }
        ]
        
        if payload.addresses:
            blocks.append({
                "type": "section",
                "text": {
                    "type": "mrkdwn",
                    "text": f"*Addresses:*\n```{self._address_lines(payload.addresses)}```"
                }
            })
        
        if payload.error:
            blocks.append({
                "type": "section",
                "text": {"type": "mrkdwn", "text": f"*Error:*\n```{payload.error[:500]}```"}
            })
        
        return {"blocks": blocks}
    
    def _generic_body(self, payload: NotificationPayload) -> dict:
        data = {
            "event": payload.type.value,
            "title": payload.title,
            "message": payload.message,
            "timestamp": payload.timestamp.isoformat(),
            "source": "ipwatch",
            "addresses": [a.to_dict() for a in payload.addresses],
        }
        
        if payload.error:
            data["error"] = payload.error
        
        return data
    
    def notify_ip_changed(self, hostname: str, addresses: Sequence[AddressRecord]) -> bool:
        """Send an IP change notification."""
        return self.send(NotificationPayload(
            type=NotificationType.IP_CHANGED,
            title="IP Address Changed",
            message=f"The IP configuration of **{hostname}** has changed.",
            addresses=list(addresses)
        ))
    
    def notify_error(self, hostname: str, error: str) -> bool:
        """Send an error notification."""
        return self.send(NotificationPayload(
            type=NotificationType.ERROR,
            title="IP Check Failed",
            message=f"Could not check the IP configuration of **{hostname}**.",
            error=error
        ))
