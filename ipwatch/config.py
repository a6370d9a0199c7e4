"""
IPWatch Configuration Module

Loads configuration from environment variables with sensible defaults.
"""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from .formatter import build_priorities


def _default_log_dir() -> Path:
    """Per-user directory for the history file."""
    if sys.platform == "win32":
        base = os.getenv("LOCALAPPDATA")
        if base:
            return Path(base) / "IPMonitor"
        return Path.home() / "AppData" / "Local" / "IPMonitor"

    state_home = os.getenv("XDG_STATE_HOME")
    if state_home:
        return Path(state_home) / "ipwatch"
    return Path.home() / ".local" / "state" / "ipwatch"


@dataclass
class Config:
    """Application configuration loaded from environment variables."""
    
    # History file
    log_dir: Path = field(default_factory=_default_log_dir)
    log_filename: str = "ip_history.json"
    max_entries: int = 100
    
    # Display priority names
    wlan_name: str = "WLAN"
    ethernet_name: str = "Ethernet"
    vswitch_name: str = "vEthernet (Default Switch)"
    
    # OS diagnostic log
    event_source: str = "IPMonitor"
    event_log: str = "Application"
    
    # Watch mode
    watch_interval_minutes: int = 5
    
    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None
    
    # Notifications
    webhook_url: Optional[str] = None
    
    @property
    def history_path(self) -> Path:
        """Path to the JSON history file."""
        return self.log_dir / self.log_filename
    
    @property
    def interface_priorities(self) -> Dict[str, int]:
        return build_priorities(self.wlan_name, self.ethernet_name, self.vswitch_name)


def load_config() -> Config:
    """Load configuration from environment variables."""
    log_dir = os.getenv("IPWATCH_LOG_DIR")
    
    config = Config(
        # History
        log_dir=Path(log_dir).expanduser() if log_dir else _default_log_dir(),
        log_filename=os.getenv("IPWATCH_LOG_FILENAME", "ip_history.json"),
        max_entries=int(os.getenv("IPWATCH_MAX_ENTRIES", "100")),
        
        # Display
        wlan_name=os.getenv("IPWATCH_WLAN_NAME", "WLAN"),
        ethernet_name=os.getenv("IPWATCH_ETHERNET_NAME", "Ethernet"),
        vswitch_name=os.getenv("IPWATCH_VSWITCH_NAME", "vEthernet (Default Switch)"),
        
        # Diagnostics
        event_source=os.getenv("IPWATCH_EVENT_SOURCE", "IPMonitor"),
        event_log=os.getenv("IPWATCH_EVENT_LOG", "Application"),
        
        # Watch mode
        watch_interval_minutes=int(os.getenv("WATCH_INTERVAL_MINUTES", "5")),
        
        # Logging
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_file=os.getenv("LOG_FILE"),
        
        # Notifications
        webhook_url=os.getenv("WEBHOOK_URL"),
    )
    
    return config


def validate_config(config: Config) -> bool:
    """
    Validate configuration.
    Returns True if valid, prints errors to stderr otherwise.
    """
    errors = []
    
    if config.max_entries < 1:
        errors.append(f"IPWATCH_MAX_ENTRIES must be at least 1 (got {config.max_entries})")
    
    if config.watch_interval_minutes < 1:
        errors.append(f"WATCH_INTERVAL_MINUTES must be at least 1 (got {config.watch_interval_minutes})")
    
    if config.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        errors.append(f"Unknown LOG_LEVEL: {config.log_level}")
    
    if not config.log_filename.strip():
        errors.append("IPWATCH_LOG_FILENAME must not be empty")
    
    if errors:
        print("Configuration errors:", file=sys.stderr)
        for error in errors:
            print(f"  - {error}", file=sys.stderr)
        return False
    
    return True
