"""
IPWatch History Store

JSON-backed, size-bounded history of IP address snapshots.
The file holds an array of entries, newest first:

    [{"timestamp": "2024-05-01 08:30:00",
      "addresses": [{"interface": "WLAN", "ipAddress": "192.168.1.5"}]}]

A legacy file holding a single entry object is also accepted.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .diagnostics import DiagnosticLog
from .network import AddressRecord

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_MAX_ENTRIES = 100


class LogStoreError(Exception):
    """Exception raised when the history file cannot be prepared or written."""
    pass


@dataclass(frozen=True)
class LogEntry:
    """One timestamped snapshot."""
    timestamp: str
    addresses: Tuple[AddressRecord, ...] = field(default_factory=tuple)

    @classmethod
    def create(cls, addresses: Sequence[AddressRecord], now: datetime) -> "LogEntry":
        """Build an entry stamped with a local wall-clock time."""
        return cls(timestamp=now.strftime(TIMESTAMP_FORMAT), addresses=tuple(addresses))

    @property
    def recorded_at(self) -> datetime:
        """Parse the timestamp. Raises ValueError on a malformed value."""
        return datetime.strptime(self.timestamp, TIMESTAMP_FORMAT)

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "addresses": [record.to_dict() for record in self.addresses],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LogEntry":
        """Build an entry from its stored form. Raises ValueError on a bad shape."""
        timestamp = data.get("timestamp", "")
        if not isinstance(timestamp, str):
            raise ValueError(f"Timestamp must be a string: {timestamp!r}")

        addresses = data.get("addresses") or []
        # A single address may have been stored unwrapped
        if isinstance(addresses, dict):
            addresses = [addresses]
        if not isinstance(addresses, list):
            raise ValueError(f"Addresses must be a list: {addresses!r}")

        return cls(
            timestamp=timestamp,
            addresses=tuple(AddressRecord.from_dict(item) for item in addresses),
        )


class LogStore:
    """
    Reads and rewrites the history file.

    Every read loads the whole file and every write replaces it; there is
    no locking, so only one writer may run at a time.
    """

    def __init__(
        self,
        log_dir: Path,
        filename: str = "ip_history.json",
        max_entries: int = DEFAULT_MAX_ENTRIES,
        diagnostics: Optional[DiagnosticLog] = None,
    ):
        self.log_dir = log_dir
        self.path = log_dir / filename
        self.max_entries = max_entries
        self.diagnostics = diagnostics or DiagnosticLog(enabled=False)

    def _ensure_directory(self) -> None:
        """Create the log directory on first use."""
        if self.log_dir.is_dir():
            return
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created log directory: {self.log_dir}")
        except OSError as e:
            self.diagnostics.report(f"Failed to create log directory {self.log_dir}", e)
            raise LogStoreError(f"Failed to create log directory {self.log_dir}: {e}") from e

    def read(self) -> List[LogEntry]:
        """
        Load the full history, newest first.

        A missing, empty or malformed file yields an empty history. A
        malformed file is left untouched until the next successful write.
        """
        self._ensure_directory()

        if not self.path.exists():
            return []

        try:
            text = self.path.read_text(encoding="utf-8-sig")
            data = json.loads(text) if text.strip() else None
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read history file {self.path}, treating as empty: {e}")
            return []

        if not data:
            return []
        if isinstance(data, dict):
            data = [data]
        if not isinstance(data, list):
            logger.warning(f"Unexpected history format in {self.path}, treating as empty")
            return []

        try:
            return [LogEntry.from_dict(item) for item in data if isinstance(item, dict)]
        except ValueError as e:
            logger.warning(f"Unexpected history format in {self.path}, treating as empty: {e}")
            return []

    def write(self, history: Sequence[LogEntry]) -> None:
        """Replace the history file with the given entries."""
        self._ensure_directory()

        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            payload = json.dumps([entry.to_dict() for entry in history], indent=2, ensure_ascii=False)
            tmp_path.write_text(payload, encoding="utf-8")
            tmp_path.replace(self.path)
        except (OSError, TypeError, ValueError) as e:
            self.diagnostics.report(f"Failed to write history file {self.path}", e)
            raise LogStoreError(f"Failed to write history file {self.path}: {e}") from e

        logger.debug(f"Wrote {len(history)} entries to {self.path}")

    def append(self, entry: LogEntry, history: Sequence[LogEntry]) -> List[LogEntry]:
        """Prepend an entry and drop the oldest beyond max_entries. Does not write."""
        return [entry, *history][:self.max_entries]
