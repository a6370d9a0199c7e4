"""
IPWatch Monitor

Check-and-record and show-latest operations over the snapshot reader,
history store, change detector and formatter.
"""

import logging
import socket
from datetime import datetime
from typing import Callable, Dict, List, Optional, TextIO

from .config import Config
from .detector import has_changed
from .diagnostics import DiagnosticLog
from .formatter import render_table
from .history import LogEntry, LogStore, LogStoreError
from .network import NetworkSource, PsutilNetworkSource, SnapshotError, read_snapshot
from .notifications import Notifier

logger = logging.getLogger(__name__)


def format_elapsed(seconds: float) -> str:
    """Whole hours plus remaining minutes, e.g. '26 hour(s) 5 minute(s)'. Negative spans count as zero."""
    hours, remainder = divmod(max(int(seconds), 0), 3600)
    return f"{hours} hour(s) {remainder // 60} minute(s)"


class IPMonitor:
    """
    Records IP address changes to the history file.

    Holds no state between calls; every operation reads the history file
    afresh and rewrites it in full when something changed.
    """
    
    def __init__(
        self,
        source: NetworkSource,
        store: LogStore,
        diagnostics: Optional[DiagnosticLog] = None,
        notifier: Optional[Notifier] = None,
        priorities: Optional[Dict[str, int]] = None,
        clock: Callable[[], datetime] = datetime.now,
        stream: Optional[TextIO] = None,
    ):
        self.source = source
        self.store = store
        self.diagnostics = diagnostics or store.diagnostics
        self.notifier = notifier
        self.priorities = priorities
        self.clock = clock
        self.stream = stream
    
    @classmethod
    def from_config(cls, config: Config, source: Optional[NetworkSource] = None) -> "IPMonitor":
        """Build a monitor with fresh handles for one invocation."""
        diagnostics = DiagnosticLog(config.event_source, config.event_log)
        store = LogStore(
            config.log_dir,
            filename=config.log_filename,
            max_entries=config.max_entries,
            diagnostics=diagnostics,
        )
        notifier = Notifier(config.webhook_url) if config.webhook_url else None
        return cls(
            source=source or PsutilNetworkSource(),
            store=store,
            diagnostics=diagnostics,
            notifier=notifier,
            priorities=config.interface_priorities,
        )
    
    def _print(self, text: str = "") -> None:
        print(text, file=self.stream)
    
    def _environment_failure(self, message: str, error: Exception, silent: bool) -> bool:
        """Report a fatal error; re-raise it unless silent."""
        self.diagnostics.report(message, error)
        if self.notifier:
            self.notifier.notify_error(socket.gethostname(), str(error))
        if silent:
            logger.debug(f"{message}: {error}")
            return False
        raise error
    
    def check_and_record(self, show_current: bool = False, show_change: bool = False, silent: bool = False) -> bool:
        """
        Compare the current addresses with the newest history entry and
        record them if they differ.
        
        Returns:
            True if a change was detected, even when saving it failed.
        
        Raises:
            SnapshotError or LogStoreError on environment failures,
            unless silent is set (then False is returned).
        """
        try:
            current = read_snapshot(self.source)
        except SnapshotError as e:
            return self._environment_failure("IP check failed", e, silent)
        
        if show_current and not silent:
            self._print("Current IP configuration:")
            self._print(render_table(current, self.priorities))
            self._print()
        
        try:
            history = self.store.read()
        except LogStoreError as e:
            return self._environment_failure("IP check failed", e, silent)
        
        previous = history[0].addresses if history else ()
        changed = has_changed(current, previous)
        
        if changed:
            entry = LogEntry.create(current, self.clock())
            try:
                self.store.write(self.store.append(entry, history))
                logger.info(f"IP change recorded at {entry.timestamp} ({len(current)} address(es))")
            except LogStoreError as e:
                logger.warning(f"IP change detected but could not be saved: {e}")
            
            if self.notifier:
                self.notifier.notify_ip_changed(socket.gethostname(), current)
        else:
            logger.debug("IP configuration unchanged")
        
        if show_change and not silent:
            if changed:
                self._print("IP configuration updated.")
            else:
                self._print("IP configuration unchanged.")
            self.show_latest()
        
        return changed
    
    def show_latest(self) -> None:
        """Print the newest history entry and how long ago it was recorded."""
        try:
            history = self.store.read()
            if not history:
                self._print("No IP log entries found.")
                return
            
            latest = history[0]
            elapsed = self.clock() - latest.recorded_at
            
            self._print(f"Last recorded: {latest.timestamp}")
            self._print(f"Elapsed:       {format_elapsed(elapsed.total_seconds())}")
            self._print()
            self._print(render_table(latest.addresses, self.priorities))
        except Exception as e:
            self.diagnostics.report("Failed to show latest IP log", e)
            logger.error(f"Failed to show latest IP log: {e}")
    
    def show_history(self, limit: int = 10) -> List[LogEntry]:
        """Print a summary line per stored entry, newest first."""
        history = self.store.read()
        
        if not history:
            self._print("No IP log entries found.")
            return []
        
        shown = history[:limit]
        self._print(f"Showing {len(shown)} of {len(history)} entries (max {self.store.max_entries})")
        self._print("-" * 55)
        for i, entry in enumerate(shown, start=1):
            addresses = ", ".join(record.ip_address for record in entry.addresses) or "(none)"
            if len(addresses) > 60:
                addresses = addresses[:57] + "..."
            self._print(f"  {i:>3}. {entry.timestamp}  {addresses}")
        
        return shown
