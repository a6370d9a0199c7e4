"""
IPWatch Diagnostics

Best-effort error reporting to the operating system's event log
(Windows Event Log, or syslog elsewhere). Failures here never propagate.
"""

import logging
import logging.handlers
import os
import sys
from typing import Optional

logger = logging.getLogger(__name__)

SYSLOG_SOCKETS = ("/dev/log", "/var/run/syslog")


class DiagnosticLog:
    """
    Writes one error record per failure to an OS-level log.

    Creating a Windows event source requires administrator rights; when
    that (or anything else) fails the diagnostic log is simply disabled.
    """

    def __init__(self, source: str = "IPMonitor", channel: str = "Application", enabled: bool = True):
        self.source = source
        self.channel = channel
        self._logger = logging.getLogger(f"ipwatch.diagnostics.{source}")
        self._logger.propagate = False
        self._logger.setLevel(logging.ERROR)
        self._handler: Optional[logging.Handler] = None

        if enabled:
            self._handler = self._build_handler()
            if self._handler:
                self._logger.addHandler(self._handler)

    @property
    def available(self) -> bool:
        return self._handler is not None

    def _build_handler(self) -> Optional[logging.Handler]:
        """Create the platform handler, or None if unavailable."""
        try:
            if sys.platform == "win32":
                return logging.handlers.NTEventLogHandler(self.source, logtype=self.channel)

            for address in SYSLOG_SOCKETS:
                if os.path.exists(address):
                    handler = logging.handlers.SysLogHandler(address=address)
                    handler.setFormatter(logging.Formatter(f"{self.source}: %(message)s"))
                    return handler
        except Exception as e:
            logger.debug(f"Diagnostic log unavailable ({self.channel}/{self.source}): {e}")
        return None

    def report(self, message: str, exc: Optional[BaseException] = None) -> None:
        """Write an error-level diagnostic record. Never raises."""
        if not self._handler:
            return
        try:
            if exc is not None:
                message = f"{message}: {exc}"
            self._logger.error(message)
        except Exception:
            pass

    def close(self) -> None:
        if self._handler:
            self._logger.removeHandler(self._handler)
            try:
                self._handler.close()
            except Exception:
                pass
            self._handler = None
