"""Reporting channel for problems found while generating."""
import logging
import threading
from typing import List, Protocol, Tuple

from sqlconst.core.workflow import Severity

log = logging.getLogger(__name__)


class Diagnostics(Protocol):
    def report(self, severity: Severity, message: str) -> None:
        ...


class LoggingDiagnostics:
    """Logs every report and remembers it; never raises into the caller."""

    _LEVELS = {
        Severity.ERROR: logging.ERROR,
        Severity.WARNING: logging.WARNING,
        Severity.NOTE: logging.INFO,
    }

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.messages: List[Tuple[Severity, str]] = []

    def report(self, severity: Severity, message: str) -> None:
        try:
            severity = Severity(severity)
        except ValueError:
            severity = Severity.WARNING
        with self._lock:
            self.messages.append((severity, message))
        log.log(self._LEVELS[severity], message)

    def count(self, severity: Severity) -> int:
        with self._lock:
            return sum(1 for s, _ in self.messages if s == severity)

    @property
    def has_errors(self) -> bool:
        return self.count(Severity.ERROR) > 0
