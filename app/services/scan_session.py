"""
Organizer scan session.

    IDLE -> SCANNING -> CHECKING -> RESOLVED

One session per scanner screen. At most one admission check runs at a time:
a decode that arrives while a check is in flight, or after the session has
resolved, is dropped rather than queued.
"""
import enum
import logging
import threading
from typing import Iterable, Optional, Protocol

from app.services.ticket_validator import AdmissionOutcome, TicketCheckReason
from app.utils.short_code import SCANNABLE_FORMATS, parse_scanned_code

logger = logging.getLogger(__name__)


class ScanState(str, enum.Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    CHECKING = "checking"
    RESOLVED = "resolved"


class AdmissionChecker(Protocol):
    def check_admission(self, ticket_id: str, event_code: int) -> AdmissionOutcome:
        ...


class ScanSession:

    def __init__(
        self,
        checker: AdmissionChecker,
        ticket_id: str,
        formats: Iterable[str] = SCANNABLE_FORMATS
    ):
        self.checker = checker
        self.ticket_id = ticket_id
        self.formats = frozenset(formats)
        self._state = ScanState.IDLE
        self._outcome: Optional[AdmissionOutcome] = None
        self._in_flight = threading.Lock()

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def outcome(self) -> Optional[AdmissionOutcome]:
        return self._outcome

    def start(self) -> None:
        if self._state is ScanState.SCANNING:
            return
        if self._state is not ScanState.IDLE:
            raise RuntimeError(f"Cannot start scanning from state {self._state.value}")
        self._state = ScanState.SCANNING

    def reset(self) -> bool:
        """Abandon the session and return to IDLE. False while a check is running."""
        if not self._in_flight.acquire(blocking=False):
            return False
        try:
            self._state = ScanState.IDLE
            self._outcome = None
            return True
        finally:
            self._in_flight.release()

    def on_decode(self, symbology: str, raw_value) -> Optional[AdmissionOutcome]:
        """
        Feed one barcode decode into the session.

        Returns the outcome when this decode resolved the session, or None
        when it was ignored (unknown format, non-numeric value, not scanning)
        or dropped because another check is in flight.
        """
        if symbology not in self.formats:
            return None

        event_code = parse_scanned_code(raw_value)
        if event_code is None:
            return None

        if not self._in_flight.acquire(blocking=False):
            logger.debug(f"Dropped decode for {self.ticket_id!r}: check already in flight")
            return None

        try:
            if self._state is not ScanState.SCANNING:
                return None

            self._state = ScanState.CHECKING
            try:
                outcome = self.checker.check_admission(self.ticket_id, event_code)
            except Exception:
                logger.exception(f"Admission check raised for {self.ticket_id!r}")
                outcome = AdmissionOutcome(self.ticket_id, TicketCheckReason.CHECK_FAILED)

            self._outcome = outcome
            self._state = ScanState.RESOLVED
            return outcome
        finally:
            self._in_flight.release()
