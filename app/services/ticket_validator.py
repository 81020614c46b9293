"""
Ticket validity checks against the live registration store.

Nothing here is cached: every call re-reads the registration row and the
event's short code. Outcomes are explicit so callers can tell a malformed
ticket, a missing registration, a wrong event code and a store failure
apart, even when all four end up as "invalid" for the person at the door.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import MalformedTicketId
from app.models.registration import EventRegistration
from app.repositories.event_repository import EventRepository
from app.repositories.registration_repository import RegistrationRepository
from app.utils.ticket_id import decode_ticket_id

logger = logging.getLogger(__name__)


class TicketCheckReason(str, enum.Enum):
    VALID = "valid"
    MALFORMED = "malformed"
    NOT_FOUND = "not_found"
    CODE_MISMATCH = "code_mismatch"
    CHECK_FAILED = "check_failed"


@dataclass(frozen=True)
class TicketLookupResult:
    ticket_id: str
    reason: TicketCheckReason
    registration: Optional[EventRegistration] = None

    @property
    def found(self) -> bool:
        return self.reason is TicketCheckReason.VALID


@dataclass(frozen=True)
class AdmissionOutcome:
    ticket_id: str
    reason: TicketCheckReason

    @property
    def valid(self) -> bool:
        return self.reason is TicketCheckReason.VALID

    @property
    def check_failed(self) -> bool:
        return self.reason is TicketCheckReason.CHECK_FAILED

    def to_dict(self) -> dict:
        return {
            "ticketId": self.ticket_id,
            "valid": self.valid,
            "reason": self.reason.value,
        }


class TicketValidator:

    def __init__(self, db: Session):
        self.db = db
        self.registration_repo = RegistrationRepository(db)
        self.event_repo = EventRepository(db)

    def lookup(self, ticket_id: str) -> TicketLookupResult:
        """Member-side ticket view. Read-only."""
        try:
            event_id, member_id = decode_ticket_id(ticket_id)
        except MalformedTicketId:
            return TicketLookupResult(ticket_id, TicketCheckReason.MALFORMED)

        try:
            registration = self.registration_repo.get_by_event_and_member(
                event_id=event_id,
                member_id=member_id,
                include_relations=True
            )
        except SQLAlchemyError:
            logger.exception(f"Ticket lookup failed for {ticket_id!r}")
            return TicketLookupResult(ticket_id, TicketCheckReason.CHECK_FAILED)

        if registration is None:
            return TicketLookupResult(ticket_id, TicketCheckReason.NOT_FOUND)

        return TicketLookupResult(ticket_id, TicketCheckReason.VALID, registration)

    def check_admission(self, ticket_id: str, event_code: int) -> AdmissionOutcome:
        """
        Organizer scan-time check.

        Valid only if the ticket id decodes, a registration exists for the
        (event, member) pair, and event_code equals the event's short code.
        Tickets are not consumed; checking a valid ticket again stays valid.
        """
        try:
            event_id, member_id = decode_ticket_id(ticket_id)
        except MalformedTicketId:
            return self._resolve(ticket_id, TicketCheckReason.MALFORMED)

        try:
            stored_code = self.event_repo.get_short_code(event_id)
            registration = self.registration_repo.get_by_event_and_member(
                event_id=event_id,
                member_id=member_id
            )
        except SQLAlchemyError as e:
            logger.error(
                f"Admission check failed for ticket {ticket_id!r}: {str(e)}",
                exc_info=True
            )
            return AdmissionOutcome(ticket_id, TicketCheckReason.CHECK_FAILED)

        if stored_code is None or registration is None:
            return self._resolve(ticket_id, TicketCheckReason.NOT_FOUND)

        if stored_code != event_code:
            return self._resolve(ticket_id, TicketCheckReason.CODE_MISMATCH)

        return self._resolve(ticket_id, TicketCheckReason.VALID)

    def _resolve(self, ticket_id: str, reason: TicketCheckReason) -> AdmissionOutcome:
        if reason is TicketCheckReason.VALID:
            logger.info(f"Ticket {ticket_id!r} admitted")
        else:
            logger.warning(f"Ticket {ticket_id!r} rejected: {reason.value}")
        return AdmissionOutcome(ticket_id, reason)
