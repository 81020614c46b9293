from sqlalchemy.orm import Session
import logging

from app.core.exceptions import CheckFailed, MalformedTicketId, PayloadTooLarge, TicketNotFound
from app.repositories.registration_repository import RegistrationRepository
from app.services.ticket_validator import (
    AdmissionOutcome,
    TicketCheckReason,
    TicketValidator,
)
from app.utils.qr_generator import generate_qr_svg
from app.utils.ticket_id import encode_ticket_id

logger = logging.getLogger(__name__)


class TicketService:

    def __init__(self, db: Session):
        self.db = db
        self.registration_repo = RegistrationRepository(db)
        self.validator = TicketValidator(db)

    def get_tickets(self, member_id: str) -> list[dict]:
        registrations = self.registration_repo.get_member_registrations(member_id)
        return [r.to_dict(include_event=True) for r in registrations]

    def get_ticket_by_id(self, ticket_id: str) -> dict:
        result = self.validator.lookup(ticket_id)

        if result.reason is TicketCheckReason.MALFORMED:
            raise MalformedTicketId()
        if result.reason is TicketCheckReason.CHECK_FAILED:
            raise CheckFailed("Ticket lookup failed. Please try again.")
        if not result.found:
            raise TicketNotFound()

        registration = result.registration
        try:
            qr_svg = generate_qr_svg(
                encode_ticket_id(registration.event_id, registration.member_id)
            )
        except PayloadTooLarge as e:
            logger.error(f"Failed to render QR for ticket {registration.ticket_id!r}: {str(e)}")
            raise PayloadTooLarge("Failed to render ticket QR code") from e

        ticket = registration.to_dict(include_event=True, include_member=True)
        ticket["qrSvg"] = qr_svg
        return ticket

    def check_ticket_validity(self, ticket_id: str, event_code: int) -> AdmissionOutcome:
        outcome = self.validator.check_admission(ticket_id, event_code)
        if outcome.check_failed:
            raise CheckFailed("Ticket check failed. Please try again.")
        return outcome
