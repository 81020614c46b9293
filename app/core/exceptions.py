"""
Ticket domain errors.

Pure helpers raise these; the validity checker folds them into explicit
outcomes, and the HTTP layer maps whatever is left to error responses.
"""

from typing import Optional


class TicketError(Exception):
    code = "ticket_error"
    message = "Ticket error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class InvalidIdentifier(TicketError):
    code = "invalid_identifier"
    message = "Identifier contains the reserved ticket separator"


class MalformedTicketId(TicketError):
    code = "malformed_ticket_id"
    message = "Invalid ticket ID"


class PayloadTooLarge(TicketError):
    code = "payload_too_large"
    message = "Payload does not fit in a QR code"


class TicketNotFound(TicketError):
    code = "not_found"
    message = "Ticket not found"


class CheckFailed(TicketError):
    code = "check_failed"
    message = "Ticket check failed"
