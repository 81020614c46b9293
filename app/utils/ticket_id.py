"""
Ticket identity codec.

A ticket id is ``<eventId>#<memberId>``. Event and member ids are uuid4
strings, so the separator never occurs inside a generated id; ``encode``
still refuses ids that contain it. The id travels as a URL path segment,
so ``decode`` percent-decodes its input before splitting.
"""
from typing import Tuple
from urllib.parse import quote, unquote

from app.core.exceptions import InvalidIdentifier, MalformedTicketId

TICKET_ID_SEPARATOR = "#"


def encode_ticket_id(event_id: str, member_id: str) -> str:
    for value in (event_id, member_id):
        if TICKET_ID_SEPARATOR in value:
            raise InvalidIdentifier(
                f"Identifier {value!r} contains the reserved separator {TICKET_ID_SEPARATOR!r}"
            )
    return f"{event_id}{TICKET_ID_SEPARATOR}{member_id}"


def decode_ticket_id(ticket_id: str) -> Tuple[str, str]:
    """
    Split a (possibly percent-encoded) ticket id into (event_id, member_id).

    Raises MalformedTicketId unless the decoded value holds exactly one
    separator with a non-empty id on each side.
    """
    parts = unquote(ticket_id or "").split(TICKET_ID_SEPARATOR)
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise MalformedTicketId(f"Invalid ticket ID: {ticket_id!r}")
    return parts[0], parts[1]


def ticket_id_path_segment(event_id: str, member_id: str) -> str:
    """
    Ticket id percent-encoded for use in a URL path, e.g. ``e1%23m1``.

    Encode exactly once: the router receives the path already decoded and
    decode_ticket_id decodes it again, so a double-encoded ``e1%2523m1``
    also resolves to ``e1#m1``.
    """
    return quote(encode_ticket_id(event_id, member_id), safe="")
