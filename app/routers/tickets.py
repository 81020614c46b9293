from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.api.deps import get_current_member
from app.core.database import get_db
from app.models.user import User
from app.schemas.ticket import (
    TicketDetailResponse,
    TicketsListResponse,
    TicketValidityRequest,
    TicketValidityResponse,
)
from app.services.ticket_service import TicketService

# ticket_id arrives percent-decoded and decode_ticket_id decodes it once more;
# clients must encode the id exactly once (see ticket_id_path_segment).
router = APIRouter(prefix="/api/tickets", tags=["Tickets"])


@router.get("", response_model=TicketsListResponse)
def get_tickets(
    current_member: User = Depends(get_current_member),
    db: Session = Depends(get_db)
):
    tickets = TicketService(db).get_tickets(current_member.id)
    return TicketsListResponse(tickets=tickets)


@router.get("/{ticket_id}", response_model=TicketDetailResponse)
def get_ticket_by_id(
    ticket_id: str,
    current_member: User = Depends(get_current_member),
    db: Session = Depends(get_db)
):
    return TicketService(db).get_ticket_by_id(ticket_id)


@router.post("/{ticket_id}/validity", response_model=TicketValidityResponse)
def check_ticket_validity(
    ticket_id: str,
    body: TicketValidityRequest,
    current_member: User = Depends(get_current_member),
    db: Session = Depends(get_db)
):
    outcome = TicketService(db).check_ticket_validity(ticket_id, body.eventCode)
    return outcome.to_dict()
