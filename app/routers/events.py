from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.api.deps import get_current_member
from app.core.database import get_db
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.event import (
    EventCodeResponse,
    EventCreate,
    EventCreateResponse,
    EventDetailResponse,
)
from app.schemas.ticket import TicketResponse
from app.services.event_service import EventService

router = APIRouter(prefix="/api/events", tags=["Events"])


@router.post("", response_model=EventCreateResponse, status_code=201)
def create_event(
    event_data: EventCreate,
    current_member: User = Depends(get_current_member),
    db: Session = Depends(get_db)
):
    event = EventService(db).create_event(current_member.id, event_data)
    return EventCreateResponse(event=event.to_dict(include_short_code=True))


@router.get("/{event_id}", response_model=EventDetailResponse)
def get_event(
    event_id: str,
    current_member: User = Depends(get_current_member),
    db: Session = Depends(get_db)
):
    return EventService(db).get_event_view(event_id, current_member.id)


@router.get("/{event_id}/code", response_model=EventCodeResponse)
def get_event_code(
    event_id: str,
    current_member: User = Depends(get_current_member),
    db: Session = Depends(get_db)
):
    return EventService(db).get_event_code(event_id, current_member.id)


@router.post("/{event_id}/register", response_model=TicketResponse)
def register_for_event(
    event_id: str,
    current_member: User = Depends(get_current_member),
    db: Session = Depends(get_db)
):
    registration = EventService(db).register_for_event(event_id, current_member.id)
    return registration.to_dict(include_event=True)


@router.delete("/{event_id}/register", response_model=MessageResponse)
def unregister_from_event(
    event_id: str,
    current_member: User = Depends(get_current_member),
    db: Session = Depends(get_db)
):
    EventService(db).unregister_from_event(event_id, current_member.id)
    return MessageResponse(message="Successfully unregistered from event")
