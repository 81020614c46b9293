from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, status
import logging

from app.models.event import Event, EventType
from app.models.registration import EventRegistration, RegistrationStatus
from app.repositories.event_repository import EventRepository
from app.repositories.registration_repository import RegistrationRepository
from app.schemas.event import EventCreate
from app.utils.qr_generator import generate_qr_svg
from app.utils.short_code import format_short_code, generate_short_code

logger = logging.getLogger(__name__)


class EventService:

    def __init__(self, db: Session):
        self.db = db
        self.event_repo = EventRepository(db)
        self.registration_repo = RegistrationRepository(db)

    def create_event(self, member_id: str, event_data: EventCreate) -> Event:
        event = self.event_repo.create(
            name=event_data.name,
            created_by_id=member_id,
            event_date=event_data.eventDate,
            short_code=generate_short_code(),
            description=event_data.description,
            image=event_data.image,
            location=event_data.location,
            event_type=EventType(event_data.type),
            commit=False
        )

        # The creator holds a ticket to their own event
        self.registration_repo.create(
            event_id=event.id,
            member_id=member_id,
            status=RegistrationStatus.REGISTERED,
            commit=False
        )

        self.db.commit()
        self.db.refresh(event)

        logger.info(f"Event {event.id} created by {member_id}")
        return event

    def get_event(self, event_id: str) -> Event:
        event = self.event_repo.get_by_id(event_id)
        if not event:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Event not found"
            )
        return event

    def get_event_view(self, event_id: str, member_id: str) -> dict:
        event = self.get_event(event_id)
        is_creator = event.created_by_id == member_id

        event_dict = event.to_dict(include_short_code=is_creator)
        event_dict["isCreator"] = is_creator
        event_dict["isRegistered"] = self.registration_repo.get_by_event_and_member(
            event_id=event_id,
            member_id=member_id
        ) is not None
        event_dict["registeredCount"] = self.registration_repo.count_event_registrations(event_id)
        return event_dict

    def get_event_code(self, event_id: str, member_id: str) -> dict:
        event = self.get_event(event_id)
        if event.created_by_id != member_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only the event creator can view the event code"
            )

        return {
            "eventId": event.id,
            "shortCode": format_short_code(event.short_code),
            "qrSvg": generate_qr_svg(str(event.short_code)),
        }

    def register_for_event(self, event_id: str, member_id: str) -> EventRegistration:
        self.get_event(event_id)

        if self.registration_repo.get_by_event_and_member(event_id, member_id):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="You are already registered for this event"
            )

        try:
            registration = self.registration_repo.create(
                event_id=event_id,
                member_id=member_id
            )
        except IntegrityError:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="You are already registered for this event"
            )

        logger.info(f"Member {member_id} registered for event {event_id}")
        return registration

    def unregister_from_event(self, event_id: str, member_id: str) -> None:
        event = self.get_event(event_id)

        if event.created_by_id == member_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You can't unregister from an event you created"
            )

        registration = self.registration_repo.get_by_event_and_member(event_id, member_id)
        if not registration:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="You are not registered for this event"
            )

        self.registration_repo.delete(registration)
        logger.info(f"Member {member_id} unregistered from event {event_id}")
