from typing import Optional
from datetime import datetime
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError
from app.models.event import Event, EventType
import uuid


class EventRepository:

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, event_id: str, include_relations: bool = True) -> Optional[Event]:
        query = self.db.query(Event).filter(Event.id == event_id)
        if include_relations:
            query = query.options(joinedload(Event.creator))
        return query.first()

    def get_short_code(self, event_id: str) -> Optional[int]:
        return self.db.query(Event.short_code).filter(
            Event.id == event_id
        ).scalar()

    def create(
        self,
        name: str,
        created_by_id: str,
        event_date: datetime,
        short_code: int,
        description: Optional[str] = None,
        image: Optional[str] = None,
        location: Optional[str] = None,
        event_type: Optional[EventType] = None,
        commit: bool = True
    ) -> Event:
        event = Event(
            id=str(uuid.uuid4()),
            name=name,
            description=description,
            image=image,
            location=location,
            type=event_type,
            event_date=event_date,
            created_by_id=created_by_id,
            short_code=short_code
        )

        try:
            self.db.add(event)
            if commit:
                self.db.commit()
                self.db.refresh(event)
            else:
                self.db.flush()
            return event
        except IntegrityError:
            self.db.rollback()
            raise
