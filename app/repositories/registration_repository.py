from typing import Optional, List
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError
from app.models.event import Event
from app.models.registration import EventRegistration, RegistrationStatus


class RegistrationRepository:

    def __init__(self, db: Session):
        self.db = db

    def get_by_event_and_member(
        self,
        event_id: str,
        member_id: str,
        include_relations: bool = False
    ) -> Optional[EventRegistration]:
        query = self.db.query(EventRegistration).filter(
            EventRegistration.event_id == event_id,
            EventRegistration.member_id == member_id
        )
        if include_relations:
            query = query.options(
                joinedload(EventRegistration.event).joinedload(Event.creator),
                joinedload(EventRegistration.member)
            )
        return query.first()

    def get_member_registrations(self, member_id: str) -> List[EventRegistration]:
        return self.db.query(EventRegistration).join(Event).filter(
            EventRegistration.member_id == member_id
        ).options(
            joinedload(EventRegistration.event)
        ).order_by(Event.event_date).all()

    def count_event_registrations(self, event_id: str) -> int:
        return self.db.query(EventRegistration).filter(
            EventRegistration.event_id == event_id
        ).count()

    def create(
        self,
        event_id: str,
        member_id: str,
        status: RegistrationStatus = RegistrationStatus.REGISTERED,
        commit: bool = True
    ) -> EventRegistration:
        registration = EventRegistration(
            event_id=event_id,
            member_id=member_id,
            status=status
        )

        try:
            self.db.add(registration)
            if commit:
                self.db.commit()
                self.db.refresh(registration)
            else:
                self.db.flush()
            return registration
        except IntegrityError:
            self.db.rollback()
            raise

    def delete(self, registration: EventRegistration) -> None:
        self.db.delete(registration)
        self.db.commit()
