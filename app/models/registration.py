from sqlalchemy import Column, String, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum
from app.core.database import Base
from app.utils.ticket_id import encode_ticket_id


class RegistrationStatus(str, enum.Enum):
    REGISTERED = "Registered"


class EventRegistration(Base):
    """
    One member's place at one event. (event_id, member_id) is the primary
    key and the only thing a ticket identifies.
    """
    __tablename__ = "event_registrations"

    event_id = Column(String(255), ForeignKey("events.id"), primary_key=True)
    member_id = Column(String(255), ForeignKey("users.id"), primary_key=True, index=True)

    status = Column(
        SQLEnum(RegistrationStatus, values_callable=lambda e: [s.value for s in e]),
        nullable=False,
        default=RegistrationStatus.REGISTERED
    )

    registered_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now()
    )

    event = relationship("Event", back_populates="registrations")
    member = relationship("User", back_populates="registrations")

    @property
    def ticket_id(self) -> str:
        return encode_ticket_id(self.event_id, self.member_id)

    def __repr__(self) -> str:
        return f"<EventRegistration(event_id={self.event_id}, member_id={self.member_id}, status={self.status})>"

    def to_dict(self, include_event: bool = False, include_member: bool = False) -> dict:
        registration_dict = {
            "id": self.ticket_id,
            "eventId": self.event_id,
            "memberId": self.member_id,
            "status": self.status.value,
            "registeredAt": self.registered_at.isoformat() if self.registered_at else None,
        }

        if include_event and self.event:
            registration_dict["event"] = {
                "id": self.event.id,
                "name": self.event.name,
                "image": self.event.image,
                "location": self.event.location,
                "eventDate": self.event.event_date.isoformat() if self.event.event_date else None,
            }

        if include_member and self.member:
            registration_dict["member"] = {
                "id": self.member.id,
                "name": self.member.name,
                "email": self.member.email,
                "image": self.member.image,
            }

        return registration_dict
