from sqlalchemy import Column, String, DateTime, Integer, ForeignKey, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship, validates
import enum
from app.core.database import Base


class EventType(str, enum.Enum):
    ONLINE = "ONLINE"
    OFFLINE = "OFFLINE"


class Event(Base):
    __tablename__ = "events"

    id = Column(String(255), primary_key=True, index=True)

    name = Column(String(255), nullable=False)
    description = Column(String(255), nullable=True)
    image = Column(String(255), nullable=True)
    location = Column(String(255), nullable=True)
    type = Column(SQLEnum(EventType), nullable=True)

    event_date = Column(DateTime(timezone=True), nullable=False, index=True)

    created_by_id = Column(String(255), ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now()
    )

    short_code = Column(
        Integer,
        nullable=False,
        comment="6-digit organizer verification code, set once at creation"
    )

    creator = relationship("User")
    registrations = relationship(
        "EventRegistration",
        back_populates="event",
        cascade="all, delete-orphan",
        lazy="dynamic"
    )

    @validates("short_code")
    def validate_short_code(self, key, value):
        if self.short_code is not None and self.short_code != value:
            raise ValueError("Event short code cannot be changed once set")
        if value is None or not 0 <= value <= 999999:
            raise ValueError("Event short code must be between 000000 and 999999")
        return value

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, name={self.name}, date={self.event_date})>"

    def to_dict(self, include_short_code: bool = False) -> dict:
        event_dict = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "image": self.image,
            "location": self.location,
            "type": self.type.value if self.type else None,
            "eventDate": self.event_date.isoformat() if self.event_date else None,
            "createdById": self.created_by_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

        if include_short_code:
            event_dict["shortCode"] = f"{self.short_code:06d}"

        return event_dict
