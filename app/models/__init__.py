from app.models.user import User
from app.models.event import Event, EventType
from app.models.registration import EventRegistration, RegistrationStatus

__all__ = ["User", "Event", "EventType", "EventRegistration", "RegistrationStatus"]
