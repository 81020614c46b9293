from pydantic import BaseModel, Field
from typing import Optional, List


class TicketEventInfo(BaseModel):
    id: str
    name: str
    image: Optional[str] = None
    location: Optional[str] = None
    eventDate: Optional[str] = None


class TicketMemberInfo(BaseModel):
    id: str
    name: Optional[str] = None
    email: str
    image: Optional[str] = None


class TicketResponse(BaseModel):
    id: str
    eventId: str
    memberId: str
    status: str
    registeredAt: Optional[str] = None
    event: Optional[TicketEventInfo] = None


class TicketDetailResponse(TicketResponse):
    member: Optional[TicketMemberInfo] = None
    qrSvg: str


class TicketsListResponse(BaseModel):
    success: bool = True
    tickets: List[TicketResponse]


class TicketValidityRequest(BaseModel):
    eventCode: int = Field(..., ge=0, description="Event short code read by the scanner")


class TicketValidityResponse(BaseModel):
    ticketId: str
    valid: bool
    reason: str
