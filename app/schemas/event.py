from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import datetime


class EventCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field("", max_length=255)
    image: Optional[str] = Field(None, max_length=255)
    eventDate: datetime
    location: Optional[str] = Field(None, max_length=255)
    type: str = Field(..., pattern="^(ONLINE|OFFLINE)$")

    @validator('image')
    def validate_image_url(cls, v):
        if v and not v.startswith(("http://", "https://")):
            raise ValueError('Image must be a URL')
        return v


class EventResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    location: Optional[str] = None
    type: Optional[str] = None
    eventDate: Optional[str] = None
    createdById: str
    createdAt: Optional[str] = None
    shortCode: Optional[str] = None


class EventDetailResponse(EventResponse):
    isCreator: bool
    isRegistered: bool
    registeredCount: int


class EventCreateResponse(BaseModel):
    success: bool = True
    message: str = "Event created successfully"
    event: EventResponse


class EventCodeResponse(BaseModel):
    eventId: str
    shortCode: str
    qrSvg: str
