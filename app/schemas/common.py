from pydantic import BaseModel
from typing import Optional


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    code: Optional[str] = None
    details: Optional[dict] = None


class MessageResponse(BaseModel):
    success: bool = True
    message: str
