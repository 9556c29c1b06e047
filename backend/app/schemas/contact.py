from typing import Optional
from app.schemas.base import CamelModel


class ContactMessageInput(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None


class ContactMessage(CamelModel):
    id: str
    name: str
    email: str
    subject: str
    message: str
    date: Optional[str] = None
