from sqlalchemy import Column, String, Text, DateTime
from app.database import Base
from app.helpers import generate_id, utcnow


class ContactMessage(Base):
    """Message left through the public "Contact Us" form."""

    __tablename__ = "contact_messages"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    subject = Column(String(500), nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
