from sqlalchemy import Column, String, DateTime
from app.database import Base
from app.helpers import generate_id, utcnow


class Partner(Base):
    __tablename__ = "partners"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    logo_url = Column(String(1000), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
