from sqlalchemy import Column, String, Text, DateTime
from app.database import Base
from app.helpers import generate_id, utcnow


class TeamMember(Base):
    """Team member profile. Title and bio are stored in one language only."""

    __tablename__ = "team_members"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    title_id = Column(String(255), nullable=False)
    bio_id = Column(Text, nullable=False)
    image_url = Column(String(1000), nullable=False)
    linkedin_url = Column(String(1000), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=True, default=utcnow, onupdate=utcnow)
