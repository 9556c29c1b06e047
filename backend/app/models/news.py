"""
News Model - SQLAlchemy ORM model for news articles

Articles are written in up to three languages (id/en/cn). Only the
Indonesian ("id") variant is mandatory; the others are stored as empty
strings when not provided.

Categories:
    company, division, industry, press
"""

from sqlalchemy import Column, String, Text, DateTime
from app.database import Base
from app.helpers import generate_id, utcnow

NEWS_CATEGORIES = ("company", "division", "industry", "press")


class News(Base):
    """
    News article entity.

    Attributes:
        id: UUID primary key
        title_id/en/cn: Localized titles
        content_id/en/cn: Localized bodies
        category: One of NEWS_CATEGORIES
        image_urls: JSON-encoded array of image URLs (text column)
        published_at: Publication timestamp shown to readers
    """

    __tablename__ = "news"

    id = Column(String(36), primary_key=True, default=generate_id)
    title_id = Column(String(500), nullable=False)
    title_en = Column(String(500), nullable=True)
    title_cn = Column(String(500), nullable=True)
    content_id = Column(Text, nullable=False)
    content_en = Column(Text, nullable=True)
    content_cn = Column(Text, nullable=True)
    category = Column(String(20), nullable=False, index=True)
    image_urls = Column(Text, nullable=True)
    published_at = Column(DateTime, nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
