from pydantic import BaseModel
from datetime import datetime
from typing import Any, Optional
from app.schemas.base import CamelModel, LocalizedText, LocalizedTextInput


class NewsInput(CamelModel):
    title: Optional[LocalizedTextInput] = None
    content: Optional[LocalizedTextInput] = None
    category: Optional[str] = None
    # List of URLs; a single string is parsed like the stored column
    image_urls: Any = None
    date: Optional[datetime] = None


class NewsArticle(CamelModel):
    id: str
    date: Optional[str] = None
    category: str
    title: LocalizedText
    content: LocalizedText
    image_urls: list[str]


class PageMeta(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class NewsListResponse(BaseModel):
    meta: PageMeta
    data: list[NewsArticle]
