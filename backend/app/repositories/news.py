import math
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import func, select

from app.helpers import coerce_list, encode_list, parse_list, to_iso, to_naive_utc, utcnow
from app.models import News, NEWS_CATEGORIES
from app.repositories.base import ResourceRepository
from app.schemas import LocalizedText, NewsArticle, PageMeta

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 50
# Keeps (page - 1) * limit within a signed 64-bit OFFSET
MAX_PAGE = (2**63 - 1) // MAX_LIMIT

_LEADING_INT = re.compile(r"^\s*([+-]?\d{1,19})")


def _parse_int(raw: Any) -> Optional[int]:
    """Leading integer of a query value ("12abc" -> 12), None when there is none."""
    if raw is None:
        return None
    if isinstance(raw, int):
        return raw
    match = _LEADING_INT.match(str(raw))
    return int(match.group(1)) if match else None


def clamp_pagination(raw_page: Any = None, raw_limit: Any = None) -> Tuple[int, int]:
    """
    Coerce page/limit query values instead of rejecting them.

    page < 1 or unparseable -> 1, page > MAX_PAGE -> MAX_PAGE
    limit < 1 or unparseable -> 10, limit > 50 -> 50
    """
    page = _parse_int(raw_page)
    limit = _parse_int(raw_limit)

    if page is None or page < 1:
        page = DEFAULT_PAGE
    if page > MAX_PAGE:
        page = MAX_PAGE
    if limit is None or limit < 1:
        limit = DEFAULT_LIMIT
    if limit > MAX_LIMIT:
        limit = MAX_LIMIT
    return page, limit


def normalize_image_urls(value: Any) -> List[str]:
    if isinstance(value, list):
        return [item for item in value if isinstance(item, str)]
    if isinstance(value, str):
        return parse_list(value)
    return []


class NewsRepository(ResourceRepository[News, NewsArticle]):
    model = News
    resource_name = "News"
    required_fields = ("title.id", "content.id", "category")
    enum_fields = {"category": NEWS_CATEGORIES}

    def order_by(self) -> Sequence[Any]:
        return [func.coalesce(News.published_at, News.created_at).desc()]

    def to_columns(self, data: Dict[str, Any], creating: bool) -> Dict[str, Any]:
        title = data["title"]
        content = data["content"]
        columns = {
            "title_id": title["id"],
            "title_en": title.get("en") or "",
            "title_cn": title.get("cn") or "",
            "content_id": content["id"],
            "content_en": content.get("en") or "",
            "content_cn": content.get("cn") or "",
            "category": data["category"],
            "image_urls": encode_list(normalize_image_urls(data.get("image_urls"))),
        }
        # On update the publish date only changes when the client sends one
        if data.get("date") is not None:
            columns["published_at"] = to_naive_utc(data["date"])
        elif creating:
            columns["published_at"] = utcnow()
        return columns

    def to_dto(self, row: News) -> NewsArticle:
        return NewsArticle(
            id=row.id,
            date=to_iso(row.published_at or row.created_at),
            category=row.category,
            title=LocalizedText(id=row.title_id, en=row.title_en or "", cn=row.title_cn or ""),
            content=LocalizedText(
                id=row.content_id, en=row.content_en or "", cn=row.content_cn or ""
            ),
            image_urls=coerce_list(row.image_urls),
        )

    async def count(self) -> int:
        result = await self._run(self.session.execute(select(func.count()).select_from(News)))
        return result.scalar() or 0

    async def list_page(self, page: int, limit: int) -> Tuple[List[NewsArticle], PageMeta]:
        """
        One page of articles, newest first.

        Args:
            page: 1-based page number (already clamped)
            limit: Page size (already clamped)

        Returns:
            (articles, meta) where meta.total_pages is at least 1
        """
        total = await self.count()
        total_pages = math.ceil(total / limit) if total > 0 else 1

        query = (
            self.base_query()
            .order_by(*self.order_by())
            .limit(limit)
            .offset((page - 1) * limit)
        )
        result = await self._run(self.session.execute(query))
        articles = [self.map_row(row) for row in result.all()]

        meta = PageMeta(page=page, limit=limit, total=total, total_pages=total_pages)
        return articles, meta
