"""
News API

Endpoints:
    GET    /api/news                 paginated list (?page=1&limit=10)
    GET    /api/news/{news_id}
    POST   /api/news
    PUT    /api/news/{news_id}
    DELETE /api/news/{news_id}
    POST   /api/news/upload-image    multipart, field "file"
    POST   /api/news/upload-images   multipart, field "files" (up to 10)

imageUrls on articles are the URLs returned by the upload endpoints.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile

from app.api.deps import get_public_base_url, get_upload_storage, repository
from app.repositories import NewsRepository, clamp_pagination
from app.schemas import (
    DataResponse,
    NewsArticle,
    NewsInput,
    NewsListResponse,
    OkResponse,
    UploadedUrl,
    UploadedUrls,
)
from app.services.uploads import NEWS_IMAGE, NEWS_IMAGES, UploadStorage, absolute_url

router = APIRouter()


@router.post("/upload-image", response_model=UploadedUrl, status_code=201)
async def upload_news_image(
    file: Optional[List[UploadFile]] = File(None),
    storage: UploadStorage = Depends(get_upload_storage),
    base_url: str = Depends(get_public_base_url),
):
    stored = await storage.save_one(NEWS_IMAGE, file)
    return UploadedUrl(url=absolute_url(base_url, stored.public_path))


@router.post("/upload-images", response_model=UploadedUrls, status_code=201)
async def upload_news_images(
    files: Optional[List[UploadFile]] = File(None),
    storage: UploadStorage = Depends(get_upload_storage),
    base_url: str = Depends(get_public_base_url),
):
    stored = await storage.save(NEWS_IMAGES, files or [])
    return UploadedUrls(urls=[absolute_url(base_url, item.public_path) for item in stored])


@router.get("", response_model=NewsListResponse)
async def list_news(
    # Raw strings: bad values fall back to defaults instead of failing
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    repo: NewsRepository = Depends(repository(NewsRepository)),
):
    page_number, page_size = clamp_pagination(page, limit)
    articles, meta = await repo.list_page(page_number, page_size)
    return NewsListResponse(meta=meta, data=articles)


@router.get("/{news_id}", response_model=DataResponse[NewsArticle])
async def get_news(
    news_id: str,
    repo: NewsRepository = Depends(repository(NewsRepository)),
):
    return DataResponse(data=await repo.get(news_id))


@router.post("", response_model=DataResponse[NewsArticle], status_code=201)
async def create_news(
    payload: NewsInput,
    repo: NewsRepository = Depends(repository(NewsRepository)),
):
    return DataResponse(data=await repo.create(payload.model_dump()))


@router.put("/{news_id}", response_model=DataResponse[NewsArticle])
async def update_news(
    news_id: str,
    payload: NewsInput,
    repo: NewsRepository = Depends(repository(NewsRepository)),
):
    return DataResponse(data=await repo.update(news_id, payload.model_dump()))


@router.delete("/{news_id}", response_model=OkResponse)
async def delete_news(
    news_id: str,
    repo: NewsRepository = Depends(repository(NewsRepository)),
):
    await repo.delete(news_id)
    return OkResponse()
