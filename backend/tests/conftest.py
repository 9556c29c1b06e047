"""
Shared fixtures: settings pointing at a throwaway SQLite file and upload
directory, a TestClient bound to a fresh app, and an async session for
repository tests.
"""

import io
from typing import Optional

import pytest
import pytest_asyncio
from fastapi import UploadFile
from fastapi.testclient import TestClient
from starlette.datastructures import Headers

from app.config import Settings
from app.database import Database
from app.main import create_app


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        db_host="localhost",
        db_user="cms",
        db_password="cms",
        db_name="cms_test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'cms.db'}",
        upload_root=str(tmp_path / "uploads"),
        cors_origins=["http://localhost:3000"],
        _env_file=None,
    )


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def database(settings):
    db = Database(settings.sqlalchemy_url)
    await db.init_db()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database):
    async with database.session() as db_session:
        yield db_session


def make_upload(
    filename: str,
    content: bytes = b"\x89PNG fake image bytes",
    content_type: str = "image/png",
    size: Optional[int] = None,
) -> UploadFile:
    """In-memory UploadFile as FastAPI would hand it to a route."""
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
        size=len(content) if size is None else size,
    )


def stored_files(directory) -> list:
    if not directory.exists():
        return []
    return sorted(path.name for path in directory.iterdir())
