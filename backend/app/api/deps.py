from typing import Callable, Type, TypeVar

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Database, get_database, get_db
from app.repositories import ResourceRepository
from app.services.uploads import UploadStorage

RepositoryT = TypeVar("RepositoryT", bound=ResourceRepository)


def repository(repository_cls: Type[RepositoryT]) -> Callable[..., RepositoryT]:
    """Dependency factory: a repository bound to the request's session."""

    def dependency(
        db: AsyncSession = Depends(get_db),
        database: Database = Depends(get_database),
    ) -> RepositoryT:
        return repository_cls(db, statement_timeout=database.statement_timeout)

    return dependency


def get_upload_storage(request: Request) -> UploadStorage:
    return request.app.state.uploads


def get_public_base_url(request: Request) -> str:
    """Configured public URL of this service, else the URL the client used."""
    settings = request.app.state.settings
    return settings.public_base_url or str(request.base_url)
