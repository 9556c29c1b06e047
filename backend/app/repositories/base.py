"""
Generic Resource Repository

Every content resource (news, jobs, applications, team, partners, contact
messages) follows the same life cycle against its own table:

    list()            all rows, most recent first
    get(id)           one row or NotFoundError
    create(data)      validate, insert with a fresh UUID, re-read
    update(id, data)  validate, full-column update, re-read
    delete(id)        hard delete, confirmed by a second lookup

Subclasses only describe their table: the ORM model, ordering, which input
fields are required, which are enumerated, and how to map between the input
dict / table columns / response DTO.

Input data is the snake_case dict produced by the request schema
(model_dump()); nested localized fields are addressed with dotted paths such
as "title.id".

All validation runs before the first statement is issued. Every statement is
bounded by statement_timeout; storage failures surface as StorageError.
"""

import asyncio
import copy
import logging
from typing import Any, Awaitable, Dict, Generic, List, Optional, Sequence, Tuple, Type, TypeVar

from pydantic.alias_generators import to_camel
from sqlalchemy import Select, delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import DeadlineExceededError, NotFoundError, StorageError, ValidationError
from app.helpers import generate_id

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")
DtoT = TypeVar("DtoT")
T = TypeVar("T")


def get_path(data: Dict[str, Any], path: str) -> Any:
    value: Any = data
    for key in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def set_path(data: Dict[str, Any], path: str, value: Any) -> None:
    *parents, leaf = path.split(".")
    target = data
    for key in parents:
        target = target.setdefault(key, {})
    target[leaf] = value


def wire_name(path: str) -> str:
    """Field name as the client sent it, e.g. image_url -> imageUrl."""
    return ".".join(to_camel(part) for part in path.split("."))


def is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


class ResourceRepository(Generic[ModelT, DtoT]):
    """
    Base class for table-backed resources.

    Attributes:
        model: SQLAlchemy ORM class
        resource_name: Human label used in error messages ("News", "Partner")
        required_fields: Dotted input paths that must be non-blank strings
        enum_fields: Input path -> permitted literal values (case-sensitive)
    """

    model: Type[ModelT]
    resource_name: str = "Resource"
    required_fields: Tuple[str, ...] = ()
    enum_fields: Dict[str, Tuple[str, ...]] = {}

    def __init__(self, session: AsyncSession, statement_timeout: float = 10.0):
        self.session = session
        self.statement_timeout = statement_timeout

    # ==================== Hooks ====================

    def order_by(self) -> Sequence[Any]:
        return [self.model.created_at.desc()]

    def base_query(self) -> Select:
        return select(self.model)

    def to_columns(self, data: Dict[str, Any], creating: bool) -> Dict[str, Any]:
        raise NotImplementedError

    def to_dto(self, row: Any) -> DtoT:
        raise NotImplementedError

    def map_row(self, row: Any) -> DtoT:
        """Map one result row of base_query(); the entity is the first column."""
        return self.to_dto(row[0])

    # ==================== Validation ====================

    def validate(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Check required and enumerated fields.

        Returns:
            Copy of data with required strings trimmed

        Raises:
            ValidationError: naming every offending field
        """
        missing = [path for path in self.required_fields if is_blank(get_path(data, path))]
        if missing:
            raise ValidationError(
                "Missing required fields: " + ", ".join(wire_name(path) for path in missing)
            )

        for path, allowed in self.enum_fields.items():
            if get_path(data, path) not in allowed:
                raise ValidationError(
                    f"Invalid {wire_name(path)}: must be one of {', '.join(allowed)}"
                )

        cleaned = copy.deepcopy(data)
        for path in self.required_fields:
            set_path(cleaned, path, get_path(cleaned, path).strip())
        return cleaned

    # ==================== Statement execution ====================

    async def _run(self, operation: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(operation, timeout=self.statement_timeout)
        except asyncio.TimeoutError:
            logger.error(f"{self.resource_name}: statement exceeded {self.statement_timeout}s")
            raise DeadlineExceededError(
                f"Database did not respond within {self.statement_timeout:g}s"
            )
        except SQLAlchemyError as e:
            logger.error(f"{self.resource_name}: storage error: {e}")
            raise StorageError(str(e)) from e

    async def _fetch_row(self, resource_id: str) -> Optional[Any]:
        query = (
            self.base_query()
            .where(self.model.id == resource_id)
            .limit(1)
            .execution_options(populate_existing=True)
        )
        result = await self._run(self.session.execute(query))
        return result.first()

    async def _commit(self) -> None:
        await self._run(self.session.commit())

    def _not_found(self) -> NotFoundError:
        return NotFoundError(f"{self.resource_name} not found")

    # ==================== Operations ====================

    async def list(self) -> List[DtoT]:
        query = self.base_query().order_by(*self.order_by())
        result = await self._run(self.session.execute(query))
        return [self.map_row(row) for row in result.all()]

    async def get(self, resource_id: str) -> DtoT:
        row = await self._fetch_row(resource_id)
        if row is None:
            raise self._not_found()
        return self.map_row(row)

    async def create(self, data: Dict[str, Any]) -> DtoT:
        columns = self.to_columns(self.validate(data), creating=True)
        resource_id = generate_id()

        await self._run(self.session.execute(insert(self.model).values(id=resource_id, **columns)))
        await self._commit()

        row = await self._fetch_row(resource_id)
        if row is None:
            raise StorageError(f"Failed to read {self.resource_name.lower()} after insert")
        return self.map_row(row)

    async def update(self, resource_id: str, data: Dict[str, Any]) -> DtoT:
        columns = self.to_columns(self.validate(data), creating=False)

        statement = update(self.model).where(self.model.id == resource_id).values(**columns)
        await self._run(self.session.execute(statement))
        await self._commit()

        row = await self._fetch_row(resource_id)
        if row is None:
            raise self._not_found()
        return self.map_row(row)

    async def delete(self, resource_id: str) -> None:
        statement = delete(self.model).where(self.model.id == resource_id)
        result = await self._run(self.session.execute(statement))
        await self._commit()

        if result.rowcount == 0:
            raise self._not_found()

        if await self._fetch_row(resource_id) is not None:
            raise StorageError(f"Failed to delete {self.resource_name.lower()}")

        logger.info(f"{self.resource_name} {resource_id} deleted")
