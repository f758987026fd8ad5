"""Base repositories: the generic entity store every domain repository builds on.

EntityRepository     create / find_by_id / find_all / update / delete (hard delete).
SoftDeleteRepository same contract; reads skip rows with deleted_at set unless
                     include_deleted=True, and delete sets deleted_at instead of
                     removing the row.
AssociationRepository
                     pure join rows keyed by a pair: idempotent add and remove.

All storage errors are translated to domain exceptions before leaving this module.
"""

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, delete, insert, select, update
from sqlalchemy.engine import Result
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.sql.base import Executable

from tenant_admin.domain.exceptions import (
    InternalException,
    ResourceNotFoundException,
    ValidationException,
)
from tenant_admin.infrastructure.persistence.database import Base
from tenant_admin.infrastructure.persistence.errors import translate_db_error
from tenant_admin.shared.telemetry.logging import get_logger
from tenant_admin.shared.utils.datetime import utc_now

_logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)
IdType = TypeVar("IdType")


class EntityRepository(Generic[ModelType, IdType]):
    """Generic CRUD over one table, parameterised by model and id type.

    Subclasses pass their model and its id column explicitly. Rows are removed
    outright on delete; use SoftDeleteRepository for tables with deleted_at.
    """

    entity_name: str = "resource"
    #: Columns that partial updates may never set.
    protected_fields: frozenset[str] = frozenset({"id", "created_at"})

    def __init__(
        self,
        db: AsyncSession,
        model: type[ModelType],
        id_column: InstrumentedAttribute[Any],
    ) -> None:
        self.db = db
        self.model = model
        self.id_column = id_column

    def _read_filters(self, include_deleted: bool) -> list[ColumnElement[bool]]:
        """Extra WHERE clauses for find_by_id / find_all."""
        return []

    def _write_filters(self) -> list[ColumnElement[bool]]:
        """Extra WHERE clauses for update / delete."""
        return []

    async def _execute(self, stmt: Executable, operation: str) -> Result[Any]:
        """Run a statement; translate any SQLAlchemy error to a domain exception."""
        try:
            return await self.db.execute(stmt)
        except SQLAlchemyError as exc:
            translated = translate_db_error(exc, self.entity_name, operation)
            if isinstance(exc, IntegrityError):
                _logger.warning(
                    "%s.%s rejected by constraint: %s",
                    self.entity_name,
                    operation,
                    translated.error_code,
                )
            else:
                _logger.error(
                    "%s.%s failed: %s",
                    self.entity_name,
                    operation,
                    exc.__class__.__name__,
                    exc_info=True,
                )
            raise translated from exc

    def _check_update_fields(self, data: Mapping[str, Any]) -> None:
        blocked = self.protected_fields.intersection(data)
        if blocked:
            field = sorted(blocked)[0]
            raise ValidationException(
                f"Field '{field}' cannot be changed on {self.entity_name}", field=field
            )

    async def create(self, data: Mapping[str, Any]) -> ModelType:
        """Insert one row and return it with generated id and timestamps.

        Raises:
            ConflictException: A unique index rejected the row.
            InternalException: The backend returned no row.
        """
        stmt = insert(self.model).values(**data).returning(self.model)
        result = await self._execute(stmt, "create")
        entity = result.scalars().first()
        if entity is None:
            _logger.error("%s.create returned no row", self.entity_name)
            raise InternalException(
                f"Failed to create {self.entity_name}", operation="create"
            )
        return entity

    async def find_by_id(
        self, entity_id: IdType, include_deleted: bool = False
    ) -> ModelType:
        """Return the row with this id.

        Raises:
            ResourceNotFoundException: No matching row (or it is soft-deleted and
                include_deleted is False).
        """
        stmt = (
            select(self.model)
            .where(self.id_column == entity_id, *self._read_filters(include_deleted))
            .execution_options(populate_existing=True)
        )
        result = await self._execute(stmt, "find_by_id")
        entity = result.scalars().first()
        if entity is None:
            raise ResourceNotFoundException(self.entity_name, entity_id)
        return entity

    async def find_all(self, include_deleted: bool = False) -> list[ModelType]:
        """Return every matching row, ordered by id. No pagination."""
        stmt = (
            select(self.model)
            .where(*self._read_filters(include_deleted))
            .order_by(self.id_column)
            .execution_options(populate_existing=True)
        )
        result = await self._execute(stmt, "find_all")
        return list(result.scalars().all())

    async def update(self, entity_id: IdType, data: Mapping[str, Any]) -> ModelType:
        """Apply a partial update and return the updated row.

        Raises:
            ValidationException: data touches a protected field (id, deleted_at, ...).
            ResourceNotFoundException: Zero rows matched.
        """
        self._check_update_fields(data)
        if not data:
            return await self.find_by_id(entity_id)
        stmt = (
            update(self.model)
            .where(self.id_column == entity_id, *self._write_filters())
            .values(**data)
            .returning(self.model)
            .execution_options(populate_existing=True)
        )
        result = await self._execute(stmt, "update")
        entity = result.scalars().first()
        if entity is None:
            raise ResourceNotFoundException(self.entity_name, entity_id)
        return entity

    async def delete(self, entity_id: IdType) -> bool:
        """Remove the row. Returns True when at least one row was removed."""
        _logger.debug("Deleting %s %s", self.entity_name, entity_id)
        stmt = (
            delete(self.model)
            .where(self.id_column == entity_id)
            .returning(self.id_column)
        )
        result = await self._execute(stmt, "delete")
        return len(result.scalars().all()) > 0


class SoftDeleteRepository(EntityRepository[ModelType, IdType]):
    """Entity store for tables with a deleted_at column.

    Reads exclude soft-deleted rows unless include_deleted=True. Updates and
    deletes only match active rows, so updating or deleting a soft-deleted id
    raises ResourceNotFoundException; deleting twice is not idempotent.
    """

    protected_fields: frozenset[str] = frozenset({"id", "created_at", "deleted_at"})

    def __init__(
        self,
        db: AsyncSession,
        model: type[ModelType],
        id_column: InstrumentedAttribute[Any],
        deleted_at_column: InstrumentedAttribute[Any],
    ) -> None:
        super().__init__(db, model, id_column)
        self.deleted_at_column = deleted_at_column

    def _read_filters(self, include_deleted: bool) -> list[ColumnElement[bool]]:
        if include_deleted:
            return []
        return [self.deleted_at_column.is_(None)]

    def _write_filters(self) -> list[ColumnElement[bool]]:
        return [self.deleted_at_column.is_(None)]

    async def delete(self, entity_id: IdType) -> bool:
        """Set deleted_at on the active row with this id.

        Raises:
            ResourceNotFoundException: No active row (missing or already deleted).
        """
        _logger.debug("Soft-deleting %s %s", self.entity_name, entity_id)
        stmt = (
            update(self.model)
            .where(self.id_column == entity_id, *self._write_filters())
            .values({self.deleted_at_column.key: utc_now()})
            .returning(self.id_column)
            .execution_options(synchronize_session="fetch")
        )
        result = await self._execute(stmt, "delete")
        if not result.scalars().all():
            raise ResourceNotFoundException(self.entity_name, entity_id)
        return True


class AssociationRepository(Generic[ModelType]):
    """Join table keyed by a (left, right) pair. Pairs form a set.

    add() inserts only when the pair is absent; remove() deletes by pair and
    succeeds whether or not the pair existed. Both report whether a row changed.
    """

    entity_name: str = "association"

    def __init__(
        self,
        db: AsyncSession,
        model: type[ModelType],
        left_column: InstrumentedAttribute[Any],
        right_column: InstrumentedAttribute[Any],
    ) -> None:
        self.db = db
        self.model = model
        self.left_column = left_column
        self.right_column = right_column

    async def _execute(self, stmt: Executable, operation: str) -> Result[Any]:
        try:
            return await self.db.execute(stmt)
        except SQLAlchemyError as exc:
            _logger.warning(
                "%s.%s failed: %s", self.entity_name, operation, exc.__class__.__name__
            )
            raise translate_db_error(exc, self.entity_name, operation) from exc

    def _pair_values(self, left_id: Any, right_id: Any) -> dict[str, Any]:
        return {self.left_column.key: left_id, self.right_column.key: right_id}

    async def exists(self, left_id: Any, right_id: Any) -> bool:
        stmt = select(self.left_column).where(
            self.left_column == left_id, self.right_column == right_id
        )
        result = await self._execute(stmt, "exists")
        return result.first() is not None

    def _dialect_name(self) -> str:
        return self.db.get_bind().dialect.name

    async def add(self, left_id: Any, right_id: Any) -> bool:
        """Insert the pair if absent. Returns True if a row was inserted."""
        values = self._pair_values(left_id, right_id)
        dialect_name = self._dialect_name()
        if dialect_name == "postgresql":
            from sqlalchemy.dialects.postgresql import insert as dialect_insert
        elif dialect_name == "sqlite":
            from sqlalchemy.dialects.sqlite import insert as dialect_insert
        else:
            return await self._add_checked(left_id, right_id, values)
        stmt = (
            dialect_insert(self.model)
            .values(**values)
            .on_conflict_do_nothing()
            .returning(self.left_column)
        )
        result = await self._execute(stmt, "add")
        return result.first() is not None

    async def _add_checked(
        self, left_id: Any, right_id: Any, values: dict[str, Any]
    ) -> bool:
        """Portable insert-if-absent for dialects without ON CONFLICT."""
        if await self.exists(left_id, right_id):
            return False
        try:
            async with self.db.begin_nested():
                await self.db.execute(insert(self.model).values(**values))
        except IntegrityError as exc:
            # Lost a race with a concurrent insert of the same pair.
            if await self.exists(left_id, right_id):
                return False
            raise translate_db_error(exc, self.entity_name, "add") from exc
        return True

    async def remove(self, left_id: Any, right_id: Any) -> bool:
        """Delete the pair. Returns True if a row was removed; absence is not an error."""
        stmt = (
            delete(self.model)
            .where(self.left_column == left_id, self.right_column == right_id)
            .returning(self.left_column)
        )
        result = await self._execute(stmt, "remove")
        return len(result.all()) > 0
