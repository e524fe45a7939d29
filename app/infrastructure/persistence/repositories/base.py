"""Base repository: generic get/create/update/delete on an injected AsyncSession."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from app.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, create, apply_fields, delete and count.

    The session is request-scoped and injected; repositories never commit.
    Transaction boundaries belong to get_db_transactional.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and refresh server defaults."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def apply_fields(self, obj: ModelType, fields: dict[str, Any]) -> ModelType:
        """Set column values on an attached record, flush and refresh it.

        Raises:
            ValueError: If a field is not a column of the model.
        """
        columns = self.model.__table__.columns
        for key, value in fields.items():
            if key not in columns:
                raise ValueError(f"{self.model.__name__} has no column '{key}'")
            setattr(obj, key, value)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        await self.db.delete(obj)
        await self.db.flush()

    async def scalar_count(self, stmt: Select) -> int:
        """Execute a count statement and return an int (0 when no row)."""
        result = await self.db.execute(stmt)
        return int(result.scalar_one_or_none() or 0)
