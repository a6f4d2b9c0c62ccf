from datetime import datetime, timezone
from typing import TypeVar, Generic, Type, List, Optional

from sqlalchemy import select, delete, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .errors import ConstraintViolation

T = TypeVar("T")  # Representa una entidad genérica (modelo SQLAlchemy)


def utcnow() -> datetime:
    """Naive UTC timestamp, the way SQLite stores DATETIME columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class GenericDAO(Generic[T]):
    def __init__(self, session: AsyncSession, model: Type[T]):
        self.session = session
        self.model = model

    def _select(self):
        return select(self.model)

    def _ordering(self):
        return (self.model.id,)

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConstraintViolation() from e

    async def _all(self, stmt) -> List[T]:
        result = await self.session.execute(stmt.order_by(*self._ordering()))
        return list(result.scalars().all())

    async def create(self, entity: T) -> T:
        now = utcnow()
        entity.created_at = now
        entity.updated_at = now
        self.session.add(entity)
        await self._commit()
        return await self.findById(entity.id)

    async def findById(self, id_value) -> Optional[T]:
        stmt = (
            self._select()
            .where(self.model.id == id_value)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def findAll(self) -> List[T]:
        return await self._all(self._select())

    async def update(self, id_value, **kwargs) -> Optional[T]:
        entity = await self.findById(id_value)
        if entity is None:
            return None
        for key, value in kwargs.items():
            setattr(entity, key, value)
        entity.updated_at = max(utcnow(), entity.created_at)
        await self._commit()
        return await self.findById(id_value)

    async def delete(self, id_value) -> bool:
        entity = await self.findById(id_value)
        if entity is None:
            return False
        await self.session.delete(entity)
        await self._commit()
        return True

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(self.model))
        return result.scalar_one()

    async def clearAll(self) -> int:
        result = await self.session.execute(delete(self.model))
        await self._commit()
        return result.rowcount
