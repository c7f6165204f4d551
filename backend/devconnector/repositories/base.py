"""
DevConnector Backend: Repository Base
======================================

What:  Generic document-style CRUD over one ORM model.
Why:   Users, profiles and posts share the same access pattern: find by id,
       find by query, create, update, delete, and "load parent, rewrite one
       embedded list, save".
How:   A repository is built once with the application's session factory
       and opens a short transaction per call. ORM objects it returns are
       detached but fully loaded (expire_on_commit=False).

Error Handling Strategy:
    - Unknown or unparseable ids → None (the service decides it is a 404)
    - SQLAlchemyError → logged, re-raised as DatabaseError (500)
    - Application errors raised by a mutation callback roll the transaction
      back and propagate unchanged

Concurrency:
    Sub-collection mutation is read-modify-write with no locking. Two
    concurrent writers to the same parent row: last write wins.
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from devconnector.database import Base
from devconnector.exceptions import DatabaseError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

ListMutation = Callable[[List[Any]], List[Any]]


def parse_id(raw: Any) -> Optional[uuid.UUID]:
    """UUID from a path parameter or stored string; None when malformed."""
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw))
    except (TypeError, ValueError):
        return None


class Repository(Generic[ModelT]):
    """CRUD access to the documents of one model."""

    model: Type[ModelT]

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._sessions = session_factory

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        async with self._sessions() as session:
            try:
                async with session.begin():
                    yield session
            except SQLAlchemyError as e:
                logger.error(
                    "Database error in %s.%s: %s",
                    type(self).__name__,
                    operation,
                    str(e),
                    exc_info=True,
                )
                raise DatabaseError(
                    context={
                        "repository": type(self).__name__,
                        "operation": operation,
                        "error_type": type(e).__name__,
                    },
                )

    # ── Reads ─────────────────────────────────────────────────────────────

    async def find_by_id(self, entity_id: Any) -> Optional[ModelT]:
        pk = parse_id(entity_id)
        if pk is None:
            return None
        async with self._transaction("find_by_id") as session:
            return await session.get(self.model, pk)

    async def find_one(self, *criteria: Any) -> Optional[ModelT]:
        async with self._transaction("find_one") as session:
            result = await session.execute(select(self.model).where(*criteria))
            return result.scalars().first()

    async def find(self, *criteria: Any, order_by: Sequence[Any] = ()) -> List[ModelT]:
        query = select(self.model).where(*criteria).order_by(*order_by)
        async with self._transaction("find") as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    # ── Writes ────────────────────────────────────────────────────────────

    async def create(self, **fields: Any) -> ModelT:
        async with self._transaction("create") as session:
            entity = self.model(**fields)
            session.add(entity)
            await session.flush()
            return entity

    async def update(self, entity_id: Any, **fields: Any) -> Optional[ModelT]:
        """Replace the given mutable fields; None if the row does not exist."""
        pk = parse_id(entity_id)
        if pk is None:
            return None
        async with self._transaction("update") as session:
            entity = await session.get(self.model, pk)
            if entity is None:
                return None
            for name, value in fields.items():
                setattr(entity, name, value)
            await session.flush()
            return entity

    async def delete(self, entity_id: Any) -> bool:
        pk = parse_id(entity_id)
        if pk is None:
            return False
        async with self._transaction("delete") as session:
            entity = await session.get(self.model, pk)
            if entity is None:
                return False
            await session.delete(entity)
            return True

    async def delete_where(self, *criteria: Any) -> int:
        """Bulk delete; returns the number of rows removed."""
        async with self._transaction("delete_where") as session:
            result = await session.execute(delete(self.model).where(*criteria))
            return result.rowcount or 0

    async def _mutate_list(
        self,
        field: str,
        mutate: ListMutation,
        *criteria: Any,
    ) -> Optional[ModelT]:
        """
        Load the parent matching `criteria`, rewrite one embedded list, save.

        `mutate` receives a copy of the current list and returns the new
        one. It may raise to abort; nothing is written in that case.
        JSON columns are not mutation-tracked, so the new list is assigned
        rather than edited in place.
        """
        async with self._transaction(f"mutate_{field}") as session:
            result = await session.execute(select(self.model).where(*criteria))
            entity = result.scalars().first()
            if entity is None:
                return None
            current = list(getattr(entity, field) or [])
            setattr(entity, field, mutate(current))
            await session.flush()
            return entity
