"""Repository helpers for the author/book catalog.

Every function takes an open ``AsyncSession`` and performs exactly one
round-trip (or one insert), so callers control session lifetime.
"""

from __future__ import annotations

from typing import Any, TypeVar
from uuid import UUID

from sqlalchemy import Uuid, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import Authors, Base, Books

ModelT = TypeVar("ModelT", bound=Base)


class InvalidIdentifierError(ValueError):
    """Raised when an identifier cannot be parsed as a record id."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid identifier: {value!r}")


def parse_id(value: str | UUID) -> UUID:
    """Coerce an incoming id (GraphQL ``ID`` strings included) to a UUID."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError as e:
        raise InvalidIdentifierError(value) from e


async def _find_by_id(session: AsyncSession, model: type[ModelT], id: str | UUID | None) -> ModelT | None:
    if id is None:
        return None
    return await session.get(model, parse_id(id))


async def _find(session: AsyncSession, model: type[ModelT], filters: dict[str, Any]) -> list[ModelT]:
    stmt = select(model)
    columns = model.__table__.c
    for key, value in filters.items():
        if key not in columns:
            raise ValueError(f"Unknown filter field for {model.__tablename__}: {key}")
        if isinstance(columns[key].type, Uuid):
            value = parse_id(value)
        stmt = stmt.where(columns[key] == value)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def _save(session: AsyncSession, record: ModelT) -> ModelT:
    session.add(record)
    await session.flush()
    await session.refresh(record)
    return record


# Authors
async def find_author_by_id(session: AsyncSession, id: str | UUID | None) -> Authors | None:
    return await _find_by_id(session, Authors, id)


async def find_authors(session: AsyncSession, **filters: Any) -> list[Authors]:
    return await _find(session, Authors, filters)


async def save_author(session: AsyncSession, author: Authors) -> Authors:
    return await _save(session, author)


# Books
async def find_book_by_id(session: AsyncSession, id: str | UUID | None) -> Books | None:
    return await _find_by_id(session, Books, id)


async def find_books(session: AsyncSession, **filters: Any) -> list[Books]:
    return await _find(session, Books, filters)


async def save_book(session: AsyncSession, book: Books) -> Books:
    return await _save(session, book)
