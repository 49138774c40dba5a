from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...catalog import find_author_by_id, find_authors, find_books, save_author
from ...database.connection import get_async_session
from ...dbmodels import Authors
from ...logging import get_logger

if TYPE_CHECKING:
    from ..types.author import Author
    from ..types.book import Book

logger = get_logger(__name__)


def to_author(row: Authors) -> Author:
    """Convert a SQLAlchemy author row to the GraphQL type."""
    from ..types.author import Author as AuthorType

    return AuthorType(id=strawberry.ID(str(row.id)), name=row.name, age=row.age)


# Query resolvers
async def resolve_author_by_id(info: strawberry.Info, id: str | None) -> Author | None:
    """Resolve a single author by id. A missing id or an unknown author resolves to null."""
    _ = info

    async with get_async_session() as session:
        row = await find_author_by_id(session, id)

    if row is None:
        logger.debug("Author not found", author_id=id)
        return None
    return to_author(row)


async def resolve_authors(info: strawberry.Info) -> list[Author]:
    """Resolve every stored author, unfiltered and unpaginated."""
    _ = info

    async with get_async_session() as session:
        rows = await find_authors(session)
    return [to_author(row) for row in rows]


# Field resolvers
async def resolve_author_books(author: Author, info: strawberry.Info) -> list[Book]:
    """Resolve the books whose author id equals this author's id."""
    from .book import to_book

    _ = info

    async with get_async_session() as session:
        rows = await find_books(session, author_id=author.id)
    return [to_book(row) for row in rows]


# Mutation resolvers
async def add_author(info: strawberry.Info, name: str, age: int | None = None) -> Author:
    """Persist a new author and return it with its assigned id."""
    _ = info

    async with get_async_session() as session:
        row = await save_author(session, Authors(name=name, age=age))

    logger.info("Author added", author_id=str(row.id))
    return to_author(row)
