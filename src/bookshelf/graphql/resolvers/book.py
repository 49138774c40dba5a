from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...catalog import find_author_by_id, find_book_by_id, find_books, parse_id, save_book
from ...database.connection import get_async_session
from ...dbmodels import Books
from ...logging import get_logger

if TYPE_CHECKING:
    from ..types.author import Author
    from ..types.book import Book

logger = get_logger(__name__)


def to_book(row: Books) -> Book:
    """Convert a SQLAlchemy book row to the GraphQL type."""
    from ..types.book import Book as BookType

    return BookType(
        id=strawberry.ID(str(row.id)),
        name=row.name,
        genre=row.genre,
        author_id=row.author_id,
    )


# Query resolvers
async def resolve_book_by_id(info: strawberry.Info, id: str | None) -> Book | None:
    """Resolve a single book by id. A missing id or an unknown book resolves to null."""
    _ = info

    async with get_async_session() as session:
        row = await find_book_by_id(session, id)

    if row is None:
        logger.debug("Book not found", book_id=id)
        return None
    return to_book(row)


async def resolve_books(info: strawberry.Info) -> list[Book]:
    """Resolve every stored book, unfiltered and unpaginated."""
    _ = info

    async with get_async_session() as session:
        rows = await find_books(session)
    return [to_book(row) for row in rows]


# Field resolvers
async def resolve_book_author(book: Book, info: strawberry.Info) -> Author | None:
    """Resolve the author a book refers to.

    The reference is not enforced, so a dangling author id resolves to null.
    """
    from .author import to_author

    _ = info

    async with get_async_session() as session:
        row = await find_author_by_id(session, book.author_id)

    if row is None:
        logger.debug("Author not found for book", book_id=str(book.id), author_id=str(book.author_id))
        return None
    return to_author(row)


# Mutation resolvers
async def add_book(
    info: strawberry.Info, name: str, author_id: str, genre: str | None = None
) -> Book:
    """Persist a new book and return it with its assigned id.

    The author id is only parsed, never checked against the authors table.
    """
    _ = info

    async with get_async_session() as session:
        row = await save_book(session, Books(name=name, genre=genre, author_id=parse_id(author_id)))

    logger.info("Book added", book_id=str(row.id), author_id=str(row.author_id))
    return to_book(row)
