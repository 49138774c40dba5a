"""Author/book catalog persistence."""

from .repository import (
    InvalidIdentifierError,
    find_author_by_id,
    find_authors,
    find_book_by_id,
    find_books,
    parse_id,
    save_author,
    save_book,
)

__all__ = [
    "InvalidIdentifierError",
    "find_author_by_id",
    "find_authors",
    "find_book_by_id",
    "find_books",
    "parse_id",
    "save_author",
    "save_book",
]
