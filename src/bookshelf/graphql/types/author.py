"""
Author GraphQL type definitions
"""

from typing import TYPE_CHECKING, Annotated

import strawberry

if TYPE_CHECKING:
    from .book import Book


@strawberry.type
class Author:
    """Author type for GraphQL API."""

    id: strawberry.ID
    name: str
    age: int | None

    @strawberry.field
    async def books(
        self, info: strawberry.Info
    ) -> list[Annotated["Book", strawberry.lazy(".book")]]:
        """Get all books whose author id matches this author."""
        # One lookup per parent author, no batching
        from ..resolvers.author import resolve_author_books

        return await resolve_author_books(self, info)
