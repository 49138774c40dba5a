"""
Integration tests for the catalog repository against an in-memory SQLite database
"""

import uuid

import pytest

from bookshelf.catalog import (
    InvalidIdentifierError,
    find_author_by_id,
    find_authors,
    find_book_by_id,
    find_books,
    parse_id,
    save_author,
    save_book,
)
from bookshelf.dbmodels import Authors, Books


class TestParseId:
    def test_accepts_uuid_and_string(self):
        value = uuid.uuid4()
        assert parse_id(value) is value
        assert parse_id(str(value)) == value

    def test_rejects_malformed(self):
        with pytest.raises(InvalidIdentifierError) as exc_info:
            parse_id("not-an-id")

        assert isinstance(exc_info.value, ValueError)
        assert exc_info.value.value == "not-an-id"


@pytest.mark.integration
class TestAuthorRepository:
    @pytest.mark.asyncio
    async def test_save_assigns_id(self, db_session):
        author = await save_author(db_session, Authors(name="Ursula K. Le Guin", age=88))

        assert isinstance(author.id, uuid.UUID)
        assert author.created_at is not None

    @pytest.mark.asyncio
    async def test_find_by_id_round_trip(self, db_session):
        saved = await save_author(db_session, Authors(name="Octavia Butler"))

        found = await find_author_by_id(db_session, str(saved.id))

        assert found is not None
        assert found.name == "Octavia Butler"
        assert found.age is None

    @pytest.mark.asyncio
    async def test_find_by_id_absent(self, db_session):
        assert await find_author_by_id(db_session, uuid.uuid4()) is None

    @pytest.mark.asyncio
    async def test_find_by_id_none_is_absent(self, db_session):
        assert await find_author_by_id(db_session, None) is None

    @pytest.mark.asyncio
    async def test_find_by_malformed_id_fails(self, db_session):
        with pytest.raises(InvalidIdentifierError):
            await find_author_by_id(db_session, "12345")

    @pytest.mark.asyncio
    async def test_find_all_and_filtered(self, db_session):
        await save_author(db_session, Authors(name="A", age=30))
        await save_author(db_session, Authors(name="B", age=40))

        assert {a.name for a in await find_authors(db_session)} == {"A", "B"}
        assert [a.name for a in await find_authors(db_session, age=40)] == ["B"]

    @pytest.mark.asyncio
    async def test_unknown_filter_field(self, db_session):
        with pytest.raises(ValueError, match="Unknown filter field"):
            await find_authors(db_session, nickname="x")


@pytest.mark.integration
class TestBookRepository:
    @pytest.mark.asyncio
    async def test_find_books_by_author(self, db_session):
        author = await save_author(db_session, Authors(name="Iain M. Banks"))
        other = await save_author(db_session, Authors(name="Someone Else"))
        await save_book(db_session, Books(name="Excession", author_id=author.id))
        await save_book(db_session, Books(name="Use of Weapons", genre="sci-fi", author_id=author.id))
        await save_book(db_session, Books(name="Unrelated", author_id=other.id))

        books = await find_books(db_session, author_id=str(author.id))

        assert {b.name for b in books} == {"Excession", "Use of Weapons"}

    @pytest.mark.asyncio
    async def test_find_books_for_author_without_books(self, db_session):
        author = await save_author(db_session, Authors(name="No Books"))

        assert await find_books(db_session, author_id=author.id) == []

    @pytest.mark.asyncio
    async def test_dangling_author_reference_is_stored(self, db_session):
        missing_author_id = uuid.uuid4()

        book = await save_book(db_session, Books(name="Orphan", author_id=missing_author_id))
        found = await find_book_by_id(db_session, book.id)

        assert found is not None
        assert found.author_id == missing_author_id
        assert await find_author_by_id(db_session, found.author_id) is None
