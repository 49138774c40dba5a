"""
Tests for the resolver logging schema extension
"""

import uuid
from unittest.mock import MagicMock, patch

import pytest
from graphql import GraphQLField, GraphQLList, GraphQLObjectType, GraphQLString
from graphql.pyutils import Path

from bookshelf.graphql.extensions import ResolverLoggingExtension, is_logged_field
from bookshelf.graphql.schema import create_schema, validate_schema

BOOK_TYPE = GraphQLObjectType("Book", {"name": GraphQLField(GraphQLString)})


def make_info(parent: str, field: str, return_type, path: Path) -> MagicMock:
    info = MagicMock()
    info.parent_type = GraphQLObjectType(parent, {field: GraphQLField(GraphQLString)})
    info.field_name = field
    info.return_type = return_type
    info.path = path
    return info


class TestIsLoggedField:
    def test_root_field_is_logged(self):
        info = make_info("Query", "books", GraphQLList(BOOK_TYPE), Path(None, "books", "Query"))

        assert is_logged_field(info)

    def test_relational_field_is_logged(self):
        path = Path(Path(None, "author", "Query"), "books", "Author")
        info = make_info("Author", "books", GraphQLList(BOOK_TYPE), path)

        assert is_logged_field(info)

    def test_scalar_field_is_skipped(self):
        path = Path(Path(None, "book", "Query"), "name", "Book")
        info = make_info("Book", "name", GraphQLString, path)

        assert not is_logged_field(info)

    def test_introspection_is_skipped(self):
        info = make_info("Query", "__schema", GraphQLString, Path(None, "__schema", "Query"))

        assert not is_logged_field(info)


@pytest.mark.integration
class TestResolverLoggingExtension:
    @pytest.mark.asyncio
    async def test_logs_root_and_relational_fields(self, database):
        schema = create_schema(log_resolvers=True)

        with patch("bookshelf.graphql.extensions.logger") as mock_logger:
            result = await schema.execute(
                'mutation { addBook(name: "X", authorId: "%s") { name author { name } } }'
                % uuid.uuid4()
            )

        assert result.errors is None
        fields = [call.kwargs["field"] for call in mock_logger.info.call_args_list]
        assert fields == ["Mutation.addBook", "Book.author"]
        first = mock_logger.info.call_args_list[0].kwargs
        assert first["operation"] == "mutation"
        assert first["arguments"]["name"] == "X"

    @pytest.mark.asyncio
    async def test_disabled_extension_does_not_log(self, database):
        schema = create_schema(log_resolvers=False)

        with patch("bookshelf.graphql.extensions.logger") as mock_logger:
            result = await schema.execute("{ books { name } }")

        assert result.errors is None
        mock_logger.info.assert_not_called()

    def test_extension_registration_follows_flag(self):
        assert ResolverLoggingExtension in create_schema(log_resolvers=True).extensions
        assert ResolverLoggingExtension not in create_schema(log_resolvers=False).extensions


def test_schema_validates():
    validate_schema(create_schema(log_resolvers=False))


def test_schema_sdl_shape():
    sdl = create_schema(log_resolvers=False).as_str()

    assert "addAuthor(name: String!" in sdl
    assert "authorId: ID!" in sdl
    assert "authorId" not in sdl.split("type Book {")[1].split("}")[0]
