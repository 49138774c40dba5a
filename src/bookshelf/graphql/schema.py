"""
Main GraphQL schema definition using Strawberry
"""

from typing import Any

import strawberry
from fastapi import Request
from graphql import get_introspection_query, graphql_sync
from graphql import validate_schema as gql_validate_schema
from strawberry.extensions import SchemaExtension
from strawberry.fastapi import GraphQLRouter

from ..config import settings
from ..logging import get_logger
from .extensions import ResolverLoggingExtension
from .mutations.root import Mutation
from .queries.root import Query

logger = get_logger(__name__)


def create_schema(log_resolvers: bool | None = None) -> strawberry.Schema:
    """Build the GraphQL schema.

    Args:
        log_resolvers: Attach the resolver logging extension. Defaults to
            ``settings.log_resolvers``.
    """
    if log_resolvers is None:
        log_resolvers = settings.log_resolvers

    extensions: list[type[SchemaExtension]] = []
    if log_resolvers:
        extensions.append(ResolverLoggingExtension)

    return strawberry.Schema(query=Query, mutation=Mutation, extensions=extensions)


schema = create_schema()


def validate_schema(target: strawberry.Schema | None = None) -> None:
    """Validate the GraphQL schema at startup.

    Ensures every lazy type reference resolves, so a broken schema fails the
    server at boot instead of on the first request.

    Raises:
        Exception: If the schema is invalid or has unresolved types
    """
    graphql_schema = (target or schema)._schema

    try:
        errors = gql_validate_schema(graphql_schema)
        if errors:
            error_messages = [str(e) for e in errors]
            raise Exception(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

        result = graphql_sync(graphql_schema, get_introspection_query())
        if result.errors:
            error_messages = [str(e) for e in result.errors]
            raise Exception(f"GraphQL introspection failed: {'; '.join(error_messages)}")

        logger.info("GraphQL schema validation successful")

    except Exception as e:
        logger.error("GraphQL schema validation failed", error=str(e))
        raise


def create_graphql_router(
    target: strawberry.Schema | None = None,
) -> GraphQLRouter[dict[str, Any], None]:
    """Create a GraphQL router for FastAPI."""

    async def get_context(request: Request) -> dict[str, Any]:
        """Get the context for GraphQL resolvers."""
        return {
            "request": request,
        }

    return GraphQLRouter(
        target or schema,
        path="/graphql",
        graphql_ide="graphiql" if settings.graphiql else None,
        context_getter=get_context,
    )
