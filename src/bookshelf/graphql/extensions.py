"""
Strawberry schema extensions
"""

from collections.abc import Callable
from typing import Any

from graphql import GraphQLObjectType, GraphQLResolveInfo, get_named_type
from strawberry.extensions import SchemaExtension

from ..logging import get_logger

logger = get_logger(__name__)


def is_logged_field(info: GraphQLResolveInfo) -> bool:
    """Return True for root operations and relational (object-typed) fields.

    Scalar fields and introspection fields are skipped.
    """
    if info.field_name.startswith("__") or info.parent_type.name.startswith("__"):
        return False
    if info.path.prev is None:
        return True
    return isinstance(get_named_type(info.return_type), GraphQLObjectType)


class ResolverLoggingExtension(SchemaExtension):
    """Emit one structured log line per root-operation or relational-field resolution."""

    def resolve(
        self,
        _next: Callable[..., Any],
        root: Any,
        info: GraphQLResolveInfo,
        *args: Any,
        **kwargs: Any,
    ) -> Any:
        if is_logged_field(info):
            logger.info(
                "Resolving field",
                operation=info.operation.operation.value,
                field=f"{info.parent_type.name}.{info.field_name}",
                arguments=kwargs,
            )
        return _next(root, info, *args, **kwargs)
