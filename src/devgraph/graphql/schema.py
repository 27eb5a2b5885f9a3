"""
Main GraphQL schema definition using Strawberry
"""

from typing import Any

import strawberry
from graphql import GraphQLError, get_introspection_query, graphql_sync
from graphql import validate_schema as gql_validate_schema
from strawberry.schema.config import StrawberryConfig
from strawberry.types import ExecutionContext

from ..errors import DeveloperError
from ..logging import get_logger
from .mutations.root import Mutation
from .queries.root import Query

logger = get_logger(__name__)


class DeveloperSchema(strawberry.Schema):
    """Strawberry schema that reports field errors through structlog."""

    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: ExecutionContext | None = None,
    ) -> None:
        _ = execution_context
        for error in errors:
            original = error.original_error
            if original is None or isinstance(original, DeveloperError):
                logger.warning(
                    "GraphQL error",
                    message=error.message,
                    path=error.path,
                    error_type=type(original).__name__ if original else None,
                )
            else:
                # Unexpected failure inside a resolver: keep the traceback
                logger.error(
                    "Unhandled GraphQL resolver error",
                    message=error.message,
                    path=error.path,
                    error_type=type(original).__name__,
                    exc_info=original,
                )


def create_schema() -> strawberry.Schema:
    """Build the GraphQL schema.

    Field and argument names are published exactly as declared (snake_case).
    The schema is built once at startup and shared read-only by every request.
    """
    return DeveloperSchema(
        query=Query,
        mutation=Mutation,
        config=StrawberryConfig(auto_camel_case=False),
    )


def validate_schema(schema: strawberry.Schema) -> None:
    """Validate the GraphQL schema at startup.

    Runs graphql-core schema validation and an introspection query so that
    unresolved types fail the server at boot instead of at request time.

    Raises:
        Exception: If the schema is invalid or has unresolved types
    """
    try:
        graphql_schema = schema._schema

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


def format_result(data: Any, errors: list[GraphQLError] | None) -> dict[str, Any]:
    """Shape an execution result as the JSON response body."""
    body: dict[str, Any] = {"data": data}
    if errors:
        body["errors"] = [error.formatted for error in errors]
    return body
