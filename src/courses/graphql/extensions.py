"""
Schema extensions
"""

from collections.abc import Iterator

from graphql import GraphQLError
from strawberry.extensions import SchemaExtension

from ..database.exceptions import DatabaseConnectionError
from ..logging import get_logger
from ..shutdown import request_exit

logger = get_logger(__name__)


def find_connection_error(errors: list[GraphQLError] | None) -> DatabaseConnectionError | None:
    for error in errors or []:
        if isinstance(error.original_error, DatabaseConnectionError):
            return error.original_error
    return None


class FatalConnectionErrorExtension(SchemaExtension):
    """Escalate document store connection failures to process shutdown.

    The failing request still receives its GraphQL error response.
    """

    def on_operation(self) -> Iterator[None]:
        yield

        result = self.execution_context.result
        if result is None:
            return

        connection_error = find_connection_error(result.errors)
        if connection_error is not None:
            logger.critical(
                "Document store unavailable",
                target=connection_error.target,
                error=str(connection_error),
            )
            request_exit(1, reason=str(connection_error))
