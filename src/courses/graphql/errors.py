"""
Errors raised by GraphQL resolvers
"""

from bson import ObjectId
from bson.errors import InvalidId


class QueryExecutionError(Exception):
    """Raised for invalid input or missing documents; surfaced as a GraphQL error."""

    pass


def parse_object_id(value: str) -> ObjectId:
    """Convert a GraphQL ID into a document id."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as e:
        raise QueryExecutionError(f"Invalid id: {value!r}") from e
