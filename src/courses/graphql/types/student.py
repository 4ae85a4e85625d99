"""
Student GraphQL type definitions
"""

from typing import Any

import strawberry


@strawberry.type
class Student:
    """Student type for GraphQL API."""

    id: strawberry.ID
    name: str
    email: str

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Student":
        return cls(
            id=strawberry.ID(str(document["_id"])),
            name=document.get("name", ""),
            email=document.get("email", ""),
        )
