"""
Course GraphQL type definitions
"""

from enum import Enum
from typing import TYPE_CHECKING, Annotated, Any

import strawberry
from bson import ObjectId

if TYPE_CHECKING:
    from .student import Student


@strawberry.enum
class Level(Enum):
    """Course difficulty."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


def parse_level(value: str | None) -> Level | None:
    if not value:
        return None
    try:
        return Level(value)
    except ValueError:
        return None


@strawberry.type
class Course:
    """Course type for GraphQL API."""

    id: strawberry.ID
    title: str
    teacher: str
    description: str
    topic: str
    level: Level | None
    person_ids: strawberry.Private[list[ObjectId]]

    @strawberry.field
    async def people(
        self, info: strawberry.Info
    ) -> list[Annotated["Student", strawberry.lazy(".student")]]:
        """Students enrolled in this course."""
        from ..resolvers.student import resolve_students_by_ids

        return await resolve_students_by_ids(info, self.person_ids)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Course":
        return cls(
            id=strawberry.ID(str(document["_id"])),
            title=document.get("title", ""),
            teacher=document.get("teacher", ""),
            description=document.get("description", ""),
            topic=document.get("topic", ""),
            level=parse_level(document.get("level")),
            person_ids=list(document.get("people") or []),
        )
