"""
Root GraphQL query definitions
"""

from typing import Annotated

import strawberry

from ..types.course import Course
from ..types.student import Student

SearchResult = Annotated[Course | Student, strawberry.union("SearchResult")]


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def get_courses(self, info: strawberry.Info) -> list[Course]:
        """Get all courses."""
        from ..resolvers.course import resolve_courses

        return await resolve_courses(info)

    @strawberry.field
    async def get_course(self, info: strawberry.Info, id: strawberry.ID) -> Course | None:
        """Get a course by ID."""
        from ..resolvers.course import resolve_course_by_id

        return await resolve_course_by_id(info, id)

    @strawberry.field
    async def get_people(self, info: strawberry.Info) -> list[Student]:
        """Get all students."""
        from ..resolvers.student import resolve_people

        return await resolve_people(info)

    @strawberry.field
    async def get_person(self, info: strawberry.Info, id: strawberry.ID) -> Student | None:
        """Get a student by ID."""
        from ..resolvers.student import resolve_person_by_id

        return await resolve_person_by_id(info, id)

    @strawberry.field
    async def search_items(self, info: strawberry.Info, keyword: str) -> list[SearchResult]:
        """Full-text search across courses and students."""
        from ..resolvers.search import search_items

        return await search_items(info, keyword)
