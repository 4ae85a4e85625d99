"""
Root GraphQL mutation definitions
"""

import strawberry

from ..types.course import Course, Level
from ..types.student import Student


# Input types for mutations
@strawberry.input
class CourseInput:
    """Input for creating a new course."""

    title: str
    teacher: str
    description: str = ""
    topic: str = ""
    level: Level | None = None


@strawberry.input
class CourseEditInput:
    """Input for editing a course. Omitted fields are left unchanged."""

    title: str | None = None
    teacher: str | None = None
    description: str | None = None
    topic: str | None = None
    level: Level | None = None


@strawberry.input
class PersonInput:
    """Input for creating a new student."""

    name: str
    email: str


@strawberry.input
class PersonEditInput:
    """Input for editing a student. Omitted fields are left unchanged."""

    name: str | None = None
    email: str | None = None


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    # Course mutations
    @strawberry.mutation(name="createCourse")
    async def create_course(self, info: strawberry.Info, input: CourseInput) -> Course:
        """Create a new course."""
        from ..resolvers.course import create_course

        return await create_course(info, input)

    @strawberry.mutation(name="editCourse")
    async def edit_course(
        self, info: strawberry.Info, id: strawberry.ID, input: CourseEditInput
    ) -> Course | None:
        """Edit an existing course."""
        from ..resolvers.course import edit_course

        return await edit_course(info, id, input)

    @strawberry.mutation(name="deleteCourse")
    async def delete_course(self, info: strawberry.Info, id: strawberry.ID) -> bool:
        """Delete a course."""
        from ..resolvers.course import delete_course

        return await delete_course(info, id)

    @strawberry.mutation(name="addPeople")
    async def add_people(
        self, info: strawberry.Info, course_id: strawberry.ID, person_id: strawberry.ID
    ) -> Course | None:
        """Enroll a student in a course."""
        from ..resolvers.course import add_people

        return await add_people(info, course_id, person_id)

    # Student mutations
    @strawberry.mutation(name="createPerson")
    async def create_person(self, info: strawberry.Info, input: PersonInput) -> Student:
        """Create a new student."""
        from ..resolvers.student import create_person

        return await create_person(info, input)

    @strawberry.mutation(name="editPerson")
    async def edit_person(
        self, info: strawberry.Info, id: strawberry.ID, input: PersonEditInput
    ) -> Student | None:
        """Edit an existing student."""
        from ..resolvers.student import edit_person

        return await edit_person(info, id, input)

    @strawberry.mutation(name="deletePerson")
    async def delete_person(self, info: strawberry.Info, id: strawberry.ID) -> bool:
        """Delete a student and remove them from every course."""
        from ..resolvers.student import delete_person

        return await delete_person(info, id)
