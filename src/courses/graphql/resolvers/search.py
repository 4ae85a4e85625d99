from __future__ import annotations

import strawberry

from ...database.collections import COURSES, STUDENTS
from ...database.connection import get_database
from ..types.course import Course
from ..types.student import Student


async def search_items(info: strawberry.Info, keyword: str) -> list[Course | Student]:
    """Text search over courses and students. Requires the text indexes."""
    if not keyword.strip():
        return []

    query = {"$text": {"$search": keyword}}
    db = await get_database()
    courses = await db[COURSES].find(query).to_list(length=None)
    people = await db[STUDENTS].find(query).to_list(length=None)
    return [Course.from_document(document) for document in courses] + [
        Student.from_document(document) for document in people
    ]
