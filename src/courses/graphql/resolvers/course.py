from __future__ import annotations

from typing import TYPE_CHECKING, Any

import strawberry
from pymongo import ReturnDocument

from ...database.collections import COURSES, STUDENTS
from ...database.connection import get_database
from ...logging import get_logger
from ..errors import QueryExecutionError, parse_object_id
from ..types.course import Course

if TYPE_CHECKING:
    from ..mutations.root import CourseEditInput, CourseInput

logger = get_logger(__name__)


# Query resolvers
async def resolve_courses(info: strawberry.Info) -> list[Course]:
    db = await get_database()
    documents = await db[COURSES].find({}).to_list(length=None)
    return [Course.from_document(document) for document in documents]


async def resolve_course_by_id(info: strawberry.Info, id: str) -> Course | None:
    object_id = parse_object_id(id)
    db = await get_database()
    document = await db[COURSES].find_one({"_id": object_id})
    if document is None:
        logger.info("Course not found", course_id=id)
        return None
    return Course.from_document(document)


# Mutation resolvers
async def create_course(info: strawberry.Info, input: CourseInput) -> Course:
    document: dict[str, Any] = {
        "title": input.title,
        "teacher": input.teacher,
        "description": input.description,
        "topic": input.topic,
        "level": input.level.value if input.level else None,
        "people": [],
    }
    db = await get_database()
    result = await db[COURSES].insert_one(document)
    document["_id"] = result.inserted_id
    logger.info("Course created", course_id=str(result.inserted_id))
    return Course.from_document(document)


def _course_changes(input: CourseEditInput) -> dict[str, Any]:
    changes: dict[str, Any] = {}
    for name in ("title", "teacher", "description", "topic"):
        value = getattr(input, name)
        if value is not None:
            changes[name] = value
    if input.level is not None:
        changes["level"] = input.level.value
    return changes


async def edit_course(info: strawberry.Info, id: str, input: CourseEditInput) -> Course | None:
    """
    Apply the provided fields to a course.

    Returns None when the course does not exist.
    """
    object_id = parse_object_id(id)
    changes = _course_changes(input)
    if not changes:
        return await resolve_course_by_id(info, id)

    db = await get_database()
    document = await db[COURSES].find_one_and_update(
        {"_id": object_id},
        {"$set": changes},
        return_document=ReturnDocument.AFTER,
    )
    if document is None:
        logger.info("Course not found for edit", course_id=id)
        return None

    logger.info("Course updated", course_id=id, fields=sorted(changes))
    return Course.from_document(document)


async def delete_course(info: strawberry.Info, id: str) -> bool:
    object_id = parse_object_id(id)
    db = await get_database()
    result = await db[COURSES].delete_one({"_id": object_id})
    deleted = result.deleted_count == 1
    logger.info("Course delete", course_id=id, deleted=deleted)
    return deleted


async def add_people(info: strawberry.Info, course_id: str, person_id: str) -> Course | None:
    """
    Enroll a student in a course.

    Enrolling the same student twice is a no-op. Both documents must exist.
    """
    course_object_id = parse_object_id(course_id)
    person_object_id = parse_object_id(person_id)

    db = await get_database()
    person = await db[STUDENTS].find_one({"_id": person_object_id}, projection={"_id": 1})
    if person is None:
        raise QueryExecutionError(f"Person not found: {person_id}")

    document = await db[COURSES].find_one_and_update(
        {"_id": course_object_id},
        {"$addToSet": {"people": person_object_id}},
        return_document=ReturnDocument.AFTER,
    )
    if document is None:
        raise QueryExecutionError(f"Course not found: {course_id}")

    logger.info("Person added to course", course_id=course_id, person_id=person_id)
    return Course.from_document(document)
