from __future__ import annotations

from typing import TYPE_CHECKING, Any

import strawberry
from bson import ObjectId
from pymongo import ReturnDocument

from ...database.collections import COURSES, STUDENTS
from ...database.connection import get_database
from ...logging import get_logger
from ..errors import parse_object_id
from ..types.student import Student

if TYPE_CHECKING:
    from ..mutations.root import PersonEditInput, PersonInput

logger = get_logger(__name__)


# Query resolvers
async def resolve_people(info: strawberry.Info) -> list[Student]:
    db = await get_database()
    documents = await db[STUDENTS].find({}).to_list(length=None)
    return [Student.from_document(document) for document in documents]


async def resolve_person_by_id(info: strawberry.Info, id: str) -> Student | None:
    object_id = parse_object_id(id)
    db = await get_database()
    document = await db[STUDENTS].find_one({"_id": object_id})
    if document is None:
        logger.info("Person not found", person_id=id)
        return None
    return Student.from_document(document)


async def resolve_students_by_ids(info: strawberry.Info, ids: list[ObjectId]) -> list[Student]:
    """Resolve stored student ids in one query, keeping the stored order."""
    if not ids:
        return []

    db = await get_database()
    documents = await db[STUDENTS].find({"_id": {"$in": ids}}).to_list(length=None)
    by_id = {document["_id"]: document for document in documents}
    return [Student.from_document(by_id[object_id]) for object_id in ids if object_id in by_id]


# Mutation resolvers
async def create_person(info: strawberry.Info, input: PersonInput) -> Student:
    document: dict[str, Any] = {"name": input.name, "email": input.email}
    db = await get_database()
    result = await db[STUDENTS].insert_one(document)
    document["_id"] = result.inserted_id
    logger.info("Person created", person_id=str(result.inserted_id))
    return Student.from_document(document)


async def edit_person(info: strawberry.Info, id: str, input: PersonEditInput) -> Student | None:
    object_id = parse_object_id(id)
    changes = {
        name: value
        for name, value in (("name", input.name), ("email", input.email))
        if value is not None
    }
    if not changes:
        return await resolve_person_by_id(info, id)

    db = await get_database()
    document = await db[STUDENTS].find_one_and_update(
        {"_id": object_id},
        {"$set": changes},
        return_document=ReturnDocument.AFTER,
    )
    if document is None:
        logger.info("Person not found for edit", person_id=id)
        return None

    logger.info("Person updated", person_id=id, fields=sorted(changes))
    return Student.from_document(document)


async def delete_person(info: strawberry.Info, id: str) -> bool:
    object_id = parse_object_id(id)
    db = await get_database()
    result = await db[STUDENTS].delete_one({"_id": object_id})
    if result.deleted_count != 1:
        return False

    # Drop dangling enrollments
    await db[COURSES].update_many({"people": object_id}, {"$pull": {"people": object_id}})
    logger.info("Person deleted", person_id=id)
    return True
