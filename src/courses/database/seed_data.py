"""
Seed data for development databases
"""

from typing import Any

from ..logging import get_logger
from .collections import COURSES, STUDENTS, ensure_indexes

logger = get_logger(__name__)

SAMPLE_STUDENTS = [
    {"name": "Ada Lovelace", "email": "ada@example.com"},
    {"name": "Alan Turing", "email": "alan@example.com"},
    {"name": "Grace Hopper", "email": "grace@example.com"},
]

SAMPLE_COURSES = [
    {
        "title": "GraphQL Fundamentals",
        "teacher": "Ruth Ellis",
        "description": "Schemas, queries and mutations from scratch",
        "topic": "APIs",
        "level": "beginner",
    },
    {
        "title": "Document Databases",
        "teacher": "Omar Haddad",
        "description": "Modeling data with collections and indexes",
        "topic": "Databases",
        "level": "intermediate",
    },
    {
        "title": "Async Python Services",
        "teacher": "Mei Tanaka",
        "description": "Event loops, backpressure and connection handling",
        "topic": "Python",
        "level": "advanced",
    },
]


async def seed_initial_data(database: Any, drop: bool = False) -> dict[str, int]:
    """
    Insert sample students and courses and create the search indexes.

    Every student is enrolled in the first course. Existing documents are kept
    unless ``drop`` is set.

    Returns:
        Number of inserted documents per collection.
    """
    if drop:
        await database[COURSES].drop()
        await database[STUDENTS].drop()
        logger.info("Dropped existing collections", collections=[COURSES, STUDENTS])

    students = [dict(student) for student in SAMPLE_STUDENTS]
    result = await database[STUDENTS].insert_many(students)
    student_ids = list(result.inserted_ids)

    courses = [dict(course, people=[]) for course in SAMPLE_COURSES]
    courses[0]["people"] = student_ids
    result = await database[COURSES].insert_many(courses)

    await ensure_indexes(database)

    counts = {STUDENTS: len(student_ids), COURSES: len(result.inserted_ids)}
    logger.info("Seed data inserted", **counts)
    return counts
