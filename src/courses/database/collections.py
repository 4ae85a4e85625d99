"""
Collection names and indexes in the document store
"""

from typing import Any

from pymongo import TEXT

COURSES = "courses"
STUDENTS = "students"

TEXT_INDEXES = {
    COURSES: [("title", TEXT), ("description", TEXT), ("topic", TEXT)],
    STUDENTS: [("name", TEXT), ("email", TEXT)],
}


async def ensure_indexes(database: Any) -> None:
    """Create the text indexes used by search."""
    for collection, keys in TEXT_INDEXES.items():
        await database[collection].create_index(keys, name=f"{collection}_text")
