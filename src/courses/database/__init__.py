"""
Database module for the Courses API
"""

from .connection import (
    ConnectionHandle,
    ConnectionState,
    close_connection,
    get_connection,
    get_database,
)
from .exceptions import DatabaseConnectionError

__all__ = [
    "ConnectionHandle",
    "ConnectionState",
    "DatabaseConnectionError",
    "close_connection",
    "get_connection",
    "get_database",
]
