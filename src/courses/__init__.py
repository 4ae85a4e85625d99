"""
Courses API
GraphQL server over a course catalog stored in MongoDB
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
