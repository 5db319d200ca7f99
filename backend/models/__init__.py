from .base import Base, Database, get_db
from .submission import DEFAULT_CATEGORY, DEFAULT_STATUS, Submission

__all__ = [
    "Base",
    "Database",
    "get_db",
    "Submission",
    "DEFAULT_CATEGORY",
    "DEFAULT_STATUS",
]
