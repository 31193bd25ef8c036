from .base import NovelStorage, aggregate_rating, novel_matches
from .database import DatabaseStorage
from .memory import MemoryStorage

__all__ = [
    "NovelStorage",
    "DatabaseStorage",
    "MemoryStorage",
    "aggregate_rating",
    "novel_matches",
]
