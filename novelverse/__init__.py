"""NovelVerse: a novel reading and publishing platform API."""

__version__ = "1.0.0"
