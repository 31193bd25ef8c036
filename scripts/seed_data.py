#!/usr/bin/env python3
"""
Sample Data Seeding Script

Seeds a small catalog through the storage layer so derived counters
(ratings, likes) come out consistent:
- Users: 1 admin (admin/admin123) and 3 readers (password: reader123)
- Novels: one per sample entry below, each with a few chapters
- Comments with ratings, likes, bookmarks and reading history

Usage:
    python scripts/seed_data.py
"""

import random
import sys
from pathlib import Path

# Add the project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

from novelverse.core.constants import Genre
from novelverse.core.database import SessionLocal, create_tables
from novelverse.schemas.chapter import ChapterCreate
from novelverse.schemas.comment import CommentCreate
from novelverse.schemas.novel import NovelCreate
from novelverse.schemas.user import UserCreate
from novelverse.storage import DatabaseStorage

SAMPLE_NOVELS = [
    {
        "title": "The Ember Throne",
        "author": "Mara Vell",
        "description": "A disgraced knight guards the last heir of a burning kingdom.",
        "genre": Genre.FANTASY,
        "tags": ["dragons", "magic", "epic"],
        "is_featured": True,
        "is_trending": True,
        "views": 1520,
    },
    {
        "title": "Dune Reborn",
        "author": "K. Osei",
        "description": "Colonists wake a buried desert city that remembers them.",
        "genre": Genre.SCIENCE_FICTION,
        "tags": ["space", "desert"],
        "is_featured": True,
        "views": 980,
    },
    {
        "title": "Letters from Vienna",
        "author": "Ilse Brandt",
        "description": "Two pen pals meet only after a war has ended.",
        "genre": Genre.ROMANCE,
        "tags": ["historical", "letters"],
        "is_trending": True,
        "views": 640,
    },
    {
        "title": "The Quiet Room",
        "author": "D. Farrow",
        "description": "A locked-room mystery in a hotel with no thirteenth floor.",
        "genre": Genre.MYSTERY,
        "tags": ["detective", "noir"],
        "views": 410,
    },
]

READERS = ["reader_one", "reader_two", "reader_three"]

COMMENTS = [
    ("Could not put it down.", 5),
    ("Strong start, slower middle.", 3),
    ("Following this one closely!", 0),
    ("Great world building.", 4),
]


def get_or_create_user(storage, username, email, password, is_admin=False):
    existing = storage.get_user_by_username(username)
    if existing:
        print(f"  ⚠️  {username} already exists")
        return existing
    user = storage.create_user(
        UserCreate(username=username, email=email, password=password, is_admin=is_admin)
    )
    print(f"  ✅ Created {'admin' if is_admin else 'reader'} {username}")
    return user


def seed(storage):
    print("👤 Seeding users...")
    admin = get_or_create_user(
        storage, "admin", "admin@novelverse.com", "admin123", is_admin=True
    )
    readers = [
        get_or_create_user(storage, name, f"{name}@example.com", "reader123")
        for name in READERS
    ]

    if storage.get_novels(limit=1):
        print("📚 Catalog already seeded, skipping novels")
        return

    print(f"📚 Seeding {len(SAMPLE_NOVELS)} novels...")
    for sample in SAMPLE_NOVELS:
        novel = storage.create_novel(NovelCreate(**sample), created_by=admin.id)

        chapters = [
            storage.create_chapter(
                ChapterCreate(
                    novel_id=novel.id,
                    title=f"Chapter {number}",
                    content=f"<p>{novel.title}, chapter {number}.</p>",
                    chapter_number=number,
                )
            )
            for number in range(1, 4)
        ]

        for reader in readers:
            content, rating = random.choice(COMMENTS)
            storage.create_comment(
                CommentCreate(
                    novel_id=novel.id, user_id=reader.id, content=content, rating=rating
                )
            )
            if random.random() < 0.6:
                storage.create_like(reader.id, novel.id)
            chapter = random.choice(chapters)
            storage.create_bookmark(reader.id, novel.id, chapter.id)
            storage.update_reading_history(
                reader.id, novel.id, chapter.id, random.randint(0, 100)
            )

        print(f"  ✅ {novel.title}")


def main():
    """Main function."""
    print("🌱 NovelVerse Data Seeding")
    print("=" * 40)

    create_tables()
    db = SessionLocal()
    try:
        seed(DatabaseStorage(db))
    finally:
        db.close()

    print("\n🎉 Seeding complete!")


if __name__ == "__main__":
    main()
