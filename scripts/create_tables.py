#!/usr/bin/env python3
"""
Create All Database Tables Script

Creates every NovelVerse table registered on the SQLAlchemy metadata.

Usage:
    python scripts/create_tables.py
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError

from novelverse.core.database import create_tables, engine
from novelverse.core.settings import settings


def create_all_tables():
    """Create all database tables."""
    print("🏗️  Creating All Database Tables")
    print("=" * 40)
    print(f"Environment: {settings.ENVIRONMENT}")
    print(f"Database: {settings.DATABASE_URL[:50]}...")
    print()

    try:
        # Test connection first
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            print("✅ Database connection successful")

        print("🔨 Creating tables...")
        create_tables(bind=engine)

        table_names = sorted(inspect(engine).get_table_names())
        print(f"✅ Successfully created {len(table_names)} tables:")
        for table in table_names:
            print(f"  - {table}")

        print(f"\n🎉 All tables created successfully!")
        return True

    except SQLAlchemyError as e:
        print(f"❌ Database error: {str(e)}")
        return False


def main():
    """Main function."""
    if create_all_tables():
        print(f"\n📋 Next step:")
        print(f"  Run: python scripts/seed_data.py")
        sys.exit(0)

    print(f"\n❌ Table creation failed!")
    sys.exit(1)


if __name__ == "__main__":
    main()
