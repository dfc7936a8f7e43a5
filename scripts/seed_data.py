#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample authors and books for development.

USAGE:
    # From the project root with the virtualenv active
    python scripts/seed_data.py

    # Remove existing rows first
    python scripts/seed_data.py --clear

This script:
1. Connects to the database using app settings (DATABASE_URL)
2. Optionally clears existing data
3. Creates sample authors and their books
"""

import argparse
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from library_catalog.config import get_settings
from library_catalog.database import SessionLocal, create_tables
from library_catalog.models import Author, Book

SAMPLE_CATALOG = {
    "George Orwell": ["1984", "Animal Farm"],
    "Jane Austen": ["Pride and Prejudice", "Emma"],
    "Ernest Hemingway": ["The Old Man and the Sea"],
    "Agatha Christie": ["Murder on the Orient Express"],
    "Isaac Asimov": ["Foundation", "I, Robot"],
    "Ursula K. Le Guin": [],
}


def clear_data(db: Session) -> None:
    """Clear all existing data; books first because they reference authors."""
    print("Clearing existing data...")
    db.execute(delete(Book))
    db.execute(delete(Author))
    db.commit()
    print("Data cleared.")


def create_catalog(db: Session) -> tuple[list[Author], list[Book]]:
    """Create the sample authors and books."""
    print("Creating authors and books...")
    authors = []
    books = []
    for name, titles in SAMPLE_CATALOG.items():
        author = Author(name=name)
        author.books = [Book(title=title) for title in titles]
        db.add(author)
        authors.append(author)
        books.extend(author.books)

    db.commit()
    print(f"Created {len(authors)} authors and {len(books)} books.")
    return authors, books


def seed_database(clear_existing: bool = False) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    settings = get_settings()
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()
    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        authors, books = create_catalog(db)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print(f"\nSummary:")
        print(f"  - Authors: {len(authors)}")
        print(f"  - Books: {len(books)}")
        print(f"\nYou can now access the API at http://localhost:{settings.port}")
        print(f"API documentation at http://localhost:{settings.port}/docs")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the catalog with sample data")
    parser.add_argument(
        "--clear",
        action="store_true",
        help="delete existing authors and books first",
    )
    args = parser.parse_args()
    seed_database(clear_existing=args.clear)
