#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample users, books and reviews for
development.

USAGE:
    # From the project root, with the package installed (pip install -e .)
    python scripts/seed_data.py

This script:
1. Connects to the database using bookreview settings
2. Clears existing data (optional)
3. Creates demo users through the auth service (so passwords are hashed)
4. Adds books and reviews through the catalog and review services

Every demo account uses the password "password123".
"""

from sqlalchemy import delete
from sqlalchemy.orm import Session

from bookreview.database import SessionLocal, create_tables
from bookreview.models import Book, Genre, Review, User
from bookreview.schemas import BookCreate, ReviewCreate
from bookreview.services import auth as auth_service
from bookreview.services import catalog as catalog_service
from bookreview.services import ledger as review_service

DEMO_PASSWORD = "password123"


def clear_data(db: Session) -> None:
    """Clear all existing data from the database."""
    print("Clearing existing data...")
    db.execute(delete(Review))
    db.execute(delete(Book))
    db.execute(delete(User))
    db.commit()
    print("Data cleared.")


def create_users(db: Session) -> dict[str, User]:
    """Create demo users."""
    print("Creating users...")
    users_data = [
        {"name": "Ana Reader", "email": "ana@example.com"},
        {"name": "Ben Critic", "email": "ben@example.com"},
        {"name": "Chloe Pages", "email": "chloe@example.com"},
    ]

    users = {}
    for data in users_data:
        user, _ = auth_service.signup(db, data["name"], data["email"], DEMO_PASSWORD)
        users[data["email"]] = user

    print(f"Created {len(users)} users.")
    return users


def create_books(db: Session, users: dict[str, User]) -> list[Book]:
    """Create sample books, spread across the demo users."""
    print("Creating books...")

    books_data = [
        {
            "title": "1984",
            "author": "George Orwell",
            "description": "A dystopian novel set in a totalitarian society under constant surveillance.",
            "genre": Genre.FICTION,
            "year": 1949,
            "owner": "ana@example.com",
        },
        {
            "title": "Pride and Prejudice",
            "author": "Jane Austen",
            "description": "A romantic novel following the emotional development of Elizabeth Bennet.",
            "genre": Genre.ROMANCE,
            "year": 1813,
            "owner": "ana@example.com",
        },
        {
            "title": "Murder on the Orient Express",
            "author": "Agatha Christie",
            "description": "Hercule Poirot investigates a murder on a train stuck in a snowdrift.",
            "genre": Genre.MYSTERY,
            "year": 1934,
            "owner": "ben@example.com",
        },
        {
            "title": "Foundation",
            "author": "Isaac Asimov",
            "description": "The first novel in the Foundation series about the fall of the Galactic Empire.",
            "genre": Genre.SCIENCE_FICTION,
            "year": 1951,
            "owner": "ben@example.com",
        },
        {
            "title": "The Hobbit",
            "author": "J.R.R. Tolkien",
            "description": "Bilbo Baggins embarks on a quest to reclaim the Lonely Mountain.",
            "genre": Genre.FANTASY,
            "year": 1937,
            "owner": "chloe@example.com",
        },
        {
            "title": "Sapiens",
            "author": "Yuval Noah Harari",
            "description": "A brief history of humankind, from the Stone Age to the present.",
            "genre": Genre.HISTORY,
            "year": 2011,
            "owner": "chloe@example.com",
        },
        {
            "title": "Steve Jobs",
            "author": "Walter Isaacson",
            "description": "The biography of the co-founder of Apple, based on over forty interviews.",
            "genre": Genre.BIOGRAPHY,
            "year": 2011,
            "owner": "ana@example.com",
        },
        {
            "title": "Atomic Habits",
            "author": "James Clear",
            "description": "Small changes, remarkable results: a framework for building good habits.",
            "genre": Genre.SELF_HELP,
            "year": 2018,
            "owner": "ben@example.com",
        },
    ]

    books = []
    for data in books_data:
        owner = users[data.pop("owner")]
        books.append(catalog_service.add_book(db, owner, BookCreate(**data)))

    print(f"Created {len(books)} books.")
    return books


def create_reviews(db: Session, users: dict[str, User], books: list[Book]) -> int:
    """Have every user review a few books they did not add."""
    print("Creating reviews...")
    comments = {
        5: "An absolute classic. Couldn't put it down.",
        4: "Really enjoyed it, a few slow chapters.",
        3: "Decent read, but it didn't stay with me.",
    }

    count = 0
    for i, book in enumerate(books):
        for j, user in enumerate(users.values()):
            if user.id == book.added_by:
                continue
            rating = 5 - (i + j) % 3
            review_service.add_review(
                db,
                user,
                book.id,
                ReviewCreate(rating=rating, review_text=comments[rating]),
            )
            count += 1

    print(f"Created {count} reviews.")
    return count


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()
    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        users = create_users(db)
        books = create_books(db, users)
        review_count = create_reviews(db, users, books)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Users: {len(users)} (password: {DEMO_PASSWORD})")
        print(f"  - Books: {len(books)}")
        print(f"  - Reviews: {review_count}")
        print("\nYou can now access the API at http://localhost:8001/api")
        print("API documentation at http://localhost:8001/docs")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
