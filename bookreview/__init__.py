"""
BookReview Application Package

A book-review service: users sign up, add books to a shared catalog and
post 1-5 star reviews.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine, session factory and Base
- exceptions.py: Domain errors and their HTTP status codes
- dependencies.py: Dependency injection (DB session, current user)
- main.py: FastAPI application factory
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Business logic (auth, catalog, ledger, rate limiting)
- client/: Terminal client (HTTP client, state store, rich views, CLI)
"""

__version__ = "0.1.0"
