"""
Test Suite for BookReview

Test Organization:
- conftest.py: Shared fixtures (test database, client, fake backend)
- test_auth.py, test_books.py, test_reviews.py: API endpoints
- test_app.py: info endpoints and the error envelope
- test_security.py: hashing, tokens, settings
- test_client_*.py: terminal client state, store and CLI

Running Tests:
    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_books.py

    # Run with verbose output
    pytest -v
"""
