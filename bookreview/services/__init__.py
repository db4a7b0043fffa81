"""
Services Package

Business logic kept out of the routers:
- security.py: password hashing and session tokens
- auth.py: signup, login and token resolution
- catalog.py: book list/create/delete (with review cascade)
- ledger.py: review list/create
- rate_limiter.py: slowapi limiter shared by the routers
"""
