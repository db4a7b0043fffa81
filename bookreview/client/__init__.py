"""
BookReview Terminal Client

Modules:
- config.py: ClientSettings (API URL, timeout, storage directory)
- models.py: wire models for users, books and reviews
- storage.py: durable key/value storage for the session and preferences
- api.py: async HTTP client for the BookReview API
- state.py: application state and pure selectors (filters, pagination,
  rating aggregates)
- store.py: the Store that owns the state and runs every user action
- render.py: rich renderables for each view
- cli.py: the `bookreview` command line entry point
"""
