"""Infrastructure Layer — database pool, media storage, and logging setup.

Invariants:
    - Driver and filesystem exceptions are mapped to core/errors.py types here
    - Nothing in this package knows about HTTP routes

Design Decisions:
    - One module per external capability (database, storage, observability)
"""
