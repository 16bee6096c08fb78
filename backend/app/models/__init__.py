"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Posts and cart entries are owned by a user (user_id)

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from app.models.user import User  # noqa: F401
from app.models.post import Post  # noqa: F401
from app.models.cart_entry import CartEntry  # noqa: F401
