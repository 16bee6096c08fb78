"""User ORM — account record keyed by numeric id.

Invariants:
    - email is unique (index-backed; also guards the register check/insert race)
    - password holds a one-way hash, never the raw value
    - number, picture, age, gender are optional and only written when supplied

Design Decisions:
    - Column names `number` and `picture` kept from the mobile client's vocabulary
    - No delete path: accounts live forever in this scope
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    number: Mapped[str | None] = mapped_column(String(32), nullable=True)
    picture: Mapped[str | None] = mapped_column(String(512), nullable=True)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    gender: Mapped[str | None] = mapped_column(String(32), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
