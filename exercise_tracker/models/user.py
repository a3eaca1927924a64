"""
Exercise Tracker: User Model
==============================

What:  ORM model for the `users` table.
Who:   UserService (create, list, lookup by id).

Table notes:
    - id is a UUID generated client-side, so it is known right after flush
    - username is NOT unique; duplicate usernames produce distinct users
"""

import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from exercise_tracker.database import Base


class User(Base):
    """A person whose exercises are tracked. Never updated or deleted."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    username: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
