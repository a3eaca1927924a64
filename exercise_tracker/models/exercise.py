"""
Exercise Tracker: Exercise Model
==================================

What:  ORM model for the `exercises` table.
Who:   ExerciseService (insert, filtered log query).

Table notes:
    - username is copied from the owning user at creation time. There is no
      foreign key to users.id: history follows the name, not the record.
    - date is stored as naive UTC. NULL means the caller supplied a date that
      could not be parsed; such rows render as "Invalid Date" and never fall
      inside a log date range.
    - Index on (username, date) serves the only query: one user's log in a range.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from exercise_tracker.database import Base


class Exercise(Base):
    """One logged exercise session."""

    __tablename__ = "exercises"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    username: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # Minutes
    duration: Mapped[Optional[float]] = mapped_column(
        Float,
        nullable=True,
    )

    date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=False),
        nullable=True,
    )

    __table_args__ = (
        Index("idx_exercises_username_date", "username", "date"),
    )

    def __repr__(self) -> str:
        return (
            f"<Exercise(id={self.id}, username='{self.username}', "
            f"date='{self.date}')>"
        )
