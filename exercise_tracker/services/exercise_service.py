"""
Exercise Tracker: Exercise Service
====================================

What:  Creates exercises for a user and builds a user's filtered exercise log.
How:   Resolves the owner through UserService, then works on exercises keyed by
       the owner's *username* (the denormalized link stored on each exercise).
Who:   Routes in routes/exercises.py.

Log semantics (GET /api/users/{_id}/logs):
    1. Filter: username == owner.username AND from <= date <= to (inclusive)
    2. count = number of filtered rows
    3. log   = filtered rows truncated to the first `limit` when limit > 0
    Truncation happens after counting, in Python, on the rows in store order.

Error Handling Strategy:
    NotFoundError from the owner lookup propagates unchanged (200 body error).
    Any SQLAlchemyError becomes DatabaseError with an operation message (500).
"""

import logging
import uuid
from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from exercise_tracker.exceptions import DatabaseError
from exercise_tracker.models.exercise import Exercise
from exercise_tracker.schemas.exercise import (
    ExerciseLogResponse,
    ExerciseResponse,
    LogEntry,
)
from exercise_tracker.services.coercion import (
    EPOCH,
    format_date,
    parse_date,
    parse_duration,
    parse_limit,
    render_number,
    utcnow,
)
from exercise_tracker.services.user_service import user_service

logger = logging.getLogger(__name__)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class ExerciseService:
    """Business logic for exercise records."""

    async def create_exercise(
        self,
        db: AsyncSession,
        user_id: str,
        description: Any = None,
        duration: Any = None,
        date: Any = None,
    ) -> ExerciseResponse:
        """
        Record an exercise for the user identified by `user_id`.

        Args:
            db: Async database session
            user_id: Owner id from the path
            description: Free text (optional)
            duration: Minutes; numeric strings are accepted (optional)
            date: ISO date; blank or missing means now. An unparseable value is
                  stored as an invalid (NULL) date rather than rejected.

        Returns:
            ExerciseResponse whose `_id` is the owner's id

        Raises:
            NotFoundError: unknown user
            DatabaseError: lookup or insert failed
        """
        exercise_date: Optional[datetime]
        if _is_blank(date):
            exercise_date = utcnow()
        else:
            exercise_date = parse_date(date)
            if exercise_date is None:
                logger.info("Unparseable exercise date %r stored as invalid date", date)

        try:
            user = await user_service.get_user(db, user_id)

            exercise = Exercise(
                id=uuid.uuid4(),
                username=user.username,
                description=None if description is None else str(description),
                duration=parse_duration(duration),
                date=exercise_date,
            )
            db.add(exercise)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating exercise for %s: %s", user_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to create exercise",
                context={"user_id": user_id, "error_type": type(e).__name__},
            )

        logger.info("Exercise %s created for user %s", exercise.id, user.id)
        return ExerciseResponse(
            id=str(user.id),
            username=user.username,
            description=exercise.description,
            duration=render_number(exercise.duration),
            date=format_date(exercise.date),
        )

    async def get_log(
        self,
        db: AsyncSession,
        user_id: str,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
        limit: Any = None,
    ) -> ExerciseLogResponse:
        """
        Build the exercise log of a user.

        Args:
            db: Async database session
            user_id: Owner id from the path
            from_date: Lower bound (inclusive); missing or unparseable → 1970-01-01
            to_date: Upper bound (inclusive); missing or unparseable → now
            limit: Max log entries; 0, negative or non-numeric → unlimited

        Raises:
            NotFoundError: unknown user
            DatabaseError: lookup or query failed
        """
        lower = parse_date(from_date) or EPOCH
        upper = parse_date(to_date) or utcnow()
        max_entries = parse_limit(limit)

        try:
            user = await user_service.get_user(db, user_id)

            result = await db.execute(
                select(Exercise).where(
                    Exercise.username == user.username,
                    Exercise.date >= lower,
                    Exercise.date <= upper,
                )
            )
            exercises: List[Exercise] = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error fetching log for %s: %s", user_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to fetch exercise log",
                context={"user_id": user_id, "error_type": type(e).__name__},
            )

        entries = [
            LogEntry(
                description=exercise.description,
                duration=render_number(exercise.duration),
                date=format_date(exercise.date),
            )
            for exercise in exercises
        ]
        if max_entries > 0:
            entries = entries[:max_entries]

        logger.debug(
            "Log for user %s: %d matched, %d returned (from=%s to=%s limit=%d)",
            user.id, len(exercises), len(entries), lower, upper, max_entries,
        )
        return ExerciseLogResponse(
            id=str(user.id),
            username=user.username,
            count=len(exercises),
            log=entries,
        )


exercise_service = ExerciseService()
