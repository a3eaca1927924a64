"""
Exercise Tracker: User Service
================================

What:  Create, list and look up users.
How:   Stateless; every call receives the request's AsyncSession.
Who:   Routes in routes/users.py; ExerciseService for the owner lookup.

Error Handling Strategy:
    list_users   store failure     → DatabaseError ("Failed to list users", 500)
    create_user  missing username  → UserCreationError (200)
                 store failure     → UserCreationError (200), also when
                                     the commit itself fails
    get_user     unknown/bad id    → NotFoundError (200)
                 store failure     → SQLAlchemyError propagates; the caller
                                     decides which operation failed
"""

import logging
import uuid
from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from exercise_tracker.exceptions import DatabaseError, NotFoundError, UserCreationError
from exercise_tracker.models.user import User
from exercise_tracker.schemas.user import UserResponse

logger = logging.getLogger(__name__)


def to_user_response(user: User) -> UserResponse:
    return UserResponse(id=str(user.id), username=user.username)


class UserService:
    """Business logic for user records."""

    async def list_users(self, db: AsyncSession) -> List[UserResponse]:
        """
        Return every stored user.

        No ORDER BY: rows come back in whatever order the store yields them.
        """
        try:
            result = await db.execute(select(User))
            users = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing users: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to list users",
                context={"error_type": type(e).__name__},
            )

        return [to_user_response(user) for user in users]

    async def create_user(self, db: AsyncSession, username: Any) -> UserResponse:
        """
        Insert a new user.

        Only absence of `username` is rejected; empty strings and duplicates
        are stored as given. Non-string scalars are stored as their string form.

        Raises:
            UserCreationError: username missing, insert or commit failed
        """
        if username is None:
            logger.warning("User creation rejected: username missing")
            raise UserCreationError(context={"reason": "username missing"})

        user = User(id=uuid.uuid4(), username=str(username))
        try:
            db.add(user)
            await db.flush()
            # Committed here, not by get_db_session, so that a failing commit
            # also answers "Failed to create user"
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to create user %r: %s", username, str(e), exc_info=True)
            raise UserCreationError(context={"error_type": type(e).__name__})

        logger.info("User created: %s (%s)", user.id, user.username)
        return to_user_response(user)

    async def get_user(self, db: AsyncSession, user_id: str) -> User:
        """
        Look up a user by its opaque id.

        Ids that are not valid UUIDs cannot exist in the store, so they are
        reported the same way as unknown ids.

        Raises:
            NotFoundError: no such user
            SQLAlchemyError: query failed
        """
        parsed_id = self._parse_id(user_id)
        if parsed_id is None:
            raise NotFoundError(resource="user", resource_id=user_id)

        result = await db.execute(select(User).where(User.id == parsed_id))
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError(resource="user", resource_id=user_id)
        return user

    @staticmethod
    def _parse_id(user_id: str) -> Optional[uuid.UUID]:
        try:
            return uuid.UUID(str(user_id).strip())
        except ValueError:
            return None


user_service = UserService()
