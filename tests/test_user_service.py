"""
Exercise Tracker: User Service Unit Tests
===========================================

What:  Tests for UserService with a mocked AsyncSession (no database).

What we test:
    ✅ Listing maps rows to {_id, username}
    ✅ Creation stores the username and assigns a UUID
    ✅ Missing username and insert failures raise UserCreationError
    ✅ Lookup: found, unknown id, malformed id
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from exercise_tracker.exceptions import DatabaseError, NotFoundError, UserCreationError
from exercise_tracker.services.user_service import UserService


def _user(username="alice"):
    user = MagicMock()
    user.id = uuid.uuid4()
    user.username = username
    return user


class TestListUsers:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_maps_rows(self, mock_db_session):
        rows = [_user("alice"), _user("bob")]
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = rows
        mock_db_session.execute.return_value = mock_result

        result = await self.service.list_users(mock_db_session)

        assert [u.username for u in result] == ["alice", "bob"]
        assert result[0].id == str(rows[0].id)
        assert result[0].model_dump(by_alias=True) == {
            "_id": str(rows[0].id),
            "username": "alice",
        }

    @pytest.mark.asyncio
    async def test_store_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("down"))
        )

        with pytest.raises(DatabaseError, match="Failed to list users"):
            await self.service.list_users(mock_db_session)


class TestCreateUser:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_success(self, mock_db_session):
        result = await self.service.create_user(mock_db_session, "alice")

        assert result.username == "alice"
        uuid.UUID(result.id)
        mock_db_session.add.assert_called_once()
        mock_db_session.flush.assert_awaited_once()
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_empty_username_allowed(self, mock_db_session):
        result = await self.service.create_user(mock_db_session, "")

        assert result.username == ""

    @pytest.mark.asyncio
    async def test_missing_username(self, mock_db_session):
        with pytest.raises(UserCreationError, match="Failed to create user"):
            await self.service.create_user(mock_db_session, None)

        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_insert_failure(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=IntegrityError("INSERT", {}, Exception("constraint"))
        )

        with pytest.raises(UserCreationError) as exc_info:
            await self.service.create_user(mock_db_session, "alice")

        assert exc_info.value.status_code == 200
        assert exc_info.value.context["error_type"] == "IntegrityError"

    @pytest.mark.asyncio
    async def test_commit_failure(self, mock_db_session):
        mock_db_session.commit = AsyncMock(
            side_effect=OperationalError("COMMIT", {}, Exception("disk I/O error"))
        )

        with pytest.raises(UserCreationError) as exc_info:
            await self.service.create_user(mock_db_session, "alice")

        assert exc_info.value.context["error_type"] == "OperationalError"


class TestGetUser:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_found(self, mock_db_session):
        user = _user()
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = user
        mock_db_session.execute.return_value = mock_result

        assert await self.service.get_user(mock_db_session, str(user.id)) is user

    @pytest.mark.asyncio
    async def test_unknown_id(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = mock_result

        with pytest.raises(NotFoundError, match="User not found"):
            await self.service.get_user(mock_db_session, str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_malformed_id_skips_query(self, mock_db_session):
        with pytest.raises(NotFoundError):
            await self.service.get_user(mock_db_session, "5f0c1b2a")

        mock_db_session.execute.assert_not_awaited()
