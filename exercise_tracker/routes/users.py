"""
Exercise Tracker: User Route Handlers
=======================================

What:  GET /api/users (list) and POST /api/users (create).
How:   Reads the body through read_payload, delegates to UserService.
       Errors are raised as application exceptions and rendered by the
       global handlers in main.py.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from exercise_tracker.database import get_db_session
from exercise_tracker.routes.payload import read_payload
from exercise_tracker.schemas.user import ErrorResponse, UserResponse
from exercise_tracker.services.user_service import user_service

router = APIRouter(prefix="/api", tags=["Users"])


@router.get(
    "/users",
    response_model=List[UserResponse],
    responses={500: {"description": "Store failure", "model": ErrorResponse}},
    summary="List all users",
)
async def list_users(db: AsyncSession = Depends(get_db_session)) -> List[UserResponse]:
    return await user_service.list_users(db)


@router.post(
    "/users",
    response_model=UserResponse,
    responses={
        200: {"description": "Created user, or {error: 'Failed to create user'}"},
    },
    summary="Create a user",
    description="Form or JSON field `username`. Duplicate usernames are allowed.",
)
async def create_user(
    payload: Dict[str, Any] = Depends(read_payload),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.create_user(db, payload.get("username"))
