"""
Exercise Tracker: Exercise Route Handlers
===========================================

What:  POST /api/users/{_id}/exercises (create) and GET /api/users/{_id}/logs (query).
How:   Path id and raw query/body values are passed through as strings;
       ExerciseService coerces them. Nothing here rejects malformed input.

Example:
    POST /api/users/5f0c.../exercises   description=run&duration=30&date=2023-01-01
    GET  /api/users/5f0c.../logs?from=2023-01-01&to=2023-12-31&limit=10
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from exercise_tracker.database import get_db_session
from exercise_tracker.routes.payload import read_payload
from exercise_tracker.schemas.exercise import ExerciseLogResponse, ExerciseResponse
from exercise_tracker.schemas.user import ErrorResponse
from exercise_tracker.services.exercise_service import exercise_service

router = APIRouter(prefix="/api/users", tags=["Exercises"])


@router.post(
    "/{user_id}/exercises",
    response_model=ExerciseResponse,
    responses={
        200: {"description": "Created exercise, or {error: 'User not found'}"},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Log an exercise for a user",
)
async def create_exercise(
    user_id: str = Path(description="User identifier"),
    payload: Dict[str, Any] = Depends(read_payload),
    db: AsyncSession = Depends(get_db_session),
) -> ExerciseResponse:
    return await exercise_service.create_exercise(
        db,
        user_id=user_id,
        description=payload.get("description"),
        duration=payload.get("duration"),
        date=payload.get("date"),
    )


@router.get(
    "/{user_id}/logs",
    response_model=ExerciseLogResponse,
    responses={
        200: {"description": "Exercise log, or {error: 'User not found'}"},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Get a user's exercise log",
    description=(
        "Optional `from`/`to` dates (inclusive, ISO 8601) and `limit`. "
        "`count` is the number of matches before `limit` truncates `log`."
    ),
)
async def get_log(
    user_id: str = Path(description="User identifier"),
    from_date: Optional[str] = Query(default=None, alias="from"),
    to_date: Optional[str] = Query(default=None, alias="to"),
    limit: Optional[str] = Query(default=None, description="Max log entries; 0 = no limit"),
    db: AsyncSession = Depends(get_db_session),
) -> ExerciseLogResponse:
    return await exercise_service.get_log(
        db,
        user_id=user_id,
        from_date=from_date,
        to_date=to_date,
        limit=limit,
    )
