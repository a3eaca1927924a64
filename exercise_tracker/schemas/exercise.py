"""
Exercise Tracker: Exercise Schemas
====================================

What:  Pydantic models for exercise creation and log responses.
How:   Dates are pre-rendered strings such as "Mon Jan 01 2024" (or
       "Invalid Date"); durations keep integer form when they are whole numbers.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Number = Union[int, float]


class ExerciseResponse(BaseModel):
    """
    What:  A newly created exercise, joined with its user.
    Who:   Returned by POST /api/users/{_id}/exercises.

    `_id` is the user's id, not the exercise's.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id", description="Owning user's identifier")
    username: str
    description: Optional[str] = None
    duration: Optional[Number] = Field(default=None, description="Minutes")
    date: str = Field(description="Calendar date, e.g. 'Sun Jan 01 2023'")


class LogEntry(BaseModel):
    """One exercise inside a log."""
    description: Optional[str] = None
    duration: Optional[Number] = None
    date: str


class ExerciseLogResponse(BaseModel):
    """
    What:  A user's filtered exercise log.
    Who:   Returned by GET /api/users/{_id}/logs.

    count is the number of exercises matching the date range; log holds at
    most `limit` of them, so len(log) can be smaller than count.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id", description="User identifier")
    username: str
    count: int = Field(description="Matched exercises before the limit is applied")
    log: List[LogEntry] = Field(default_factory=list)
