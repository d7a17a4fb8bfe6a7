from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .tags import normalize_tags

# Incoming timestamps can be a date, datetime, or ISO8601 string
TimestampInput = Union[date, datetime, str]


# PUBLIC_INTERFACE
class Priority(str, Enum):
    """Task priority. Rank order lives in ranking.PRIORITY_RANK."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# PUBLIC_INTERFACE
class TaskStatus(str, Enum):
    """Task status; only ever flipped by an explicit toggle."""

    ACTIVE = "active"
    COMPLETED = "completed"

    def toggled(self) -> "TaskStatus":
        if self is TaskStatus.ACTIVE:
            return TaskStatus.COMPLETED
        return TaskStatus.ACTIVE


# PUBLIC_INTERFACE
class View(str, Enum):
    """Named projections of the task collection."""

    ACTIVE = "active"
    COMPLETED = "completed"
    ALL = "all"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(timezone.utc)
    except OverflowError as e:
        raise ValueError(f"Timestamp {value.isoformat()} is out of range in UTC") from e


# PUBLIC_INTERFACE
def parse_timestamp(value: Optional[TimestampInput]) -> Optional[datetime]:
    """
    Normalize timestamp input into an aware UTC datetime.
    - None or a blank string means "absent" and returns None.
    - A string is parsed via datetime.fromisoformat; date-only strings become midnight.
    - A date (not datetime) becomes midnight of that day.
    - Naive datetimes are taken as UTC.
    - Offsets that push the instant outside the datetime range raise ValueError.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return _as_utc(value)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        try:
            parsed = datetime.fromisoformat(s)
        except ValueError:
            try:
                d = date.fromisoformat(s)
            except ValueError as e:
                raise ValueError(
                    "Invalid timestamp format. Use ISO8601 date or datetime string "
                    "(e.g., '2025-01-31' or '2025-01-31T13:45:00Z')."
                ) from e
            return datetime(d.year, d.month, d.day, tzinfo=timezone.utc)
        return _as_utc(parsed)

    raise ValueError("Invalid type for timestamp; expected date, datetime, or ISO8601 string.")


# PUBLIC_INTERFACE
class Task(BaseModel):
    """
    A single mission tracked by the store.

    Instances are frozen: the store replaces tasks rather than mutating them,
    so any snapshot handed out stays valid. Field aliases match the persisted
    record layout (createdAt, dueDate).
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "6f1c2a8e-8d4b-4c52-9a57-2f8e0c3b9d11",
                "title": "Map the headline win",
                "details": "Draft the outline before standup",
                "priority": "high",
                "tags": ["deep-work", "q3"],
                "status": "active",
                "createdAt": "2025-01-25T10:15:30.123000Z",
                "dueDate": "2025-02-01T00:00:00Z",
            }
        },
    )

    id: str = Field(..., min_length=1, description="Opaque unique identifier")
    title: str = Field(..., min_length=1, description="Display title, never blank")
    details: str = Field(default="", description="Free-form notes")
    priority: Priority = Field(..., description="Priority level")
    tags: List[str] = Field(default_factory=list, description="Normalized tag tokens")
    status: TaskStatus = Field(default=TaskStatus.ACTIVE, description="Completion status")
    created_at: datetime = Field(..., alias="createdAt", description="Creation timestamp (UTC)")
    due_date: Optional[datetime] = Field(
        default=None, alias="dueDate", description="Optional deadline (UTC); absent means no deadline"
    )

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title must not be blank")
        return v

    @field_validator("created_at", "due_date", mode="before")
    @classmethod
    def parse_timestamps(cls, v: Optional[TimestampInput]) -> Optional[datetime]:
        return parse_timestamp(v)

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: List[str]) -> List[str]:
        for tag in v:
            if normalize_tags(tag) != [tag]:
                raise ValueError(f"tag {tag!r} is not normalized")
        return v
