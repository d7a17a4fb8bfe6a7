from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import Priority, Task, TimestampInput, View, parse_timestamp
from .stats import TaskStats


# PUBLIC_INTERFACE
class TaskSubmission(BaseModel):
    """
    Form values submitted to create a task.

    A blank title is accepted here on purpose: the store treats it as a
    no-op rather than an error.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "title": "Map the headline win",
                "details": "Draft the outline before standup",
                "priority": "high",
                "tags": "Deep Work, Q3",
                "dueDate": "2025-02-01",
            }
        },
    )

    title: str = Field(default="", description="Task title; blank titles are ignored")
    details: str = Field(default="", description="Optional notes")
    priority: Priority = Field(default=Priority.MEDIUM, description="high, medium or low")
    tags: str = Field(default="", description="Comma-separated raw tags")
    due_date: Optional[datetime] = Field(
        default=None,
        alias="dueDate",
        description="Due date/time. Accepts ISO8601 date or datetime; dates are set to 00:00 UTC",
    )

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, v: Optional[TimestampInput]) -> Optional[datetime]:
        """
        Normalize due_date from str/date/datetime to an aware datetime; blank means absent.
        """
        return parse_timestamp(v)


# PUBLIC_INTERFACE
class DashboardOut(BaseModel):
    """
    Everything the page renders after a read or a mutation.
    """

    view: View = Field(..., description="View the items were filtered by")
    items: List[Task] = Field(..., description="Tasks in the view, in list order")
    focus: Optional[Task] = Field(default=None, description="Focus task across all active tasks")
    stats: TaskStats = Field(..., description="Aggregate counts over the whole collection")


# PUBLIC_INTERFACE
class FocusOut(BaseModel):
    """Envelope for the focus task, which may be absent."""

    focus: Optional[Task] = Field(default=None, description="Focus task or null")
