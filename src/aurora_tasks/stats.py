from __future__ import annotations

import math
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field

from .models import Task, TaskStatus


# PUBLIC_INTERFACE
class TaskStats(BaseModel):
    """Aggregate completion counts for a task collection."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total: int = Field(..., ge=0, description="Number of tasks")
    active: int = Field(..., ge=0, description="Number of active tasks")
    completed: int = Field(..., ge=0, description="Number of completed tasks")
    completion_rate: int = Field(
        ..., ge=0, le=100, alias="completionRate", description="Completed share as a whole percentage"
    )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# PUBLIC_INTERFACE
def compute_stats(tasks: Iterable[Task]) -> TaskStats:
    """
    Derive counts from a snapshot of tasks.

    completion_rate is completed/total as a percentage rounded half up,
    and 0 for an empty collection.
    """
    items = list(tasks)
    total = len(items)
    completed = sum(1 for t in items if t.status is TaskStatus.COMPLETED)
    rate = 0 if total == 0 else _round_half_up(completed / total * 100)
    return TaskStats(
        total=total,
        active=total - completed,
        completed=completed,
        completion_rate=rate,
    )
