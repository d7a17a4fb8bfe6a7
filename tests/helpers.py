from datetime import datetime, timedelta, timezone
from typing import List, Optional

from aurora_tasks.models import Priority, Task, TaskStatus
from aurora_tasks.storage import InMemoryStorage

T0 = datetime(2025, 1, 1, 9, 0, 0, tzinfo=timezone.utc)


def at(minutes: int) -> datetime:
    """A creation timestamp `minutes` after T0."""
    return T0 + timedelta(minutes=minutes)


def day(n: int) -> datetime:
    """Midnight UTC of January `n`, 2025."""
    return datetime(2025, 1, n, tzinfo=timezone.utc)


def make_task(
    task_id: str,
    priority: str = "medium",
    status: str = "active",
    created: int = 0,
    due: Optional[datetime] = None,
    tags: Optional[List[str]] = None,
) -> Task:
    return Task(
        id=task_id,
        title=f"Task {task_id}",
        priority=Priority(priority),
        status=TaskStatus(status),
        created_at=at(created),
        due_date=due,
        tags=tags or [],
    )


def ids(tasks) -> List[str]:
    return [t.id for t in tasks]


def ticking_clock(start: datetime = T0, step: timedelta = timedelta(minutes=1)):
    """Clock returning start, start+step, start+2*step, ... on successive calls."""
    state = {"now": start - step}

    def clock() -> datetime:
        state["now"] = state["now"] + step
        return state["now"]

    return clock


class RecordingStorage(InMemoryStorage):
    """In-memory storage that counts writes and can be told to fail them."""

    def __init__(self, initial: Optional[bytes] = None, fail_writes: bool = False) -> None:
        super().__init__(initial)
        self.writes = 0
        self.fail_writes = fail_writes

    def write(self, data: bytes) -> bool:
        self.writes += 1
        if self.fail_writes:
            return False
        return super().write(data)
