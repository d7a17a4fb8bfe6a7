"""
Task ordering policies.

Two orderings share priority as the primary key but answer different
questions and therefore differ on the tie-break:

- list order ("what exists"): newest created first within a priority;
- focus order ("what next"): deadlines first within a priority, earliest
  deadline winning, then newest created.

Keep them as separate functions.
"""
from __future__ import annotations

from functools import cmp_to_key
from typing import Dict, Iterable, List, Optional

from .models import Priority, Task, TaskStatus

PRIORITY_RANK: Dict[Priority, int] = {
    Priority.HIGH: 0,
    Priority.MEDIUM: 1,
    Priority.LOW: 2,
}


# PUBLIC_INTERFACE
def priority_rank(priority: Priority) -> int:
    """Lower rank sorts first."""
    return PRIORITY_RANK[Priority(priority)]


def _sign(delta: float) -> int:
    return (delta > 0) - (delta < 0)


# PUBLIC_INTERFACE
def list_sort_key(task: Task):
    """Sort key for list order: priority rank ascending, then created_at descending."""
    return (priority_rank(task.priority), -task.created_at.timestamp())


# PUBLIC_INTERFACE
def sort_for_list(tasks: Iterable[Task]) -> List[Task]:
    """Order a (view-filtered) task list for display."""
    return sorted(tasks, key=list_sort_key)


# PUBLIC_INTERFACE
def compare_focus(a: Task, b: Task) -> int:
    """
    Three-way comparator for focus order. Negative means `a` ranks first.

    At equal priority:
    - both due: earlier due date first
    - one due: the one with a due date first
    - neither: more recently created first
    """
    rank_delta = priority_rank(a.priority) - priority_rank(b.priority)
    if rank_delta:
        return _sign(rank_delta)

    if a.due_date is not None and b.due_date is not None:
        return _sign((a.due_date - b.due_date).total_seconds())
    if a.due_date is not None:
        return -1
    if b.due_date is not None:
        return 1

    return _sign((b.created_at - a.created_at).total_seconds())


# PUBLIC_INTERFACE
def rank_for_focus(tasks: Iterable[Task]) -> List[Task]:
    """Active tasks only, in focus order. Remaining ties keep input order."""
    active = [t for t in tasks if t.status is TaskStatus.ACTIVE]
    return sorted(active, key=cmp_to_key(compare_focus))


# PUBLIC_INTERFACE
def select_focus(tasks: Iterable[Task]) -> Optional[Task]:
    """Return the single focus task, or None when no task is active."""
    ranked = rank_for_focus(tasks)
    return ranked[0] if ranked else None
