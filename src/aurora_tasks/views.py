from __future__ import annotations

from typing import Iterable, List

from .models import Task, TaskStatus, View

_VIEW_STATUS = {
    View.ACTIVE: TaskStatus.ACTIVE,
    View.COMPLETED: TaskStatus.COMPLETED,
}


# PUBLIC_INTERFACE
def filter_view(tasks: Iterable[Task], view: View) -> List[Task]:
    """Return the tasks visible in `view`, keeping their relative order."""
    view = View(view)
    if view is View.ALL:
        return list(tasks)
    wanted = _VIEW_STATUS[view]
    return [t for t in tasks if t.status is wanted]
