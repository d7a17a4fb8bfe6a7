from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from ..models import Task, View
from ..ranking import select_focus, sort_for_list
from ..schemas import DashboardOut, FocusOut, TaskSubmission
from ..stats import TaskStats, compute_stats
from ..store import TaskStore
from ..views import filter_view

router = APIRouter(
    prefix="/api/v1/tasks",
    tags=["tasks"],
)


def _get_store(request: Request) -> TaskStore:
    """
    Dependency returning the single store owned by the application.
    """
    return request.app.state.store


def build_dashboard(store: TaskStore, view: View) -> DashboardOut:
    """
    Project one snapshot of the store into the page's read model.
    """
    snapshot = store.tasks
    return DashboardOut(
        view=view,
        items=sort_for_list(filter_view(snapshot, view)),
        focus=select_focus(snapshot),
        stats=compute_stats(snapshot),
    )


# PUBLIC_INTERFACE
@router.get(
    "/",
    response_model=DashboardOut,
    summary="Dashboard",
    description=(
        "Return the tasks in the selected view together with the focus task and stats.\n\n"
        "Items are ordered by priority (high first), then newest created first. "
        "The focus task is chosen from all active tasks regardless of view."
    ),
    responses={200: {"description": "Dashboard retrieved successfully"}},
)
def get_dashboard(
    view: View = Query(View.ACTIVE, description="View to list: active, completed or all"),
    store: TaskStore = Depends(_get_store),
) -> DashboardOut:
    """
    Read the dashboard for a view.
    """
    return build_dashboard(store, view)


# PUBLIC_INTERFACE
@router.get(
    "/focus",
    response_model=FocusOut,
    summary="Focus Task",
    description=(
        "Return the single highest-ranked active task: priority first, then tasks with a due "
        "date (earliest first), then newest created. `focus` is null when nothing is active."
    ),
)
def get_focus(store: TaskStore = Depends(_get_store)) -> FocusOut:
    return FocusOut(focus=select_focus(store.tasks))


# PUBLIC_INTERFACE
@router.get(
    "/stats",
    response_model=TaskStats,
    summary="Stats",
    description="Return total, active and completed counts and the completion rate.",
)
def get_stats(store: TaskStore = Depends(_get_store)) -> TaskStats:
    return compute_stats(store.tasks)


# PUBLIC_INTERFACE
@router.get(
    "/{task_id}",
    response_model=Task,
    summary="Get Task",
    description="Get a single task by ID.",
    responses={
        200: {"description": "Task found"},
        404: {"description": "Task not found"},
    },
)
def get_task(task_id: str, store: TaskStore = Depends(_get_store)) -> Task:
    """
    Retrieve a single task by its ID.
    """
    task = store.get(task_id)
    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


# PUBLIC_INTERFACE
@router.post(
    "/",
    response_model=DashboardOut,
    summary="Create Task",
    description=(
        "Submit form values for a new task and return the refreshed dashboard. "
        "A blank title is ignored and the dashboard is returned unchanged."
    ),
    responses={
        200: {"description": "Dashboard after the submission"},
        422: {"description": "Validation error"},
    },
)
def create_task(
    payload: TaskSubmission,
    view: View = Query(View.ACTIVE, description="View to list: active, completed or all"),
    store: TaskStore = Depends(_get_store),
) -> DashboardOut:
    store.create(
        title=payload.title,
        details=payload.details,
        priority=payload.priority,
        raw_tags=payload.tags,
        due_date=payload.due_date,
    )
    return build_dashboard(store, view)


# PUBLIC_INTERFACE
@router.post(
    "/{task_id}/toggle",
    response_model=DashboardOut,
    summary="Toggle Task",
    description="Flip a task between active and completed and return the refreshed dashboard.",
)
def toggle_task(
    task_id: str,
    view: View = Query(View.ACTIVE, description="View to list: active, completed or all"),
    store: TaskStore = Depends(_get_store),
) -> DashboardOut:
    store.toggle_status(task_id)
    return build_dashboard(store, view)


# PUBLIC_INTERFACE
@router.delete(
    "/{task_id}",
    response_model=DashboardOut,
    summary="Archive Task",
    description="Remove a task permanently and return the refreshed dashboard.",
)
def archive_task(
    task_id: str,
    view: View = Query(View.ACTIVE, description="View to list: active, completed or all"),
    store: TaskStore = Depends(_get_store),
) -> DashboardOut:
    store.archive(task_id)
    return build_dashboard(store, view)
