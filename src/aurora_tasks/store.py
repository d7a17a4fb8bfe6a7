from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from threading import RLock
from typing import Callable, Iterable, List, Optional, Tuple

from pydantic import TypeAdapter, ValidationError

from .models import Priority, Task, TaskStatus, TimestampInput, parse_timestamp
from .storage import Storage
from .tags import normalize_tags

logger = logging.getLogger(__name__)

_TASKS = TypeAdapter(List[Task])

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


# PUBLIC_INTERFACE
def serialize_tasks(tasks: Iterable[Task]) -> bytes:
    """Encode a collection as the persisted JSON array (camelCase keys, no null dueDate)."""
    return _TASKS.dump_json(list(tasks), by_alias=True, exclude_none=True)


# PUBLIC_INTERFACE
def deserialize_tasks(raw: bytes) -> List[Task]:
    """
    Decode a persisted JSON array.

    Raises:
        ValueError (pydantic ValidationError included) if the payload is not
        valid JSON, has the wrong shape, or repeats an id.
    """
    tasks = _TASKS.validate_json(raw)
    ids = [t.id for t in tasks]
    if len(set(ids)) != len(ids):
        raise ValueError("duplicate task ids in persisted payload")
    return tasks


# PUBLIC_INTERFACE
class TaskStore:
    """
    Owns the task collection and persists it on every change.

    Create one per application with TaskStore.load(storage). Readers get
    tuples of frozen Task objects; each mutation builds a new collection,
    swaps it in, and writes the whole thing to storage.
    """

    def __init__(
        self,
        storage: Storage,
        tasks: Iterable[Task] = (),
        *,
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
    ) -> None:
        self._lock = RLock()
        self._storage = storage
        self._tasks: Tuple[Task, ...] = tuple(tasks)
        self._clock = clock or _utcnow
        self._id_factory = id_factory or _new_id

    @classmethod
    def load(
        cls,
        storage: Storage,
        *,
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
    ) -> "TaskStore":
        """
        Build a store from whatever storage holds.

        Absent content gives an empty store. Malformed content also gives an
        empty store; the parse failure is logged and not raised.
        """
        raw = storage.read()
        tasks: List[Task] = []
        if raw:
            try:
                tasks = deserialize_tasks(raw)
            except (ValidationError, ValueError) as exc:
                logger.warning("Discarding malformed task data (%s); starting empty", exc)
                tasks = []
        store = cls(storage, tasks, clock=clock, id_factory=id_factory)
        logger.info("TaskStore ready total=%s", len(store.tasks))
        return store

    @property
    def tasks(self) -> Tuple[Task, ...]:
        """Snapshot of the collection, newest-created first."""
        return self._tasks

    def get(self, task_id: str) -> Optional[Task]:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def _allocate_id(self) -> str:
        taken = {t.id for t in self._tasks}
        new_id = self._id_factory()
        while new_id in taken:
            new_id = self._id_factory()
        return new_id

    def _commit(self, tasks: Tuple[Task, ...]) -> None:
        self._tasks = tasks
        if not self._storage.write(serialize_tasks(tasks)):
            logger.warning("Persisting %s tasks failed; keeping in-memory state", len(tasks))

    def create(
        self,
        title: str,
        details: str = "",
        priority: Priority = Priority.MEDIUM,
        raw_tags: str = "",
        due_date: Optional[TimestampInput] = None,
    ) -> Optional[Task]:
        """
        Add a new active task at the front of the collection.

        Returns the created task, or None (and changes nothing) when the
        title is blank. An unparseable due_date string raises ValueError;
        the HTTP layer validates it before calling in.
        """
        trimmed = (title or "").strip()
        if not trimmed:
            logger.debug("Ignoring create with blank title")
            return None

        with self._lock:
            task = Task(
                id=self._allocate_id(),
                title=trimmed,
                details=(details or "").strip(),
                priority=Priority(priority),
                tags=normalize_tags(raw_tags or ""),
                status=TaskStatus.ACTIVE,
                created_at=self._clock(),
                due_date=parse_timestamp(due_date),
            )
            self._commit((task,) + self._tasks)
        logger.debug("Created task id=%s priority=%s", task.id, task.priority.value)
        return task

    def toggle_status(self, task_id: str) -> Optional[Task]:
        """Flip active/completed. Returns the updated task, or None if the id is unknown."""
        with self._lock:
            updated: Optional[Task] = None
            new_tasks = []
            for t in self._tasks:
                if t.id == task_id:
                    t = t.model_copy(update={"status": t.status.toggled()})
                    updated = t
                new_tasks.append(t)
            if updated is None:
                return None
            self._commit(tuple(new_tasks))
        logger.debug("Toggled task id=%s status=%s", task_id, updated.status.value)
        return updated

    def archive(self, task_id: str) -> bool:
        """Remove a task permanently. Returns False if the id is unknown."""
        with self._lock:
            remaining = tuple(t for t in self._tasks if t.id != task_id)
            if len(remaining) == len(self._tasks):
                return False
            self._commit(remaining)
        logger.debug("Archived task id=%s", task_id)
        return True
