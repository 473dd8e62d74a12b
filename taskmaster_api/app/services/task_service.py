"""
Business logic for to-do tasks.

``TaskService`` works on the tasks collection of an ``InMemoryStore``.
Every operation is scoped to an owner id supplied by the endpoint; while
``KNOWN_DEFECT_UNAUTHENTICATED_TASKS`` is active that id is always the
demo user, so every caller sees and edits the same list.

Updating a task with ``completed=true`` is where the tutorial's central
bug lives (``KNOWN_DEFECT_COMPLETE_DELETES_TASK``): the task is removed
instead of being marked complete.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional

from ..core.config import Settings
from ..core.defects import KNOWN_DEFECT_COMPLETE_DELETES_TASK, is_active
from ..core.errors import NotFoundError, ValidationError
from ..core.store import InMemoryStore, TaskRecord, utcnow


logger = logging.getLogger(__name__)

TITLE_REQUIRED = "Task title required"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_task_id(raw: str) -> Optional[int]:
    """Parse a path id the way the original server did.

    Leading whitespace and an optional sign are accepted and parsing
    stops at the first non-digit, so ``"12abc"`` yields 12.  Returns
    None when no digits lead the string.
    """
    match = _LEADING_INT.match(raw)
    if not match:
        return None
    return int(match.group(1))


class TaskService:
    """Create, list, update and delete tasks in a store."""

    def __init__(self, store: InMemoryStore, settings: Settings) -> None:
        self.store = store
        self.settings = settings

    def _get_owned_task(self, raw_id: str, owner_id: int) -> TaskRecord:
        task_id = parse_task_id(raw_id)
        task = self.store.get_task(task_id) if task_id is not None else None
        if task is None or task.user_id != owner_id:
            raise NotFoundError("Task not found")
        return task

    async def list_tasks(self, owner_id: int) -> List[TaskRecord]:
        return self.store.list_tasks(owner_id)

    async def create_task(self, title: Optional[str], owner_id: int) -> TaskRecord:
        """Append a new, not yet completed task for ``owner_id``.

        Raises
        ------
        ValidationError
            If ``title`` is missing or empty.
        """
        if not title:
            raise ValidationError(TITLE_REQUIRED)
        task = self.store.add_task(title, user_id=owner_id, created_at=utcnow())
        logger.info("Created task %s for user %s", task.id, owner_id)
        return task

    async def update_task(self, raw_id: str, changes: Dict[str, Any], owner_id: int) -> Optional[TaskRecord]:
        """Apply ``changes`` to a task.

        ``changes`` holds only the fields the client actually sent.  A
        field sent as ``null`` is ignored.

        Returns
        -------
        Optional[TaskRecord]
            The updated task, or ``None`` when the task was removed
            because ``KNOWN_DEFECT_COMPLETE_DELETES_TASK`` is active and
            ``completed`` was ``True``.

        Raises
        ------
        NotFoundError
            If no task with this id belongs to ``owner_id``.
        """
        task = self._get_owned_task(raw_id, owner_id)

        if changes.get("completed") is True and is_active(KNOWN_DEFECT_COMPLETE_DELETES_TASK, self.settings):
            self.store.remove_task(task.id)
            logger.warning(
                "%s: task %s deleted instead of being marked complete",
                KNOWN_DEFECT_COMPLETE_DELETES_TASK,
                task.id,
            )
            return None

        if changes.get("title") is not None:
            task.title = changes["title"]
        if changes.get("completed") is not None:
            task.completed = changes["completed"]
        task.updated_at = utcnow()
        logger.info("Updated task %s", task.id)
        return task

    async def delete_task(self, raw_id: str, owner_id: int) -> TaskRecord:
        """Remove a task and return it.

        Raises
        ------
        NotFoundError
            If no task with this id belongs to ``owner_id``.
        """
        task = self._get_owned_task(raw_id, owner_id)
        self.store.remove_task(task.id)
        logger.info("Deleted task %s", task.id)
        return task
