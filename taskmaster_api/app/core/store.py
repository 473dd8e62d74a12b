"""
In-memory storage for users and tasks.

``InMemoryStore`` owns both collections together with their id
counters.  One instance is created per application (``app.state.store``)
and handed to the services, so tests get an isolated store simply by
building a new app.  All data is lost when the process exits.

Records are plain dataclasses; the API schemas in ``schemas`` are built
from them with ``from_attributes``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from .security import hash_password


def utcnow() -> datetime:
    """Current UTC time truncated to milliseconds."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


@dataclass
class TaskRecord:
    id: int
    title: str
    completed: bool = False
    user_id: int = 1
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class UserRecord:
    id: int
    username: str
    # Salted hash produced by ``core.security.hash_password``.
    password_hash: str


@dataclass
class InMemoryStore:
    """Repository over the ``tasks`` and ``users`` collections.

    Ids are assigned from per-collection counters that only ever grow,
    so an id is never reused after its record is removed.
    """

    tasks: List[TaskRecord] = field(default_factory=list)
    users: List[UserRecord] = field(default_factory=list)
    next_task_id: int = 1
    next_user_id: int = 1

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------
    def list_tasks(self, user_id: int) -> List[TaskRecord]:
        return [task for task in self.tasks if task.user_id == user_id]

    def add_task(self, title: str, user_id: int, created_at: Optional[datetime] = None) -> TaskRecord:
        task = TaskRecord(
            id=self.next_task_id,
            title=title,
            completed=False,
            user_id=user_id,
            created_at=created_at,
        )
        self.next_task_id += 1
        self.tasks.append(task)
        return task

    def get_task(self, task_id: int) -> Optional[TaskRecord]:
        return next((task for task in self.tasks if task.id == task_id), None)

    def remove_task(self, task_id: int) -> Optional[TaskRecord]:
        """Remove the task with ``task_id`` and return it, or None if absent."""
        for index, task in enumerate(self.tasks):
            if task.id == task_id:
                return self.tasks.pop(index)
        return None

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def add_user(self, username: str, password_hash: str) -> UserRecord:
        user = UserRecord(id=self.next_user_id, username=username, password_hash=password_hash)
        self.next_user_id += 1
        self.users.append(user)
        return user

    def get_user(self, user_id: int) -> Optional[UserRecord]:
        return next((user for user in self.users if user.id == user_id), None)

    def find_user_by_username(self, username: str) -> Optional[UserRecord]:
        return next((user for user in self.users if user.username == username), None)


# Sample data the tutorial starts with.
DEMO_TASKS = (
    ("Learn Git Worktrees", False),
    ("Build Sample App", True),
    ("Practice Hotfix Workflow", False),
)

DEMO_USERS = (
    ("demo", "password123"),
    ("admin", "admin"),
)


def create_store(seed: bool = True, iterations: Optional[int] = None) -> InMemoryStore:
    """Build a store, optionally populated with the demo users and tasks.

    ``iterations`` is forwarded to the password hasher for the demo
    accounts; tests lower it to keep fixture set-up fast.
    """
    store = InMemoryStore()
    if not seed:
        return store
    for title, completed in DEMO_TASKS:
        task = store.add_task(title, user_id=1)
        task.completed = completed
    for username, password in DEMO_USERS:
        store.add_user(username, hash_password(password, iterations=iterations))
    return store
