"""
API endpoints for to-do tasks.

While ``KNOWN_DEFECT_UNAUTHENTICATED_TASKS`` is active these routes
accept anonymous requests and operate on the demo user's tasks; once
it is hotfixed a bearer token is required and each caller only sees
their own tasks.  Path ids are plain strings here and parsed by the
service, so a malformed id is a 404 like any other unknown task.
"""

from typing import Optional, Union

from fastapi import APIRouter, Depends, status

from taskmaster_api.app.core.security import get_task_owner_id
from taskmaster_api.app.schemas.task import (
    TaskCreate,
    TaskEnvelope,
    TaskList,
    TaskMessage,
    TaskRead,
    TaskUpdate,
)
from taskmaster_api.app.api.deps import get_task_service
from taskmaster_api.app.services.task_service import TaskService


router = APIRouter()


@router.get("", response_model=TaskList, response_model_exclude_none=True)
async def list_tasks(
    owner_id: int = Depends(get_task_owner_id),
    service: TaskService = Depends(get_task_service),
) -> TaskList:
    tasks = await service.list_tasks(owner_id)
    return TaskList(tasks=[TaskRead.model_validate(task) for task in tasks])


@router.post(
    "",
    response_model=TaskEnvelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_task(
    payload: Optional[TaskCreate] = None,
    owner_id: int = Depends(get_task_owner_id),
    service: TaskService = Depends(get_task_service),
) -> TaskEnvelope:
    """Create a task.  Responds with 400 when the title is missing or empty."""
    payload = payload or TaskCreate()
    task = await service.create_task(payload.title, owner_id)
    return TaskEnvelope(task=TaskRead.model_validate(task))


@router.put(
    "/{task_id}",
    response_model=Union[TaskEnvelope, TaskMessage],
    response_model_exclude_none=True,
)
async def update_task(
    task_id: str,
    payload: Optional[TaskUpdate] = None,
    owner_id: int = Depends(get_task_owner_id),
    service: TaskService = Depends(get_task_service),
) -> Union[TaskEnvelope, TaskMessage]:
    """Update the title and/or completion state of a task.

    With ``completed: true`` and ``KNOWN_DEFECT_COMPLETE_DELETES_TASK``
    active, the task is removed and only a message is returned.
    """
    changes = payload.model_dump(exclude_unset=True) if payload else {}
    task = await service.update_task(task_id, changes, owner_id)
    if task is None:
        return TaskMessage(message="Task completed and removed")
    return TaskEnvelope(task=TaskRead.model_validate(task))


@router.delete("/{task_id}", response_model=TaskMessage, response_model_exclude_none=True)
async def delete_task(
    task_id: str,
    owner_id: int = Depends(get_task_owner_id),
    service: TaskService = Depends(get_task_service),
) -> TaskMessage:
    task = await service.delete_task(task_id, owner_id)
    return TaskMessage(message="Task deleted", task=TaskRead.model_validate(task))
