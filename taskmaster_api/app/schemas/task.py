"""
Pydantic models for tasks.

Field names follow Python conventions internally and are exposed in
camelCase on the wire (``userId``, ``createdAt``, ``updatedAt``) so the
existing front-end keeps working.  Request bodies declare every field
as optional and strictly typed: missing values are reported by the
service layer with the tutorial's own messages, and a ``completed`` of
``"true"`` or ``1`` is rejected rather than coerced to ``True``.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, StrictBool, StrictStr


class TaskCreate(BaseModel):
    title: Optional[StrictStr] = Field(None, examples=["Buy milk"])


class TaskUpdate(BaseModel):
    """Partial update for a task.

    Only fields present in the request body are applied; use
    ``model_dump(exclude_unset=True)`` to tell an omitted field from an
    explicit value.
    """

    title: Optional[StrictStr] = Field(None, examples=["Buy oat milk"])
    completed: Optional[StrictBool] = Field(None, examples=[True])


class TaskRead(BaseModel):
    """Schema for a task returned by the API."""

    id: int
    title: str
    completed: bool
    user_id: int = Field(..., alias="userId")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }


class TaskEnvelope(BaseModel):
    task: TaskRead


class TaskList(BaseModel):
    tasks: List[TaskRead]


class TaskMessage(BaseModel):
    """Response for updates and deletions that report a message."""

    message: str
    task: Optional[TaskRead] = None
