"""
Pydantic request / response schemas for the task routes.

Wire format is camelCase; request bodies also accept snake_case.  Server
stamped fields (``createdAt``, ``updatedAt``, ``ownerId``) are rejected on
input.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from database.models import Task, TaskPriority, TaskStatus


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskCreate(_CamelModel):
    model_config = ConfigDict(extra="forbid")

    title: str
    description: Optional[str] = None
    status: str = TaskStatus.TODO.value
    priority: str = TaskPriority.MEDIUM.value
    due_date: Optional[datetime] = None


class TaskUpdate(_CamelModel):
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[datetime] = None


class TaskOut(_CamelModel):
    id: uuid.UUID
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[datetime] = None
    owner_id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_task(cls, task: Task) -> "TaskOut":
        return cls(
            id=task.task_id,
            title=task.title,
            description=task.description,
            status=task.status,
            priority=task.priority,
            due_date=task.due_date,
            owner_id=task.user_id,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )
