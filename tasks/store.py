"""
Task persistence scoped to the owning user.

Every query filters on ``Task.user_id``; a task owned by someone else is
indistinguishable from one that does not exist.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Task, utcnow
from tasks.parsing import parse_priority, parse_status
from utils.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"title", "description", "status", "priority", "due_date"})


def _clean_title(title: Any) -> str:
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Title is required")
    return title


class TaskStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_by_owner(self, owner_id: uuid.UUID) -> List[Task]:
        result = await self.session.execute(
            select(Task)
            .where(Task.user_id == owner_id)
            .order_by(Task.created_at.asc())
        )
        return list(result.scalars().all())

    async def get_one(self, owner_id: uuid.UUID, task_id: uuid.UUID) -> Task:
        result = await self.session.execute(
            select(Task).where(Task.task_id == task_id, Task.user_id == owner_id)
        )
        task = result.scalar_one_or_none()
        if task is None:
            raise NotFoundError("Task not found")
        return task

    async def create(
        self,
        owner_id: uuid.UUID,
        title: str,
        description: Optional[str] = None,
        status: Any = "todo",
        priority: Any = "medium",
        due_date: Optional[datetime] = None,
    ) -> Task:
        """Insert a task owned by ``owner_id``; both timestamps are set to now."""
        parsed_status = parse_status(status)
        parsed_priority = parse_priority(priority)
        now = utcnow()
        task = Task(
            task_id=uuid.uuid4(),
            user_id=owner_id,
            title=_clean_title(title),
            description=description,
            status=parsed_status,
            priority=parsed_priority,
            due_date=due_date,
            created_at=now,
            updated_at=now,
        )
        self.session.add(task)
        await self.session.flush()
        logger.info("Created task %s for user %s", task.task_id, owner_id)
        return task

    async def update(
        self,
        owner_id: uuid.UUID,
        task_id: uuid.UUID,
        fields: Mapping[str, Any],
    ) -> Task:
        """
        Apply a partial update.

        Only keys present in ``fields`` with a non-``None`` value are
        touched; ``None`` means "leave unchanged".
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown task fields: {', '.join(sorted(unknown))}")
        supplied = {name: value for name, value in fields.items() if value is not None}

        # validate everything before touching the row
        changes: dict[str, Any] = {}
        if "title" in supplied:
            changes["title"] = _clean_title(supplied["title"])
        if "description" in supplied:
            changes["description"] = supplied["description"]
        if "status" in supplied:
            changes["status"] = parse_status(supplied["status"])
        if "priority" in supplied:
            changes["priority"] = parse_priority(supplied["priority"])
        if "due_date" in supplied:
            changes["due_date"] = supplied["due_date"]

        task = await self.get_one(owner_id, task_id)
        for name, value in changes.items():
            setattr(task, name, value)
        task.updated_at = utcnow()
        await self.session.flush()
        logger.debug("Updated task %s fields=%s", task_id, sorted(changes))
        return task

    async def delete(self, owner_id: uuid.UUID, task_id: uuid.UUID) -> None:
        task = await self.get_one(owner_id, task_id)
        await self.session.delete(task)
        await self.session.flush()
        logger.info("Deleted task %s for user %s", task_id, owner_id)
