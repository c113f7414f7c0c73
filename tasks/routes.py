"""
Task CRUD routes.  Every endpoint is scoped to the authenticated user.

Route prefix: {api_prefix}/tasks
"""

from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, get_current_user_id
from tasks.schemas import TaskCreate, TaskOut, TaskUpdate
from tasks.store import TaskStore

router = APIRouter(tags=["tasks"])


def get_task_store(session: AsyncSession = Depends(db_session)) -> TaskStore:
    return TaskStore(session)


@router.get("", response_model=List[TaskOut])
async def list_tasks(
    user_id: uuid.UUID = Depends(get_current_user_id),
    store: TaskStore = Depends(get_task_store),
) -> List[TaskOut]:
    tasks = await store.list_by_owner(user_id)
    return [TaskOut.from_task(t) for t in tasks]


@router.get("/{task_id}", response_model=TaskOut)
async def get_task(
    task_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    store: TaskStore = Depends(get_task_store),
) -> TaskOut:
    return TaskOut.from_task(await store.get_one(user_id, task_id))


@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
async def create_task(
    body: TaskCreate,
    request: Request,
    response: Response,
    user_id: uuid.UUID = Depends(get_current_user_id),
    store: TaskStore = Depends(get_task_store),
) -> TaskOut:
    task = await store.create(
        user_id,
        title=body.title,
        description=body.description,
        status=body.status,
        priority=body.priority,
        due_date=body.due_date,
    )
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{task.task_id}"
    return TaskOut.from_task(task)


@router.put("/{task_id}", response_model=TaskOut)
async def update_task(
    task_id: uuid.UUID,
    body: TaskUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    store: TaskStore = Depends(get_task_store),
) -> TaskOut:
    task = await store.update(user_id, task_id, body.model_dump(exclude_unset=True, exclude_none=True))
    return TaskOut.from_task(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    store: TaskStore = Depends(get_task_store),
) -> Response:
    await store.delete(user_id, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
