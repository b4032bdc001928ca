"""
API endpoints for staff tasks and follow-ups.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from gto_workforce.core.database import get_session
from gto_workforce.core.database.entities.tasks import Task
from gto_workforce.core.database.repositories import TaskRepository
from gto_workforce.core.models.io.tasks import TaskCreate, TaskRead, TaskUpdate

router = APIRouter(tags=["tasks"])


async def _get_or_404(repo: TaskRepository, task_id: int) -> Task:
    task = await repo.get_by_id(task_id)
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED, summary="Create Task")
async def create_task(task: TaskCreate, session: AsyncSession = Depends(get_session)) -> TaskRead:
    return TaskRead.model_validate(await TaskRepository(session).create(Task.model_validate(task)))


@router.get(
    "",
    response_model=List[TaskRead],
    summary="List Tasks",
    description="List tasks, newest first, optionally filtered by status, priority and assignee.",
)
async def list_tasks(
    status_filter: Optional[str] = Query(None, alias="status"),
    priority: Optional[str] = None,
    assigned_to: Optional[int] = None,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
) -> List[TaskRead]:
    tasks = await TaskRepository(session).list(
        limit=limit,
        offset=offset,
        filters={"status": status_filter, "priority": priority, "assigned_to": assigned_to},
    )
    return [TaskRead.model_validate(t) for t in tasks]


@router.get("/{task_id}", response_model=TaskRead, summary="Get Task")
async def get_task(task_id: int, session: AsyncSession = Depends(get_session)) -> TaskRead:
    return TaskRead.model_validate(await _get_or_404(TaskRepository(session), task_id))


@router.put("/{task_id}", response_model=TaskRead, summary="Update Task")
async def update_task(task_id: int, task_update: TaskUpdate, session: AsyncSession = Depends(get_session)) -> TaskRead:
    repo = TaskRepository(session)
    task = await _get_or_404(repo, task_id)
    changes = task_update.model_dump(exclude_unset=True)
    if changes.get("status") == "completed" and task.completed_at is None:
        changes["completed_at"] = datetime.utcnow()
    return TaskRead.model_validate(await repo.update_fields(task, changes))


@router.post(
    "/{task_id}/complete",
    response_model=TaskRead,
    summary="Complete Task",
    description="Mark a task as completed and stamp completed_at.",
)
async def complete_task(task_id: int, session: AsyncSession = Depends(get_session)) -> TaskRead:
    repo = TaskRepository(session)
    task = await _get_or_404(repo, task_id)
    task = await repo.update_fields(task, {"status": "completed", "completed_at": datetime.utcnow()})
    return TaskRead.model_validate(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Task")
async def delete_task(task_id: int, session: AsyncSession = Depends(get_session)) -> None:
    if not await TaskRepository(session).delete(task_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
