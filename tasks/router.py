"""Task API router.

Every route requires an authenticated session. Endpoints:
- list tasks (insertion order)
- list user display names (assignee options)
- create / update (full replacement) / delete a task
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from auth.dependencies import CurrentUser, get_current_user
from auth.repository import UserRepository, get_user_repository
from tasks.models.schemas import (
    DeleteResponse,
    TaskCreate,
    TaskResponse,
    TaskUpdate,
)
from tasks.repository import TaskRepository, get_task_repository

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    user: CurrentUser = Depends(get_current_user),
    repo: TaskRepository = Depends(get_task_repository),
):
    """All tasks on the board with their creator."""
    return await repo.list()


@router.get("/users", response_model=list[str])
async def list_user_names(
    user: CurrentUser = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    """Display names of every registered user."""
    return await users.list_names()


@router.post("", status_code=201, response_model=TaskResponse)
async def create_task(
    request: TaskCreate,
    user: CurrentUser = Depends(get_current_user),
    repo: TaskRepository = Depends(get_task_repository),
):
    """Create a task owned by the signed-in user."""
    task = await repo.create_for(request, creator_id=user.id, creator_name=user.name)
    logger.info("Task %s created by %s", task["id"], user.id)
    return task


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    request: TaskUpdate,
    user: CurrentUser = Depends(get_current_user),
    repo: TaskRepository = Depends(get_task_repository),
):
    """Replace a task's editable fields."""
    task = await repo.replace_fields(task_id, request)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    logger.info("Task %s updated by %s", task_id, user.id)
    return task


@router.delete("/{task_id}", response_model=DeleteResponse)
async def delete_task(
    task_id: str,
    user: CurrentUser = Depends(get_current_user),
    repo: TaskRepository = Depends(get_task_repository),
):
    """Remove a task permanently."""
    deleted = await repo.delete(task_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Task not found")
    logger.info("Task %s deleted by %s", task_id, user.id)
    return DeleteResponse(id=task_id)
