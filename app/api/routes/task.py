"""
Task API routes
CRUD endpoints for task management
Reference: https://fastapi.tiangolo.com/tutorial/sql-databases/

Route order matters: /status/{status} is registered before /{task_id} so a
status name is never parsed as an id.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.schemas.task import (
    ErrorResponse,
    MessageResponse,
    TaskCreate,
    TaskDataResponse,
    TaskListResponse,
    TaskMessageResponse,
    TaskResponse,
    TaskUpdate,
)
from app.core.database import get_db
from app.core.exceptions import NotFoundError, ValidationError
from app.models.task import TaskStatus
from app.services.task import TaskService, is_valid_task_id

logger = logging.getLogger(__name__)


def parse_task_id(raw: str) -> int:
    """
    Turn a path segment into a task id

    Anything that cannot name a stored task (not a plain number, zero, or
    beyond the SQLite integer range) is answered like a missing row.

    Raises:
        NotFoundError: If the segment cannot be a task id
    """
    if not (raw.isascii() and raw.isdigit()):
        raise NotFoundError()
    task_id = int(raw)
    if not is_valid_task_id(task_id):
        raise NotFoundError()
    return task_id


# Create router for task endpoints
router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],  # Groups endpoints in API documentation
    responses={
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)


@router.get(
    "",
    response_model=TaskListResponse,
    summary="List tasks",
    description="Retrieve every task, newest first",
    status_code=status.HTTP_200_OK,
)
async def get_all_tasks(db: AsyncSession = Depends(get_db)) -> TaskListResponse:
    """
    Get all tasks

    Returns:
        Count and list of tasks (possibly empty)
    """
    tasks = await TaskService.find_all(db)
    logger.info(f"Retrieved {len(tasks)} tasks")
    return TaskListResponse(
        count=len(tasks),
        data=[TaskResponse.model_validate(task) for task in tasks],
    )


@router.get(
    "/status/{task_status}",
    response_model=TaskListResponse,
    summary="List tasks by status",
    description="Retrieve tasks with the given status (pending, in-progress, completed)",
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid status"},
    },
)
async def get_tasks_by_status(
    task_status: str,
    db: AsyncSession = Depends(get_db),
) -> TaskListResponse:
    """
    Get tasks filtered by status

    Args:
        task_status: One of the TaskStatus values

    Raises:
        ValidationError: If the status is not an allowed value
    """
    allowed = TaskStatus.values()
    if task_status not in allowed:
        raise ValidationError(
            f"invalid status, allowed values: {', '.join(allowed)}"
        )

    tasks = await TaskService.find_by_status(db, task_status)
    logger.info(f"Retrieved {len(tasks)} tasks with status '{task_status}'")
    return TaskListResponse(
        count=len(tasks),
        data=[TaskResponse.model_validate(task) for task in tasks],
    )


@router.get(
    "/{task_id}",
    response_model=TaskDataResponse,
    summary="Get task by ID",
    description="Retrieve a single task by its ID",
    status_code=status.HTTP_200_OK,
    responses={
        404: {"model": ErrorResponse, "description": "Task not found"},
    },
)
async def get_task(
    task_id: str,
    db: AsyncSession = Depends(get_db),
) -> TaskDataResponse:
    """
    Get a single task by ID

    Raises:
        NotFoundError: If task is not found
    """
    task = await TaskService.find_by_id(db, parse_task_id(task_id))
    if task is None:
        raise NotFoundError()
    return TaskDataResponse(data=TaskResponse.model_validate(task))


@router.post(
    "",
    response_model=TaskMessageResponse,
    summary="Create task",
    description="Create a new task; only the title is required",
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Title missing"},
    },
)
async def create_task(
    task_data: Optional[TaskCreate] = None,
    db: AsyncSession = Depends(get_db),
) -> TaskMessageResponse:
    """
    Create a new task

    Defaults: description "", status "pending", priority "medium", no due date
    A request without a body is treated as one without a title.

    Raises:
        ValidationError: If the title is missing or empty
    """
    if task_data is None or not task_data.title:
        raise ValidationError("title is required")

    task = await TaskService.create(db, task_data)
    logger.info(f"Created task {task.id} '{task.title}'")
    return TaskMessageResponse(
        message="task created successfully",
        data=TaskResponse.model_validate(task),
    )


@router.put(
    "/{task_id}",
    response_model=TaskMessageResponse,
    summary="Update task",
    description="Update an existing task; omitted fields keep their value",
    status_code=status.HTTP_200_OK,
    responses={
        404: {"model": ErrorResponse, "description": "Task not found"},
    },
)
async def update_task(
    task_id: str,
    task_data: Optional[TaskUpdate] = None,
    db: AsyncSession = Depends(get_db),
) -> TaskMessageResponse:
    """
    Update an existing task

    The task is looked up first so a missing id answers 404 without a write.

    Raises:
        NotFoundError: If task is not found
    """
    task_id = parse_task_id(task_id)
    existing = await TaskService.find_by_id(db, task_id)
    if existing is None:
        raise NotFoundError()

    task = await TaskService.update(db, task_id, task_data or TaskUpdate())
    if task is None:
        # Deleted between the lookup and the write
        raise NotFoundError()

    logger.info(f"Updated task {task_id}")
    return TaskMessageResponse(
        message="task updated successfully",
        data=TaskResponse.model_validate(task),
    )


@router.delete(
    "/{task_id}",
    response_model=MessageResponse,
    summary="Delete task",
    description="Delete a task by ID",
    status_code=status.HTTP_200_OK,
    responses={
        404: {"model": ErrorResponse, "description": "Task not found"},
    },
)
async def delete_task(
    task_id: str,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """
    Delete a task

    Raises:
        NotFoundError: If task is not found
    """
    task_id = parse_task_id(task_id)
    existing = await TaskService.find_by_id(db, task_id)
    if existing is None:
        raise NotFoundError()

    if not await TaskService.delete(db, task_id):
        raise NotFoundError()

    logger.info(f"Deleted task {task_id}")
    return MessageResponse(message="task deleted successfully")
