"""
Task service layer
Persistence operations on the tasks table
Reference: https://docs.sqlalchemy.org/en/20/orm/queryguide/
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.schemas.task import TaskCreate, TaskUpdate
from app.core.exceptions import StorageError
from app.models.task import Task, TaskPriority, TaskStatus, utcnow

logger = logging.getLogger(__name__)

# Fields that always hold a value: null or "" in an update keeps the old one
_REQUIRED_FIELDS = ("title", "status", "priority")

# SQLite INTEGER PRIMARY KEY range; ids outside it can never match a row
MAX_TASK_ID = 2**63 - 1


def is_valid_task_id(task_id: int) -> bool:
    """True when `task_id` could be the id of a stored task"""
    return 1 <= task_id <= MAX_TASK_ID


def _next_timestamp(previous: Optional[datetime]) -> datetime:
    """Current time, nudged forward so it is strictly after `previous`"""
    now = utcnow()
    if previous is not None and now <= previous:
        now = previous + timedelta(microseconds=1)
    return now


class TaskService:
    """
    Service class for task persistence
    Handles all database operations for tasks

    Methods do not validate input beyond applying defaults; that is the
    route handlers' job. SQLAlchemy failures surface as StorageError.
    """

    @staticmethod
    async def create(db: AsyncSession, task_data: TaskCreate) -> Task:
        """
        Insert a new task

        Args:
            db: Database session
            task_data: Task creation data; title must already be validated

        Returns:
            The stored Task with its generated id and timestamps

        Raises:
            StorageError: If the insert fails
        """
        now = utcnow()
        task = Task(
            title=task_data.title,
            description=task_data.description or "",
            status=task_data.status or TaskStatus.PENDING.value,
            priority=task_data.priority or TaskPriority.MEDIUM.value,
            due_date=task_data.due_date or None,
            created_at=now,
            updated_at=now,
        )
        try:
            db.add(task)
            await db.commit()
            await db.refresh(task)
        except SQLAlchemyError as e:
            logger.error(f"Failed to create task: {type(e).__name__}: {e}")
            raise StorageError("error creating task", str(e)) from e

        logger.debug(f"Inserted {task!r}")
        return task

    @staticmethod
    async def find_all(db: AsyncSession) -> List[Task]:
        """
        Retrieve every task, newest first

        Returns:
            List of Task objects (empty when the store is empty)
        """
        query = select(Task).order_by(Task.created_at.desc(), Task.id.desc())
        try:
            result = await db.execute(query)
        except SQLAlchemyError as e:
            logger.error(f"Failed to list tasks: {type(e).__name__}: {e}")
            raise StorageError("error fetching tasks", str(e)) from e
        return list(result.scalars().all())

    @staticmethod
    async def find_by_id(db: AsyncSession, task_id: int) -> Optional[Task]:
        """
        Retrieve a single task by ID

        Returns:
            Task object if found, None otherwise
        """
        if not is_valid_task_id(task_id):
            return None
        try:
            result = await db.execute(select(Task).where(Task.id == task_id))
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch task {task_id}: {type(e).__name__}: {e}")
            raise StorageError("error fetching task", str(e)) from e
        return result.scalar_one_or_none()

    @staticmethod
    async def update(
        db: AsyncSession,
        task_id: int,
        task_data: TaskUpdate,
    ) -> Optional[Task]:
        """
        Merge the supplied fields over an existing task

        Only fields present in the request are applied:
        - title, status and priority keep their value when sent as null or ""
        - description sent as null is stored as ""
        - due_date sent as null or "" is cleared
        updated_at is always refreshed, even for an empty patch.

        Args:
            db: Database session
            task_id: ID of the task to update
            task_data: Task update data (partial)

        Returns:
            Updated Task object if found, None otherwise
        """
        task = await TaskService.find_by_id(db, task_id)
        if task is None:
            return None

        patch = task_data.model_dump(exclude_unset=True)
        for field, value in patch.items():
            if field in _REQUIRED_FIELDS:
                if value:
                    setattr(task, field, value)
            elif field == "description":
                task.description = value if value is not None else ""
            elif field == "due_date":
                task.due_date = value or None

        task.updated_at = _next_timestamp(task.updated_at)

        try:
            await db.commit()
            await db.refresh(task)
        except SQLAlchemyError as e:
            logger.error(f"Failed to update task {task_id}: {type(e).__name__}: {e}")
            raise StorageError("error updating task", str(e)) from e

        logger.debug(f"Updated {task!r} with fields {sorted(patch)}")
        return task

    @staticmethod
    async def delete(db: AsyncSession, task_id: int) -> bool:
        """
        Delete a task

        Returns:
            True if task was deleted, False if not found
        """
        task = await TaskService.find_by_id(db, task_id)
        if task is None:
            return False

        try:
            await db.delete(task)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete task {task_id}: {type(e).__name__}: {e}")
            raise StorageError("error deleting task", str(e)) from e
        return True

    @staticmethod
    async def find_by_status(db: AsyncSession, status: str) -> List[Task]:
        """
        Retrieve tasks whose status equals `status`, newest first

        The value is used as-is; callers validate it against TaskStatus.
        """
        query = (
            select(Task)
            .where(Task.status == status)
            .order_by(Task.created_at.desc(), Task.id.desc())
        )
        try:
            result = await db.execute(query)
        except SQLAlchemyError as e:
            logger.error(f"Failed to list tasks with status {status!r}: {type(e).__name__}: {e}")
            raise StorageError("error fetching tasks by status", str(e)) from e
        return list(result.scalars().all())

    @staticmethod
    async def count(db: AsyncSession) -> int:
        """Number of stored tasks"""
        try:
            result = await db.execute(select(func.count(Task.id)))
        except SQLAlchemyError as e:
            logger.error(f"Failed to count tasks: {type(e).__name__}: {e}")
            raise StorageError("error counting tasks", str(e)) from e
        return result.scalar_one()
