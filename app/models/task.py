"""
Task database model
SQLAlchemy model for tasks
Reference: https://docs.sqlalchemy.org/en/20/orm/declarative_styles.html
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class TaskStatus(str, Enum):
    """Task lifecycle stage."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


class TaskPriority(str, Enum):
    """Task importance tag."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


# Note: status and priority are stored as plain strings, not as enums
# Only the filter-by-status endpoint checks values against TaskStatus


def utcnow() -> datetime:
    """
    Current UTC time as a naive datetime

    SQLite has no timezone-aware DATETIME type, so timestamps are stored
    naive and always in UTC.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Task(Base):
    """
    Task model representing a task in the database

    Attributes:
        id: Primary key, auto-incrementing integer (never reused)
        title: Task title (required)
        description: Task description (empty string when not provided)
        status: pending, in-progress or completed (default: pending)
        priority: low, medium or high (default: medium)
        due_date: Optional due date as an ISO date string
        created_at: Timestamp when task was created
        updated_at: Timestamp when task was last updated

    Reference: https://docs.sqlalchemy.org/en/20/orm/mapped_sql_expressions.html
    """
    __tablename__ = "tasks"

    # AUTOINCREMENT keeps SQLite from handing out the id of a deleted row again
    # Reference: https://docs.sqlalchemy.org/en/20/dialects/sqlite.html#sqlite-autoincrement-behavior
    __table_args__ = {"sqlite_autoincrement": True}

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # Task fields
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default="")
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TaskStatus.PENDING.value
    )
    priority: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TaskPriority.MEDIUM.value
    )
    due_date: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Timestamps
    # Assigned in Python with microsecond precision so ordering by created_at
    # and the strictly increasing updated_at hold for rows written in the same second
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )

    def __repr__(self) -> str:
        """String representation of Task"""
        return f"<Task(id={self.id}, title='{self.title}', status='{self.status}')>"
