"""
Database models
All SQLAlchemy models should be defined here or imported here
"""

# Import Base for models to inherit from
from app.core.database import Base
from app.models.task import Task, TaskPriority, TaskStatus

__all__ = [
    "Base",
    "Task",
    "TaskPriority",
    "TaskStatus",
]
