"""
Pydantic schemas for API request/response models
"""

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

__all__ = [
    "ErrorResponse",
    "MessageResponse",
    "TaskCreate",
    "TaskDataResponse",
    "TaskListResponse",
    "TaskMessageResponse",
    "TaskResponse",
    "TaskUpdate",
]
