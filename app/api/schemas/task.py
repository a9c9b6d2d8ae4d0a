"""
Task Pydantic schemas
Request and response models for Task API endpoints
Reference: https://fastapi.tiangolo.com/tutorial/body/
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TaskCreate(BaseModel):
    """
    Schema for creating a new task

    title is optional here so the handler can answer "title is required"
    in the API's own error format instead of a framework validation error.
    status and priority are not checked against their enums on write.
    """
    title: Optional[str] = Field(None, description="Task title (required)")
    description: Optional[str] = Field(None, description="Task description")
    status: Optional[str] = Field(None, description="pending, in-progress or completed")
    priority: Optional[str] = Field(None, description="low, medium or high")
    due_date: Optional[str] = Field(None, description="Due date (YYYY-MM-DD)")


class TaskUpdate(BaseModel):
    """
    Schema for updating a task
    All fields are optional for partial updates

    Fields left out of the request body are not changed. Use
    model_dump(exclude_unset=True) to tell "not supplied" apart from an
    explicit null, which clears description and due_date.
    Reference: https://fastapi.tiangolo.com/tutorial/body-updates/
    """
    title: Optional[str] = Field(None, description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    status: Optional[str] = Field(None, description="pending, in-progress or completed")
    priority: Optional[str] = Field(None, description="low, medium or high")
    due_date: Optional[str] = Field(None, description="Due date (YYYY-MM-DD)")


class TaskResponse(BaseModel):
    """
    Schema for a stored task
    Includes the database-generated id and timestamps
    """
    model_config = ConfigDict(from_attributes=True)  # Allow creation from ORM objects

    id: int = Field(..., description="Task ID")
    title: str
    description: Optional[str] = None
    status: str
    priority: str
    due_date: Optional[str] = None
    created_at: datetime = Field(..., description="Timestamp when task was created")
    updated_at: datetime = Field(..., description="Timestamp when task was last updated")


class TaskDataResponse(BaseModel):
    """Envelope for a single task"""
    success: bool = True
    data: TaskResponse


class TaskMessageResponse(BaseModel):
    """Envelope for a task returned by a write"""
    success: bool = True
    message: str
    data: TaskResponse


class TaskListResponse(BaseModel):
    """Envelope for a list of tasks"""
    success: bool = True
    count: int
    data: list[TaskResponse]


class MessageResponse(BaseModel):
    """Envelope carrying only a confirmation message"""
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """
    Error envelope
    `error` holds internal detail and is omitted in production
    """
    success: bool = False
    message: str
    error: Optional[str] = None
