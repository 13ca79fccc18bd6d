"""Pydantic schemas for task request/response validation."""

from pydantic import Field, field_validator
from datetime import datetime
from typing import Optional, List, Literal
from kanban.schemas.common import CamelModel
from kanban.schemas.user import UserSummary

Priority = Literal["low", "medium", "high"]


class TaskCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    priority: Optional[Priority] = None
    due_date: Optional[datetime] = None


class TaskUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    priority: Optional[Priority] = None
    due_date: Optional[datetime] = None

    @field_validator("title", "priority")
    @classmethod
    def reject_null(cls, v):
        # description et dueDate peuvent être effacés, pas ceux-ci
        if v is None:
            raise ValueError("cannot be null")
        return v


class TaskMove(CamelModel):
    list_id: str
    position: int = Field(ge=0)


class TaskAssign(CamelModel):
    user_id: str


class TaskAssigneeResponse(CamelModel):
    id: str
    user_id: str
    task_id: str
    user: UserSummary


class TaskResponse(CamelModel):
    id: str
    list_id: str
    title: str
    description: Optional[str]
    priority: str
    due_date: Optional[datetime]
    position: int
    created_at: datetime
    updated_at: datetime
    assignees: List[TaskAssigneeResponse] = []


class ListSummary(CamelModel):
    id: str
    title: str


class TaskSearchResult(TaskResponse):
    list: ListSummary
