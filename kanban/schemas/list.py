from pydantic import Field
from datetime import datetime
from typing import Optional, List
from kanban.schemas.common import CamelModel
from kanban.schemas.task import TaskResponse

# Schemas listes

class ListCreate(CamelModel):
    title: str = Field(min_length=1, max_length=100)

class ListUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=100)

class ListPosition(CamelModel):
    id: str
    position: int

class ListReorder(CamelModel):
    lists: List[ListPosition]

class ListResponse(CamelModel):
    id: str
    board_id: str
    title: str
    position: int
    created_at: datetime
    updated_at: datetime

class ListWithTasks(ListResponse):
    tasks: List[TaskResponse] = []
