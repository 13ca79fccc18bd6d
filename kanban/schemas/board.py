from pydantic import EmailStr, Field
from datetime import datetime
from typing import Optional, List
from kanban.schemas.common import CamelModel
from kanban.schemas.list import ListWithTasks
from kanban.schemas.user import UserSummary

# Schemas boards

class BoardCreate(CamelModel):
    title: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    color: Optional[str] = None

class BoardUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    color: Optional[str] = None

class AddMemberRequest(CamelModel):
    email: EmailStr

class MemberResponse(CamelModel):
    id: str
    user_id: str
    board_id: str
    role: str
    user: UserSummary

class BoardResponse(CamelModel):
    id: str
    title: str
    description: Optional[str]
    color: str
    created_at: datetime
    updated_at: datetime
    members: List[MemberResponse] = []

class BoardDetail(BoardResponse):
    lists: List[ListWithTasks] = []
