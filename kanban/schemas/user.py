from pydantic import EmailStr, Field
from datetime import datetime
from typing import Optional
from kanban.schemas.common import CamelModel

class UserCreate(CamelModel):
    name: str = Field(min_length=3)
    email: EmailStr
    password: str = Field(min_length=8)

class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=8)

class RefreshRequest(CamelModel):
    refresh_token: str

class UserSummary(CamelModel):
    id: str
    name: str
    email: str
    avatar: Optional[str] = None

class UserResponse(UserSummary):
    created_at: datetime
