from datetime import datetime
from typing import Optional
from kanban.schemas.common import CamelModel
from kanban.schemas.user import UserSummary

class TaskRef(CamelModel):
    id: str
    title: str

class ActivityResponse(CamelModel):
    id: str
    action: str
    details: str
    entity_type: str
    task_id: Optional[str]
    user_id: str
    board_id: str
    created_at: datetime
    user: UserSummary
    task: Optional[TaskRef] = None
