from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from kanban.core.database import get_db
from kanban.models.user import User
from kanban.routers.deps import get_current_user
from kanban.schemas.activity import ActivityResponse
from kanban.schemas.common import build_pagination, dump, success
from kanban.services.access_service import check_access
from kanban.services.activity_service import get_activities

router = APIRouter(tags=["activities"])

@router.get("/boards/{board_id}/activities")
def board_activities(
    board_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    # Journal du board, le plus récent en premier
    check_access(db, board_id, current_user.id)
    activities, total = get_activities(db, board_id, page, limit)
    return success({
        "activities": [dump(ActivityResponse, activity) for activity in activities],
        "pagination": build_pagination(page, limit, total)
    })
