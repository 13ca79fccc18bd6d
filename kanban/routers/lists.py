from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from kanban.core.database import get_db
from kanban.models.user import User
from kanban.routers.deps import get_broadcaster, get_current_user
from kanban.schemas.common import dump, success
from kanban.schemas.list import ListCreate, ListUpdate, ListReorder, ListResponse, ListWithTasks
from kanban.services import list_service
from kanban.services.broadcast_service import Broadcaster

router = APIRouter(tags=["lists"])

@router.post("/boards/{board_id}/lists", status_code=status.HTTP_201_CREATED)
def create_list(
    board_id: str,
    list_data: ListCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    broadcaster: Broadcaster = Depends(get_broadcaster)
):
    board_list = list_service.create_list(db, broadcaster, board_id, current_user.id, list_data)
    return success({"list": dump(ListWithTasks, board_list)})

@router.put("/boards/{board_id}/lists/reorder")
def reorder_lists(board_id: str, body: ListReorder, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    list_service.reorder_lists(db, board_id, current_user.id, body.lists)
    return success(message="Lists reordered")

@router.put("/lists/{list_id}")
def update_list(list_id: str, list_data: ListUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    board_list = list_service.update_list(db, list_id, current_user.id, list_data)
    return success({"list": dump(ListResponse, board_list)})

@router.delete("/lists/{list_id}")
def delete_list(
    list_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    broadcaster: Broadcaster = Depends(get_broadcaster)
):
    list_service.delete_list(db, broadcaster, list_id, current_user.id)
    return success(message="List deleted")
