from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from kanban.core.database import get_db
from kanban.models.user import User
from kanban.routers.deps import get_current_user
from kanban.schemas.board import BoardCreate, BoardUpdate, BoardResponse, BoardDetail, AddMemberRequest
from kanban.schemas.common import build_pagination, dump, success
from kanban.services import board_service

router = APIRouter(prefix="/boards", tags=["boards"])

@router.get("")
def list_boards(
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
    search: str = Query(""),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    boards, total = board_service.list_boards(db, current_user.id, page, limit, search)
    return success({
        "boards": [{**dump(BoardResponse, board), "listCount": len(board.lists)} for board in boards],
        "pagination": build_pagination(page, limit, total)
    })

@router.post("", status_code=status.HTTP_201_CREATED)
def create_board(board_data: BoardCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    board = board_service.create_board(db, current_user.id, board_data)
    return success({"board": dump(BoardDetail, board)})

@router.get("/{board_id}")
def get_board(board_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    board = board_service.get_board(db, board_id, current_user.id)
    return success({"board": dump(BoardDetail, board)})

@router.put("/{board_id}")
def update_board(board_id: str, board_data: BoardUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    board = board_service.update_board(db, board_id, current_user.id, board_data)
    return success({"board": dump(BoardResponse, board)})

@router.delete("/{board_id}")
def delete_board(board_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    board_service.delete_board(db, board_id, current_user.id)
    return success(message="Board deleted")

@router.post("/{board_id}/members")
def add_member(board_id: str, body: AddMemberRequest, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    board = board_service.add_member(db, board_id, current_user.id, body.email)
    if board is None:
        return success(message="User is already a member")
    return success({"board": dump(BoardResponse, board)})
