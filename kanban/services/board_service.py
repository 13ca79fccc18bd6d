"""Board service"""

from typing import List, Optional, Tuple
from sqlalchemy.orm import Session, selectinload
from kanban.core.config import settings
from kanban.core.database import transaction
from kanban.core.errors import NotFoundError
from kanban.models.board import Board, BoardMember
from kanban.models.list import BoardList
from kanban.models.task import Task, TaskAssignee
from kanban.models.user import User
from kanban.schemas.board import BoardCreate, BoardUpdate
from kanban.services.access_service import OWNER, MEMBER, check_access, find_membership, require_owner
from kanban.services.activity_service import record_activity

DEFAULT_LISTS = ("To Do", "In Progress", "Done")


def _board_query(db: Session):
    return db.query(Board).options(selectinload(Board.members).selectinload(BoardMember.user))


def list_boards(db: Session, user_id: str, page: int = 1, limit: int = 12, search: str = "") -> Tuple[List[Board], int]:
    query = db.query(Board).join(BoardMember).filter(BoardMember.user_id == user_id)
    if search:
        query = query.filter(Board.title.ilike(f"%{search}%"))

    total = query.count()
    boards = query.options(
        selectinload(Board.members).selectinload(BoardMember.user),
        selectinload(Board.lists)
    ).order_by(Board.updated_at.desc()).offset((page - 1) * limit).limit(limit).all()
    return boards, total


def get_board(db: Session, board_id: str, user_id: str) -> Board:
    check_access(db, board_id, user_id)

    board = _board_query(db).options(
        selectinload(Board.lists)
        .selectinload(BoardList.tasks)
        .selectinload(Task.assignees)
        .selectinload(TaskAssignee.user)
    ).filter(Board.id == board_id).first()
    if not board:
        raise NotFoundError("Board")
    return board


def create_board(db: Session, user_id: str, data: BoardCreate) -> Board:
    board = Board(
        title=data.title,
        description=data.description,
        color=data.color or settings.DEFAULT_BOARD_COLOR
    )
    board.members.append(BoardMember(user_id=user_id, role=OWNER))
    for position, title in enumerate(DEFAULT_LISTS):
        board.lists.append(BoardList(title=title, position=position))

    with transaction(db):
        db.add(board)
    board_id = board.id

    record_activity(
        db,
        action="created",
        details=f'created board "{data.title}"',
        entity_type="board",
        user_id=user_id,
        board_id=board_id
    )
    return _board_query(db).filter(Board.id == board_id).first()


def update_board(db: Session, board_id: str, user_id: str, data: BoardUpdate) -> Board:
    member = check_access(db, board_id, user_id)
    require_owner(member, "Only the owner can update this board")

    board = db.query(Board).filter(Board.id == board_id).first()
    if not board:
        raise NotFoundError("Board")

    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        # title et color ne sont pas nullables
        if value is None and field != "description":
            continue
        setattr(board, field, value)

    with transaction(db):
        db.add(board)

    record_activity(
        db,
        action="updated",
        details=f'updated board "{board.title}"',
        entity_type="board",
        user_id=user_id,
        board_id=board_id
    )
    return _board_query(db).filter(Board.id == board_id).first()


def delete_board(db: Session, board_id: str, user_id: str) -> None:
    member = check_access(db, board_id, user_id)
    require_owner(member, "Only the owner can delete this board")

    board = db.query(Board).filter(Board.id == board_id).first()
    if not board:
        raise NotFoundError("Board")

    # cascade: listes, tâches, assignations, membres, activités
    with transaction(db):
        db.delete(board)


def add_member(db: Session, board_id: str, user_id: str, email: str) -> Optional[Board]:
    """Ajoute un membre par email. Retourne None si l'utilisateur est déjà membre."""
    check_access(db, board_id, user_id)

    user = db.query(User).filter(User.email == email).first()
    if not user:
        raise NotFoundError("User")

    if find_membership(db, board_id, user.id):
        return None

    with transaction(db):
        db.add(BoardMember(user_id=user.id, board_id=board_id, role=MEMBER))

    record_activity(
        db,
        action="added",
        details=f"added {user.name} to the board",
        entity_type="board",
        user_id=user_id,
        board_id=board_id
    )
    return _board_query(db).filter(Board.id == board_id).first()
