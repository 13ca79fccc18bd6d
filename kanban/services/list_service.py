"""List service: création, mise à jour, suppression et réordonnancement des listes"""

from typing import List
from sqlalchemy.orm import Session
from kanban.core.database import transaction
from kanban.core.errors import NotFoundError
from kanban.models.board import Board
from kanban.models.list import BoardList
from kanban.schemas.common import dump
from kanban.schemas.list import ListCreate, ListUpdate, ListPosition, ListWithTasks
from kanban.services.access_service import check_access
from kanban.services.activity_service import record_activity
from kanban.services.broadcast_service import Broadcaster, LIST_CREATED, LIST_DELETED
from kanban.services.position_service import apply_list_positions, next_list_position


def get_list(db: Session, list_id: str) -> BoardList:
    board_list = db.query(BoardList).filter(BoardList.id == list_id).first()
    if not board_list:
        raise NotFoundError("List")
    return board_list


def create_list(db: Session, broadcaster: Broadcaster, board_id: str, user_id: str, data: ListCreate) -> BoardList:
    board = db.query(Board).filter(Board.id == board_id).first()
    if not board:
        raise NotFoundError("Board")
    check_access(db, board_id, user_id)

    board_list = BoardList(
        board_id=board_id,
        title=data.title,
        position=next_list_position(db, board_id)
    )
    with transaction(db):
        db.add(board_list)

    record_activity(
        db,
        action="created",
        details=f'created list "{data.title}"',
        entity_type="list",
        user_id=user_id,
        board_id=board_id
    )

    payload = dump(ListWithTasks, board_list)
    broadcaster.emit(board_id, LIST_CREATED, {"list": payload, "boardId": board_id})
    return board_list


def update_list(db: Session, list_id: str, user_id: str, data: ListUpdate) -> BoardList:
    # pas d'activité ni de broadcast pour un renommage
    board_list = get_list(db, list_id)
    check_access(db, board_list.board_id, user_id)

    if data.title is not None:
        board_list.title = data.title
    with transaction(db):
        db.add(board_list)
    return board_list


def delete_list(db: Session, broadcaster: Broadcaster, list_id: str, user_id: str) -> str:
    board_list = get_list(db, list_id)
    board_id = board_list.board_id
    title = board_list.title
    check_access(db, board_id, user_id)

    # les tâches partent avec la liste (cascade)
    with transaction(db):
        db.delete(board_list)

    record_activity(
        db,
        action="deleted",
        details=f'deleted list "{title}"',
        entity_type="list",
        user_id=user_id,
        board_id=board_id
    )

    broadcaster.emit(board_id, LIST_DELETED, {"listId": list_id, "boardId": board_id})
    return board_id


def reorder_lists(db: Session, board_id: str, user_id: str, items: List[ListPosition]) -> List[BoardList]:
    """Applique les positions envoyées par le client en une seule transaction."""
    check_access(db, board_id, user_id)

    with transaction(db):
        lists = apply_list_positions(db, board_id, items)
    return lists
