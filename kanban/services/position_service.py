"""
Position sequencer.

Lists are ordered inside a board and tasks inside a list by an integer
``position``. Only relative order matters: gaps left behind by moves and
deletes are never compacted.
"""

from typing import Iterable, List
from sqlalchemy import func
from sqlalchemy.orm import Session
from kanban.core.errors import NotFoundError
from kanban.models.list import BoardList
from kanban.models.task import Task


def next_position(db: Session, position_column, *scope) -> int:
    """Return ``max(position) + 1`` over the scope, 0 for an empty scope.

    Read-then-write: two concurrent appends on the same parent can get the
    same value. The order between them is then unspecified.
    """
    current = db.query(func.max(position_column)).filter(*scope).scalar()
    return (current if current is not None else -1) + 1


def next_list_position(db: Session, board_id: str) -> int:
    return next_position(db, BoardList.position, BoardList.board_id == board_id)


def next_task_position(db: Session, list_id: str) -> int:
    return next_position(db, Task.position, Task.list_id == list_id)


def open_slot(db: Session, list_id: str, position: int, exclude_task_id: str = None) -> int:
    """Shift every task of the list at ``position`` or after by one. Returns the shifted count."""
    query = db.query(Task).filter(Task.list_id == list_id, Task.position >= position)
    if exclude_task_id is not None:
        query = query.filter(Task.id != exclude_task_id)
    return query.update({Task.position: Task.position + 1}, synchronize_session=False)


def place_task(db: Session, task: Task, target: BoardList, position: int) -> Task:
    """Move ``task`` into ``target`` at ``position``.

    Nothing is committed here: the caller wraps the shift and the final write
    in one transaction.
    """
    open_slot(db, target.id, position, exclude_task_id=task.id)
    task.list = target
    task.position = position
    return task


def apply_list_positions(db: Session, board_id: str, items: Iterable) -> List[BoardList]:
    """Write client-submitted (id, position) pairs as-is.

    Positions are not checked for uniqueness or contiguity. Every id must be a
    list of the board, otherwise nothing is written.
    """
    items = list(items)
    ids = [item.id for item in items]
    lists = db.query(BoardList).filter(
        BoardList.board_id == board_id,
        BoardList.id.in_(ids)
    ).all() if ids else []

    by_id = {board_list.id: board_list for board_list in lists}
    if any(list_id not in by_id for list_id in ids):
        raise NotFoundError("List")

    for item in items:
        by_id[item.id].position = item.position
    return [by_id[list_id] for list_id in ids]
