"""Task service

Chaque mutation suit la même séquence:
board du parent -> access guard -> préconditions -> écriture (transaction)
-> activité -> broadcast sur le canal du board.
"""

from typing import List, Optional, Tuple
from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload
from kanban.core.database import transaction
from kanban.core.errors import ForbiddenError, NotFoundError
from kanban.models.list import BoardList
from kanban.models.task import Task, TaskAssignee
from kanban.models.user import User
from kanban.schemas.common import dump
from kanban.schemas.task import TaskCreate, TaskUpdate, TaskMove, TaskResponse
from kanban.services.access_service import NOT_A_MEMBER, check_access, find_membership
from kanban.services.activity_service import record_activity
from kanban.services.broadcast_service import (
    Broadcaster,
    TASK_CREATED,
    TASK_UPDATED,
    TASK_DELETED,
    TASK_MOVED
)
from kanban.services.list_service import get_list
from kanban.services.position_service import next_task_position, place_task

def _task_query(db: Session):
    return db.query(Task).options(
        selectinload(Task.assignees).selectinload(TaskAssignee.user)
    )


def get_task(db: Session, task_id: str) -> Task:
    task = db.query(Task).options(selectinload(Task.list)).filter(Task.id == task_id).first()
    if not task:
        raise NotFoundError("Task")
    return task


def load_task(db: Session, task_id: str) -> Task:
    """Recharge la tâche avec ses assignés."""
    return _task_query(db).filter(Task.id == task_id).first()


def create_task(db: Session, broadcaster: Broadcaster, list_id: str, user_id: str, data: TaskCreate) -> Tuple[Task, str]:
    board_list = get_list(db, list_id)
    board_id = board_list.board_id
    check_access(db, board_id, user_id)

    task = Task(
        list_id=list_id,
        title=data.title,
        description=data.description,
        priority=data.priority or "medium",
        due_date=data.due_date,
        position=next_task_position(db, list_id)
    )
    with transaction(db):
        db.add(task)
    task_id = task.id

    record_activity(
        db,
        action="created",
        details=f'created task "{data.title}"',
        task_id=task_id,
        user_id=user_id,
        board_id=board_id
    )

    task = load_task(db, task_id)
    broadcaster.emit(board_id, TASK_CREATED, {"task": dump(TaskResponse, task), "boardId": board_id})
    return task, board_id


def update_task(db: Session, broadcaster: Broadcaster, task_id: str, user_id: str, data: TaskUpdate) -> Tuple[Task, str]:
    task = get_task(db, task_id)
    board_id = task.list.board_id
    check_access(db, board_id, user_id)

    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(task, field, value)

    with transaction(db):
        db.add(task)

    record_activity(
        db,
        action="updated",
        details=f'updated task "{task.title}"',
        task_id=task_id,
        user_id=user_id,
        board_id=board_id
    )

    task = load_task(db, task_id)
    broadcaster.emit(board_id, TASK_UPDATED, {"task": dump(TaskResponse, task), "boardId": board_id})
    return task, board_id


def delete_task(db: Session, broadcaster: Broadcaster, task_id: str, user_id: str) -> Tuple[str, str]:
    task = get_task(db, task_id)
    board_id = task.list.board_id
    list_id = task.list_id
    title = task.title
    check_access(db, board_id, user_id)

    # suppression définitive, les assignations suivent
    with transaction(db):
        db.delete(task)

    record_activity(
        db,
        action="deleted",
        details=f'deleted task "{title}"',
        user_id=user_id,
        board_id=board_id
    )

    broadcaster.emit(board_id, TASK_DELETED, {"taskId": task_id, "listId": list_id, "boardId": board_id})
    return board_id, list_id


def move_task(db: Session, broadcaster: Broadcaster, task_id: str, user_id: str, data: TaskMove) -> Tuple[Task, str]:
    task = get_task(db, task_id)
    board_id = task.list.board_id
    check_access(db, board_id, user_id)

    target = db.query(BoardList).filter(BoardList.id == data.list_id).first()
    # pas de déplacement entre boards
    if not target or target.board_id != board_id:
        raise NotFoundError("Target list")
    source_title = task.list.title

    with transaction(db):
        place_task(db, task, target, data.position)

    record_activity(
        db,
        action="moved",
        details=f'moved task "{task.title}" from "{source_title}" to "{target.title}"',
        task_id=task_id,
        user_id=user_id,
        board_id=board_id
    )

    task = load_task(db, task_id)
    broadcaster.emit(board_id, TASK_MOVED, {"task": dump(TaskResponse, task), "boardId": board_id})
    return task, board_id


def assign_task(db: Session, broadcaster: Broadcaster, task_id: str, user_id: str, assignee_id: str) -> Tuple[Optional[Task], str]:
    """Assigne un membre du board. Retourne (None, board_id) s'il l'est déjà."""
    task = get_task(db, task_id)
    board_id = task.list.board_id
    check_access(db, board_id, user_id)

    assignee = db.query(User).filter(User.id == assignee_id).first()
    if not assignee:
        raise NotFoundError("User")
    if not find_membership(db, board_id, assignee_id):
        raise ForbiddenError(NOT_A_MEMBER)

    existing = db.query(TaskAssignee).filter(
        TaskAssignee.task_id == task_id,
        TaskAssignee.user_id == assignee_id
    ).first()
    if existing:
        return None, board_id

    title = task.title
    with transaction(db):
        db.add(TaskAssignee(task_id=task_id, user_id=assignee_id))

    record_activity(
        db,
        action="assigned",
        details=f'assigned {assignee.name} to task "{title}"',
        task_id=task_id,
        user_id=user_id,
        board_id=board_id
    )

    task = load_task(db, task_id)
    broadcaster.emit(board_id, TASK_UPDATED, {"task": dump(TaskResponse, task), "boardId": board_id})
    return task, board_id


def unassign_task(db: Session, broadcaster: Broadcaster, task_id: str, user_id: str, assignee_id: str) -> Tuple[Task, str]:
    task = get_task(db, task_id)
    board_id = task.list.board_id
    title = task.title
    check_access(db, board_id, user_id)

    with transaction(db):
        db.query(TaskAssignee).filter(
            TaskAssignee.task_id == task_id,
            TaskAssignee.user_id == assignee_id
        ).delete(synchronize_session=False)

    unassigned = db.query(User).filter(User.id == assignee_id).first()
    name = unassigned.name if unassigned else "a user"
    record_activity(
        db,
        action="unassigned",
        details=f'unassigned {name} from task "{title}"',
        task_id=task_id,
        user_id=user_id,
        board_id=board_id
    )

    task = load_task(db, task_id)
    broadcaster.emit(board_id, TASK_UPDATED, {"task": dump(TaskResponse, task), "boardId": board_id})
    return task, board_id


def search_tasks(db: Session, board_id: str, user_id: str, q: str = "", page: int = 1, limit: int = 20) -> Tuple[List[Task], int]:
    check_access(db, board_id, user_id)

    pattern = f"%{q}%"
    query = db.query(Task).join(BoardList, Task.list_id == BoardList.id).filter(
        BoardList.board_id == board_id,
        or_(Task.title.ilike(pattern), Task.description.ilike(pattern))
    )
    total = query.count()
    tasks = query.options(
        selectinload(Task.assignees).selectinload(TaskAssignee.user),
        selectinload(Task.list)
    ).order_by(Task.updated_at.desc()).offset((page - 1) * limit).limit(limit).all()
    return tasks, total
