from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from kanban.core.database import get_db
from kanban.models.user import User
from kanban.routers.deps import get_broadcaster, get_current_user
from kanban.schemas.common import build_pagination, dump, success
from kanban.schemas.task import TaskCreate, TaskUpdate, TaskMove, TaskAssign, TaskResponse, TaskSearchResult
from kanban.services import task_service
from kanban.services.broadcast_service import Broadcaster

router = APIRouter(tags=["tasks"])


@router.post("/lists/{list_id}/tasks", status_code=status.HTTP_201_CREATED)
def create_task(
    list_id: str,
    task_data: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    broadcaster: Broadcaster = Depends(get_broadcaster)
):
    task, board_id = task_service.create_task(db, broadcaster, list_id, current_user.id, task_data)
    return success({"task": dump(TaskResponse, task), "boardId": board_id})


@router.put("/tasks/{task_id}/move")
def move_task(
    task_id: str,
    move: TaskMove,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    broadcaster: Broadcaster = Depends(get_broadcaster)
):
    task, board_id = task_service.move_task(db, broadcaster, task_id, current_user.id, move)
    return success({"task": dump(TaskResponse, task), "boardId": board_id})


@router.put("/tasks/{task_id}")
def update_task(
    task_id: str,
    task_data: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    broadcaster: Broadcaster = Depends(get_broadcaster)
):
    task, board_id = task_service.update_task(db, broadcaster, task_id, current_user.id, task_data)
    return success({"task": dump(TaskResponse, task), "boardId": board_id})


@router.delete("/tasks/{task_id}")
def delete_task(
    task_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    broadcaster: Broadcaster = Depends(get_broadcaster)
):
    board_id, list_id = task_service.delete_task(db, broadcaster, task_id, current_user.id)
    return success({"boardId": board_id, "listId": list_id, "taskId": task_id}, message="Task deleted")


@router.post("/tasks/{task_id}/assign")
def assign_task(
    task_id: str,
    body: TaskAssign,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    broadcaster: Broadcaster = Depends(get_broadcaster)
):
    task, board_id = task_service.assign_task(db, broadcaster, task_id, current_user.id, body.user_id)
    if task is None:
        return success(message="User already assigned")
    return success({"task": dump(TaskResponse, task), "boardId": board_id})


@router.delete("/tasks/{task_id}/assign/{user_id}")
def unassign_task(
    task_id: str,
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    broadcaster: Broadcaster = Depends(get_broadcaster)
):
    task, board_id = task_service.unassign_task(db, broadcaster, task_id, current_user.id, user_id)
    return success({"task": dump(TaskResponse, task), "boardId": board_id})


@router.get("/boards/{board_id}/tasks/search")
def search_tasks(
    board_id: str,
    q: str = Query(""),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    tasks, total = task_service.search_tasks(db, board_id, current_user.id, q, page, limit)
    return success({
        "tasks": [dump(TaskSearchResult, task) for task in tasks],
        "pagination": build_pagination(page, limit, total)
    })
