from kanban.models.user import User
from kanban.models.board import Board, BoardMember
from kanban.models.list import BoardList
from kanban.models.task import Task, TaskAssignee
from kanban.models.activity import Activity

__all__ = ["User", "Board", "BoardMember", "BoardList", "Task", "TaskAssignee", "Activity"]
