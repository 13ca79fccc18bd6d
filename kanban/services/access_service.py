"""Access guard: l'appartenance au board est le seul signal d'autorisation"""

from sqlalchemy.orm import Session
from kanban.core.errors import ForbiddenError
from kanban.models.board import BoardMember

OWNER = "owner"
MEMBER = "member"

NOT_A_MEMBER = "You are not a member of this board"


def find_membership(db: Session, board_id: str, user_id: str):
    return db.query(BoardMember).filter(
        BoardMember.board_id == board_id,
        BoardMember.user_id == user_id
    ).first()


def check_access(db: Session, board_id: str, user_id: str) -> BoardMember:
    # pas de cache: chaque opération revérifie l'appartenance
    member = find_membership(db, board_id, user_id)
    if not member:
        raise ForbiddenError(NOT_A_MEMBER)
    return member


def require_owner(member: BoardMember, message: str) -> BoardMember:
    if member.role != OWNER:
        raise ForbiddenError(message)
    return member
