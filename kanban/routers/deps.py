from typing import Optional
from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session
from kanban.core.database import get_db
from kanban.core.errors import UnauthorizedError
from kanban.core.security import decode_token
from kanban.models.user import User
from kanban.services.broadcast_service import Broadcaster


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    return authorization.split(" ", 1)[1].strip() or None


def get_current_user(db: Session = Depends(get_db), authorization: Optional[str] = Header(None)) -> User:
    """Récupère l'utilisateur depuis le JWT token (header Authorization: Bearer ...)."""
    token = bearer_token(authorization)
    if not token:
        raise UnauthorizedError("Invalid User")

    user_id = decode_token(token)
    if not user_id:
        raise UnauthorizedError("Invalid token")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise UnauthorizedError("User not found")

    return user


def get_broadcaster(request: Request) -> Broadcaster:
    return request.app.state.broadcaster
