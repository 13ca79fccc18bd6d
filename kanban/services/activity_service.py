"""Activity recorder"""

import logging
from typing import List, Optional, Tuple
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
from kanban.models.activity import Activity

logger = logging.getLogger(__name__)


def record_activity(
    db: Session,
    action: str,
    details: str,
    user_id: str,
    board_id: str,
    entity_type: str = "task",
    task_id: Optional[str] = None
) -> Optional[Activity]:
    """Ajoute une entrée d'audit après la mutation principale.

    Un échec est loggé mais ne remonte pas: la mutation déjà commitée reste
    la source de vérité.
    """
    try:
        activity = Activity(
            action=action,
            details=details,
            entity_type=entity_type,
            task_id=task_id,
            user_id=user_id,
            board_id=board_id
        )
        db.add(activity)
        db.commit()
        return activity
    except SQLAlchemyError:
        db.rollback()
        logger.warning(f"Could not record activity '{action}' on board {board_id}", exc_info=True)
        return None


def get_activities(db: Session, board_id: str, page: int = 1, limit: int = 20) -> Tuple[List[Activity], int]:
    query = db.query(Activity).filter(Activity.board_id == board_id)
    total = query.count()
    activities = query.options(
        selectinload(Activity.user),
        selectinload(Activity.task)
    ).order_by(Activity.created_at.desc()).offset((page - 1) * limit).limit(limit).all()
    return activities, total
