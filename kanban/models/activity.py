"""Activity model: journal d'audit, jamais modifié"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from kanban.core.database import Base


class Activity(Base):
    __tablename__ = "activities"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    action = Column(String, nullable=False)  # created, updated, deleted, moved...
    details = Column(String, nullable=False)
    entity_type = Column(String, nullable=False, default="task")  # task, list, board

    task_id = Column(String(36), ForeignKey("tasks.id", ondelete="SET NULL"), nullable=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    board_id = Column(String(36), ForeignKey("boards.id", ondelete="CASCADE"), nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    board = relationship("Board", back_populates="activities")
    user = relationship("User")
    task = relationship("Task")
