"""Board and membership models"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from kanban.core.database import Base


class Board(Base):
    __tablename__ = "boards"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    color = Column(String, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    members = relationship("BoardMember", back_populates="board", cascade="all, delete-orphan")
    lists = relationship("BoardList", back_populates="board", cascade="all, delete-orphan", order_by="BoardList.position")
    activities = relationship("Activity", back_populates="board", cascade="all, delete-orphan")


class BoardMember(Base):
    __tablename__ = "board_members"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    board_id = Column(String(36), ForeignKey("boards.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(String(20), nullable=False, default="member")  # owner, member
    created_at = Column(DateTime, default=datetime.utcnow)

    board = relationship("Board", back_populates="members")
    user = relationship("User")

    __table_args__ = (
        UniqueConstraint("user_id", "board_id", name="uq_board_member"),
    )
