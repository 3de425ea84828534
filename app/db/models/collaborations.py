from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from core.constants import CollabStatus
from db.session import Base

# COLLABORATIONS MODEL


class Collaboration(Base):
    __tablename__ = "collaborations"

    id = Column(Integer, primary_key=True, index=True)
    requester_project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    target_project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(
        SAEnum(CollabStatus, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False, default=CollabStatus.pending
    )
    message = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    requester = relationship("Project", foreign_keys=[requester_project_id], back_populates="outgoing_collabs")
    target = relationship("Project", foreign_keys=[target_project_id], back_populates="incoming_collabs")
