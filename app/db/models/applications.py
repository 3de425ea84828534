from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from core.constants import ApplicationStatus, Chain
from db.session import Base

# WHITELIST APPLICATIONS MODEL


class WhitelistApplication(Base):
    __tablename__ = "whitelist_applications"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    wallet_address = Column(String, nullable=False)
    wallet_chain = Column(SAEnum(Chain, native_enum=False, values_callable=lambda e: [m.value for m in e]), nullable=False)
    twitter_handle = Column(String)
    discord_handle = Column(String)
    reason = Column(Text)
    status = Column(
        SAEnum(ApplicationStatus, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False, default=ApplicationStatus.pending
    )
    reviewed_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"))
    reviewed_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    project = relationship("Project", back_populates="applications")
