from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from core.constants import Chain
from db.session import Base

# PROJECTS MODEL


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    slug = Column(String, unique=True, index=True, nullable=False)
    description = Column(Text)
    chain = Column(SAEnum(Chain, native_enum=False, values_callable=lambda e: [m.value for m in e]), nullable=False, default=Chain.ethereum)

    logo_url = Column(String)
    banner_url = Column(String)
    twitter_url = Column(String)
    discord_url = Column(String)
    website_url = Column(String)
    marketplace_url = Column(String)

    supply = Column(Integer)
    mint_price = Column(Numeric(precision=36, scale=18, asdecimal=False))
    wl_spots_total = Column(Integer, nullable=False, default=0)
    wl_spots_filled = Column(Integer, nullable=False, default=0)
    gtd_spots_total = Column(Integer, nullable=False, default=0)
    gtd_spots_filled = Column(Integer, nullable=False, default=0)

    is_applications_open = Column(Boolean, nullable=False, default=False)
    is_locked = Column(Boolean, nullable=False, default=False)
    locked_at = Column(DateTime(timezone=True))
    locked_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"))

    wl_open_date = Column(DateTime(timezone=True))
    wl_close_date = Column(DateTime(timezone=True))
    snapshot_date = Column(DateTime(timezone=True))
    mint_date = Column(DateTime(timezone=True))

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    wallets = relationship("Wallet", back_populates="project", cascade="all, delete-orphan", passive_deletes=True)
    applications = relationship("WhitelistApplication", back_populates="project", cascade="all, delete-orphan", passive_deletes=True)
    activity = relationship("ActivityLog", back_populates="project", cascade="all, delete-orphan", passive_deletes=True)
    outgoing_collabs = relationship(
        "Collaboration", foreign_keys="Collaboration.requester_project_id",
        back_populates="requester", cascade="all, delete-orphan", passive_deletes=True
    )
    incoming_collabs = relationship(
        "Collaboration", foreign_keys="Collaboration.target_project_id",
        back_populates="target", cascade="all, delete-orphan", passive_deletes=True
    )
