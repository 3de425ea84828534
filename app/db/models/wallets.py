from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from core.constants import Chain, WalletCategory, WalletSource, WalletStatus
from db.session import Base

# WALLETS MODEL


def _enum(e):
    return SAEnum(e, native_enum=False, values_callable=lambda x: [m.value for m in x])


class Wallet(Base):
    __tablename__ = "wallets"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    address = Column(String, nullable=False)
    chain = Column(_enum(Chain), nullable=False)
    category = Column(_enum(WalletCategory), nullable=False, default=WalletCategory.wl)
    label = Column(String)
    source = Column(_enum(WalletSource), nullable=False, default=WalletSource.manual)
    status = Column(_enum(WalletStatus), nullable=False, default=WalletStatus.active)
    added_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    removed_at = Column(DateTime(timezone=True))
    removed_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"))

    project = relationship("Project", back_populates="wallets")


# one active entry per (project, address, chain); removed rows are history
Index(
    "ux_wallets_active_address",
    Wallet.project_id, func.lower(Wallet.address), Wallet.chain,
    unique=True,
    sqlite_where=text("status = 'active'"),
    postgresql_where=text("status = 'active'"),
)
