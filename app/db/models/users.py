from sqlalchemy import Boolean, Column, Integer, String, DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy.sql import func

from core.constants import Chain
from db.session import Base

# USER MODEL


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    display_name = Column(String)
    hashed_password = Column(String, nullable=False)
    wallet_address = Column(String)
    wallet_chain = Column(SAEnum(Chain, native_enum=False, values_callable=lambda e: [m.value for m in e]))
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
