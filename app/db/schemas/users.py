from datetime import datetime
from pydantic import BaseModel, ConfigDict
import typing as t

from core.constants import Chain

### SCHEMAS FOR USERS ###


class UserBase(BaseModel):
    email: str
    display_name: t.Optional[str] = None
    wallet_address: t.Optional[str] = None
    wallet_chain: t.Optional[Chain] = None


class UserCreate(UserBase):
    password: str


class User(UserBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    is_active: bool = True
    created_at: t.Optional[datetime] = None
