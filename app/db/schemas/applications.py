from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_validator
import typing as t

from core.constants import ApplicationStatus, Chain

### SCHEMAS FOR WHITELIST APPLICATIONS ###


class ApplicationSubmit(BaseModel):
    wallet_address: str
    wallet_chain: t.Optional[Chain] = None
    twitter_handle: t.Optional[str] = None
    discord_handle: t.Optional[str] = None
    reason: t.Optional[str] = None


class ApplicationReview(BaseModel):
    decision: ApplicationStatus

    @field_validator("decision")
    @classmethod
    def not_pending(cls, v):
        if v == ApplicationStatus.pending:
            raise ValueError("decision must be approved or rejected")
        return v


class Application(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    wallet_address: str
    wallet_chain: Chain
    twitter_handle: t.Optional[str] = None
    discord_handle: t.Optional[str] = None
    reason: t.Optional[str] = None
    status: ApplicationStatus
    reviewed_by: t.Optional[int] = None
    reviewed_at: t.Optional[datetime] = None
    created_at: t.Optional[datetime] = None
