from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_validator
import typing as t

from core.constants import CollabStatus
from db.schemas.projects import ProjectSummary

### SCHEMAS FOR COLLABORATIONS ###


class CollabCreate(BaseModel):
    target_project_id: int
    message: t.Optional[str] = None

    @field_validator("message", mode="before")
    @classmethod
    def blank_message(cls, v):
        if isinstance(v, str):
            return v.strip() or None
        return v


class CollabRespond(BaseModel):
    decision: CollabStatus

    @field_validator("decision")
    @classmethod
    def accept_or_decline(cls, v):
        if v not in (CollabStatus.accepted, CollabStatus.declined):
            raise ValueError("decision must be accepted or declined")
        return v


class Collaboration(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    requester_project_id: int
    target_project_id: int
    status: CollabStatus
    message: t.Optional[str] = None
    created_at: t.Optional[datetime] = None
    updated_at: t.Optional[datetime] = None
    requester: t.Optional[ProjectSummary] = None
    target: t.Optional[ProjectSummary] = None
