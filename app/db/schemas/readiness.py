from pydantic import BaseModel
import typing as t

from core.constants import ReadinessCategory, ReadinessStatus

### SCHEMAS FOR LAUNCH READINESS ###


class ReadinessItem(BaseModel):
    id: str
    label: str
    category: ReadinessCategory
    status: ReadinessStatus
    description: t.Optional[str] = None
    href: t.Optional[str] = None


class ReadinessScore(BaseModel):
    completed: int
    total: int
    percent: int = 0


class ReadinessGroup(BaseModel):
    title: str
    items: t.List[ReadinessItem]


class Readiness(BaseModel):
    items: t.List[ReadinessItem]
    score: ReadinessScore
    groups: t.List[ReadinessGroup]
