from datetime import datetime
from pydantic import BaseModel, ConfigDict
import typing as t

### SCHEMAS FOR ACTIVITY LOG ###


class ActivityEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    actor_id: t.Optional[int] = None
    action: str
    details: t.Dict[str, t.Any] = {}
    created_at: t.Optional[datetime] = None
    label: t.Optional[str] = None
    summary: t.Optional[str] = None
