import typing as t

from fastapi import APIRouter, Depends, HTTPException, status
from starlette.responses import JSONResponse

from api.utils.logger import logger, myself
from core.auth import get_current_active_user
from core.constants import ACTION_LABELS, ActivityAction
from db.session import get_db
from db.crud.activity import get_activity, describe_activity
from db.crud.projects import get_owned_project
from db.schemas.activity import ActivityEntry

activity_router = r = APIRouter()


def _label(action: str) -> str:
    try:
        return ACTION_LABELS[ActivityAction(action)]
    except ValueError:
        return action


@r.get("/{project_id}/activity", response_model=t.List[ActivityEntry], name="activity:feed")
def activity_feed(
    project_id: int,
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    """
    Audit trail for a project, newest first
    """
    try:
        get_owned_project(db, project_id, current_user.id)
        entries = []
        for log in get_activity(db, project_id):
            entry = ActivityEntry.model_validate(log)
            entry.label = _label(log.action)
            entry.summary = describe_activity(log.action, log.details)
            entries.append(entry)
        return entries
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')
