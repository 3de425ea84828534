import typing as t

from fastapi import APIRouter, Depends, HTTPException, status
from starlette.responses import JSONResponse

from api.utils.logger import logger, myself
from core.auth import get_current_active_user
from db.session import get_db
from db.crud.collaborations import (
    get_incoming,
    get_outgoing,
    send_collaboration,
    respond_collaboration,
    complete_collaboration,
)
from db.crud.projects import get_owned_project
from db.schemas.collaborations import CollabCreate, CollabRespond, Collaboration

collaborations_router = r = APIRouter()


@r.get("/{project_id}/collabs/incoming", response_model=t.List[Collaboration], name="collabs:incoming")
def collabs_incoming(
    project_id: int,
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    try:
        get_owned_project(db, project_id, current_user.id)
        return get_incoming(db, project_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')


@r.get("/{project_id}/collabs/outgoing", response_model=t.List[Collaboration], name="collabs:outgoing")
def collabs_outgoing(
    project_id: int,
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    try:
        get_owned_project(db, project_id, current_user.id)
        return get_outgoing(db, project_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')


@r.post("/{project_id}/collabs", response_model=Collaboration, status_code=status.HTTP_201_CREATED, name="collabs:send")
def collabs_send(
    project_id: int,
    collab: CollabCreate,
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    """
    Send a collab request to another project
    """
    try:
        get_owned_project(db, project_id, current_user.id)
        return send_collaboration(db, project_id, collab.target_project_id, collab.message, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')


@r.put("/{project_id}/collabs/{collab_id}", response_model=Collaboration, name="collabs:respond")
def collabs_respond(
    project_id: int,
    collab_id: int,
    response: CollabRespond,
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    """
    Accept or decline an incoming request
    """
    try:
        get_owned_project(db, project_id, current_user.id)
        return respond_collaboration(db, collab_id, response.decision, current_user.id, project_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')


@r.post("/{project_id}/collabs/{collab_id}/complete", response_model=Collaboration, name="collabs:complete")
def collabs_complete(
    project_id: int,
    collab_id: int,
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    try:
        get_owned_project(db, project_id, current_user.id)
        return complete_collaboration(db, collab_id, project_id, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')
