import typing as t

from fastapi import APIRouter, Depends, HTTPException, Query, status
from starlette.responses import JSONResponse

from api.utils.logger import logger, myself
from core.auth import get_current_active_user
from core.constants import ApplicationStatus
from db.session import get_db
from db.crud.applications import get_applications, review_application
from db.crud.projects import get_owned_project, toggle_applications
from db.schemas.applications import Application, ApplicationReview
from db.schemas.projects import Project

applications_router = r = APIRouter()


@r.get("/{project_id}/applications", response_model=t.List[Application], name="applications:list")
def applications_list(
    project_id: int,
    status_filter: t.Optional[ApplicationStatus] = Query(None, alias="status"),
    search: t.Optional[str] = None,
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    """
    Applications for a project, newest first
    """
    try:
        get_owned_project(db, project_id, current_user.id)
        return get_applications(db, project_id, status_filter, search)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')


@r.put("/{project_id}/applications/{application_id}", response_model=Application, name="applications:review")
def applications_review(
    project_id: int,
    application_id: int,
    review: ApplicationReview,
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    """
    Approve or reject a pending application
    """
    try:
        get_owned_project(db, project_id, current_user.id)
        return review_application(db, application_id, review.decision, current_user.id, project_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')


@r.post("/{project_id}/applications/toggle", response_model=Project, name="applications:toggle")
def applications_toggle(
    project_id: int,
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    """
    Open or close the public application form
    """
    try:
        get_owned_project(db, project_id, current_user.id)
        return toggle_applications(db, project_id, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')
