import typing as t

from fastapi import APIRouter, Depends, HTTPException, status
from starlette.responses import JSONResponse

from api.utils.logger import logger, myself
from api.utils.readiness import compute_readiness, get_readiness_score, group_readiness_items
from core.auth import get_current_active_user
from core.errors import ValidationError
from db.session import get_db
from db.crud.overview import get_project_overview
from db.crud.projects import (
    get_projects_for_owner,
    get_owned_project,
    search_projects,
    create_project,
    edit_project,
    lock_project,
    unlock_project,
    delete_project,
)
from db.schemas.projects import Project, ProjectCreate, ProjectOverview, ProjectSummary, ProjectUpdate
from db.schemas.readiness import Readiness

projects_router = r = APIRouter()


@r.get(
    "/",
    response_model=t.List[Project],
    name="projects:my-projects"
)
def projects_list(
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    """
    Get projects owned by the current user
    """
    try:
        return get_projects_for_owner(db, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')


@r.get("/search", response_model=t.List[ProjectSummary], name="projects:search")
def projects_search(
    q: str = '',
    exclude: t.Optional[int] = None,
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    """
    Find collab partners by name
    """
    try:
        return search_projects(db, q, exclude)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')


@r.post("/", response_model=Project, status_code=status.HTTP_201_CREATED, name="projects:create")
def project_create(
    project: ProjectCreate,
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    """
    Create a new project
    """
    try:
        return create_project(db, current_user.id, project)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')


@r.get("/{project_id}", response_model=Project, name="projects:project-details")
def project_details(
    project_id: int,
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    try:
        return get_owned_project(db, project_id, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')


@r.put("/{project_id}", response_model=Project, name="projects:edit")
def project_edit(
    project_id: int,
    project: ProjectUpdate,
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    """
    Update existing project settings
    """
    try:
        get_owned_project(db, project_id, current_user.id)
        return edit_project(db, project_id, project, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')


@r.delete("/{project_id}", name="projects:delete")
def project_delete(
    project_id: int,
    confirm_name: str = '',
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    """
    Delete a project and everything attached to it. The caller must
    repeat the exact project name in confirm_name.
    """
    try:
        project = get_owned_project(db, project_id, current_user.id)
        if confirm_name != project.name:
            raise ValidationError("confirm_name does not match the project name")
        return {"id": delete_project(db, project_id), "deleted": True}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')


@r.post("/{project_id}/lock", response_model=Project, name="projects:lock")
def project_lock(
    project_id: int,
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    """
    Freeze the whitelist
    """
    try:
        get_owned_project(db, project_id, current_user.id)
        return lock_project(db, project_id, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')


@r.post("/{project_id}/unlock", response_model=Project, name="projects:unlock")
def project_unlock(
    project_id: int,
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    try:
        get_owned_project(db, project_id, current_user.id)
        return unlock_project(db, project_id, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')


@r.get("/{project_id}/overview", response_model=ProjectOverview, name="projects:overview")
def project_overview(
    project_id: int,
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    """
    Dashboard counts, recent wallets and readiness
    """
    try:
        get_owned_project(db, project_id, current_user.id)
        return get_project_overview(db, project_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')


@r.get("/{project_id}/readiness", response_model=Readiness, name="projects:readiness")
def project_readiness(
    project_id: int,
    db=Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    try:
        project = get_owned_project(db, project_id, current_user.id)
        items = compute_readiness(project)
        return Readiness(
            items=items,
            score=get_readiness_score(items),
            groups=group_readiness_items(items),
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')
