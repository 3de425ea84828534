from fastapi import APIRouter, Depends, HTTPException, status
from starlette.responses import JSONResponse

from api.utils.logger import logger, myself
from core.constants import TIMELINE_FIELDS, TIMELINE_LABELS
from db.session import get_db
from db.crud.applications import submit_application
from db.crud.projects import count_active_wallets, get_project_by_slug
from db.crud.wallets import check_wallet
from db.schemas.applications import ApplicationSubmit
from db.schemas.projects import PublicProject, PublicProjectView, TimelineEntry
from db.schemas.wallets import WalletCheck

# no auth on these, they back the public /p/{slug} pages
public_router = r = APIRouter()


@r.get("/{slug}", response_model=PublicProjectView, name="public:project")
def public_project(
    slug: str,
    db=Depends(get_db),
):
    try:
        project = get_project_by_slug(db, slug)
        timeline = [
            TimelineEntry(field=field, label=TIMELINE_LABELS[field], date=getattr(project, field))
            for field in TIMELINE_FIELDS
            if getattr(project, field)
        ]
        return PublicProjectView(
            project=PublicProject.model_validate(project),
            wallet_count=count_active_wallets(db, project.id),
            timeline=timeline,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')


@r.get("/{slug}/check", response_model=WalletCheck, name="public:check")
def public_check(
    slug: str,
    address: str = '',
    db=Depends(get_db),
):
    """
    Is this wallet on the list?
    """
    try:
        return check_wallet(db, get_project_by_slug(db, slug), address)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')


@r.post("/{slug}/apply", status_code=status.HTTP_201_CREATED, name="public:apply")
def public_apply(
    slug: str,
    application: ApplicationSubmit,
    db=Depends(get_db),
):
    """
    Submit a whitelist application
    """
    try:
        submitted = submit_application(db, slug, application)
        return {"id": submitted.id, "status": submitted.status.value}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=f'{str(e)}')
