from sqlalchemy.orm import Session

from api.utils.readiness import compute_readiness, get_readiness_score
from db.crud.applications import count_pending_applications
from db.crud.collaborations import count_collaborations
from db.crud.projects import count_active_wallets, get_project
from db.crud.wallets import get_recent_wallets
from db.schemas.projects import Project, ProjectOverview
from db.schemas.wallets import Wallet

##################################
### PROJECT DASHBOARD OVERVIEW ###
##################################


def get_project_overview(db: Session, id: int) -> ProjectOverview:
    project = get_project(db, id)
    items = compute_readiness(project)
    return ProjectOverview(
        project=Project.model_validate(project),
        wallet_count=count_active_wallets(db, id),
        collab_count=count_collaborations(db, id),
        pending_applications=count_pending_applications(db, id),
        recent_wallets=[Wallet.model_validate(w) for w in get_recent_wallets(db, id)],
        readiness=items,
        score=get_readiness_score(items),
    )
