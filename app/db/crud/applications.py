from datetime import datetime, timezone
from sqlalchemy import func, or_
from sqlalchemy.orm import Session
import typing as t

from api.utils.logger import logger
from api.utils.wallet import validate_wallet_address
from core.constants import ActivityAction, ApplicationStatus, WalletCategory, WalletSource
from core.errors import ApplicationsClosed, InvalidAddress, InvalidState, NotFound
from db.crud.activity import log_activity
from db.crud.projects import get_project, get_project_by_slug, refresh_spot_counts
from db.crud.wallets import create_wallet, find_active_wallet
from db.models import applications as models
from db.schemas import applications as schemas
from db.schemas.wallets import AddWallet
from db.session import commit

#################################################
### CRUD OPERATIONS FOR WHITELIST APPLICATIONS ###
#################################################


def _clean(v: t.Optional[str]) -> t.Optional[str]:
    return (v or '').strip() or None


def get_application(db: Session, id: int, project_id: int = None) -> models.WhitelistApplication:
    q = db.query(models.WhitelistApplication).filter(models.WhitelistApplication.id == id)
    if project_id is not None:
        q = q.filter(models.WhitelistApplication.project_id == project_id)
    application = q.first()
    if not application:
        raise NotFound("application not found")
    return application


def get_applications(
    db: Session, project_id: int, status: ApplicationStatus = None, search: str = None
) -> t.List[models.WhitelistApplication]:
    q = db.query(models.WhitelistApplication).filter(models.WhitelistApplication.project_id == project_id)
    if status:
        q = q.filter(models.WhitelistApplication.status == status)
    if search and search.strip():
        s = search.strip().lower()
        q = q.filter(or_(
            func.lower(models.WhitelistApplication.wallet_address).contains(s, autoescape=True),
            func.lower(models.WhitelistApplication.twitter_handle).contains(s, autoescape=True),
            func.lower(models.WhitelistApplication.discord_handle).contains(s, autoescape=True),
        ))
    return q.order_by(
        models.WhitelistApplication.created_at.desc(), models.WhitelistApplication.id.desc()
    ).all()


def count_pending_applications(db: Session, project_id: int) -> int:
    return db.query(func.count(models.WhitelistApplication.id)).filter(
        models.WhitelistApplication.project_id == project_id,
        models.WhitelistApplication.status == ApplicationStatus.pending,
    ).scalar()


def submit_application(db: Session, slug: str, application: schemas.ApplicationSubmit):
    """
    Public form intake. Anonymous, so nothing goes to the activity log; the
    review that follows is what gets audited.
    """
    project = get_project_by_slug(db, slug)
    if not project.is_applications_open:
        raise ApplicationsClosed()

    address = application.wallet_address.strip()
    chain = application.wallet_chain or project.chain
    check = validate_wallet_address(address, chain)
    if not check.valid:
        raise InvalidAddress(check.error)

    twitter = (application.twitter_handle or '').strip().replace('@', '', 1)
    db_application = models.WhitelistApplication(
        project_id=project.id,
        wallet_address=address,
        wallet_chain=chain,
        twitter_handle=_clean(twitter),
        discord_handle=_clean(application.discord_handle),
        reason=_clean(application.reason),
        status=ApplicationStatus.pending,
    )
    db.add(db_application)
    commit(db)
    db.refresh(db_application)

    logger.info(f'application {db_application.id} submitted for project {project.id}')
    return db_application


def review_application(
    db: Session, id: int, decision: ApplicationStatus, actor_id: int, project_id: int = None
) -> models.WhitelistApplication:
    application = get_application(db, id, project_id)
    if application.status != ApplicationStatus.pending:
        raise InvalidState(f"application already {application.status.value}")

    decision = ApplicationStatus(decision)
    if decision == ApplicationStatus.pending:
        raise InvalidState("decision must be approved or rejected")

    if decision == ApplicationStatus.rejected:
        details = {
            'wallet_address': application.wallet_address,
            'chain': application.wallet_chain.value,
        }
        action = ActivityAction.application_rejected

    elif find_active_wallet(db, application.project_id, application.wallet_address):
        details = {
            'wallet_address': application.wallet_address,
            'already_whitelisted': True,
            'note': 'Wallet was already on the list',
        }
        action = ActivityAction.application_approved

    else:
        # goes through the whitelist rules, so a locked project stops the approval here
        project = get_project(db, application.project_id, fresh=True)
        label = 'Applied via WL form' + (f' (@{application.twitter_handle})' if application.twitter_handle else '')
        create_wallet(db, project, AddWallet(
            address=application.wallet_address,
            chain=application.wallet_chain,
            category=WalletCategory.wl,
            label=label,
        ), WalletSource.application, actor_id)
        refresh_spot_counts(db, project)
        details = {
            'wallet_address': application.wallet_address,
            'chain': application.wallet_chain.value,
            'twitter': application.twitter_handle,
        }
        action = ActivityAction.application_approved

    application.status = decision
    application.reviewed_by = actor_id
    application.reviewed_at = datetime.now(timezone.utc)
    log_activity(db, application.project_id, actor_id, action, details)
    commit(db)
    db.refresh(application)

    logger.info(f'application {id} {decision.value}')
    return application
