import random
import re
import string
from datetime import datetime, timezone
from sqlalchemy import func
from sqlalchemy.orm import Session
import typing as t

from api.utils.logger import logger
from core.constants import (
    ActivityAction,
    GTD_CATEGORIES,
    SLUG_FALLBACK,
    SLUG_MAX_LENGTH,
    SLUG_SUFFIX_LENGTH,
    TIMELINE_FIELDS,
    WalletStatus,
)
from core.errors import Forbidden, NotFound, ValidationError
from db.crud.activity import log_activity
from db.models import projects as models
from db.models import wallets as wallet_models
from db.schemas import projects as schemas
from db.session import commit

####################################
### CRUD OPERATIONS FOR PROJECTS ###
####################################

SLUG_ALPHABET = string.digits + string.ascii_lowercase


def slugify(text: str) -> str:
    # My Launch!! -> my-launch
    text = re.sub(r'[^\w\s-]', '', (text or '').lower(), flags=re.ASCII)
    text = re.sub(r'[\s_]+', '-', text)
    return text.strip('-')[:SLUG_MAX_LENGTH]


def generate_project_slug(name: str) -> str:
    # not checked against existing slugs, the suffix makes collisions unlikely
    suffix = ''.join(random.choices(SLUG_ALPHABET, k=SLUG_SUFFIX_LENGTH))
    return f'{slugify(name) or SLUG_FALLBACK}-{suffix}'


def to_utc_iso(value) -> t.Optional[str]:
    """Normalize a timeline value for comparison and for the audit trail."""
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace('Z', '+00:00'))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def _as_utc(value):
    # stored at the same millisecond precision the audit trail compares on
    if not isinstance(value, datetime):
        return value
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def get_project(db: Session, id: int, fresh: bool = False) -> models.Project:
    """
    Load a project by id. With fresh=True the row is re-read from the
    database even if the session already holds it, so flags like is_locked
    reflect the current stored value.
    """
    q = db.query(models.Project)
    if fresh:
        q = q.populate_existing()
    project = q.filter(models.Project.id == id).first()
    if not project:
        raise NotFound("project not found")
    return project


def get_project_by_slug(db: Session, slug: str) -> models.Project:
    project = db.query(models.Project).filter(models.Project.slug == slug).first()
    if not project:
        raise NotFound("project not found")
    return project


def get_owned_project(db: Session, id: int, owner_id: int) -> models.Project:
    project = get_project(db, id)
    if project.owner_id != owner_id:
        raise Forbidden()
    return project


def get_projects_for_owner(db: Session, owner_id: int, skip: int = 0, limit: int = 100) -> t.List[models.Project]:
    return db.query(models.Project).filter(
        models.Project.owner_id == owner_id
    ).order_by(
        models.Project.created_at.desc(), models.Project.id.desc()
    ).offset(skip).limit(limit).all()


def search_projects(db: Session, query: str, exclude_id: int = None, limit: int = 10) -> t.List[models.Project]:
    query = (query or '').strip()
    if len(query) < 2:
        return []

    q = db.query(models.Project).filter(models.Project.name.ilike(f'%{query}%'))
    if exclude_id is not None:
        q = q.filter(models.Project.id != exclude_id)
    return q.order_by(models.Project.name).limit(limit).all()


def count_active_wallets(db: Session, project_id: int) -> int:
    return db.query(func.count(wallet_models.Wallet.id)).filter(
        wallet_models.Wallet.project_id == project_id,
        wallet_models.Wallet.status == WalletStatus.active,
    ).scalar()


def refresh_spot_counts(db: Session, project: models.Project):
    db.flush()
    rows = db.query(wallet_models.Wallet.category, func.count(wallet_models.Wallet.id)).filter(
        wallet_models.Wallet.project_id == project.id,
        wallet_models.Wallet.status == WalletStatus.active,
    ).group_by(wallet_models.Wallet.category).all()

    gtd = sum(n for category, n in rows if category in GTD_CATEGORIES)
    wl = sum(n for category, n in rows if category not in GTD_CATEGORIES)
    project.wl_spots_filled = wl
    project.gtd_spots_filled = gtd
    return project


def create_project(db: Session, owner_id: int, project: schemas.ProjectCreate):
    if not (project.name or '').strip():
        raise ValidationError("Project name is required")

    data = project.model_dump()
    data['wl_spots_total'] = data.get('wl_spots_total') or 0
    data['gtd_spots_total'] = data.get('gtd_spots_total') or 0
    for field in TIMELINE_FIELDS:
        data[field] = _as_utc(data.get(field))

    db_project = models.Project(
        owner_id=owner_id,
        slug=generate_project_slug(data['name']),
        **data
    )
    db.add(db_project)
    db.flush()

    log_activity(db, db_project.id, owner_id, ActivityAction.project_created, {
        'name': db_project.name,
        'chain': db_project.chain.value,
    })
    commit(db)
    db.refresh(db_project)

    logger.info(f'project {db_project.id} created ({db_project.slug})')
    return db_project


def edit_project(db: Session, id: int, project: schemas.ProjectUpdate, actor_id: int):
    db_project = get_project(db, id)

    update_data = project.model_dump(exclude_unset=True)
    if 'name' in update_data and not update_data['name']:
        raise ValidationError("Project name is required")
    if update_data.get('chain', '') is None:
        del update_data['chain']

    changes = []
    for field in TIMELINE_FIELDS:
        if field not in update_data:
            continue
        previous_value = to_utc_iso(getattr(db_project, field))
        new_value = to_utc_iso(update_data[field])
        if previous_value != new_value:
            changes.append({'field': field, 'previous_value': previous_value, 'new_value': new_value})

    for key, value in update_data.items():
        setattr(db_project, key, _as_utc(value) if key in TIMELINE_FIELDS else value)
    db.add(db_project)

    for change in changes:
        log_activity(db, db_project.id, actor_id, ActivityAction.timeline_changed, change)
    log_activity(db, db_project.id, actor_id, ActivityAction.project_updated, {
        'summary': 'Project settings updated',
    })
    commit(db)
    db.refresh(db_project)

    logger.info(f'project {id} updated, {len(changes)} timeline change(s)')
    return db_project


def lock_project(db: Session, id: int, actor_id: int):
    db_project = get_project(db, id, fresh=True)
    if db_project.is_locked:
        return db_project

    db_project.is_locked = True
    db_project.locked_at = datetime.now(timezone.utc)
    db_project.locked_by = actor_id
    log_activity(db, id, actor_id, ActivityAction.list_locked, {
        'wallet_count': count_active_wallets(db, id),
    })
    commit(db)
    db.refresh(db_project)

    logger.info(f'project {id} whitelist locked')
    return db_project


def unlock_project(db: Session, id: int, actor_id: int):
    db_project = get_project(db, id, fresh=True)
    if not db_project.is_locked:
        return db_project

    previously_locked_at = to_utc_iso(db_project.locked_at)
    db_project.is_locked = False
    db_project.locked_at = None
    db_project.locked_by = None
    log_activity(db, id, actor_id, ActivityAction.list_unlocked, {
        'previously_locked_at': previously_locked_at,
    })
    commit(db)
    db.refresh(db_project)

    logger.info(f'project {id} whitelist unlocked')
    return db_project


def toggle_applications(db: Session, id: int, actor_id: int):
    db_project = get_project(db, id, fresh=True)
    db_project.is_applications_open = not db_project.is_applications_open
    log_activity(db, id, actor_id, ActivityAction.project_updated, {
        'summary': ('Applications closed', 'Applications opened')[db_project.is_applications_open],
    })
    commit(db)
    db.refresh(db_project)
    return db_project


def delete_project(db: Session, id: int) -> int:
    project = get_project(db, id)
    db.delete(project)
    commit(db)

    logger.info(f'project {id} deleted')
    return id
