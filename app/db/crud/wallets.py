from datetime import datetime, timezone
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import typing as t

from api.utils.logger import logger
from api.utils.wallet import preview_candidates, truncate_address, validate_wallet_address
from core.constants import ActivityAction, CATEGORY_LABELS, CHAIN_LABELS, WalletCategory, WalletSource, WalletStatus
from core.errors import DuplicateActive, InvalidAddress, Locked
from db.crud.activity import log_activity
from db.crud.projects import get_project, refresh_spot_counts
from db.models import projects as project_models
from db.models import wallets as models
from db.schemas import wallets as schemas
from db.session import commit

###################################
### CRUD OPERATIONS FOR WALLETS ###
###################################

EXPORT_HEADER = 'address,chain,category,label'


def _active(db: Session, project_id: int):
    return db.query(models.Wallet).filter(
        models.Wallet.project_id == project_id,
        models.Wallet.status == WalletStatus.active,
    )


def find_active_wallet(db: Session, project_id: int, address: str) -> t.Optional[models.Wallet]:
    return _active(db, project_id).filter(
        func.lower(models.Wallet.address) == address.strip().lower()
    ).first()


def get_wallets(
    db: Session, project_id: int, category: WalletCategory = None, search: str = None
) -> t.List[models.Wallet]:
    q = _active(db, project_id)
    if category:
        q = q.filter(models.Wallet.category == category)
    if search and search.strip():
        s = search.strip().lower()
        q = q.filter(or_(
            func.lower(models.Wallet.address).contains(s, autoescape=True),
            func.lower(models.Wallet.label).contains(s, autoescape=True),
            models.Wallet.category.in_([c for c in WalletCategory if s in c.value]),
        ))
    return q.order_by(models.Wallet.created_at.desc(), models.Wallet.id.desc()).all()


def get_recent_wallets(db: Session, project_id: int, limit: int = 5) -> t.List[models.Wallet]:
    return _active(db, project_id).order_by(
        models.Wallet.created_at.desc(), models.Wallet.id.desc()
    ).limit(limit).all()


def check_wallet(db: Session, project: project_models.Project, address: str) -> schemas.WalletCheck:
    address = (address or '').strip()
    wallet = find_active_wallet(db, project.id, address) if address else None
    if not wallet:
        return schemas.WalletCheck(found=False, address=address)
    return schemas.WalletCheck(
        found=True,
        address=wallet.address,
        chain=wallet.chain,
        category=wallet.category,
        chain_label=CHAIN_LABELS[wallet.chain],
        category_label=CATEGORY_LABELS[wallet.category],
    )


def create_wallet(
    db: Session, project: project_models.Project, wallet: schemas.AddWallet, source: WalletSource, actor_id: int
) -> models.Wallet:
    """
    Insert one active wallet without logging or committing. The caller owns
    the transaction and decides which audit entry describes the change.
    Expects a freshly read project so the lock flag is current.
    """
    if project.is_locked:
        raise Locked()

    address = wallet.address.strip()
    check = validate_wallet_address(address, wallet.chain)
    if not check.valid:
        raise InvalidAddress(check.error)

    if find_active_wallet(db, project.id, address):
        raise DuplicateActive()

    db_wallet = models.Wallet(
        project_id=project.id,
        address=address,
        chain=wallet.chain,
        category=wallet.category,
        label=wallet.label,
        source=source,
        status=WalletStatus.active,
        added_by=actor_id,
    )
    try:
        with db.begin_nested():
            db.add(db_wallet)
    except IntegrityError:
        raise DuplicateActive()

    return db_wallet


def add_wallet(
    db: Session, project_id: int, wallet: schemas.AddWallet, source: WalletSource, actor_id: int
) -> models.Wallet:
    project = get_project(db, project_id, fresh=True)
    db_wallet = create_wallet(db, project, wallet, source, actor_id)
    refresh_spot_counts(db, project)

    log_activity(db, project_id, actor_id, ActivityAction.wallet_added, {
        'address': db_wallet.address,
        'chain': db_wallet.chain.value,
        'category': db_wallet.category.value,
        'label': db_wallet.label,
    })
    commit(db)
    db.refresh(db_wallet)

    logger.info(f'wallet {db_wallet.id} added to project {project_id}')
    return db_wallet


def bulk_import(
    db: Session, project_id: int, candidates: t.List[schemas.WalletCandidate], actor_id: int
) -> schemas.BulkImportResult:
    """
    Import parsed csv rows. A locked project rejects the whole batch; after
    that every row stands on its own: invalid rows count as errors, rows
    already on the list count as skipped, the rest are added.
    """
    project = get_project(db, project_id, fresh=True)
    if project.is_locked:
        raise Locked()

    result = schemas.BulkImportResult(total=len(candidates))
    for row in preview_candidates(candidates, project.chain):
        if not row.valid:
            result.errors += 1
            continue

        if find_active_wallet(db, project_id, row.address):
            result.skipped += 1
            continue

        try:
            with db.begin_nested():
                db.add(models.Wallet(
                    project_id=project_id,
                    address=row.address,
                    chain=row.chain,
                    category=row.category,
                    label=row.label,
                    source=WalletSource.csv_upload,
                    status=WalletStatus.active,
                    added_by=actor_id,
                ))
            result.added += 1
        except IntegrityError:
            result.skipped += 1

    refresh_spot_counts(db, project)
    log_activity(db, project_id, actor_id, ActivityAction.wallet_bulk_upload, result.model_dump())
    commit(db)

    logger.info(f'bulk import into project {project_id}: {result}')
    return result


def remove_wallets(db: Session, project_id: int, wallet_ids: t.List[int], actor_id: int) -> int:
    project = get_project(db, project_id, fresh=True)
    if project.is_locked:
        raise Locked()
    if not wallet_ids:
        return 0

    wallets = _active(db, project_id).filter(models.Wallet.id.in_(set(wallet_ids))).all()
    if not wallets:
        return 0

    now = datetime.now(timezone.utc)
    for w in wallets:
        w.status = WalletStatus.removed
        w.removed_at = now
        w.removed_by = actor_id

    refresh_spot_counts(db, project)
    log_activity(db, project_id, actor_id, ActivityAction.wallet_removed, {
        'count': len(wallets),
        'addresses': [truncate_address(w.address, 6) for w in wallets],
    })
    commit(db)

    logger.info(f'{len(wallets)} wallet(s) removed from project {project_id}')
    return len(wallets)


def export_active(db: Session, project_id: int, category: WalletCategory = None, search: str = None) -> str:
    # plain comma join, labels containing commas are not escaped
    rows = [
        f'{w.address},{w.chain.value},{w.category.value},{w.label or ""}'
        for w in get_wallets(db, project_id, category, search)
    ]
    return '\n'.join([EXPORT_HEADER] + rows)
