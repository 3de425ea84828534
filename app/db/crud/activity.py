import json
from sqlalchemy.orm import Session
import typing as t

from api.utils.logger import logger, LEIF
from api.utils.wallet import truncate_address
from core.constants import ActivityAction
from db.models import activity as models

from config import Config, Environment
CFG = Config[Environment]

########################################
### CRUD OPERATIONS FOR ACTIVITY LOG ###
########################################


def log_activity(db: Session, project_id: int, actor_id: t.Optional[int], action: ActivityAction, details: dict):
    """
    Stage an audit entry in the caller's unit of work. Nothing is committed
    here; the entry is saved, or rolled back, together with the change it
    describes.
    """
    entry = models.ActivityLog(
        project_id=project_id,
        actor_id=actor_id,
        action=ActivityAction(action).value,
        details=details or {},
    )
    db.add(entry)
    logger.log(LEIF, f'activity {entry.action} on project {project_id}: {entry.details}')
    return entry


def get_activity(db: Session, project_id: int, limit: int = None) -> t.List[models.ActivityLog]:
    return db.query(models.ActivityLog).filter(
        models.ActivityLog.project_id == project_id
    ).order_by(
        models.ActivityLog.created_at.desc(), models.ActivityLog.id.desc()
    ).limit(limit or CFG.activityLimit).all()


def describe_activity(action: str, details: t.Optional[dict]) -> str:
    """One line summary for the activity feed."""
    if not details:
        return ''

    def short(key):
        return truncate_address(str(details.get(key) or ''), 8)

    if action == ActivityAction.wallet_added:
        return f"{short('address')} | {str(details.get('category') or '').upper()} | {details.get('chain')}"

    if action == ActivityAction.wallet_removed:
        if details.get('count', 1) == 1 and details.get('addresses'):
            return f"{details['addresses'][0]} removed"
        return f"{details.get('count')} wallets removed"

    if action == ActivityAction.wallet_bulk_upload:
        return f"{details.get('added')} added, {details.get('skipped')} skipped, {details.get('errors')} invalid"

    if action == ActivityAction.list_locked:
        return f"{details.get('wallet_count')} wallets secured"

    if action == ActivityAction.list_unlocked:
        return 'Whitelist reopened for modifications'

    if action == ActivityAction.application_approved:
        if details.get('already_whitelisted'):
            return f"{short('wallet_address')} approved, already on the list"
        return f"{short('wallet_address')} approved and added to list"

    if action == ActivityAction.application_rejected:
        return f"{short('wallet_address')} rejected"

    if action == ActivityAction.timeline_changed:
        prev = details.get('previous_value') or 'not set'
        new = details.get('new_value') or 'cleared'
        return f"{details.get('field', '')}: {prev} → {new}"

    if action in (ActivityAction.project_updated, ActivityAction.project_created):
        return str(details.get('summary') or details.get('name') or 'Settings updated')

    if action == ActivityAction.collab_sent:
        return f"Request sent to {details.get('target_project')}"

    if action in (ActivityAction.collab_accepted, ActivityAction.collab_declined, ActivityAction.collab_completed):
        verb = ActivityAction(action).value.split('.')[-1]
        return f"Collab with {details.get('partner_project')} {verb}"

    return json.dumps(details, default=str)
