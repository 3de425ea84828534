from sqlalchemy import func, or_
from sqlalchemy.orm import Session
import typing as t

from api.utils.logger import logger
from core.constants import ActivityAction, CollabStatus
from core.errors import InvalidState, NotFound, ValidationError
from db.crud.activity import log_activity
from db.crud.projects import get_project
from db.models import collaborations as models
from db.session import commit

##########################################
### CRUD OPERATIONS FOR COLLABORATIONS ###
##########################################

# pending -> accepted | declined, accepted -> completed; nothing leaves declined or completed
TRANSITIONS = {
    CollabStatus.pending: (CollabStatus.accepted, CollabStatus.declined),
    CollabStatus.accepted: (CollabStatus.completed,),
    CollabStatus.declined: (),
    CollabStatus.completed: (),
}

RESPONSE_ACTIONS = {
    CollabStatus.accepted: ActivityAction.collab_accepted,
    CollabStatus.declined: ActivityAction.collab_declined,
}


def _partner(project) -> dict:
    return {'partner_project': project.name, 'partner_project_id': project.id}


def _transition(collab: models.Collaboration, status: CollabStatus):
    if status not in TRANSITIONS[collab.status]:
        raise InvalidState(f"collaboration is {collab.status.value}, cannot become {status.value}")
    collab.status = status


def get_collaboration(db: Session, id: int) -> models.Collaboration:
    collab = db.query(models.Collaboration).filter(models.Collaboration.id == id).first()
    if not collab:
        raise NotFound("collaboration not found")
    return collab


def get_incoming(db: Session, project_id: int) -> t.List[models.Collaboration]:
    return db.query(models.Collaboration).filter(
        models.Collaboration.target_project_id == project_id
    ).order_by(models.Collaboration.created_at.desc(), models.Collaboration.id.desc()).all()


def get_outgoing(db: Session, project_id: int) -> t.List[models.Collaboration]:
    return db.query(models.Collaboration).filter(
        models.Collaboration.requester_project_id == project_id
    ).order_by(models.Collaboration.created_at.desc(), models.Collaboration.id.desc()).all()


def count_collaborations(db: Session, project_id: int) -> int:
    return db.query(func.count(models.Collaboration.id)).filter(or_(
        models.Collaboration.requester_project_id == project_id,
        models.Collaboration.target_project_id == project_id,
    )).scalar()


def send_collaboration(
    db: Session, requester_project_id: int, target_project_id: int, message: t.Optional[str], actor_id: int
) -> models.Collaboration:
    requester = get_project(db, requester_project_id)
    target = get_project(db, target_project_id)
    if requester.id == target.id:
        raise ValidationError("A project cannot collaborate with itself")

    collab = models.Collaboration(
        requester_project_id=requester.id,
        target_project_id=target.id,
        status=CollabStatus.pending,
        message=(message or '').strip() or None,
    )
    db.add(collab)
    log_activity(db, requester.id, actor_id, ActivityAction.collab_sent, {
        'target_project': target.name,
        'target_project_id': target.id,
    })
    commit(db)
    db.refresh(collab)

    logger.info(f'collab {collab.id} sent from project {requester.id} to {target.id}')
    return collab


def respond_collaboration(
    db: Session, id: int, decision: CollabStatus, actor_id: int, project_id: int = None
) -> models.Collaboration:
    """
    Accept or decline an incoming request. Only the target project answers,
    and the entry lands in its activity stream.
    """
    collab = get_collaboration(db, id)
    if project_id is not None and collab.target_project_id != project_id:
        raise NotFound("collaboration not found")

    decision = CollabStatus(decision)
    if decision not in RESPONSE_ACTIONS:
        raise InvalidState("decision must be accepted or declined")

    _transition(collab, decision)
    log_activity(db, collab.target_project_id, actor_id, RESPONSE_ACTIONS[decision], _partner(collab.requester))
    commit(db)
    db.refresh(collab)

    logger.info(f'collab {id} {decision.value}')
    return collab


def complete_collaboration(db: Session, id: int, project_id: int, actor_id: int) -> models.Collaboration:
    collab = get_collaboration(db, id)
    if project_id == collab.requester_project_id:
        partner = collab.target
    elif project_id == collab.target_project_id:
        partner = collab.requester
    else:
        raise ValidationError("project is not part of this collaboration")

    _transition(collab, CollabStatus.completed)
    log_activity(db, project_id, actor_id, ActivityAction.collab_completed, _partner(partner))
    commit(db)
    db.refresh(collab)

    logger.info(f'collab {id} completed by project {project_id}')
    return collab
