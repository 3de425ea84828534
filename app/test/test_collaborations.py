import pytest

from core.constants import CollabStatus
from core.errors import InvalidState, NotFound, ValidationError
from db.crud.activity import get_activity
from db.crud.collaborations import (
    complete_collaboration,
    count_collaborations,
    get_incoming,
    get_outgoing,
    respond_collaboration,
    send_collaboration,
)
from db.crud.projects import create_project
from db.schemas.projects import ProjectCreate


@pytest.fixture
def request_sent(db, owner, project, other_project):
    return send_collaboration(db, project.id, other_project.id, "  cross promo? ", owner.id)


def test_send(db, project, other_project, request_sent):
    assert request_sent.status == CollabStatus.pending
    assert request_sent.message == "cross promo?"

    entry = get_activity(db, project.id)[0]
    assert entry.action == "collab.sent"
    assert entry.details == {"target_project": "Sun Dogs", "target_project_id": other_project.id}

    assert [c.id for c in get_outgoing(db, project.id)] == [request_sent.id]
    assert [c.id for c in get_incoming(db, other_project.id)] == [request_sent.id]
    assert get_incoming(db, project.id) == []
    assert count_collaborations(db, project.id) == count_collaborations(db, other_project.id) == 1


def test_cannot_target_self_or_missing(db, owner, project):
    with pytest.raises(ValidationError):
        send_collaboration(db, project.id, project.id, None, owner.id)
    with pytest.raises(NotFound):
        send_collaboration(db, project.id, 999, None, owner.id)


def test_accept_logs_on_target(db, other_user, project, other_project, request_sent):
    collab = respond_collaboration(db, request_sent.id, CollabStatus.accepted, other_user.id, other_project.id)

    assert collab.status == CollabStatus.accepted
    entry = get_activity(db, other_project.id)[0]
    assert entry.action == "collab.accepted"
    assert entry.details == {"partner_project": "Moon Cats", "partner_project_id": project.id}
    assert entry.actor_id == other_user.id


def test_decline_is_terminal(db, owner, other_user, project, other_project, request_sent):
    respond_collaboration(db, request_sent.id, CollabStatus.declined, other_user.id)
    assert get_activity(db, other_project.id)[0].action == "collab.declined"

    with pytest.raises(InvalidState):
        respond_collaboration(db, request_sent.id, CollabStatus.accepted, other_user.id)
    with pytest.raises(InvalidState):
        complete_collaboration(db, request_sent.id, project.id, owner.id)


def test_only_target_responds(db, owner, project, request_sent):
    with pytest.raises(NotFound):
        respond_collaboration(db, request_sent.id, CollabStatus.accepted, owner.id, project.id)


def test_complete_from_either_side(db, owner, other_user, project, other_project, request_sent):
    with pytest.raises(InvalidState):
        complete_collaboration(db, request_sent.id, project.id, owner.id)

    respond_collaboration(db, request_sent.id, CollabStatus.accepted, other_user.id)
    collab = complete_collaboration(db, request_sent.id, project.id, owner.id)

    assert collab.status == CollabStatus.completed
    entry = get_activity(db, project.id)[0]
    assert entry.action == "collab.completed"
    assert entry.details == {"partner_project": "Sun Dogs", "partner_project_id": other_project.id}

    with pytest.raises(InvalidState):
        complete_collaboration(db, request_sent.id, other_project.id, other_user.id)


def test_outsider_cannot_complete(db, owner, other_user, request_sent):
    outsider = create_project(db, owner.id, ProjectCreate(name="Third Wheel"))
    respond_collaboration(db, request_sent.id, CollabStatus.accepted, other_user.id)

    with pytest.raises(ValidationError):
        complete_collaboration(db, request_sent.id, outsider.id, owner.id)


def test_pairs_are_not_unique(db, owner, project, other_project, request_sent):
    send_collaboration(db, project.id, other_project.id, None, owner.id)
    assert len(get_outgoing(db, project.id)) == 2
