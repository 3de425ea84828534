import pytest

from core.constants import ApplicationStatus, Chain, WalletCategory, WalletSource
from core.errors import ApplicationsClosed, InvalidAddress, InvalidState, Locked, NotFound
from db.crud.activity import get_activity
from db.crud.applications import (
    count_pending_applications,
    get_applications,
    review_application,
    submit_application,
)
from db.crud.projects import get_project, lock_project, toggle_applications
from db.crud.wallets import add_wallet
from db.models.wallets import Wallet
from db.schemas.applications import ApplicationSubmit
from db.schemas.wallets import AddWallet
from samples import ETH_A, ETH_B, SOL


@pytest.fixture
def open_project(db, owner, project):
    toggle_applications(db, project.id, owner.id)
    return project


def submit(db, project, address=ETH_A, **kw):
    return submit_application(db, project.slug, ApplicationSubmit(wallet_address=address, **kw))


class TestSubmit:

    def test_closed_by_default(self, db, project):
        with pytest.raises(ApplicationsClosed):
            submit(db, project)

    def test_unknown_slug(self, db):
        with pytest.raises(NotFound):
            submit_application(db, "nope-1234", ApplicationSubmit(wallet_address=ETH_A))

    def test_submit_cleans_fields(self, db, open_project):
        before = len(get_activity(db, open_project.id))
        application = submit(
            db, open_project, address=f" {ETH_A} ",
            twitter_handle="  @mooncat ", discord_handle="   ", reason=" because ",
        )

        assert application.status == ApplicationStatus.pending
        assert application.wallet_address == ETH_A
        assert application.wallet_chain == Chain.ethereum
        assert application.twitter_handle == "mooncat"
        assert application.discord_handle is None
        assert application.reason == "because"
        # public submissions are not audited
        assert len(get_activity(db, open_project.id)) == before

    def test_address_checked_against_chosen_chain(self, db, open_project):
        with pytest.raises(InvalidAddress):
            submit(db, open_project, address=ETH_A, wallet_chain=Chain.solana)
        assert submit(db, open_project, address=SOL, wallet_chain=Chain.solana).wallet_chain == Chain.solana


class TestReview:

    def test_approve_creates_wallet(self, db, owner, open_project):
        application = submit(db, open_project, twitter_handle="@mooncat")

        reviewed = review_application(db, application.id, ApplicationStatus.approved, owner.id)

        assert reviewed.status == ApplicationStatus.approved
        assert reviewed.reviewed_by == owner.id and reviewed.reviewed_at is not None
        wallets = db.query(Wallet).all()
        assert len(wallets) == 1
        assert wallets[0].source == WalletSource.application
        assert wallets[0].category == WalletCategory.wl
        assert wallets[0].label == "Applied via WL form (@mooncat)"
        assert get_project(db, open_project.id, fresh=True).wl_spots_filled == 1

        entry = get_activity(db, open_project.id)[0]
        assert entry.action == "application.approved"
        assert entry.details == {"wallet_address": ETH_A, "chain": "ethereum", "twitter": "mooncat"}
        # one audit entry for the approval, none for the wallet insert
        assert [log.action for log in get_activity(db, open_project.id)].count("wallet.added") == 0

    def test_approve_already_whitelisted(self, db, owner, open_project):
        add_wallet(db, open_project.id, AddWallet(address=ETH_A, chain=Chain.ethereum), WalletSource.manual, owner.id)
        application = submit(db, open_project, address=ETH_A.replace("a", "A"))

        reviewed = review_application(db, application.id, ApplicationStatus.approved, owner.id)

        assert reviewed.status == ApplicationStatus.approved
        assert db.query(Wallet).count() == 1
        details = get_activity(db, open_project.id)[0].details
        assert details["already_whitelisted"] is True
        assert details["note"] == "Wallet was already on the list"

    def test_reject(self, db, owner, open_project):
        application = submit(db, open_project)
        reviewed = review_application(db, application.id, ApplicationStatus.rejected, owner.id)

        assert reviewed.status == ApplicationStatus.rejected
        assert db.query(Wallet).count() == 0
        entry = get_activity(db, open_project.id)[0]
        assert entry.action == "application.rejected"
        assert entry.details == {"wallet_address": ETH_A, "chain": "ethereum"}

    def test_review_only_once(self, db, owner, open_project):
        application = submit(db, open_project)
        review_application(db, application.id, ApplicationStatus.rejected, owner.id)

        with pytest.raises(InvalidState):
            review_application(db, application.id, ApplicationStatus.approved, owner.id)
        assert db.query(Wallet).count() == 0

    def test_pending_is_not_a_decision(self, db, owner, open_project):
        application = submit(db, open_project)
        with pytest.raises(InvalidState):
            review_application(db, application.id, ApplicationStatus.pending, owner.id)

    def test_locked_project_blocks_approval(self, db, owner, open_project):
        application = submit(db, open_project)
        lock_project(db, open_project.id, owner.id)

        with pytest.raises(Locked):
            review_application(db, application.id, ApplicationStatus.approved, owner.id)
        db.rollback()

        assert db.query(Wallet).count() == 0
        assert get_applications(db, open_project.id)[0].status == ApplicationStatus.pending

    def test_wrong_project(self, db, owner, open_project, other_project):
        application = submit(db, open_project)
        with pytest.raises(NotFound):
            review_application(db, application.id, ApplicationStatus.approved, owner.id, other_project.id)


def test_listing_and_counts(db, owner, open_project):
    first = submit(db, open_project, twitter_handle="alpha")
    submit(db, open_project, address=ETH_B, discord_handle="Beta#1")
    review_application(db, first.id, ApplicationStatus.rejected, owner.id)

    assert count_pending_applications(db, open_project.id) == 1
    assert len(get_applications(db, open_project.id)) == 2
    assert [a.wallet_address for a in get_applications(db, open_project.id, ApplicationStatus.pending)] == [ETH_B]
    assert [a.wallet_address for a in get_applications(db, open_project.id, search="beta")] == [ETH_B]
