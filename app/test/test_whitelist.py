import pytest

from core.constants import ActivityAction, Chain, WalletCategory, WalletSource, WalletStatus
from core.errors import DuplicateActive, InvalidAddress, Locked, NotFound
from db.crud.activity import get_activity
from db.crud.projects import get_project, lock_project, unlock_project
from db.crud.wallets import (
    add_wallet,
    bulk_import,
    check_wallet,
    export_active,
    get_wallets,
    remove_wallets,
)
from db.models.projects import Project
from db.models.wallets import Wallet
from db.schemas.wallets import AddWallet, WalletCandidate
from samples import ETH_A, ETH_B, ETH_C, SOL


def add(db, project, actor, address=ETH_A, chain=Chain.ethereum, **kw):
    return add_wallet(db, project.id, AddWallet(address=address, chain=chain, **kw), WalletSource.manual, actor.id)


class TestAddWallet:

    def test_add(self, db, owner, project):
        wallet = add(db, project, owner, category=WalletCategory.og, label=" friend ")

        assert wallet.status == WalletStatus.active
        assert wallet.source == WalletSource.manual
        assert wallet.label == "friend"
        assert wallet.added_by == owner.id

        entry = get_activity(db, project.id)[0]
        assert entry.action == ActivityAction.wallet_added.value
        assert entry.details == {"address": ETH_A, "chain": "ethereum", "category": "og", "label": "friend"}

    def test_duplicate_is_case_insensitive(self, db, owner, project):
        add(db, project, owner)
        with pytest.raises(DuplicateActive):
            add(db, project, owner, address=ETH_A.upper().replace("0X", "0x"))
        assert db.query(Wallet).count() == 1

    def test_same_address_other_project(self, db, owner, other_user, project, other_project):
        add(db, project, owner)
        assert add(db, other_project, other_user).project_id == other_project.id

    def test_invalid_address(self, db, owner, project):
        with pytest.raises(InvalidAddress) as e:
            add(db, project, owner, address="0x123")
        assert e.value.status_code == 422
        assert "EVM" in e.value.detail

    def test_missing_project(self, db, owner):
        with pytest.raises(NotFound):
            add_wallet(db, 404, AddWallet(address=ETH_A, chain=Chain.ethereum), WalletSource.manual, owner.id)

    def test_check_order_locked_before_invalid(self, db, owner, project):
        lock_project(db, project.id, owner.id)
        with pytest.raises(Locked):
            add(db, project, owner, address="nope")

    def test_removed_wallet_can_be_added_again(self, db, owner, project):
        first = add(db, project, owner)
        remove_wallets(db, project.id, [first.id], owner.id)
        second = add(db, project, owner)
        assert second.id != first.id
        assert db.query(Wallet).filter(Wallet.status == WalletStatus.removed).count() == 1

    def test_spot_counters(self, db, owner, project):
        add(db, project, owner, category=WalletCategory.gtd)
        add(db, project, owner, address=ETH_B, category=WalletCategory.team)
        wallet = add(db, project, owner, address=SOL, chain=Chain.solana)

        fresh = get_project(db, project.id, fresh=True)
        assert (fresh.wl_spots_filled, fresh.gtd_spots_filled) == (2, 1)

        remove_wallets(db, project.id, [wallet.id], owner.id)
        assert get_project(db, project.id, fresh=True).wl_spots_filled == 1


class TestLockGate:

    def test_lock_blocks_add_and_remove_until_unlocked(self, db, owner, project):
        wallet = add(db, project, owner)
        lock_project(db, project.id, owner.id)

        with pytest.raises(Locked):
            add(db, project, owner, address=ETH_B)
        with pytest.raises(Locked):
            remove_wallets(db, project.id, [wallet.id], owner.id)
        with pytest.raises(Locked):
            bulk_import(db, project.id, [WalletCandidate(address=ETH_C)], owner.id)
        assert db.query(Wallet).count() == 1

        unlock_project(db, project.id, owner.id)
        add(db, project, owner, address=ETH_B)
        assert remove_wallets(db, project.id, [wallet.id], owner.id) == 1

    def test_lock_is_read_at_call_time(self, db, session_factory, owner, project):
        assert project.is_locked is False
        db.commit()

        # another request locks the project behind this session's back
        other = session_factory()
        other.query(Project).filter(Project.id == project.id).update({"is_locked": True})
        other.commit()
        other.close()

        with pytest.raises(Locked):
            add(db, project, owner)


class TestBulkImport:

    def test_added_skipped_errors(self, db, owner, project):
        add(db, project, owner)
        result = bulk_import(db, project.id, [
            WalletCandidate(address=ETH_B),
            WalletCandidate(address=ETH_A.replace("a", "A")),
            WalletCandidate(address="garbage"),
        ], owner.id)

        assert (result.added, result.skipped, result.errors, result.total) == (1, 1, 1, 3)

        uploads = [log for log in get_activity(db, project.id) if log.action == ActivityAction.wallet_bulk_upload]
        assert len(uploads) == 1
        assert uploads[0].details == {"added": 1, "skipped": 1, "errors": 1, "total": 3}

        imported = db.query(Wallet).filter(Wallet.address == ETH_B).one()
        assert imported.source == WalletSource.csv_upload
        assert imported.category == WalletCategory.wl

    def test_duplicates_inside_one_file(self, db, owner, project):
        result = bulk_import(db, project.id, [
            WalletCandidate(address=ETH_A),
            WalletCandidate(address=ETH_A),
            WalletCandidate(address=SOL, category="gtd"),
        ], owner.id)

        assert (result.added, result.skipped, result.errors) == (2, 1, 0)
        fresh = get_project(db, project.id, fresh=True)
        assert (fresh.wl_spots_filled, fresh.gtd_spots_filled) == (1, 1)

    def test_store_conflict_counts_as_skipped(self, db, owner, project, mocker):
        add(db, project, owner)
        # the pre-check misses, the unique index still catches it
        mocker.patch("db.crud.wallets.find_active_wallet", return_value=None)

        result = bulk_import(db, project.id, [WalletCandidate(address=ETH_A), WalletCandidate(address=ETH_B)], owner.id)
        assert (result.added, result.skipped) == (1, 1)
        assert db.query(Wallet).filter(Wallet.status == WalletStatus.active).count() == 2

    def test_empty_import(self, db, owner, project):
        result = bulk_import(db, project.id, [], owner.id)
        assert result.total == 0
        assert get_activity(db, project.id)[0].action == "wallet.bulk_upload"


class TestRemove:

    def test_remove_logs_once(self, db, owner, project):
        a = add(db, project, owner)
        b = add(db, project, owner, address=ETH_B)

        assert remove_wallets(db, project.id, [a.id, b.id, 999], owner.id) == 2

        removed = db.query(Wallet).filter(Wallet.status == WalletStatus.removed).all()
        assert len(removed) == 2
        assert all(w.removed_at is not None and w.removed_by == owner.id for w in removed)

        entry = get_activity(db, project.id)[0]
        assert entry.action == "wallet.removed"
        assert entry.details["count"] == 2
        assert sorted(entry.details["addresses"]) == ["0xaaaa...aaaaaa", "0xbbbb...bbbbbb"]

    def test_empty_and_unmatched_are_no_ops(self, db, owner, project, other_project, other_user):
        foreign = add(db, other_project, other_user)
        before = len(get_activity(db, project.id))

        assert remove_wallets(db, project.id, [], owner.id) == 0
        assert remove_wallets(db, project.id, [foreign.id], owner.id) == 0
        assert len(get_activity(db, project.id)) == before
        assert db.get(Wallet, foreign.id).status == WalletStatus.active


def test_listing_search_and_export(db, owner, project):
    add(db, project, owner, label="Alice")
    add(db, project, owner, address=ETH_B, category=WalletCategory.gtd)
    gone = add(db, project, owner, address=ETH_C)
    remove_wallets(db, project.id, [gone.id], owner.id)

    assert len(get_wallets(db, project.id)) == 2
    assert [w.address for w in get_wallets(db, project.id, search="alice")] == [ETH_A]
    assert [w.address for w in get_wallets(db, project.id, search="GTD")] == [ETH_B]
    assert [w.address for w in get_wallets(db, project.id, category=WalletCategory.gtd)] == [ETH_B]

    lines = export_active(db, project.id).split("\n")
    assert lines[0] == "address,chain,category,label"
    assert sorted(lines[1:]) == sorted([f"{ETH_A},ethereum,wl,Alice", f"{ETH_B},ethereum,gtd,"])
    assert export_active(db, project.id, category=WalletCategory.og) == "address,chain,category,label"


def test_public_check(db, owner, project):
    add(db, project, owner, category=WalletCategory.gtd)

    found = check_wallet(db, project, f"  {ETH_A.upper().replace('0X', '0x')} ")
    assert found.found and found.category == WalletCategory.gtd and found.chain == Chain.ethereum
    assert found.category_label == "GTD" and found.chain_label == "Ethereum"
    assert not check_wallet(db, project, ETH_B).found
    assert not check_wallet(db, project, "").found
