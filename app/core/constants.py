from enum import Enum


class Chain(str, Enum):
    ethereum = "ethereum"
    solana = "solana"
    bitcoin = "bitcoin"
    polygon = "polygon"
    base = "base"
    other = "other"


class WalletCategory(str, Enum):
    wl = "wl"
    gtd = "gtd"
    og = "og"
    team = "team"
    fcfs = "fcfs"


class WalletSource(str, Enum):
    manual = "manual"
    csv_upload = "csv_upload"
    collab = "collab"
    application = "application"


class WalletStatus(str, Enum):
    active = "active"
    removed = "removed"


class ApplicationStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class CollabStatus(str, Enum):
    pending = "pending"
    accepted = "accepted"
    declined = "declined"
    completed = "completed"


class ActivityAction(str, Enum):
    wallet_added = "wallet.added"
    wallet_removed = "wallet.removed"
    wallet_bulk_upload = "wallet.bulk_upload"
    list_locked = "list.locked"
    list_unlocked = "list.unlocked"
    application_approved = "application.approved"
    application_rejected = "application.rejected"
    collab_sent = "collab.sent"
    collab_accepted = "collab.accepted"
    collab_declined = "collab.declined"
    collab_completed = "collab.completed"
    project_updated = "project.updated"
    project_created = "project.created"
    timeline_changed = "timeline.changed"


class ReadinessStatus(str, Enum):
    complete = "complete"
    incomplete = "incomplete"
    coming_soon = "coming_soon"


class ReadinessCategory(str, Enum):
    whitelist = "whitelist"
    timeline = "timeline"
    profile = "profile"
    assets = "assets"
    contract = "contract"
    distribution = "distribution"


CHAIN_LABELS = {
    Chain.ethereum: "Ethereum",
    Chain.solana: "Solana",
    Chain.bitcoin: "Bitcoin",
    Chain.polygon: "Polygon",
    Chain.base: "Base",
    Chain.other: "Other",
}

CATEGORY_LABELS = {
    WalletCategory.wl: "WL",
    WalletCategory.gtd: "GTD",
    WalletCategory.og: "OG",
    WalletCategory.team: "Team",
    WalletCategory.fcfs: "FCFS",
}

ACTION_LABELS = {
    ActivityAction.wallet_added: "Wallet added",
    ActivityAction.wallet_removed: "Wallet removed",
    ActivityAction.wallet_bulk_upload: "Bulk upload",
    ActivityAction.list_locked: "Whitelist locked",
    ActivityAction.list_unlocked: "Whitelist unlocked",
    ActivityAction.application_approved: "Application approved",
    ActivityAction.application_rejected: "Application rejected",
    ActivityAction.collab_sent: "Collab request sent",
    ActivityAction.collab_accepted: "Collab accepted",
    ActivityAction.collab_declined: "Collab declined",
    ActivityAction.collab_completed: "Collab completed",
    ActivityAction.project_updated: "Project updated",
    ActivityAction.project_created: "Project created",
    ActivityAction.timeline_changed: "Timeline changed",
}

# readiness categories sharing a heading on the overview page
READINESS_GROUPS = {
    ReadinessCategory.whitelist: "Whitelist & Timeline",
    ReadinessCategory.timeline: "Whitelist & Timeline",
    ReadinessCategory.profile: "Profile",
    ReadinessCategory.assets: "Coming Soon",
    ReadinessCategory.contract: "Coming Soon",
    ReadinessCategory.distribution: "Coming Soon",
}

TIMELINE_FIELDS = ("wl_open_date", "wl_close_date", "snapshot_date", "mint_date")

# gtd wallets fill the gtd allocation, every other category the wl allocation
GTD_CATEGORIES = (WalletCategory.gtd,)

SLUG_MAX_LENGTH = 60
SLUG_SUFFIX_LENGTH = 4
SLUG_FALLBACK = "project"

TIMELINE_LABELS = {
    "wl_open_date": "WL Opens",
    "wl_close_date": "WL Closes",
    "snapshot_date": "Snapshot",
    "mint_date": "Mint",
}
