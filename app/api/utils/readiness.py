import typing as t

from core.constants import READINESS_GROUPS, ReadinessCategory, ReadinessStatus
from db.schemas.readiness import ReadinessGroup, ReadinessItem, ReadinessScore

# placeholders shown on the checklist, never scored
COMING_SOON = (
    ("metadata-validated", "Metadata validated", ReadinessCategory.assets, "Token metadata format and completeness check"),
    ("art-organized", "Art assets organized", ReadinessCategory.assets, "Image layers and trait files structured"),
    ("trait-verified", "Trait file verified", ReadinessCategory.assets, "Trait rarity and distribution validated"),
    ("contract-uri", "Contract URI set", ReadinessCategory.contract, "Base URI and reveal URI configured"),
    ("marketplace-compat", "Marketplace compatibility", ReadinessCategory.distribution, "OpenSea, Magic Eden, and marketplace standards met"),
)


def _status(done) -> ReadinessStatus:
    return ReadinessStatus.complete if done else ReadinessStatus.incomplete


def compute_readiness(project) -> t.List[ReadinessItem]:
    """
    Build the launch checklist from a project snapshot. Nothing is read from
    or written to the database; call again whenever the project changes.
    """
    settings = f'/projects/{project.id}/settings'
    whitelist = f'/projects/{project.id}/whitelist'

    items = [
        ReadinessItem(
            id="project-configured",
            label="Project configured",
            category=ReadinessCategory.whitelist,
            status=_status(project.name and project.chain),
            href=settings,
            description="Name, chain, and basic info set",
        ),
        ReadinessItem(
            id="timeline-set",
            label="Timeline set",
            category=ReadinessCategory.timeline,
            status=_status(project.wl_open_date and project.mint_date),
            href=settings,
            description="WL open date and mint date configured",
        ),
        ReadinessItem(
            id="whitelist-populated",
            label="Whitelist populated",
            category=ReadinessCategory.whitelist,
            status=_status((project.wl_spots_filled or 0) > 0),
            href=whitelist,
            description="At least one wallet added to the list",
        ),
        ReadinessItem(
            id="spots-allocated",
            label="Spot allocations defined",
            category=ReadinessCategory.whitelist,
            status=_status((project.wl_spots_total or 0) > 0),
            href=settings,
            description="Total WL spots configured",
        ),
        ReadinessItem(
            id="social-links",
            label="Social links added",
            category=ReadinessCategory.profile,
            status=_status(project.twitter_url or project.discord_url or project.website_url),
            href=settings,
            description="At least one social link connected",
        ),
        ReadinessItem(
            id="whitelist-locked",
            label="Whitelist locked",
            category=ReadinessCategory.whitelist,
            status=_status(project.is_locked),
            href=settings,
            description="List finalized and visible to community",
        ),
    ]

    items += [
        ReadinessItem(id=id, label=label, category=category, status=ReadinessStatus.coming_soon, description=description)
        for id, label, category, description in COMING_SOON
    ]

    return items


def get_readiness_score(items: t.List[ReadinessItem]) -> ReadinessScore:
    live = [i for i in items if i.status != ReadinessStatus.coming_soon]
    completed = len([i for i in live if i.status == ReadinessStatus.complete])
    total = len(live)
    return ReadinessScore(
        completed=completed,
        total=total,
        percent=round(100 * completed / total) if total else 0,
    )


def group_readiness_items(items: t.List[ReadinessItem]) -> t.List[ReadinessGroup]:
    groups = {}
    for item in items:
        groups.setdefault(READINESS_GROUPS[item.category], []).append(item)
    return [ReadinessGroup(title=title, items=grouped) for title, grouped in groups.items()]
