import math
from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_validator
import typing as t

from core.constants import Chain
from db.schemas.readiness import ReadinessItem, ReadinessScore
from db.schemas.wallets import Wallet

### SCHEMAS FOR PROJECTS ###

TEXT_FIELDS = (
    "description", "logo_url", "banner_url", "twitter_url",
    "discord_url", "website_url", "marketplace_url",
)

INT_MIN, INT_MAX = -2**31, 2**31 - 1


def _blank_to_none(v):
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v


def _int_or(v, default):
    if v is None:
        return default
    if isinstance(v, bool):
        return int(v)
    try:
        n = int(float(str(v).strip()))
    except (ValueError, OverflowError):
        return default
    # anything the Integer columns cannot hold is as good as garbage
    if not INT_MIN <= n <= INT_MAX:
        return default
    return n


def _float_or_none(v):
    if v is None:
        return None
    try:
        f = float(str(v).strip())
    except (ValueError, OverflowError):
        return None
    return f if math.isfinite(f) else None


class ProjectFields(BaseModel):
    """Form fields shared by create and update; every field may be omitted."""
    description: t.Optional[str] = None
    chain: t.Optional[Chain] = None
    logo_url: t.Optional[str] = None
    banner_url: t.Optional[str] = None
    twitter_url: t.Optional[str] = None
    discord_url: t.Optional[str] = None
    website_url: t.Optional[str] = None
    marketplace_url: t.Optional[str] = None
    supply: t.Optional[int] = None
    mint_price: t.Optional[float] = None
    wl_spots_total: t.Optional[int] = None
    gtd_spots_total: t.Optional[int] = None
    wl_open_date: t.Optional[datetime] = None
    wl_close_date: t.Optional[datetime] = None
    snapshot_date: t.Optional[datetime] = None
    mint_date: t.Optional[datetime] = None

    @field_validator(*TEXT_FIELDS, mode="before")
    @classmethod
    def strip_text(cls, v):
        return _blank_to_none(v)

    @field_validator("wl_open_date", "wl_close_date", "snapshot_date", "mint_date", mode="before")
    @classmethod
    def blank_date(cls, v):
        return _blank_to_none(v)

    # blank or garbage spot totals count as zero, supply as unknown
    @field_validator("wl_spots_total", "gtd_spots_total", mode="before")
    @classmethod
    def spots_default_zero(cls, v):
        return _int_or(_blank_to_none(v), 0)

    @field_validator("supply", mode="before")
    @classmethod
    def supply_or_none(cls, v):
        return _int_or(_blank_to_none(v), None)

    @field_validator("mint_price", mode="before")
    @classmethod
    def price_or_none(cls, v):
        return _float_or_none(_blank_to_none(v))


class ProjectCreate(ProjectFields):
    name: str
    chain: Chain = Chain.ethereum

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class ProjectUpdate(ProjectFields):
    name: t.Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class Project(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    name: str
    slug: str
    description: t.Optional[str] = None
    chain: Chain
    logo_url: t.Optional[str] = None
    banner_url: t.Optional[str] = None
    twitter_url: t.Optional[str] = None
    discord_url: t.Optional[str] = None
    website_url: t.Optional[str] = None
    marketplace_url: t.Optional[str] = None
    supply: t.Optional[int] = None
    mint_price: t.Optional[float] = None
    wl_spots_total: int = 0
    wl_spots_filled: int = 0
    gtd_spots_total: int = 0
    gtd_spots_filled: int = 0
    is_applications_open: bool = False
    is_locked: bool = False
    locked_at: t.Optional[datetime] = None
    locked_by: t.Optional[int] = None
    wl_open_date: t.Optional[datetime] = None
    wl_close_date: t.Optional[datetime] = None
    snapshot_date: t.Optional[datetime] = None
    mint_date: t.Optional[datetime] = None
    created_at: t.Optional[datetime] = None
    updated_at: t.Optional[datetime] = None


class ProjectSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    chain: Chain
    logo_url: t.Optional[str] = None


class PublicProject(BaseModel):
    """What an anonymous visitor of /p/{slug} gets to see."""
    model_config = ConfigDict(from_attributes=True)

    name: str
    slug: str
    description: t.Optional[str] = None
    chain: Chain
    logo_url: t.Optional[str] = None
    banner_url: t.Optional[str] = None
    twitter_url: t.Optional[str] = None
    discord_url: t.Optional[str] = None
    website_url: t.Optional[str] = None
    marketplace_url: t.Optional[str] = None
    supply: t.Optional[int] = None
    mint_price: t.Optional[float] = None
    wl_spots_total: int = 0
    gtd_spots_total: int = 0
    is_applications_open: bool = False
    is_locked: bool = False
    locked_at: t.Optional[datetime] = None


class TimelineEntry(BaseModel):
    field: str
    label: str
    date: datetime


class PublicProjectView(BaseModel):
    project: PublicProject
    wallet_count: int
    timeline: t.List[TimelineEntry]


class ProjectOverview(BaseModel):
    project: Project
    wallet_count: int
    collab_count: int
    pending_applications: int
    recent_wallets: t.List[Wallet]
    readiness: t.List[ReadinessItem]
    score: ReadinessScore
