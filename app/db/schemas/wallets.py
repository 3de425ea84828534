from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_validator
import typing as t

from core.constants import Chain, WalletCategory, WalletSource, WalletStatus

### SCHEMAS FOR WALLETS ###


class AddressValidation(BaseModel):
    valid: bool
    error: t.Optional[str] = None


class AddWallet(BaseModel):
    address: str
    chain: Chain
    category: WalletCategory = WalletCategory.wl
    label: t.Optional[str] = None

    @field_validator("address", mode="before")
    @classmethod
    def strip_address(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("label", mode="before")
    @classmethod
    def blank_label(cls, v):
        if isinstance(v, str):
            return v.strip() or None
        return v


class Wallet(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    address: str
    chain: Chain
    category: WalletCategory
    label: t.Optional[str] = None
    source: WalletSource
    status: WalletStatus
    added_by: t.Optional[int] = None
    created_at: t.Optional[datetime] = None
    removed_at: t.Optional[datetime] = None
    removed_by: t.Optional[int] = None


class WalletCandidate(BaseModel):
    """One parsed csv row; chain and category are still raw text here."""
    address: str
    chain: t.Optional[str] = None
    category: t.Optional[str] = None
    label: t.Optional[str] = None


class ImportPreviewRow(BaseModel):
    address: str
    chain: t.Optional[Chain] = None
    category: t.Optional[WalletCategory] = None
    label: t.Optional[str] = None
    valid: bool
    error: t.Optional[str] = None


class BulkImportResult(BaseModel):
    added: int = 0
    skipped: int = 0
    errors: int = 0
    total: int = 0


class RemoveWallets(BaseModel):
    ids: t.List[int]


class WalletCheck(BaseModel):
    found: bool
    address: str
    chain: t.Optional[Chain] = None
    category: t.Optional[WalletCategory] = None
    chain_label: t.Optional[str] = None
    category_label: t.Optional[str] = None
