import re
import typing as t

from core.constants import Chain, WalletCategory
from db.schemas.wallets import AddressValidation, ImportPreviewRow, WalletCandidate

ETH_REGEX = re.compile(r'0x[a-fA-F0-9]{40}')
SOL_REGEX = re.compile(r'[1-9A-HJ-NP-Za-km-z]{32,44}')
BTC_TAPROOT_REGEX = re.compile(r'bc1p[a-zA-HJ-NP-Z0-9]{58}')
BTC_LEGACY_REGEX = re.compile(r'(1|3|bc1)[a-zA-HJ-NP-Z0-9]{25,62}')

EVM_CHAINS = (Chain.ethereum, Chain.polygon, Chain.base)
MIN_OTHER_LENGTH = 10

ERR_EMPTY = 'Address is empty'
ERR_EVM = 'Invalid EVM address. Must start with 0x followed by 40 hex characters'
ERR_SOLANA = 'Invalid Solana address. Must be a base58 string (32-44 characters)'
ERR_BITCOIN = 'Invalid Bitcoin address'
ERR_TOO_SHORT = 'Address seems too short'

# header sniffing for csv uploads
HEADER_HINTS = ('address', 'wallet', 'chain')
QUOTES = re.compile(r'^["\']|["\']$')


def _is_bitcoin(address: str) -> bool:
    return bool(BTC_TAPROOT_REGEX.fullmatch(address) or BTC_LEGACY_REGEX.fullmatch(address))


def validate_wallet_address(address: str, chain: Chain) -> AddressValidation:
    """
    Format check only, nothing here talks to a chain.
    """
    trimmed = (address or '').strip()
    if not trimmed:
        return AddressValidation(valid=False, error=ERR_EMPTY)

    chain = Chain(chain)
    if chain in EVM_CHAINS:
        if not ETH_REGEX.fullmatch(trimmed):
            return AddressValidation(valid=False, error=ERR_EVM)
    elif chain == Chain.solana:
        if not SOL_REGEX.fullmatch(trimmed):
            return AddressValidation(valid=False, error=ERR_SOLANA)
    elif chain == Chain.bitcoin:
        if not _is_bitcoin(trimmed):
            return AddressValidation(valid=False, error=ERR_BITCOIN)
    elif len(trimmed) < MIN_OTHER_LENGTH:
        return AddressValidation(valid=False, error=ERR_TOO_SHORT)

    return AddressValidation(valid=True)


def detect_chain(address: str) -> t.Optional[Chain]:
    # first match wins: ethereum, solana, bitcoin
    trimmed = (address or '').strip()
    if ETH_REGEX.fullmatch(trimmed):
        return Chain.ethereum
    if SOL_REGEX.fullmatch(trimmed):
        return Chain.solana
    if _is_bitcoin(trimmed):
        return Chain.bitcoin
    return None


def truncate_address(address: str, chars: int = 6) -> str:
    if len(address) <= chars * 2 + 3:
        return address
    return f'{address[:chars]}...{address[-chars:]}'


def parse_csv_wallets(content: str) -> t.List[WalletCandidate]:
    """
    Split raw upload text into candidate rows.

    Columns are address, chain, category, label; only address is required.
    Fields are split on bare commas, so quoted values holding a comma are
    not supported.
    """
    lines = (content or '').strip().split('\n')
    if not lines or not lines[0]:
        return []

    first = lines[0].lower()
    start = 1 if any(h in first for h in HEADER_HINTS) else 0

    candidates = []
    for line in lines[start:]:
        line = line.strip()
        if not line:
            continue

        parts = [QUOTES.sub('', p.strip()) for p in line.split(',')]
        if not parts[0]:
            continue

        def part(i):
            return (parts[i] if len(parts) > i else '') or None

        candidates.append(WalletCandidate(
            address=parts[0],
            chain=part(1),
            category=part(2),
            label=part(3),
        ))

    return candidates


def resolve_candidate(candidate: WalletCandidate, default_chain: Chain) -> ImportPreviewRow:
    """
    Decide chain and category for one csv row and validate its address.
    Chain comes from the row, then from the address shape, then the project.
    """
    address = candidate.address.strip()
    label = (candidate.label or '').strip() or None

    try:
        if candidate.chain:
            chain = Chain(candidate.chain.strip().lower())
        else:
            chain = detect_chain(address) or Chain(default_chain)
    except ValueError:
        return ImportPreviewRow(address=address, label=label, valid=False, error=f'Unknown chain: {candidate.chain}')

    try:
        category = WalletCategory(candidate.category.strip().lower()) if candidate.category else WalletCategory.wl
    except ValueError:
        return ImportPreviewRow(address=address, chain=chain, label=label, valid=False, error=f'Unknown category: {candidate.category}')

    check = validate_wallet_address(address, chain)
    return ImportPreviewRow(
        address=address,
        chain=chain,
        category=category,
        label=label,
        valid=check.valid,
        error=check.error,
    )


def preview_candidates(candidates: t.List[WalletCandidate], default_chain: Chain) -> t.List[ImportPreviewRow]:
    return [resolve_candidate(c, default_chain) for c in candidates]
