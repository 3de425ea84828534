import pytest

from api.utils.wallet import (
    detect_chain,
    parse_csv_wallets,
    preview_candidates,
    truncate_address,
    validate_wallet_address,
)
from core.constants import Chain, WalletCategory
from samples import BTC_SEGWIT, BTC_TAPROOT, ETH_A, SOL


class TestValidateWalletAddress:

    @pytest.mark.parametrize("chain", [Chain.ethereum, Chain.polygon, Chain.base])
    def test_evm_chains_share_the_hex_rule(self, chain):
        assert validate_wallet_address(ETH_A, chain).valid
        assert validate_wallet_address("0x" + "AbC123" * 6 + "ef01", chain).valid

        bad = validate_wallet_address("0x" + "g" * 40, chain)
        assert not bad.valid
        assert bad.error.startswith("Invalid EVM address")
        assert not validate_wallet_address("0x" + "a" * 39, chain).valid
        assert not validate_wallet_address("a" * 42, chain).valid

    @pytest.mark.parametrize("chain", list(Chain))
    def test_empty_address_fails_everywhere(self, chain):
        for address in ("", "   ", "\t\n"):
            res = validate_wallet_address(address, chain)
            assert not res.valid
            assert res.error == "Address is empty"

    def test_input_is_trimmed(self):
        assert validate_wallet_address(f"  {ETH_A}  ", Chain.ethereum).valid

    def test_solana(self):
        assert validate_wallet_address(SOL, Chain.solana).valid
        # 0, O, I and l are not base58
        res = validate_wallet_address("0" + SOL[1:], Chain.solana)
        assert not res.valid
        assert "Solana" in res.error
        assert not validate_wallet_address(SOL[:31], Chain.solana).valid

    def test_bitcoin(self):
        assert validate_wallet_address(BTC_SEGWIT, Chain.bitcoin).valid
        assert validate_wallet_address(BTC_TAPROOT, Chain.bitcoin).valid
        assert validate_wallet_address("1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa", Chain.bitcoin).valid
        res = validate_wallet_address("2NotReallyBitcoin", Chain.bitcoin)
        assert not res.valid
        assert res.error == "Invalid Bitcoin address"

    def test_other_only_checks_length(self):
        assert validate_wallet_address("x" * 10, Chain.other).valid
        res = validate_wallet_address("x" * 9, Chain.other)
        assert not res.valid
        assert res.error == "Address seems too short"


class TestDetectChain:

    def test_priority(self):
        assert detect_chain(ETH_A) == Chain.ethereum
        assert detect_chain(SOL) == Chain.solana
        assert detect_chain(BTC_SEGWIT) == Chain.bitcoin
        assert detect_chain(BTC_TAPROOT) == Chain.bitcoin
        assert detect_chain("hello") is None
        assert detect_chain("") is None

    def test_evm_shaped_never_detected_as_other_chains(self):
        for address in (ETH_A, "0x" + "1" * 40, "0x" + "F" * 40):
            assert detect_chain(address) == Chain.ethereum


def test_truncate_address():
    assert truncate_address(ETH_A) == "0xaaaa...aaaaaa"
    assert truncate_address("short") == "short"
    # 6*2+3 characters is the longest address left alone
    assert truncate_address("x" * 15) == "x" * 15
    assert truncate_address("x" * 16) == "xxxxxx...xxxxxx"
    assert truncate_address(ETH_A, 8) == "0xaaaaaa...aaaaaaaa"


class TestParseCsvWallets:

    def test_header_is_skipped(self):
        rows = parse_csv_wallets(f"address,chain,category,label\n{ETH_A},ethereum,gtd,friend\n")
        assert len(rows) == 1
        assert rows[0].address == ETH_A
        assert rows[0].chain == "ethereum"
        assert rows[0].category == "gtd"
        assert rows[0].label == "friend"

    def test_no_header(self):
        rows = parse_csv_wallets(f"{ETH_A}\n{SOL},solana")
        assert [r.address for r in rows] == [ETH_A, SOL]
        assert rows[0].chain is None
        assert rows[1].chain == "solana"

    @pytest.mark.parametrize("header", ["Wallet", "CHAIN,foo", "my wallets"])
    def test_header_detection_is_case_insensitive(self, header):
        assert parse_csv_wallets(f"{header}\n{ETH_A}")[0].address == ETH_A

    def test_quotes_blank_lines_and_empty_addresses(self):
        content = f'\r\n"{ETH_A}", \'ethereum\' ,"wl",\n\n   \n,solana\n'
        rows = parse_csv_wallets(content)
        assert len(rows) == 1
        assert rows[0].address == ETH_A
        assert rows[0].chain == "ethereum"
        assert rows[0].category == "wl"
        assert rows[0].label is None

    def test_empty_input(self):
        assert parse_csv_wallets("") == []
        assert parse_csv_wallets("\n \n") == []

    def test_embedded_commas_are_not_supported(self):
        rows = parse_csv_wallets(f'{ETH_A},ethereum,wl,"Doe, John"')
        assert rows[0].label == "Doe"


def test_preview_resolves_chain_and_category():
    rows = preview_candidates(parse_csv_wallets(
        f"{ETH_A}\n{SOL},,og\n{BTC_SEGWIT},solana\nnot-a-wallet\n{ETH_A},dogechain\n{ETH_A},ethereum,vip"
    ), Chain.bitcoin)

    assert rows[0].valid and rows[0].chain == Chain.ethereum and rows[0].category == WalletCategory.wl
    assert rows[1].valid and rows[1].chain == Chain.solana and rows[1].category == WalletCategory.og
    # explicit chain wins over detection
    assert not rows[2].valid and rows[2].chain == Chain.solana
    # nothing detected, falls back to the project chain
    assert not rows[3].valid and rows[3].chain == Chain.bitcoin
    assert not rows[4].valid and "chain" in rows[4].error
    assert not rows[5].valid and "category" in rows[5].error
