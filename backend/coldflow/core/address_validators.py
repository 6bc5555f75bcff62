"""Address Validators — per-coin recipient address format checks, selected by lookup.

Invariants:
    - A validator returns an error message (str) or None — it never raises
    - Coin codes are matched case-insensitively
    - Coins without a registered validator are accepted as-is
    - When an allowlist is configured it replaces the per-coin format check

Design Decisions:
    - Registry dict over a switch on coin code: new coins are added with
      register_address_validator, the dispatch code never changes
    - Allowlist patterns use re.search (unanchored), so operators anchor their own patterns
"""

import re
from typing import Callable, Iterable

AddressValidator = Callable[[str], str | None]


BITCOIN_MIN_LENGTH: int = 26
BITCOIN_MAX_LENGTH: int = 62
ETHEREUM_LENGTH: int = 42
ETHEREUM_PREFIX: str = "0x"


def validate_bitcoin_address(address: str) -> str | None:
    if not BITCOIN_MIN_LENGTH <= len(address) <= BITCOIN_MAX_LENGTH:
        return "invalid Bitcoin address format"
    return None


def validate_ethereum_address(address: str) -> str | None:
    if len(address) != ETHEREUM_LENGTH or not address.startswith(ETHEREUM_PREFIX):
        return "invalid Ethereum address format"
    return None


_VALIDATORS: dict[str, AddressValidator] = {}


def register_address_validator(coins: Iterable[str], validator: AddressValidator) -> None:
    """Register (or replace) the validator for each coin code."""
    for coin in coins:
        _VALIDATORS[coin.lower()] = validator


def get_address_validator(coin: str) -> AddressValidator | None:
    return _VALIDATORS.get((coin or "").lower())


register_address_validator(("btc", "tbtc"), validate_bitcoin_address)
register_address_validator(("eth",), validate_ethereum_address)


def matches_allowlist(address: str, patterns: Iterable[str]) -> bool:
    return any(re.search(pattern, address) for pattern in patterns)


def check_recipient_address(
    address: str, coin: str, allowed_patterns: tuple[str, ...] = (),
) -> str | None:
    """Full recipient check: presence, then allowlist or per-coin format."""
    if not address or not address.strip():
        return "recipient address is required"

    if allowed_patterns:
        if not matches_allowlist(address, allowed_patterns):
            return "recipient address not in allowlist"
        return None

    validator = get_address_validator(coin)
    if validator is None:
        return None
    return validator(address)
