"""Cold Transfer Validation — exhaustive field rules for a proposed cold withdrawal.

Invariants:
    - Exhaustive, not fail-fast: every rule runs and all violations are returned together
    - Exception: a missing wallet returns immediately with that single violation
    - At most one violation per field; violations ordered walletId, recipientAddress,
      amountString, businessPurpose, requestorName, requestorEmail, urgencyLevel
    - Pure: no IO, the wallet is resolved by the caller
    - Email and amount patterns must match the whole string (fullmatch, no trailing newline)

Design Decisions:
    - Each rule is a small function returning a message or None: rules compose
      in validate_cold_transfer and are testable alone
    - Violation field names are the camelCase API names so clients can map them to inputs
"""

import re

from coldflow.core.address_validators import check_recipient_address
from coldflow.core.amounts import parse_amount
from coldflow.core.cold_wallet_config import ColdWalletConfig
from coldflow.core.domain_types import UrgencyLevel, WalletType
from coldflow.core.errors import AmountParseError
from coldflow.core.transfer_records import (
    ColdTransferProposal, FieldViolation, Wallet,
)


EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
VALID_URGENCY_LEVELS: tuple[str, ...] = tuple(u.value for u in UrgencyLevel)


def check_transfer_amount(
    amount: str, coin: str, wallet: Wallet, config: ColdWalletConfig,
) -> str | None:
    """Amount rule: parseable, positive, within single limit and spendable balance."""
    try:
        value = parse_amount(amount)
    except AmountParseError:
        return "invalid amount format"

    if value <= 0:
        return "amount must be greater than zero"

    if value > config.max_single_transfer_limit:
        return (
            f"amount exceeds single transfer limit of "
            f"{config.max_single_transfer_limit} {coin}"
        )

    try:
        spendable = parse_amount(wallet.spendable_balance_string)
    except AmountParseError:
        return "unable to verify wallet balance"

    if value > spendable:
        return (
            f"amount exceeds spendable balance of "
            f"{wallet.spendable_balance_string} {coin}"
        )
    return None


def is_valid_email(email: str) -> bool:
    return bool(email) and EMAIL_PATTERN.fullmatch(email) is not None


def validate_cold_transfer(
    proposal: ColdTransferProposal,
    wallet: Wallet | None,
    config: ColdWalletConfig,
) -> list[FieldViolation]:
    """Run every cold-transfer rule and return all violations (empty list = valid)."""
    if wallet is None:
        return [FieldViolation("walletId", "Wallet not found")]

    violations: list[FieldViolation] = []

    if wallet.wallet_type != WalletType.COLD:
        violations.append(
            FieldViolation("walletId", "Wallet is not a cold storage wallet"),
        )

    address_error = check_recipient_address(
        proposal.recipient_address, proposal.coin,
        config.allowed_address_patterns,
    )
    if address_error:
        violations.append(FieldViolation("recipientAddress", address_error))

    amount_error = check_transfer_amount(
        proposal.amount_string, proposal.coin, wallet, config,
    )
    if amount_error:
        violations.append(FieldViolation("amountString", amount_error))

    if not (proposal.business_purpose or "").strip():
        violations.append(FieldViolation(
            "businessPurpose",
            "Business purpose is required for cold storage transfers",
        ))

    if not (proposal.requestor_name or "").strip():
        violations.append(
            FieldViolation("requestorName", "Requestor name is required"),
        )

    if not is_valid_email(proposal.requestor_email):
        violations.append(
            FieldViolation("requestorEmail", "Valid requestor email is required"),
        )

    if proposal.urgency_level not in VALID_URGENCY_LEVELS:
        violations.append(FieldViolation(
            "urgencyLevel",
            "Urgency level must be one of: " + ", ".join(VALID_URGENCY_LEVELS),
        ))

    return violations
