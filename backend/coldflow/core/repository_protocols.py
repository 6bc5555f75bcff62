"""Boundary Protocols — contracts between the cold-transfer core and the shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - get() returns None for unknown ids; errors are reserved for store failures
    - TransferRepository.update is a conditional write: it raises ConcurrencyError
      when the stored version differs from expected_version
    - list_by_statuses applies the transfer_type filter before limit/offset,
      so a page is short only when the matching rows run out

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do IO, but the core functions that
      consume their results are never async themselves
"""

from typing import Protocol, Sequence
from uuid import UUID

from coldflow.core.domain_types import TransferStatus, WalletType
from coldflow.core.transfer_records import TransferRequest, Wallet


class WalletRepository(Protocol):
    """Read-only wallet lookup — wallets are owned by the wallet service."""
    async def get(self, wallet_id: UUID) -> Wallet | None: ...


class TransferRepository(Protocol):
    """Contract for transfer request persistence — implemented by shell."""
    async def create(self, transfer: TransferRequest) -> TransferRequest: ...
    async def get(self, transfer_id: UUID) -> TransferRequest | None: ...
    async def update(
        self, transfer: TransferRequest, expected_version: int,
    ) -> TransferRequest: ...
    async def list_by_statuses(
        self,
        statuses: Sequence[TransferStatus],
        limit: int,
        offset: int = 0,
        transfer_type: WalletType | None = None,
    ) -> list[TransferRequest]: ...


class NotificationSink(Protocol):
    """Outbound operator notifications — best-effort from the core's perspective."""
    async def notify_transfer_created(self, transfer: TransferRequest) -> None: ...
