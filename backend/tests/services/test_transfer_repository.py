"""SQL Repositories — tests against in-memory SQLite.

Tests cover:
    - create assigns id/version and round-trips workflow metadata with aware datetimes
    - update bumps the version; a stale expected version raises ConcurrencyError
    - update of a deleted row raises ResourceNotFoundError
    - list_by_statuses filters by status, newest first, with limit/offset
    - list_by_statuses filters transfer_type before limit/offset
    - wallet lookup maps rows and returns None for unknown ids
    - models configure with no relationships and no deprecation warnings
"""

import warnings
from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy import delete, inspect
from sqlalchemy.orm import configure_mappers

from coldflow.core.domain_types import (
    IN_FLIGHT_STATUSES, OfflineWorkflowState, TransferStatus, WalletType,
)
from coldflow.core.errors import ConcurrencyError, ResourceNotFoundError
from coldflow.core.offline_workflow import apply_offline_transition
from coldflow.infrastructure.transfer_repository import SqlTransferRepository
from coldflow.infrastructure.wallet_repository import SqlWalletRepository
from coldflow.models.transfer_request import TransferRequestModel
from coldflow.models.wallet import WalletModel
from tests.factories import T0, make_cold_transfer


def _new_transfer(wallet_id, created_at=T0):
    transfer = make_cold_transfer(created_at=created_at, wallet_id=wallet_id)
    transfer.id = None
    return transfer


async def test_create_and_get(test_db, seed_cold_wallet):
    repo = SqlTransferRepository(test_db)
    created = await repo.create(_new_transfer(seed_cold_wallet.id))

    assert created.id is not None
    assert created.version == 1

    loaded = await repo.get(created.id)
    assert loaded.status == TransferStatus.SUBMITTED
    assert loaded.transfer_type == WalletType.COLD
    assert loaded.created_at == T0
    assert loaded.created_at.tzinfo is not None
    assert loaded.workflow == created.workflow
    assert loaded.workflow.sla_deadlines.completion == T0 + timedelta(hours=72)


async def test_get_unknown_returns_none(test_db):
    assert await SqlTransferRepository(test_db).get(uuid4()) is None


async def test_update_bumps_version(test_db, seed_cold_wallet):
    repo = SqlTransferRepository(test_db)
    created = await repo.create(_new_transfer(seed_cold_wallet.id))
    moved = apply_offline_transition(
        created, OfflineWorkflowState.OPERATOR_QUEUED, "queued", T0 + timedelta(hours=1),
    )

    stored = await repo.update(moved, expected_version=1)

    assert stored.version == 2
    assert stored.status == TransferStatus.APPROVED
    assert stored.approved_at == T0 + timedelta(hours=1)
    assert stored.workflow.offline_state == OfflineWorkflowState.OPERATOR_QUEUED
    assert stored.workflow.state_notes == "queued"


async def test_stale_update_conflicts(test_db, seed_cold_wallet):
    repo = SqlTransferRepository(test_db)
    created = await repo.create(_new_transfer(seed_cold_wallet.id))
    first = apply_offline_transition(
        created, OfflineWorkflowState.SECURITY_REVIEW, "", T0,
    )
    second = apply_offline_transition(
        created, OfflineWorkflowState.EXECUTED, "", T0,
    )
    await repo.update(first, expected_version=1)

    with pytest.raises(ConcurrencyError):
        await repo.update(second, expected_version=1)

    current = await repo.get(created.id)
    assert current.version == 2
    assert current.workflow.offline_state == OfflineWorkflowState.SECURITY_REVIEW


async def test_update_deleted_row(test_db, seed_cold_wallet):
    repo = SqlTransferRepository(test_db)
    created = await repo.create(_new_transfer(seed_cold_wallet.id))
    await test_db.execute(
        delete(TransferRequestModel).where(TransferRequestModel.id == created.id),
    )
    await test_db.commit()

    with pytest.raises(ResourceNotFoundError):
        await repo.update(created, expected_version=1)


async def test_list_by_statuses(test_db, seed_cold_wallet):
    repo = SqlTransferRepository(test_db)
    old = await repo.create(_new_transfer(seed_cold_wallet.id, T0))
    new = await repo.create(_new_transfer(seed_cold_wallet.id, T0 + timedelta(hours=1)))
    done = await repo.create(_new_transfer(seed_cold_wallet.id, T0 + timedelta(hours=2)))
    executed = apply_offline_transition(done, OfflineWorkflowState.EXECUTED, "", T0)
    await repo.update(executed, expected_version=1)

    listed = await repo.list_by_statuses(IN_FLIGHT_STATUSES, limit=10)
    assert [t.id for t in listed] == [new.id, old.id]

    page = await repo.list_by_statuses(IN_FLIGHT_STATUSES, limit=1, offset=1)
    assert [t.id for t in page] == [old.id]


async def test_wallet_lookup(test_db, seed_cold_wallet):
    repo = SqlWalletRepository(test_db)
    wallet = await repo.get(seed_cold_wallet.id)
    assert wallet.wallet_type == WalletType.COLD
    assert wallet.spendable_balance_string == "10.0"
    assert await repo.get(uuid4()) is None


def test_mappers_configure_without_warnings():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        configure_mappers()
    assert not inspect(TransferRequestModel).relationships
    assert not inspect(WalletModel).relationships


async def test_list_by_statuses_filters_type_before_limit(test_db, seed_cold_wallet):
    repo = SqlTransferRepository(test_db)
    cold = await repo.create(_new_transfer(seed_cold_wallet.id, T0))
    hot = _new_transfer(seed_cold_wallet.id, T0 + timedelta(hours=1))
    hot.transfer_type = WalletType.HOT
    await repo.create(hot)

    page = await repo.list_by_statuses(
        IN_FLIGHT_STATUSES, limit=1, transfer_type=WalletType.COLD,
    )
    assert [t.id for t in page] == [cold.id]

    unfiltered = await repo.list_by_statuses(IN_FLIGHT_STATUSES, limit=1)
    assert [t.transfer_type for t in unfiltered] == [WalletType.HOT]
