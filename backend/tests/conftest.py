"""Root conftest — process environment and shared fixtures for all tests.

Invariants:
    - Environment is set before any coldflow module builds Settings
    - No test reaches a real database or webhook
"""

import os

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("APP_ENV", "test")
os.environ.pop("NOTIFICATION_WEBHOOK_URL", None)

from coldflow.core.cold_wallet_config import ColdWalletConfig  # noqa: E402
from coldflow.core.transfer_records import Wallet  # noqa: E402
from tests.factories import make_wallet  # noqa: E402


@pytest.fixture
def config() -> ColdWalletConfig:
    return ColdWalletConfig()


@pytest.fixture
def cold_wallet() -> Wallet:
    return make_wallet()
