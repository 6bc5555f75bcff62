"""Application Configuration — tests for env profiles and cold wallet settings validation.

Tests cover:
    - Approval count/timeout default by environment profile
    - Explicit values override the profile
    - Malformed amounts and regexes fail at load time
    - postgresql:// URLs rewritten for asyncpg
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from pydantic import ValidationError

from coldflow.config import Settings


def test_production_profile():
    config = Settings(app_env="production").cold_wallet_config()
    assert config.required_approvals == 3
    assert config.approval_timeout_hours == 72


def test_development_profile():
    config = Settings(app_env="development").cold_wallet_config()
    assert config.required_approvals == 2
    assert config.approval_timeout_hours == 24


def test_explicit_values_override_profile():
    config = Settings(
        app_env="production",
        cold_required_approvals=5,
        cold_max_single_transfer_limit="2.5",
        cold_completion_sla=timedelta(hours=96),
        cold_allowed_address_patterns=["^bc1q"],
    ).cold_wallet_config()
    assert config.required_approvals == 5
    assert config.max_single_transfer_limit == Decimal("2.5")
    assert config.completion_sla == timedelta(hours=96)
    assert config.allowed_address_patterns == ("^bc1q",)


def test_malformed_amount_rejected():
    with pytest.raises(ValidationError):
        Settings(cold_manual_review_threshold="1e3")


def test_bad_pattern_rejected():
    with pytest.raises(ValidationError):
        Settings(cold_allowed_address_patterns=["(unclosed"])


def test_zero_approvals_rejected():
    with pytest.raises(ValueError):
        Settings(cold_required_approvals=0).cold_wallet_config()


def test_postgres_url_rewritten():
    settings = Settings(database_url="postgresql://u:p@host/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@host/db"
