"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Cold wallet amounts are validated as decimals and allowlist patterns as
      regexes at load time: a bad value fails startup, not a transfer
    - cold_wallet_config() is the only bridge from settings into the core

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Approval count/timeout left unset fall back to the environment profile:
      production 3 approvals / 72h, everything else 2 / 24h
"""

import re
from datetime import timedelta
from decimal import Decimal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from coldflow.core.amounts import is_valid_amount
from coldflow.core.cold_wallet_config import ColdWalletConfig


PRODUCTION_ENVS = frozenset({"production", "release"})


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    app_env: str = "development"

    # Database
    database_url: str = (
        "postgresql+asyncpg://coldflow:coldflow@db:5432/coldflow"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Cold wallet — validation
    cold_max_daily_transfer_limit: str = "10.0"
    cold_max_single_transfer_limit: str = "5.0"
    cold_allowed_address_patterns: list[str] = []
    cold_required_approvals: int | None = None
    cold_approval_timeout_hours: int | None = None

    # Cold wallet — SLA
    cold_initial_response_sla: timedelta = timedelta(hours=2)
    cold_processing_sla: timedelta = timedelta(hours=24)
    cold_completion_sla: timedelta = timedelta(hours=72)

    # Cold wallet — offline workflow
    cold_manual_review_threshold: str = "1.0"
    cold_operator_notification_list: list[str] = []
    cold_escalation_threshold: timedelta = timedelta(hours=48)

    @field_validator(
        "cold_max_daily_transfer_limit",
        "cold_max_single_transfer_limit",
        "cold_manual_review_threshold",
    )
    @classmethod
    def check_decimal_amount(cls, v: str) -> str:
        if not is_valid_amount(v):
            raise ValueError(f"not a decimal amount: {v!r}")
        return v.strip()

    @field_validator("cold_allowed_address_patterns")
    @classmethod
    def check_patterns_compile(cls, v: list[str]) -> list[str]:
        for pattern in v:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"invalid address pattern {pattern!r}: {e}") from e
        return v

    # Notifications
    notification_webhook_url: str | None = None
    notification_timeout_seconds: float = 10.0

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() in PRODUCTION_ENVS

    def cold_wallet_config(self) -> ColdWalletConfig:
        """Build the immutable config injected into cold-transfer services."""
        required_approvals = self.cold_required_approvals
        if required_approvals is None:
            required_approvals = 3 if self.is_production else 2
        timeout_hours = self.cold_approval_timeout_hours
        if timeout_hours is None:
            timeout_hours = 72 if self.is_production else 24

        return ColdWalletConfig(
            max_daily_transfer_limit=Decimal(self.cold_max_daily_transfer_limit),
            max_single_transfer_limit=Decimal(self.cold_max_single_transfer_limit),
            allowed_address_patterns=tuple(self.cold_allowed_address_patterns),
            required_approvals=required_approvals,
            approval_timeout_hours=timeout_hours,
            initial_response_sla=self.cold_initial_response_sla,
            processing_sla=self.cold_processing_sla,
            completion_sla=self.cold_completion_sla,
            manual_review_threshold=Decimal(self.cold_manual_review_threshold),
            operator_notification_list=tuple(self.cold_operator_notification_list),
            escalation_threshold=self.cold_escalation_threshold,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
