"""SLA Classification — pure aggregation of in-flight cold transfers against SLA windows.

Invariants:
    - Only cold transfers are counted
    - breached (elapsed > completion) and at-risk (elapsed > completion / 2) are exclusive
    - escalated (elapsed > escalation threshold) is counted independently of both
    - Report keys are the public camelCase names used by the dashboard

Design Decisions:
    - `now` passed in: the monitor service owns the clock, this module is deterministic
    - Durations rendered Go-style ("72h0m0s") to keep the report format stable for clients
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable

from coldflow.core.cold_wallet_config import ColdWalletConfig
from coldflow.core.transfer_records import TransferRequest


@dataclass(frozen=True)
class SLAClassification:
    """SLA flags for one transfer."""
    breached: bool
    at_risk: bool
    escalated: bool


def classify_elapsed(elapsed: timedelta, config: ColdWalletConfig) -> SLAClassification:
    breached = elapsed > config.completion_sla
    at_risk = not breached and elapsed > config.completion_sla / 2
    return SLAClassification(
        breached=breached,
        at_risk=at_risk,
        escalated=elapsed > config.escalation_threshold,
    )


def format_duration(value: timedelta) -> str:
    """Render a duration as hours/minutes/seconds, e.g. 72h0m0s, 30m0s, 45s."""
    total_us = (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds
    if total_us == 0:
        return "0s"
    sign = "-" if total_us < 0 else ""
    total_us = abs(total_us)
    hours, rem = divmod(total_us, 3_600_000_000)
    minutes, rem = divmod(rem, 60_000_000)
    seconds, micros = divmod(rem, 1_000_000)

    secs = str(seconds)
    if micros:
        secs += "." + f"{micros:06d}".rstrip("0")
    if hours:
        return f"{sign}{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{sign}{minutes}m{secs}s"
    return f"{sign}{secs}s"


def sla_config_summary(config: ColdWalletConfig) -> dict:
    return {
        "initialResponseSLA": format_duration(config.initial_response_sla),
        "processingSLA": format_duration(config.processing_sla),
        "completionSLA": format_duration(config.completion_sla),
    }


def compute_sla_report(
    transfers: Iterable[TransferRequest],
    config: ColdWalletConfig,
    now: datetime,
) -> dict:
    """Aggregate SLA counts for the cold transfers in `transfers`."""
    total = breached = at_risk = escalated = 0
    for transfer in transfers:
        if not transfer.is_cold:
            continue
        total += 1
        result = classify_elapsed(now - transfer.created_at, config)
        breached += result.breached
        at_risk += result.at_risk
        escalated += result.escalated

    return {
        "totalColdTransfers": total,
        "slaBreached": breached,
        "atRisk": at_risk,
        "escalated": escalated,
        "config": sla_config_summary(config),
    }
