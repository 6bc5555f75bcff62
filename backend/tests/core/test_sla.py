"""SLA Classification — tests for breach / at-risk / escalation counting.

Tests cover:
    - T+40h at risk only, T+49h at risk and escalated, T+73h breached and escalated
    - Boundaries are strict (exactly completion/2 is not at risk)
    - Non-cold transfers excluded from every count
    - Duration rendering and report shape
"""

from datetime import timedelta

from coldflow.core.domain_types import WalletType
from coldflow.core.sla import (
    classify_elapsed, compute_sla_report, format_duration, sla_config_summary,
)
from tests.factories import T0, make_cold_transfer


# ─── classify_elapsed ────────────────────────────────────────────

def test_fresh_transfer_is_clean(config):
    result = classify_elapsed(timedelta(hours=1), config)
    assert (result.breached, result.at_risk, result.escalated) == (False, False, False)


def test_forty_hours_at_risk(config):
    result = classify_elapsed(timedelta(hours=40), config)
    assert (result.breached, result.at_risk, result.escalated) == (False, True, False)


def test_forty_nine_hours_at_risk_and_escalated(config):
    result = classify_elapsed(timedelta(hours=49), config)
    assert (result.breached, result.at_risk, result.escalated) == (False, True, True)


def test_seventy_three_hours_breached(config):
    result = classify_elapsed(timedelta(hours=73), config)
    assert (result.breached, result.at_risk, result.escalated) == (True, False, True)


def test_boundaries_are_strict(config):
    assert classify_elapsed(timedelta(hours=36), config).at_risk is False
    assert classify_elapsed(timedelta(hours=48), config).escalated is False
    assert classify_elapsed(timedelta(hours=72), config).breached is False
    assert classify_elapsed(timedelta(hours=72), config).at_risk is True


# ─── compute_sla_report ──────────────────────────────────────────

def test_report_counts(config):
    now = T0 + timedelta(hours=80)
    transfers = [
        make_cold_transfer(created_at=now - timedelta(hours=40)),
        make_cold_transfer(created_at=now - timedelta(hours=49)),
        make_cold_transfer(created_at=now - timedelta(hours=73)),
        make_cold_transfer(created_at=now - timedelta(hours=1)),
    ]
    report = compute_sla_report(transfers, config, now)
    assert report["totalColdTransfers"] == 4
    assert report["slaBreached"] == 1
    assert report["atRisk"] == 2
    assert report["escalated"] == 2
    assert report["config"] == {
        "initialResponseSLA": "2h0m0s",
        "processingSLA": "24h0m0s",
        "completionSLA": "72h0m0s",
    }


def test_non_cold_transfers_excluded(config):
    hot = make_cold_transfer()
    hot.transfer_type = WalletType.HOT
    report = compute_sla_report([hot], config, T0 + timedelta(hours=100))
    assert report["totalColdTransfers"] == 0
    assert report["slaBreached"] == 0


def test_empty_report(config):
    report = compute_sla_report([], config, T0)
    assert report["totalColdTransfers"] == 0
    assert report["atRisk"] == 0
    assert report["escalated"] == 0


# ─── format_duration ─────────────────────────────────────────────

def test_format_duration():
    assert format_duration(timedelta(hours=72)) == "72h0m0s"
    assert format_duration(timedelta(minutes=30)) == "30m0s"
    assert format_duration(timedelta(seconds=45)) == "45s"
    assert format_duration(timedelta(0)) == "0s"
    assert format_duration(timedelta(hours=1, minutes=2, seconds=3)) == "1h2m3s"
    assert format_duration(timedelta(seconds=1, milliseconds=500)) == "1.5s"


def test_config_summary_uses_configured_windows(config):
    assert sla_config_summary(config)["completionSLA"] == "72h0m0s"
