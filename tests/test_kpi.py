"""
Cost-per-result and status tier tests.
"""
from decimal import Decimal

import pytest

from ads_monitor.models.metrics import AccountSummary, CampaignRecord
from ads_monitor.services.kpi import (
    STATUS_AWAITING_DATA,
    STATUS_CRITICAL,
    STATUS_OPTIMAL,
    STATUS_REGULAR,
    cost_per_result,
    global_kpi,
    kpi_for,
    status_for,
)


def test_zero_conversions_gives_zero_cpr():
    assert cost_per_result(Decimal("10.00"), 0) == 0
    assert cost_per_result(Decimal("0"), 0) == 0


def test_cpr_is_exact_ratio():
    assert cost_per_result(Decimal("9.00"), 3) == Decimal("3")
    assert cost_per_result(Decimal("100.00"), 20) == Decimal("5")
    assert cost_per_result(Decimal("1"), 3) == Decimal(1) / Decimal(3)


@pytest.mark.parametrize("cpr, expected", [
    ("0", STATUS_AWAITING_DATA),
    ("0.01", STATUS_OPTIMAL),
    ("0.4", STATUS_OPTIMAL),
    ("0.41", STATUS_REGULAR),
    ("0.9", STATUS_REGULAR),
    ("0.91", STATUS_CRITICAL),
    ("5", STATUS_CRITICAL),
])
def test_status_thresholds(cpr, expected):
    assert status_for(Decimal(cpr)) == expected


def test_spending_without_conversions_awaits_data():
    kpi = kpi_for(Decimal("25.00"), 0)
    assert kpi.cost_per_result == 0
    assert kpi.status == STATUS_AWAITING_DATA
    assert kpi.status_label == "ESPERANDO DATA"


def test_kpi_to_dict():
    assert kpi_for(Decimal("3.00"), 10).to_dict() == {
        "spend": 3.0,
        "conversions": 10,
        "cost_per_result": 0.3,
        "status": STATUS_OPTIMAL,
        "status_label": "ÓPTIMO",
    }


def test_global_kpi_sums_accounts():
    accounts = [
        AccountSummary("act_1", (CampaignRecord("a", "CD", Decimal("6.00"), 10),)),
        AccountSummary("act_2", (CampaignRecord("b", "MD", Decimal("2.00"), 10),)),
        AccountSummary("act_3", ()),
    ]
    kpi = global_kpi(accounts)
    assert kpi.spend == Decimal("8.00")
    assert kpi.conversions == 20
    assert kpi.cost_per_result == Decimal("0.4")
    assert kpi.status == STATUS_OPTIMAL


def test_global_kpi_with_no_accounts():
    kpi = global_kpi([])
    assert kpi.spend == 0
    assert kpi.status == STATUS_AWAITING_DATA
