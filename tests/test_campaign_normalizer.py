"""
Campaign normalization tests.

Guards against:
1. Campaigns without spend leaking into today's totals
2. Malformed spend / action fields raising instead of defaulting to zero
3. Counting the wrong action type as a conversation
"""
from decimal import Decimal

from ads_monitor.services.campaign_normalizer import (
    count_action,
    normalize_campaign,
    normalize_campaigns,
)
from conftest import SENTINEL, campaign_row


# ---------------------------------------------------------------------------
# Spend filter
# ---------------------------------------------------------------------------

def test_zero_spend_is_excluded():
    assert normalize_campaign(campaign_row("CD_Promo", "0", "5")) is None


def test_negative_spend_is_excluded():
    assert normalize_campaign(campaign_row("CD_Promo", "-3.50", "5")) is None


def test_missing_spend_is_excluded():
    assert normalize_campaign(campaign_row("CD_Promo", None, "5")) is None


def test_non_numeric_spend_is_excluded():
    assert normalize_campaign(campaign_row("CD_Promo", "n/a", "5")) is None
    assert normalize_campaign(campaign_row("CD_Promo", "NaN", "5")) is None


def test_spend_without_conversions_is_kept():
    """Active means spending, even with zero conversations so far."""
    record = normalize_campaign(campaign_row("MD_Test", "12.30"))
    assert record is not None
    assert record.spend == Decimal("12.30")
    assert record.conversions == 0


def test_numeric_spend_is_accepted():
    record = normalize_campaign(campaign_row("KD", 3.1, "1"))
    assert record.spend == Decimal("3.1")


# ---------------------------------------------------------------------------
# Field extraction
# ---------------------------------------------------------------------------

def test_record_fields():
    record = normalize_campaign(campaign_row("CD_Promo", "100.00", "20", campaign_id="238"))
    assert record.campaign_id == "238"
    assert record.name == "CD_Promo"
    assert record.spend == Decimal("100.00")
    assert record.conversions == 20


def test_campaign_id_falls_back_to_id():
    record = normalize_campaign({"id": "77", "campaign_name": "X", "spend": "1"})
    assert record.campaign_id == "77"


def test_only_sentinel_action_is_counted():
    row = campaign_row("CD", "5", "3")
    assert normalize_campaign(row).conversions == 3

    other = campaign_row("CD", "5", "3", action_type="onsite_conversion.post_save")
    assert normalize_campaign(other).conversions == 0


def test_custom_action_type():
    row = campaign_row("CD", "5", "4", action_type="lead")
    assert normalize_campaign(row, action_type="lead").conversions == 4


def test_count_action_tolerates_garbage():
    assert count_action(None, SENTINEL) == 0
    assert count_action("oops", SENTINEL) == 0
    assert count_action([None, {"action_type": SENTINEL}], SENTINEL) == 0
    assert count_action([{"action_type": SENTINEL, "value": "abc"}], SENTINEL) == 0
    assert count_action([{"action_type": SENTINEL, "value": "7.0"}], SENTINEL) == 7
    assert count_action([{"action_type": SENTINEL, "value": "-2"}], SENTINEL) == 0


# ---------------------------------------------------------------------------
# Batch
# ---------------------------------------------------------------------------

def test_normalize_campaigns_keeps_upstream_order():
    rows = [
        campaign_row("NT_1", "1.00", campaign_id="a"),
        campaign_row("NT_2", "0", campaign_id="b"),
        "not a row",
        campaign_row("NT_3", "2.00", campaign_id="c"),
    ]
    records = normalize_campaigns(rows)
    assert [r.campaign_id for r in records] == ["a", "c"]
