"""
Campaign normalization

Turns raw insights rows into CampaignRecords. Missing or malformed fields
fall back to zero; only campaigns that spent money today survive.
"""
from typing import Any, Dict, Iterable, List, Optional

from ads_monitor.config import DEFAULT_CONVERSION_ACTION
from ads_monitor.models.metrics import CampaignRecord, ZERO
from ads_monitor.utils.helpers import parse_count, parse_decimal


def count_action(actions: Any, action_type: str) -> int:
    """Value of the first counter of ``action_type`` in an actions breakdown, else 0"""
    if not isinstance(actions, list):
        return 0
    for action in actions:
        if isinstance(action, dict) and action.get("action_type") == action_type:
            return max(parse_count(action.get("value")), 0)
    return 0


def normalize_campaign(
    row: Dict[str, Any],
    action_type: str = DEFAULT_CONVERSION_ACTION,
) -> Optional[CampaignRecord]:
    """
    Build a CampaignRecord from one insights row.

    Returns None when the campaign has no spend today (spend <= 0, missing
    or unparsable), regardless of its conversion count.
    """
    spend = parse_decimal(row.get("spend"))
    if spend <= ZERO:
        return None

    return CampaignRecord(
        campaign_id=str(row.get("campaign_id") or row.get("id") or ""),
        name=str(row.get("campaign_name") or ""),
        spend=spend,
        conversions=count_action(row.get("actions"), action_type),
    )


def normalize_campaigns(
    rows: Iterable[Any],
    action_type: str = DEFAULT_CONVERSION_ACTION,
) -> List[CampaignRecord]:
    """Normalize rows in upstream order, dropping non-spending campaigns"""
    records = []
    for row in rows:
        if not isinstance(row, dict):
            continue
        record = normalize_campaign(row, action_type)
        if record is not None:
            records.append(record)
    return records
