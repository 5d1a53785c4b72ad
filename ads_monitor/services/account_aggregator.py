"""
Account aggregation
"""
from typing import Iterable, List

from ads_monitor.models.metrics import (
    AccountFetchOk,
    AccountFetchResult,
    AccountSummary,
    CampaignRecord,
)


def summarize_account(account_id: str, campaigns: Iterable[CampaignRecord]) -> AccountSummary:
    """Fold one account's campaigns into its summary. An empty list is a valid, inactive account."""
    return AccountSummary(account_id=account_id, campaigns=tuple(campaigns))


def collect_summaries(results: Iterable[AccountFetchResult]) -> List[AccountSummary]:
    """Keep the accounts that were fetched successfully, in configured order"""
    return [r.summary for r in results if isinstance(r, AccountFetchOk)]


def failed_account_ids(results: Iterable[AccountFetchResult]) -> List[str]:
    return [r.account_id for r in results if not isinstance(r, AccountFetchOk)]
