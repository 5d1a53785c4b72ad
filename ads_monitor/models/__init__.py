"""Data model for the metrics pipeline"""

from ads_monitor.models.metrics import (
    AccountFetchFailed,
    AccountFetchOk,
    AccountFetchResult,
    AccountSummary,
    CampaignRecord,
    HourlyPoint,
    MetricsSnapshot,
    ProductBucket,
)

__all__ = [
    "AccountFetchFailed",
    "AccountFetchOk",
    "AccountFetchResult",
    "AccountSummary",
    "CampaignRecord",
    "HourlyPoint",
    "MetricsSnapshot",
    "ProductBucket",
]
