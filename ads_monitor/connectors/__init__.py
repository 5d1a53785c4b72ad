"""Upstream reporting connectors for Ads Monitor"""

from ads_monitor.connectors.base_connector import BaseConnector
from ads_monitor.connectors.meta_insights_connector import InsightsAPIError, MetaInsightsConnector

__all__ = [
    "BaseConnector",
    "InsightsAPIError",
    "MetaInsightsConnector",
]
