"""
Meta (Facebook) Graph insights connector
Fetches today's campaign-level spend and action breakdown for each ad account
"""
from typing import Any, Callable, Dict, List, Optional, Sequence
import asyncio
import aiohttp
from ads_monitor.config import MonitorConfig
from ads_monitor.connectors.base_connector import BaseConnector
from ads_monitor.models.metrics import AccountFetchFailed, AccountFetchOk, AccountFetchResult
from ads_monitor.services.account_aggregator import summarize_account
from ads_monitor.services.campaign_normalizer import normalize_campaigns
from ads_monitor.utils.logger import account_logger


INSIGHTS_FIELDS = ["campaign_id", "campaign_name", "spend", "actions"]


class InsightsAPIError(Exception):
    """The insights endpoint answered, but not with a usable report"""


class MetaInsightsConnector(BaseConnector):
    """Connector for the Meta Marketing API insights edge"""

    def __init__(self, config: MonitorConfig, session_factory: Optional[Callable[[], Any]] = None):
        super().__init__("Meta Insights")
        self.config = config
        self._session_factory = session_factory or self._default_session

    def _default_session(self) -> aiohttp.ClientSession:
        if self.config.request_timeout_seconds:
            timeout = aiohttp.ClientTimeout(total=self.config.request_timeout_seconds)
            return aiohttp.ClientSession(timeout=timeout)
        return aiohttp.ClientSession()

    def insights_url(self, account_id: str) -> str:
        return f"{self.config.graph_base_url}/{self.config.graph_api_version}/{account_id}/insights"

    def insights_params(self) -> Dict[str, Any]:
        """Query for today's report at campaign level"""
        return {
            "fields": ",".join(INSIGHTS_FIELDS),
            "date_preset": "today",
            "level": "campaign",
            "limit": self.config.insights_limit,
            "access_token": self.config.access_token,
        }

    async def fetch_accounts(self, account_ids: Sequence[str]) -> List[AccountFetchResult]:
        """Fetch all accounts concurrently; one failing account never affects the others"""
        async with self._session_factory() as session:
            tasks = [self._fetch_account(session, account_id) for account_id in account_ids]
            return list(await asyncio.gather(*tasks))

    async def _fetch_account(self, session, account_id: str) -> AccountFetchResult:
        try:
            rows = await self.fetch_campaign_rows(session, account_id)
        except Exception as e:
            reason = self._redact(f"{type(e).__name__}: {e}")
            account_logger(account_id).error(f"Error fetching insights: {reason}")
            return AccountFetchFailed(account_id=account_id, reason=reason)

        records = normalize_campaigns(rows, self.config.conversion_action_type)
        account_logger(account_id).debug(
            f"{len(rows)} campaign rows, {len(records)} with spend today"
        )
        return AccountFetchOk(account_id=account_id, summary=summarize_account(account_id, records))

    async def fetch_campaign_rows(self, session, account_id: str) -> List[Dict[str, Any]]:
        """
        Request one account's insights report and return its raw campaign rows.

        Raises:
            InsightsAPIError: the body carried an ``error`` object, was not
                JSON, or did not have the expected shape
            aiohttp.ClientError: transport failure
        """
        async with session.get(self.insights_url(account_id), params=self.insights_params()) as response:
            try:
                data = await response.json(content_type=None)
            except ValueError:
                raise InsightsAPIError(f"Invalid JSON in response (HTTP {response.status})")

        if not isinstance(data, dict):
            raise InsightsAPIError(f"Unexpected response body (HTTP {response.status})")

        error = data.get("error")
        if error:
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise InsightsAPIError(message or "Unknown Graph API error")

        if response.status >= 400:
            raise InsightsAPIError(f"HTTP {response.status}")

        rows = data.get("data") or []
        if not isinstance(rows, list):
            raise InsightsAPIError("Unexpected 'data' field in response")

        return rows

    def _redact(self, text: str) -> str:
        token = self.config.access_token
        return text.replace(token, "***") if token else text
