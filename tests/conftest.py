"""
Shared fakes for the metrics pipeline tests.

The Graph API is never called: connectors get a fake aiohttp-style session,
services get a stub connector.
"""
import asyncio
from typing import Dict, List, Sequence

import pytest

from ads_monitor.config import MonitorConfig
from ads_monitor.connectors.base_connector import BaseConnector
from ads_monitor.models.metrics import AccountFetchResult

SENTINEL = "onsite_conversion.messaging_conversation_started_7d"


def run(coro):
    """Run an async coroutine in a sync test."""
    return asyncio.run(coro)


class FakeResponse:
    def __init__(self, status: int, body):
        self.status = status
        self.body = body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def json(self, content_type=None):
        if isinstance(self.body, Exception):
            raise self.body
        return self.body


class FakeSession:
    """
    Stands in for aiohttp.ClientSession.

    ``outcomes`` maps account id -> (status, body) or an exception to raise
    when the request is issued.
    """

    def __init__(self, outcomes: Dict):
        self.outcomes = outcomes
        self.requests: List = []
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        self.closed = True
        return False

    def get(self, url, params=None):
        self.requests.append((url, dict(params or {})))
        account_id = url.rstrip("/").split("/")[-2]
        outcome = self.outcomes[account_id]
        if isinstance(outcome, Exception):
            raise outcome
        status, body = outcome
        return FakeResponse(status, body)


class StubConnector(BaseConnector):
    """Returns canned fetch results (or raises) without any I/O"""

    def __init__(self, results: Sequence[AccountFetchResult] = (), exc: Exception = None, delay: float = 0.0):
        super().__init__("Stub")
        self.results = list(results)
        self.exc = exc
        self.delay = delay
        self.calls = 0

    async def fetch_accounts(self, account_ids):
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.exc:
            raise self.exc
        return list(self.results)


def campaign_row(name, spend, messages=None, campaign_id="c1", action_type=SENTINEL):
    row = {"campaign_id": campaign_id, "campaign_name": name}
    if spend is not None:
        row["spend"] = spend
    if messages is not None:
        row["actions"] = [
            {"action_type": "link_click", "value": "999"},
            {"action_type": action_type, "value": messages},
        ]
    return row


@pytest.fixture
def monitor_config():
    return MonitorConfig(access_token="test-token", account_ids=("act_1111", "act_2222"))
