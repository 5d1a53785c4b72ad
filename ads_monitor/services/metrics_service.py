"""
Metrics Service
Runs the refresh cycle (fetch -> normalize -> aggregate) and builds the
dashboard view (products, KPIs, hourly projection) on top of it.
"""
import asyncio
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

import pytz

from ads_monitor.config import MonitorConfig
from ads_monitor.connectors.base_connector import BaseConnector
from ads_monitor.connectors.meta_insights_connector import MetaInsightsConnector
from ads_monitor.models.metrics import MetricsSnapshot
from ads_monitor.services.account_aggregator import collect_summaries, failed_account_ids
from ads_monitor.services.hourly_projection import (
    WINDOW_HOURS,
    WINDOW_START_HOUR,
    RandomSource,
    hour_label,
    project_hourly,
)
from ads_monitor.services.kpi import global_kpi, kpi_for
from ads_monitor.services.product_classifier import (
    DEFAULT_PRODUCT_RULES,
    ProductRule,
    classify,
    rollup_products,
)
from ads_monitor.utils.logger import log


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _log_cycle_failure(task: asyncio.Future) -> None:
    """Retrieve the cycle outcome even when every caller was cancelled"""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        log.opt(exception=exc).error(f"Refresh cycle failed: {type(exc).__name__}")


class MetricsService:
    """
    One instance per process. ``refresh`` coalesces overlapping calls: while
    a cycle is in flight, further callers await that same cycle instead of
    fanning out to the upstream API again.
    """

    def __init__(
        self,
        config: MonitorConfig,
        connector: Optional[BaseConnector] = None,
        clock: Callable[[], datetime] = _utcnow,
        rng: Optional[RandomSource] = None,
        product_rules: Sequence[ProductRule] = DEFAULT_PRODUCT_RULES,
    ):
        self.config = config
        self.connector = connector or MetaInsightsConnector(config)
        self.clock = clock
        self.rng = rng
        self.product_rules = tuple(product_rules)
        self._inflight: Optional[asyncio.Future] = None

    async def refresh(self) -> MetricsSnapshot:
        """
        Fetch today's metrics for every configured account.

        Raises:
            ConfigurationError: no access token or no accounts configured;
                raised before any request is made
            Exception: anything escaping the per-account isolation
        """
        self.config.validate()

        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.ensure_future(self._run_cycle())
            self._inflight.add_done_callback(_log_cycle_failure)
        else:
            log.debug("Refresh already in flight, joining it")

        return await asyncio.shield(self._inflight)

    async def _run_cycle(self) -> MetricsSnapshot:
        results = await self.connector.sync(self.config.account_ids)

        snapshot = MetricsSnapshot(
            accounts=tuple(collect_summaries(results)),
            generated_at=self.clock(),
            failed_accounts=tuple(failed_account_ids(results)),
        )
        log.info(
            f"Refresh done: {len(snapshot.accounts)} accounts, "
            f"{len(snapshot.campaigns)} active campaigns, "
            f"{len(snapshot.failed_accounts)} failed"
        )
        return snapshot

    def current_hour(self) -> int:
        """Hour of day on the dashboard clock"""
        now = self.clock()
        if self.config.report_timezone:
            return now.astimezone(pytz.timezone(self.config.report_timezone)).hour
        return now.astimezone().hour

    async def dashboard(self) -> Dict[str, Any]:
        snapshot = await self.refresh()
        return build_dashboard(snapshot, self.current_hour(), self.rng, self.product_rules)


def build_dashboard(
    snapshot: MetricsSnapshot,
    current_hour: int,
    rng: Optional[RandomSource] = None,
    product_rules: Sequence[ProductRule] = DEFAULT_PRODUCT_RULES,
) -> Dict[str, Any]:
    """
    Everything the dashboard renders, derived from one snapshot.

    ``hourly`` is a synthetic projection, flagged as such in the payload.
    """
    overall = global_kpi(snapshot.accounts)

    products = [
        {"code": b.code, "label": b.label, **kpi_for(b.spend, b.conversions).to_dict()}
        for b in rollup_products(snapshot.accounts, product_rules)
    ]

    campaigns: List[Dict[str, Any]] = []
    for account in snapshot.accounts:
        for c in account.campaigns:
            campaigns.append({
                "account_id": account.account_id,
                "id": c.campaign_id,
                "name": c.name,
                "product_code": classify(c.name, product_rules),
                **kpi_for(c.spend, c.conversions).to_dict(),
            })

    accounts = [
        {
            "id": a.account_id,
            "label": a.label,
            "active": a.is_active,
            "campaign_count": len(a.campaigns),
            **kpi_for(a.total_spend, a.total_conversions).to_dict(),
        }
        for a in snapshot.accounts
    ]

    points = project_hourly(current_hour, overall.conversions, rng)

    return {
        "generated_at": snapshot.generated_at.isoformat(),
        "global": overall.to_dict(),
        "products": products,
        "campaigns": campaigns,
        "accounts": accounts,
        "hourly": {
            "synthetic": True,
            "window": f"{hour_label(WINDOW_START_HOUR)}-{hour_label(WINDOW_START_HOUR + WINDOW_HOURS - 1)}",
            "points": [p.to_dict() for p in points],
        },
    }
