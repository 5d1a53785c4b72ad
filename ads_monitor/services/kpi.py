"""
KPI derivation

Cost-per-result (CPR) and the status tiers shown on the dashboard. The
thresholds are in account currency units.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable

from ads_monitor.models.metrics import AccountSummary, ZERO, money
from ads_monitor.utils.helpers import safe_divide

CPR_OPTIMAL_MAX = Decimal("0.4")
CPR_REGULAR_MAX = Decimal("0.9")

STATUS_AWAITING_DATA = "awaiting_data"
STATUS_OPTIMAL = "optimal"
STATUS_REGULAR = "regular"
STATUS_CRITICAL = "critical"

STATUS_LABELS = {
    STATUS_AWAITING_DATA: "ESPERANDO DATA",
    STATUS_OPTIMAL: "ÓPTIMO",
    STATUS_REGULAR: "REGULAR",
    STATUS_CRITICAL: "CRÍTICO",
}


def cost_per_result(spend: Decimal, conversions: int) -> Decimal:
    """spend / conversions, or 0 when nothing converted yet"""
    if conversions <= 0:
        return ZERO
    return safe_divide(spend, conversions)


def status_for(cpr: Decimal) -> str:
    """Map a CPR to its status tier. Tier bounds are inclusive."""
    if cpr == 0:
        return STATUS_AWAITING_DATA
    if cpr <= CPR_OPTIMAL_MAX:
        return STATUS_OPTIMAL
    if cpr <= CPR_REGULAR_MAX:
        return STATUS_REGULAR
    return STATUS_CRITICAL


@dataclass(frozen=True)
class KpiResult:
    spend: Decimal
    conversions: int
    cost_per_result: Decimal
    status: str

    @property
    def status_label(self) -> str:
        return STATUS_LABELS[self.status]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "spend": money(self.spend),
            "conversions": self.conversions,
            "cost_per_result": money(self.cost_per_result),
            "status": self.status,
            "status_label": self.status_label,
        }


def kpi_for(spend: Decimal, conversions: int) -> KpiResult:
    cpr = cost_per_result(spend, conversions)
    return KpiResult(spend=spend, conversions=conversions, cost_per_result=cpr, status=status_for(cpr))


def global_kpi(accounts: Iterable[AccountSummary]) -> KpiResult:
    """KPIs over every account that spent today"""
    active = [a for a in accounts if a.total_spend > ZERO]
    spend = sum((a.total_spend for a in active), ZERO)
    conversions = sum(a.total_conversions for a in active)
    return kpi_for(spend, conversions)
