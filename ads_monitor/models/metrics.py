"""
Metrics data model

Every object here is rebuilt from scratch on each refresh cycle; nothing is
persisted between cycles.
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Tuple, Union


ZERO = Decimal("0")


def money(value: Decimal) -> float:
    """Decimal amount -> JSON number"""
    return float(value)


@dataclass(frozen=True)
class CampaignRecord:
    """One campaign with spend today, as seen in the insights report."""
    campaign_id: str
    name: str
    spend: Decimal
    conversions: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.campaign_id,
            "producto": self.name,
            "gasto": money(self.spend),
            "mensajes": self.conversions,
        }


@dataclass(frozen=True)
class AccountSummary:
    """
    Today's totals for one ad account.

    Totals are derived from ``campaigns`` so they always agree with the
    records they summarize.
    """
    account_id: str
    campaigns: Tuple[CampaignRecord, ...] = ()

    @property
    def label(self) -> str:
        return f"Cuenta {self.account_id[-4:]}"

    @property
    def total_spend(self) -> Decimal:
        return sum((c.spend for c in self.campaigns), ZERO)

    @property
    def total_conversions(self) -> int:
        return sum(c.conversions for c in self.campaigns)

    @property
    def is_active(self) -> bool:
        return len(self.campaigns) > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.account_id,
            "nombre": self.label,
            "gastoHoy": money(self.total_spend),
            "mensajesHoy": self.total_conversions,
            "activo": self.is_active,
            "campanas": [c.to_dict() for c in self.campaigns],
        }


@dataclass(frozen=True)
class AccountFetchOk:
    account_id: str
    summary: AccountSummary

    ok = True


@dataclass(frozen=True)
class AccountFetchFailed:
    account_id: str
    reason: str

    ok = False


AccountFetchResult = Union[AccountFetchOk, AccountFetchFailed]


@dataclass
class ProductBucket:
    """Running spend/conversion totals for one product line."""
    code: str
    label: str
    spend: Decimal = ZERO
    conversions: int = 0

    def add(self, campaign: CampaignRecord) -> None:
        self.spend += campaign.spend
        self.conversions += campaign.conversions


@dataclass(frozen=True)
class HourlyPoint:
    hour: str
    conversions: int

    def to_dict(self) -> Dict[str, Any]:
        return {"hour": self.hour, "conversions": self.conversions}


@dataclass(frozen=True)
class MetricsSnapshot:
    """Result of one refresh cycle: the accounts that answered, and when."""
    accounts: Tuple[AccountSummary, ...]
    generated_at: datetime
    failed_accounts: Tuple[str, ...] = field(default=())

    @property
    def campaigns(self) -> List[CampaignRecord]:
        return [c for account in self.accounts for c in account.campaigns]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cuentas": [a.to_dict() for a in self.accounts],
            "lastUpdated": self.generated_at.isoformat(),
        }
