"""
Product classification

Campaign names start with a two-letter product code ("CD_Promo",
"md - retargeting"). The rule table below maps those prefixes to product
buckets; anything unrecognized lands in the catch-all bucket.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence

from ads_monitor.models.metrics import AccountSummary, ProductBucket, ZERO


@dataclass(frozen=True)
class ProductRule:
    prefix: str
    code: str
    label: str


# Priority order; first match wins
DEFAULT_PRODUCT_RULES = (
    ProductRule(prefix="CD", code="CD", label="Cuerpo Divino"),
    ProductRule(prefix="MD", code="MD", label="Mujer Divina"),
    ProductRule(prefix="NT", code="NT", label="Nutrikids"),
    ProductRule(prefix="KD", code="KD", label="Kid"),
)

CATCH_ALL_CODE = "OTROS"
CATCH_ALL_LABEL = "Otros / Sin Código"


def classify(name: str, rules: Sequence[ProductRule] = DEFAULT_PRODUCT_RULES) -> str:
    """Bucket code for a campaign name (case-insensitive prefix match)"""
    upper = (name or "").upper()
    for rule in rules:
        if upper.startswith(rule.prefix.upper()):
            return rule.code
    return CATCH_ALL_CODE


def empty_buckets(rules: Sequence[ProductRule] = DEFAULT_PRODUCT_RULES) -> Dict[str, ProductBucket]:
    buckets = {}
    for rule in rules:
        buckets.setdefault(rule.code, ProductBucket(code=rule.code, label=rule.label))
    buckets[CATCH_ALL_CODE] = ProductBucket(code=CATCH_ALL_CODE, label=CATCH_ALL_LABEL)
    return buckets


def rollup_products(
    accounts: Iterable[AccountSummary],
    rules: Sequence[ProductRule] = DEFAULT_PRODUCT_RULES,
) -> List[ProductBucket]:
    """
    Accumulate spend and conversions per product bucket across all accounts.

    Returns only buckets that spent something, in rule order with the
    catch-all last.
    """
    buckets = empty_buckets(rules)
    for account in accounts:
        for campaign in account.campaigns:
            buckets[classify(campaign.name, rules)].add(campaign)

    return [b for b in buckets.values() if b.spend > ZERO]
