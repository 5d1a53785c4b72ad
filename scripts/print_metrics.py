#!/usr/bin/env python3
"""
Today's Ad Metrics

Fetches today's report for every configured account and prints the
dashboard: global KPI, per-product and per-campaign tables, and the
hourly projection (synthetic, extrapolated from the current total).

Usage:
    python scripts/print_metrics.py
    python scripts/print_metrics.py --json   # machine-readable output
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
import asyncio
import json
from decimal import Decimal

from ads_monitor.config import ConfigurationError, get_settings
from ads_monitor.services.metrics_service import MetricsService
from ads_monitor.utils.helpers import format_currency


def _row(label, kpi):
    return (
        f"  {label:<32} {format_currency(Decimal(str(kpi['spend']))):>14} "
        f"{kpi['conversions']:>6} {format_currency(Decimal(str(kpi['cost_per_result']))):>10}  "
        f"{kpi['status_label']}"
    )


def print_dashboard(view):
    g = view["global"]
    print(f"\nAds Monitor - {view['generated_at']}")
    print(f"  Spend today:      {format_currency(Decimal(str(g['spend'])))}")
    print(f"  Conversations:    {g['conversions']}")
    print(f"  Cost per result:  {format_currency(Decimal(str(g['cost_per_result'])))}  [{g['status_label']}]")

    print("\nBy product:")
    if not view["products"]:
        print("  (no recognised activity)")
    for p in view["products"]:
        print(_row(p["label"], p))

    print("\nBy campaign:")
    if not view["campaigns"]:
        print("  (no activity today yet)")
    for c in view["campaigns"]:
        print(_row(c["name"][:32], c))

    print("\nHourly projection (synthetic):")
    for point in view["hourly"]["points"]:
        print(f"  {point['hour']}  {point['conversions']}")


def main():
    parser = argparse.ArgumentParser(description="Print today's ad metrics")
    parser.add_argument("--json", action="store_true", help="Print the dashboard as JSON")
    args = parser.parse_args()

    service = MetricsService(get_settings().monitor_config())
    try:
        view = asyncio.run(service.dashboard())
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        print("\nSet FACEBOOK_ACCESS_TOKEN and FB_ACCOUNT_ID_1..4 in your .env file.")
        sys.exit(1)

    if args.json:
        print(json.dumps(view, indent=2, ensure_ascii=False))
    else:
        print_dashboard(view)


if __name__ == "__main__":
    main()
