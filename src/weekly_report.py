"""
FlowSync Weekly Report
======================
Prints this week's wellness picture from the fixture stores:
  1. Today's energy breakdown
  2. Burnout risk tier + goal adjustments
  3. Ranked weekly insights

Usage:
    python weekly_report.py                     # Week ending on the latest biometric day
    python weekly_report.py --date 2024-10-24   # Week ending on a given day
    python weekly_report.py --json              # Machine-readable output
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from typing import Any, Dict, Optional

import config
from insight_engine import InsightService, burnout_needs_attention
from pipeline.insight_templates import week_period
from sources import FixtureStores, load_fixture_stores

log = logging.getLogger("weekly_report")


def latest_biometric_day(stores: FixtureStores) -> Optional[date]:
    days = [r.date for r in stores.biometrics.list()]
    return max(days) if days else None


def build_report(
    stores: FixtureStores,
    reference_date: Optional[date] = None,
    limit: Optional[int] = None,
) -> Dict[str, Any]:
    """Everything the report prints, as plain JSON-ready data."""
    ref = reference_date or latest_biometric_day(stores) or date.today()
    service = InsightService(stores.moods, stores.biometrics, stores.goals, limit=limit)

    assessment = service.burnout(ref)
    if burnout_needs_attention(assessment):
        log.warning("Burnout risk is %s - goal adjustments recommended",
                    assessment.risk_tier.value)

    return {
        "period": week_period(ref),
        "reference_date": ref.isoformat(),
        "energy": service.energy_breakdown(ref).to_dict(),
        "burnout": assessment.to_dict(),
        "adjustments": service.goal_adjustments(ref).to_dict(),
        "insights": [i.to_dict() for i in service.get_weekly_insights(ref)],
    }


def print_report(report: Dict[str, Any]) -> None:
    energy = report["energy"]
    burnout = report["burnout"]
    print(f"FlowSync weekly report ({report['period']})")
    print("=" * 60)
    print(f"Energy: {energy['energy_score']}/100 ({energy['energy_level']})")
    for factor in ("sleep", "hrv", "mood"):
        f = energy[factor]
        print(f"  {factor:<6} +{f['contribution']:<3} impact {f['impact']:+.1f}")
    print(f"Burnout risk: {burnout['risk_tier']}")
    for d in report["adjustments"]["directives"]:
        print(f"  - {d['action']}")
    print(report["adjustments"]["message"])
    print("-" * 60)
    if not report["insights"]:
        print("No insights this week. Keep logging!")
    for i, insight in enumerate(report["insights"], 1):
        print(f"{i}. [{insight['score']:.0f}] {insight['title']}")
        print(f"   {insight['summary']}")
        for rec in insight["recommendations"]:
            print(f"     * {rec}")
        if insight.get("goal_correlation"):
            print(f"   Goals: {insight['goal_correlation']}")


# ═══════════════════════════════════════════════════════════════
#  CLI
# ═══════════════════════════════════════════════════════════════

def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="FlowSync Weekly Report")
    parser.add_argument("--data-dir", default=str(config.DATA_DIR),
                        help="Directory holding moods.json, biometrics.json, goals.json")
    parser.add_argument("--limit", type=int, default=config.INSIGHT_LIMIT,
                        help="Maximum insights to show (default: %(default)s, max 8)")
    parser.add_argument("--date", type=date.fromisoformat, default=None,
                        help="Last day of the reported week (YYYY-MM-DD)")
    parser.add_argument("--json", action="store_true",
                        help="Print the report as JSON")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s  %(levelname)-8s  %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        stores = load_fixture_stores(args.data_dir)
    except ValueError as e:
        # pydantic.ValidationError subclasses ValueError
        log.error("Could not load fixtures from %s: %s", args.data_dir, e)
        return 1

    report = build_report(stores, reference_date=args.date, limit=args.limit)
    if args.json:
        print(json.dumps(report, indent=2))
    else:
        print_report(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
