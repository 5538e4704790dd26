#!/usr/bin/env python3
"""
Opportunity Report - Unified Runner
Scores, fee-adjusts and classifies a batch of DeFi opportunities from a JSON
config and returns the aggregated JSON results.
"""

import json
import argparse
import logging
import sys
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional, Tuple

import pandas as pd

try:
    from .config_schema import (
        RiskModelConfig,
        FeeModelConfig,
        default_risk_config,
        default_fee_config,
        load_protocol_metas,
        get_example_batch,
        validate_risk_config,
        validate_fee_config,
    )
    from .errors import AnalyticsError
    from .opportunities import build_opportunities
    from .quadrant import QuadrantAssignment, classify, assignments_to_frame, summarize_quadrants
    from . import settings
except ImportError:
    from config_schema import (
        RiskModelConfig,
        FeeModelConfig,
        default_risk_config,
        default_fee_config,
        load_protocol_metas,
        get_example_batch,
        validate_risk_config,
        validate_fee_config,
    )
    from errors import AnalyticsError
    from opportunities import build_opportunities
    from quadrant import QuadrantAssignment, classify, assignments_to_frame, summarize_quadrants
    import settings

logger = logging.getLogger(__name__)


def load_tables(risk_table: Optional[str], fee_table: Optional[str]):
    """Load custom reference tables (or defaults) and validate them."""
    risk_config = RiskModelConfig.from_json_file(risk_table) if risk_table else default_risk_config()
    fee_config = FeeModelConfig.from_json_file(fee_table) if fee_table else default_fee_config()

    for name, validation in (
        ("risk table", validate_risk_config(risk_config)),
        ("fee table", validate_fee_config(fee_config)),
    ):
        for warning in validation["warnings"]:
            logger.warning("%s: %s", name, warning)
        if not validation["is_valid"]:
            raise AnalyticsError(f"Invalid {name}: {'; '.join(validation['errors'])}")

    return risk_config, fee_config


def analyze_batch(
    batch: List[Dict[str, Any]],
    investment_amount: float,
    holding_period_days: float,
    use_net_yield: bool = True,
    risk_config: Optional[RiskModelConfig] = None,
    fee_config: Optional[FeeModelConfig] = None,
) -> Tuple[List[QuadrantAssignment], pd.DataFrame]:
    """Score, fee-adjust and classify a batch of protocol metadata dicts."""
    metas = load_protocol_metas(batch)
    records = build_opportunities(metas, investment_amount, holding_period_days, risk_config, fee_config)
    assignments = classify(records, use_net_yield=use_net_yield)
    return assignments, summarize_quadrants(assignments, use_net_yield=use_net_yield)


def run_opportunity_report(
    batch: List[Dict[str, Any]],
    investment_amount: Optional[float] = None,
    holding_period_days: Optional[float] = None,
    use_net_yield: bool = True,
    risk_config: Optional[RiskModelConfig] = None,
    fee_config: Optional[FeeModelConfig] = None,
) -> Dict[str, Any]:
    """
    Run the full pipeline over a batch of protocol metadata dicts.

    Returns:
        Dict with parameters, per-opportunity quadrant assignments and
        per-quadrant counts
    """
    amount = settings.DEFAULT_INVESTMENT_AMOUNT if investment_amount is None else investment_amount
    period = settings.DEFAULT_HOLDING_PERIOD_DAYS if holding_period_days is None else holding_period_days

    assignments, summary = analyze_batch(batch, amount, period, use_net_yield, risk_config, fee_config)
    return build_report(assignments, summary, amount, period, use_net_yield)


def build_report(
    assignments: List[QuadrantAssignment],
    summary: pd.DataFrame,
    investment_amount: float,
    holding_period_days: float,
    use_net_yield: bool = True,
) -> Dict[str, Any]:
    return {
        "parameters": {
            "investment_amount": investment_amount,
            "holding_period_days": holding_period_days,
            "yield_basis": "net" if use_net_yield else "gross",
            "opportunities": len(assignments),
        },
        "opportunities": [a.to_dict() for a in assignments],
        "summary": {
            quadrant: {"label": row["label"], "count": int(row["count"])}
            for quadrant, row in summary.iterrows()
        },
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Opportunity Report - risk, net yield and quadrant analysis")
    parser.add_argument("--config", "-c", type=str, help="Path to JSON batch of protocol metadata")
    parser.add_argument("--output", "-o", type=str, help="Path to output JSON file")
    parser.add_argument("--amount", type=float, default=None, help="Investment amount in USD")
    parser.add_argument("--period", type=float, default=None, help="Holding period in days")
    parser.add_argument("--gross", action="store_true", help="Classify on gross APY instead of net APY")
    parser.add_argument("--risk-table", type=str, help="Path to custom risk ratings JSON")
    parser.add_argument("--fee-table", type=str, help="Path to custom fee tables JSON")
    parser.add_argument("--example", action="store_true", help="Print example batch and exit")

    args = parser.parse_args(argv)
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    if args.example:
        print(json.dumps([meta.to_dict() for meta in get_example_batch()], indent=2))
        return 0

    if not args.config:
        parser.print_help()
        return 1

    with open(args.config, "r") as f:
        batch = json.load(f)

    amount = settings.DEFAULT_INVESTMENT_AMOUNT if args.amount is None else args.amount
    period = settings.DEFAULT_HOLDING_PERIOD_DAYS if args.period is None else args.period

    try:
        risk_config, fee_config = load_tables(args.risk_table, args.fee_table)
        assignments, summary = analyze_batch(
            batch, amount, period, not args.gross, risk_config, fee_config
        )
        results = build_report(assignments, summary, amount, period, not args.gross)
    except AnalyticsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print("\n" + "=" * 80)
    print("OPPORTUNITIES")
    print("=" * 80)
    print(assignments_to_frame(assignments).to_string(index=False))

    print("\n" + "=" * 80)
    print("QUADRANT SUMMARY")
    print("=" * 80)
    print(summary.to_string())

    output_json = json.dumps(results, indent=2, default=str)
    if args.output:
        with open(args.output, "w") as f:
            f.write(output_json)
        print(f"\nResults written to: {args.output}")
    else:
        print("\n" + "=" * 80)
        print("FINAL JSON OUTPUT")
        print("=" * 80)
        print(output_json)
    return 0


if __name__ == "__main__":
    sys.exit(main())
