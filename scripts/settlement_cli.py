#!/usr/bin/env python3
"""
Payroll settlement command line.

Computes settlement periods and aggregates work sessions, printing JSON to
stdout.  Logs go to stderr as structured JSON lines.

Usage:
    python3 scripts/settlement_cli.py [--config FILE] <command> [options]

Commands:
    period      Most recently closed period as of a date.
    periods     Selectable periods, most recent first.
    aggregate   Aggregate a CSV/JSON/JSONL/XLSX work-session file.
    export      Export payload for a company from the database.

Examples:
    python3 scripts/settlement_cli.py period --date 2024-03-15 --closing-day 20 --pay-day 25
    python3 scripts/settlement_cli.py periods --as-of 2024-03-15 --months-back 6
    python3 scripts/settlement_cli.py aggregate --file sessions.csv --date 2024-03-15
    python3 scripts/settlement_cli.py export --company-id <uuid> --exported-by admin
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any
from uuid import UUID

# Project root on sys.path
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from settlement_config import get_active_config  # noqa: E402
from settlement_config.schema import SettlementConfig  # noqa: E402
from settlement_engines import (  # noqa: E402
    aggregate,
    compute_period,
    generate_periods,
    sessions_within,
    summarize_totals,
)
from settlement_ingestion import ingest_rows  # noqa: E402
from settlement_ingestion.adapters import read_source  # noqa: E402
from settlement_kernel.db.engine import init_engine_from_url, session_scope  # noqa: E402
from settlement_kernel.domain.clock import SystemClock  # noqa: E402
from settlement_kernel.exceptions import SettlementError  # noqa: E402
from settlement_kernel.logging_config import configure_logging, get_logger  # noqa: E402
from settlement_services.payroll_service import PayrollSettlementService  # noqa: E402

logger = get_logger("cli")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Payroll settlement: periods and wage aggregation.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Site YAML merged over the bundled defaults.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def day_options(p: argparse.ArgumentParser) -> None:
        p.add_argument("--closing-day", type=int, default=None,
                       help="Closing day 1-31 (default: config default_closing_day).")
        p.add_argument("--pay-day", type=int, default=None,
                       help="Pay day 1-31 (default: config default_pay_day).")

    p_period = sub.add_parser("period", help="Most recently closed period as of a date.")
    p_period.add_argument("--date", required=True, help="Reference date (YYYY-MM-DD).")
    day_options(p_period)

    p_periods = sub.add_parser("periods", help="Selectable periods, newest first.")
    p_periods.add_argument("--as-of", default=None,
                           help="Anchor date (YYYY-MM-DD). Default: today in the payroll timezone.")
    p_periods.add_argument("--months-back", type=int, default=None,
                           help="Number of periods (default: config months_back).")
    day_options(p_periods)

    p_agg = sub.add_parser("aggregate", help="Aggregate a work-session file.")
    p_agg.add_argument("--file", required=True, type=Path,
                       help="CSV, JSON, JSONL or XLSX work-session file.")
    p_agg.add_argument("--date", default=None,
                       help="Only sessions inside the period computed for this date. Default: all sessions.")
    p_agg.add_argument("--no-projects", action="store_true",
                       help="Omit the per-project breakdown.")
    day_options(p_agg)

    p_export = sub.add_parser("export", help="Export payload for a company from the database.")
    p_export.add_argument("--company-id", required=True, type=UUID)
    p_export.add_argument("--date", default=None,
                          help="Period computed for this date. Default: current period.")
    p_export.add_argument("--worker-id", type=UUID, default=None,
                          help="Only this worker.")
    p_export.add_argument("--exported-by", default="cli")
    p_export.add_argument("--use-defaults", action="store_true",
                          help="Use configured default days when the company has no settings.")

    return parser.parse_args(argv)


def _days(args: argparse.Namespace, config: SettlementConfig) -> tuple[int, int]:
    closing = args.closing_day if args.closing_day is not None else config.default_closing_day
    pay = args.pay_day if args.pay_day is not None else config.default_pay_day
    return closing, pay


def _cmd_period(args: argparse.Namespace, config: SettlementConfig) -> dict[str, Any]:
    closing, pay = _days(args, config)
    period = compute_period(args.date, closing, pay)
    return {"period_key": period.period_key, **period.to_dict()}


def _cmd_periods(args: argparse.Namespace, config: SettlementConfig) -> dict[str, Any]:
    closing, pay = _days(args, config)
    as_of = args.as_of or SystemClock(config.timezone).today()
    months_back = args.months_back if args.months_back is not None else config.months_back
    periods = generate_periods(closing, pay, months_back, as_of)
    return {"periods": [{"period_key": p.period_key, **p.to_dict()} for p in periods]}


def _cmd_aggregate(args: argparse.Namespace, config: SettlementConfig) -> dict[str, Any]:
    ingested = ingest_rows(read_source(args.file), source=str(args.file))
    sessions = ingested.sessions
    period = None
    if args.date is not None:
        closing, pay = _days(args, config)
        period = compute_period(args.date, closing, pay)
        sessions = sessions_within(period, sessions)
        logger.info(
            "sessions_filtered",
            extra={
                "period_key": period.period_key,
                "kept": len(sessions),
                "excluded": len(ingested.sessions) - len(sessions),
            },
        )
    summaries = aggregate(sessions, period)
    include_projects = config.include_project_breakdown and not args.no_projects
    return {
        "period": period.to_dict() if period else None,
        "summaries": [s.to_dict(include_projects=include_projects) for s in summaries],
        "totals": summarize_totals(summaries).to_dict(),
        "warnings": [w.to_dict() for w in ingested.warnings],
    }


def _cmd_export(args: argparse.Namespace, config: SettlementConfig) -> dict[str, Any]:
    init_engine_from_url(config.database_url, echo=config.echo_sql)
    with session_scope() as session:
        service = PayrollSettlementService(session, SystemClock(config.timezone), config)
        if args.date is not None:
            settings = service.settings_for(args.company_id, args.use_defaults)
            period = compute_period(args.date, settings.closing_day, settings.pay_day)
        else:
            period = service.current_period(args.company_id, args.use_defaults)
        export = service.build_export_data(
            args.company_id, period, args.exported_by, worker_id=args.worker_id,
        )
    return export.to_dict()


_COMMANDS = {
    "period": _cmd_period,
    "periods": _cmd_periods,
    "aggregate": _cmd_aggregate,
    "export": _cmd_export,
}


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    try:
        config = get_active_config(args.config)
        configure_logging(level=config.log_level, stream=sys.stderr)
        payload = _COMMANDS[args.command](args, config)
    except SettlementError as exc:
        print(json.dumps({"error": exc.code, "message": str(exc)}), file=sys.stderr)
        return 2
    print(json.dumps(payload, ensure_ascii=False, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
