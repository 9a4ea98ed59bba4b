"""Compute a prorated quote from a coverage CSV worksheet."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from prorate_app.core.container import build_container
from prorate_app.models.policy import PolicyInputs
from prorate_app.services.quote_renderer import render_quote_html, render_quote_text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Prorate coverage lines from a CSV file.")
    parser.add_argument("csv_path", help="Coverage worksheet with a header row.")
    parser.add_argument("--broker-fee", default="", help="Total broker fee.")
    parser.add_argument("--financed-broker-fee", default="", help="Portion of the broker fee to finance.")
    parser.add_argument(
        "--down-payment-pct",
        default="",
        help="Global down payment percent. Blank uses the configured default.",
    )
    parser.add_argument("--apr", default="", help="Annual percentage rate for financing.")
    parser.add_argument("--payments", default="", help="Number of monthly payments.")
    parser.add_argument(
        "--unpaid",
        action="store_true",
        help="Mark payment status as unconfirmed; the calculation is refused.",
    )
    parser.add_argument("--config", default=None, help="Path to calculator YAML config.")
    parser.add_argument("--html", default=None, help="Also write the quote to this HTML file.")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Import lines, calculate and print the quote."""
    args = build_parser().parse_args(argv)
    container = build_container(Path(args.config) if args.config else None)

    imported = container.csv_import_service.import_lines(args.csv_path)
    for message in imported.error_messages:
        print(f"[WARN] {message}", file=sys.stderr)

    result = container.proration_service.calculate(
        imported.lines,
        PolicyInputs(
            total_broker_fee=args.broker_fee,
            financed_broker_fee=args.financed_broker_fee,
            down_payment_pct=args.down_payment_pct,
            apr=args.apr,
            number_of_payments=args.payments,
            payment_status=not args.unpaid,
        ),
    )
    print(render_quote_text(result))

    if args.html and not result.blocked:
        target_path = Path(args.html)
        target_path.parent.mkdir(parents=True, exist_ok=True)
        target_path.write_text(render_quote_html(result), encoding="utf-8")
        print(f"[INFO] quote written: {target_path}")

    return 1 if result.blocked else 0


if __name__ == "__main__":
    sys.exit(main())
