# ruff: noqa: T201

"""
CLI module for meterbill.

Prices a consumption from the command line and starts the REST API server.
"""

import argparse
import sys
from decimal import Decimal, InvalidOperation
from importlib.metadata import PackageNotFoundError, version

from meterbill.config.constants import CURRENCY, UNIT
from meterbill.exceptions.errors import MeterbillError
from meterbill.models.bill import BillBreakdown
from meterbill.models.tariff import TariffClass
from meterbill.services.billing import calculate_bill_breakdown
from meterbill.utils.logging_config import init_console_logging, logging

# get meterbill_version dynamically
try:
    meterbill_version = version("meterbill")
except PackageNotFoundError:
    meterbill_version = "unknown"


def _parse_units(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation as e:
        raise argparse.ArgumentTypeError(f"invalid consumption: {value!r}") from e


def format_breakdown(bill: BillBreakdown) -> str:
    """Render an itemised bill as aligned text lines."""
    lines = [f"Consumption: {bill.units} {UNIT} ({bill.tariff_class.value})"]
    for slab in bill.slabs:
        upper = "inf" if not slab.upper_bound.is_finite() else f"{slab.upper_bound}"
        lines.append(
            f"  {slab.lower_bound}-{upper} {UNIT}: {slab.units} @ {slab.rate} = {slab.amount:.2f}"
        )
    if bill.unbilled_units:
        lines.append(f"  Unbilled: {bill.unbilled_units} {UNIT}")

    items = [
        ("Energy charge", bill.energy_charge),
        ("Fixed charge", bill.fixed_charge),
        ("Meter rent", bill.meter_rent),
        ("Electricity duty", bill.electricity_duty),
        ("GST", bill.gst),
        ("Fuel price adjustment", bill.fuel_price_adjustment),
        ("TR surcharge", bill.tr_surcharge),
        ("QTR adjustment", bill.qtr_adjustment),
        ("Municipal utility charge", bill.muct),
        ("Advance income tax", bill.advance_income_tax),
    ]
    lines.extend(f"{label:<26}{amount:>12.2f}" for label, amount in items)
    lines.append(f"{'Total (' + CURRENCY + ')':<26}{bill.total:>12.2f}")
    return "\n".join(lines)


def run_cli() -> None:
    """Run the command-line interface for meterbill."""
    parser = argparse.ArgumentParser(description="meterbill CLI")
    parser.add_argument("--version", action="version", version=f"meterbill CLI v{meterbill_version}")
    parser.add_argument(
        "-log",
        "--log-level",
        default="warning",
        help="Set log level (e.g., debug, info, warning, error)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Bill command
    bill_parser = subparsers.add_parser("bill", help="Calculate the bill for a consumption")
    bill_parser.add_argument("units", type=_parse_units, help=f"Consumption in {UNIT}")
    bill_parser.add_argument(
        "-t",
        "--tariff-class",
        choices=[member.value for member in TariffClass],
        default=TariffClass.STANDARD.value,
        help="Tariff schedule to apply (default: standard)",
    )
    bill_parser.add_argument(
        "-b",
        "--breakdown",
        action="store_true",
        help="Show every charge instead of the total only",
    )

    # Serve command (API server)
    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to bind to (default: 8000)",
    )
    serve_parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    serve_parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of worker processes (default: 1)",
    )

    args = parser.parse_args()

    # check passed arguments
    if not getattr(logging, args.log_level.upper(), None):
        print(f"Invalid log level: {args.log_level}")
        sys.exit(1)
    init_console_logging(args.log_level.upper())

    if args.command == "serve":
        from meterbill.api.server import run_server

        run_server(
            host=args.host,
            port=args.port,
            reload=args.reload,
            workers=args.workers,
        )
        return

    if args.command != "bill":
        parser.print_help()
        sys.exit(0)

    try:
        bill = calculate_bill_breakdown(args.units, args.tariff_class)
    except MeterbillError as error:
        print(error)
        sys.exit(1)

    if args.breakdown:
        print(format_breakdown(bill))
    else:
        print(f"{bill.total:.2f}")

    sys.exit(0)


if __name__ == "__main__":
    run_cli()
