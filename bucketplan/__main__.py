"""CLI entry point for bucketplan."""

from __future__ import annotations

import argparse
from functools import partial
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
import sys
import threading

from .engine import (
    DEFAULT_WITHDRAWAL_PERIOD,
    CalculationResult,
    CustomCalculationResult,
    calculate,
    calculate_custom,
)
from .report import render_report, result_payload, write_json, write_report
from .schema import Portfolio, SchemaError, load_portfolio
from .summary import custom_summary, portfolio_summary
from .validate import ValidationResult, validate_custom_parameters, validate_portfolio


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Retirement bucket projections for couples")
    parser.add_argument("portfolio", help="Path to portfolio JSON file")
    parser.add_argument("-o", "--output", default="report.html", help="Output HTML path")
    parser.add_argument("--json", dest="json_output", help="Also write the calculation results as JSON to this path")
    parser.add_argument("--validate", action="store_true", help="Validate JSON only")
    parser.add_argument("--summary", action="store_true", help="Print text summary to stdout")
    parser.add_argument("--custom", action="store_true", help="Add a custom projection (implied by the options below)")
    parser.add_argument("--disbursement-age", type=float, help="Custom projection: first disbursement age (default: older person's age)")
    parser.add_argument("--withdrawal-period", type=float, help=f"Custom projection: withdrawal period in years (default: {DEFAULT_WITHDRAWAL_PERIOD:g})")
    parser.add_argument("--rate", type=float, help="Custom projection: real interest rate in percent (default: portfolio default)")
    parser.add_argument("--server", action="store_true", help="Watch portfolio file, regenerate output, and serve via local web server")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind local web server (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port for local web server (default: 8000)")
    parser.add_argument("--watch-interval", type=float, default=1.0, help="Portfolio file watch interval in seconds (default: 1.0)")
    return parser


def _print_validation(validation: ValidationResult) -> None:
    for warning in validation.warnings:
        print(f"WARNING: {warning}")
    for error in validation.errors:
        print(f"ERROR: {error}", file=sys.stderr)


def _wants_custom(args: argparse.Namespace) -> bool:
    return args.custom or any(
        value is not None for value in (args.disbursement_age, args.withdrawal_period, args.rate)
    )


def _check_portfolio(portfolio: Portfolio, args: argparse.Namespace) -> ValidationResult:
    validation = validate_portfolio(portfolio)
    if _wants_custom(args):
        custom_check = validate_custom_parameters(
            portfolio,
            args.disbursement_age if args.disbursement_age is not None else portfolio.couple.oldest_age,
            args.withdrawal_period if args.withdrawal_period is not None else DEFAULT_WITHDRAWAL_PERIOD,
            args.rate if args.rate is not None else portfolio.financial.default_real_rate,
        )
        validation.errors.extend(custom_check.errors)
        validation.warnings.extend(custom_check.warnings)
    return validation


def _run_custom(portfolio: Portfolio, args: argparse.Namespace) -> CustomCalculationResult | None:
    if not _wants_custom(args):
        return None
    return calculate_custom(
        portfolio,
        disbursement_age=args.disbursement_age,
        withdrawal_period=args.withdrawal_period if args.withdrawal_period is not None else DEFAULT_WITHDRAWAL_PERIOD,
        interest_rate=args.rate,
    )


def _load_checked(args: argparse.Namespace) -> tuple[Portfolio | None, ValidationResult | None]:
    """Load and validate the portfolio, printing any problems.

    Returns ``(None, None)`` when the file cannot be read or parsed.
    """
    try:
        portfolio = load_portfolio(args.portfolio)
    except (SchemaError, OSError, ValueError) as exc:
        print(f"Failed to load portfolio: {exc}", file=sys.stderr)
        return None, None
    validation = _check_portfolio(portfolio, args)
    _print_validation(validation)
    return portfolio, validation


def _print_summary(portfolio: Portfolio, result: CalculationResult, custom: CustomCalculationResult | None) -> None:
    print(f"Buckets: {len(result.bucket_calculations)}")
    print(f"Monthly expenses: ${portfolio.financial.monthly_expenses:,.0f}")
    coverage_rows = portfolio_summary(portfolio, result)
    if custom is not None:
        coverage_rows.append(custom_summary(portfolio, custom))
    for row in coverage_rows:
        percent = "n/a" if row.coverage_percent is None else f"{row.coverage_percent:.1f}%"
        print(f"{row.label}: ${row.total_monthly_income:,.0f}/month ({percent} of expenses)")


def _write_outputs(portfolio: Portfolio, validation: ValidationResult, args: argparse.Namespace) -> None:
    result = calculate(portfolio)
    custom = _run_custom(portfolio, args)
    html_content = render_report(portfolio, result, portfolio_path=args.portfolio, custom=custom, validation=validation)
    write_report(args.output, html_content)
    print(f"Wrote report to {Path(args.output)}")
    if args.json_output:
        write_json(args.json_output, result_payload(result, custom))
        print(f"Wrote results to {Path(args.json_output)}")
    if args.summary:
        _print_summary(portfolio, result, custom)


def _portfolio_mtime_ns(portfolio_path: str) -> int | None:
    try:
        return Path(portfolio_path).stat().st_mtime_ns
    except OSError:
        return None


def _watch_portfolio(args: argparse.Namespace, stop_event: threading.Event, last_seen: int | None) -> None:
    """Rewrite the report each time the portfolio file changes on disk."""
    while not stop_event.wait(args.watch_interval):
        mtime_ns = _portfolio_mtime_ns(args.portfolio)
        if mtime_ns is None or mtime_ns == last_seen:
            continue
        last_seen = mtime_ns
        print(f"{args.portfolio} changed; rebuilding {args.output}")
        portfolio, validation = _load_checked(args)
        if validation is None or not validation.is_valid:
            print("Keeping the previous report until the portfolio is fixed.", file=sys.stderr)
            continue
        _write_outputs(portfolio, validation, args)


def _serve(args: argparse.Namespace) -> None:
    output_path = Path(args.output).resolve()
    handler = partial(SimpleHTTPRequestHandler, directory=str(output_path.parent))
    server = ThreadingHTTPServer((args.host, args.port), handler)
    stop_event = threading.Event()
    last_seen = _portfolio_mtime_ns(args.portfolio)
    watcher = threading.Thread(target=_watch_portfolio, args=(args, stop_event, last_seen), daemon=True)
    watcher.start()

    print(f"Serving http://{args.host}:{args.port}/{output_path.name} (Ctrl+C to stop)")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        stop_event.set()
        server.server_close()
        watcher.join(timeout=max(args.watch_interval * 2, 0.1))


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.server and args.validate:
        print("--validate cannot be used with --server", file=sys.stderr)
        return 2
    if args.server and args.watch_interval <= 0:
        print("--watch-interval must be > 0", file=sys.stderr)
        return 2

    portfolio, validation = _load_checked(args)
    if validation is None:
        return 2
    if not validation.is_valid:
        return 1

    if args.validate:
        print("Portfolio is valid.")
        return 0

    _write_outputs(portfolio, validation, args)
    if args.server:
        _serve(args)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
