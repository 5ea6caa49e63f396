"""HTML report and JSON export."""

from __future__ import annotations

from datetime import UTC, datetime
import hashlib
import html
import json
from pathlib import Path
from typing import Any

from .engine import CalculationResult, CustomCalculationResult
from .schema import Portfolio
from .summary import ExpenseCoverage, coverage_status, custom_summary, portfolio_summary
from .templates import render_html_document
from .validate import ValidationResult, validate_portfolio

MILESTONE_TITLES = {
    "access_age": "Earliest Access",
    "full_benefit_age": "Full Benefit",
    "age_70": "Age 70",
    "age_75": "Age 75",
    "age_80": "Age 80",
}


def _money(value: float) -> str:
    return f"${value:,.0f}"


def _age(value: float) -> str:
    return f"{value:g}"


def _owner_label(owner: str) -> str:
    return owner.replace("person", "Person ").capitalize()


def _coverage_text(row: ExpenseCoverage) -> str:
    return "n/a" if row.coverage_percent is None else f"{row.coverage_percent:.1f}%"


def _coverage_cards(rows: list[ExpenseCoverage], monthly_expenses: float) -> str:
    cards = [("Monthly Expenses Target", _money(monthly_expenses), "")]
    for row in rows:
        status = coverage_status(row.coverage_percent)
        cards.append((f"Monthly Income at {row.label}", _money(row.total_monthly_income), ""))
        cards.append((f"Expense Coverage ({row.label})", _coverage_text(row), f"coverage-{status}"))
    return "".join(
        f'<div class="card"><div class="k">{html.escape(k)}</div><div class="v {css}">{html.escape(v)}</div></div>'
        for k, v, css in cards
    )


def _inputs_panel(portfolio: Portfolio) -> str:
    couple = portfolio.couple
    financial = portfolio.financial
    people = "".join(
        f"<tr><td>{html.escape(person.name)}</td><td>{_age(person.age)}</td></tr>"
        for person in (couple.person1, couple.person2)
    )
    assumptions = (
        f"<p>Monthly expenses: {financial.monthly_expenses:,.2f} {html.escape(financial.currency)}<br />"
        f"Default real interest rate: {financial.default_real_rate:g}%<br />"
        f"Expected inflation: {financial.inflation_assumption:g}% "
        '<span class="subtle">(reference only; figures are in real terms)</span></p>'
    )
    rows: list[str] = []
    for bucket in portfolio.buckets:
        contribution = "-"
        if bucket.monthly_contribution > 0:
            contribution = f"{_money(bucket.monthly_contribution)} until {_age(bucket.contribution_end_age)}"
        rows.append(
            "<tr>"
            + f"<td>{html.escape(bucket.name)}</td>"
            + f"<td>{html.escape(bucket.category.capitalize())}</td>"
            + f"<td>{html.escape(bucket.location)}</td>"
            + f"<td>{html.escape(_owner_label(bucket.owner))}</td>"
            + f"<td>{_money(bucket.current_value)}</td>"
            + f"<td>{bucket.real_rate:g}%</td>"
            + f"<td>{_age(bucket.access_age)}</td>"
            + f"<td>{_age(bucket.full_benefit_age)}</td>"
            + f"<td>{html.escape(contribution)}</td>"
            + f"<td>{bucket.early_penalty:g}%</td>"
            + f"<td>{html.escape(bucket.notes)}</td>"
            + "</tr>"
        )
    return (
        "<h3>Couple</h3><table><thead><tr><th>Name</th><th>Age</th></tr></thead><tbody>"
        + people
        + "</tbody></table>"
        + "<h3>Assumptions</h3>"
        + assumptions
        + "<h3>Retirement Accounts</h3><table><thead><tr>"
        "<th>Name</th><th>Type</th><th>Location</th><th>Owner</th><th>Current Value</th><th>Real Rate</th>"
        "<th>Access Age</th><th>Full Benefit Age</th><th>Contribution</th><th>Early Penalty</th><th>Notes</th>"
        "</tr></thead><tbody>"
        + "".join(rows)
        + "</tbody></table>"
    )


def _projection_tables(result: CalculationResult) -> str:
    sections: list[str] = []
    for item in result.bucket_calculations:
        rows: list[str] = []
        for label, point in item.calculations.items():
            penalty = f"{point.penalty_rate:g}%" if point.penalty_applied else "None"
            rows.append(
                f'<tr class="{"penalty" if point.penalty_applied else ""}">'
                + f"<td>{html.escape(MILESTONE_TITLES.get(label, label))}</td>"
                + f"<td>{_age(point.age)}</td>"
                + f"<td>{point.years_from_now:g}</td>"
                + f"<td>{_money(point.account_value)}</td>"
                + f"<td>{_money(point.monthly_payment)}</td>"
                + f"<td>{_money(point.annual_payment)}</td>"
                + f"<td>{penalty}</td>"
                + "</tr>"
            )
        if not rows:
            rows.append('<tr><td colspan="7">All milestone ages are already past.</td></tr>')
        sections.append(
            f"<h3>{html.escape(item.bucket.name)}</h3>"
            + "<table><thead><tr>"
            + "<th>Milestone</th><th>Age</th><th>Years</th><th>Account Value</th><th>Monthly</th><th>Annual</th><th>Penalty</th>"
            + "</tr></thead><tbody>"
            + "".join(rows)
            + "</tbody></table>"
        )
    if not sections:
        return "<p>No buckets to project.</p>"
    return "".join(sections) + '<p class="subtle">Payments amortize the projected value over 20 years.</p>'


def _custom_panel(portfolio: Portfolio, custom: CustomCalculationResult | None) -> str:
    if custom is None:
        return '<p>Run with <code>--custom</code> to choose a disbursement age, withdrawal period, and rate.</p>'

    rows: list[str] = []
    for item in custom.projections:
        projection = item.projection
        point = projection.point
        penalty = f"{point.penalty_rate:g}%" if point.penalty_applied else "None"
        rows.append(
            f'<tr class="{"penalty" if point.penalty_applied else ""}">'
            + f"<td>{html.escape(item.bucket.name)}</td>"
            + f"<td>{html.escape(_owner_label(item.bucket.owner))}</td>"
            + f"<td>{_age(projection.disbursement_age)}</td>"
            + f"<td>{projection.years_to_disbursement:g}</td>"
            + f"<td>{_money(point.account_value)}</td>"
            + f"<td>{_money(point.monthly_payment)}</td>"
            + f"<td>{_money(point.annual_payment)}</td>"
            + f"<td>{penalty}</td>"
            + "</tr>"
        )

    coverage = custom_summary(portfolio, custom)
    status = coverage_status(coverage.coverage_percent)
    gap_label = "Shortfall" if coverage.is_shortfall else "Surplus"
    return (
        f"<p>Disbursement age {_age(custom.disbursement_age)}, withdrawal period {custom.withdrawal_period:g} years, "
        f"interest rate {custom.interest_rate:g}%.</p>"
        + "<table><thead><tr>"
        + "<th>Bucket</th><th>Owner</th><th>Disbursement Age</th><th>Years</th><th>Account Value</th>"
        + "<th>Monthly</th><th>Annual</th><th>Penalty</th>"
        + "</tr></thead><tbody>"
        + "".join(rows)
        + "</tbody></table>"
        + f"<p>Total monthly income: {_money(coverage.total_monthly_income)}<br />"
        + f'Expense coverage: <strong class="coverage-{status}">{_coverage_text(coverage)}</strong><br />'
        + f"{gap_label}: {_money(abs(coverage.gap))} per month</p>"
    )


def _validation_panel(validation: ValidationResult) -> str:
    rows: list[str] = []
    for msg in validation.errors:
        rows.append(f"<tr><td>Error</td><td>{html.escape(msg)}</td></tr>")
    for msg in validation.warnings:
        rows.append(f"<tr><td>Warning</td><td>{html.escape(msg)}</td></tr>")
    if not rows:
        rows.append("<tr><td>OK</td><td>No validation issues detected.</td></tr>")

    return "<table><thead><tr><th>Type</th><th>Detail</th></tr></thead><tbody>" + "".join(rows) + "</tbody></table>"


def result_payload(result: CalculationResult, custom: CustomCalculationResult | None = None) -> dict[str, Any]:
    payload = result.to_dict()
    if custom is not None:
        payload["custom_projection"] = custom.to_dict()
    return payload


def _script_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload).replace("</", "<\\/")


def render_report(
    portfolio: Portfolio,
    result: CalculationResult,
    portfolio_path: str,
    custom: CustomCalculationResult | None = None,
    validation: ValidationResult | None = None,
) -> str:
    if validation is None:
        validation = validate_portfolio(portfolio)
    portfolio_hash = hashlib.sha256(Path(portfolio_path).read_bytes()).hexdigest()[:12]
    names = f"{portfolio.couple.person1.name} & {portfolio.couple.person2.name}"
    title = f"Retirement Projections - {html.escape(names)}"
    timestamp = datetime.now(UTC).isoformat(timespec="seconds")
    subtitle = (
        f"Buckets: {len(portfolio.buckets)} | Currency: {html.escape(portfolio.financial.currency)} | "
        f"Generated: {timestamp} | Portfolio hash: {portfolio_hash}"
    )

    return render_html_document(
        title=title,
        subtitle=subtitle,
        summary_cards=_coverage_cards(portfolio_summary(portfolio, result), portfolio.financial.monthly_expenses),
        inputs_panel=_inputs_panel(portfolio),
        projection_tables=_projection_tables(result),
        custom_panel=_custom_panel(portfolio, custom),
        validation_table=_validation_panel(validation),
        payload_json=_script_json(result_payload(result, custom)),
    )


def write_report(path: str | Path, html_content: str) -> None:
    Path(path).write_text(html_content, encoding="utf-8")


def write_json(path: str | Path, payload: dict[str, Any]) -> None:
    Path(path).write_text(json.dumps(payload, indent=2), encoding="utf-8")
