"""Expense coverage summaries built from projection results."""

from __future__ import annotations

from dataclasses import dataclass

from .engine import CalculationResult, CustomCalculationResult
from .schema import Portfolio

SUMMARY_MILESTONES = (
    ("access_age", "Early Access"),
    ("full_benefit_age", "Full Benefit"),
)


@dataclass(slots=True)
class ExpenseCoverage:
    label: str
    total_monthly_income: float
    monthly_expenses: float
    coverage_percent: float | None
    gap: float

    @property
    def is_shortfall(self) -> bool:
        return self.gap < 0


def milestone_total(result: CalculationResult, label: str) -> float:
    return sum(
        item.calculations[label].monthly_payment for item in result.bucket_calculations if label in item.calculations
    )


def custom_total(result: CustomCalculationResult) -> float:
    return sum(item.projection.point.monthly_payment for item in result.projections)


def expense_coverage(total_monthly_income: float, monthly_expenses: float, label: str) -> ExpenseCoverage:
    percent = None
    if monthly_expenses > 0:
        percent = total_monthly_income / monthly_expenses * 100
    return ExpenseCoverage(
        label=label,
        total_monthly_income=total_monthly_income,
        monthly_expenses=monthly_expenses,
        coverage_percent=percent,
        gap=total_monthly_income - monthly_expenses,
    )


def coverage_status(percent: float | None) -> str:
    if percent is None:
        return "unknown"
    if percent >= 100:
        return "good"
    if percent >= 75:
        return "partial"
    return "low"


def portfolio_summary(portfolio: Portfolio, result: CalculationResult) -> list[ExpenseCoverage]:
    """Coverage at the early-access and full-benefit milestones that pay anything."""
    rows: list[ExpenseCoverage] = []
    for key, label in SUMMARY_MILESTONES:
        total = milestone_total(result, key)
        if total > 0:
            rows.append(expense_coverage(total, portfolio.financial.monthly_expenses, label))
    return rows


def custom_summary(portfolio: Portfolio, result: CustomCalculationResult) -> ExpenseCoverage:
    return expense_coverage(custom_total(result), portfolio.financial.monthly_expenses, "Custom Projection")
