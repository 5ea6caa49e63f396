"""Portfolio-wide projection runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .projection import BucketResult, CustomBucketResult, project_bucket, project_custom
from .schema import Portfolio

DEFAULT_WITHDRAWAL_PERIOD = 20.0


@dataclass(slots=True)
class CalculationResult:
    bucket_calculations: list[BucketResult]
    # Reserved result sections; nothing populates them yet.
    scenarios: list[Any] = field(default_factory=list)
    breakeven_analysis: list[Any] = field(default_factory=list)
    recommendations: list[Any] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "bucket_calculations": [item.to_dict() for item in self.bucket_calculations],
            "scenarios": list(self.scenarios),
            "breakeven_analysis": list(self.breakeven_analysis),
            "recommendations": list(self.recommendations),
        }


@dataclass(slots=True)
class CustomCalculationResult:
    disbursement_age: float
    withdrawal_period: float
    interest_rate: float
    projections: list[CustomBucketResult]

    def to_dict(self) -> dict[str, Any]:
        return {
            "parameters": {
                "disbursement_age": self.disbursement_age,
                "withdrawal_period": self.withdrawal_period,
                "interest_rate": self.interest_rate,
            },
            "projections": [item.to_dict() for item in self.projections],
        }


def calculate(portfolio: Portfolio) -> CalculationResult:
    """Run milestone projections for every bucket, preserving bucket order."""
    couple = portfolio.couple
    return CalculationResult(bucket_calculations=[project_bucket(bucket, couple) for bucket in portfolio.buckets])


def calculate_custom(
    portfolio: Portfolio,
    disbursement_age: float | None = None,
    withdrawal_period: float = DEFAULT_WITHDRAWAL_PERIOD,
    interest_rate: float | None = None,
) -> CustomCalculationResult:
    """Run the custom projection for every bucket.

    Defaults follow the projections form: payouts start at the older person's
    current age and use the portfolio's default real rate.
    """
    if disbursement_age is None:
        disbursement_age = portfolio.couple.oldest_age
    if interest_rate is None:
        interest_rate = portfolio.financial.default_real_rate

    projections = [
        CustomBucketResult(
            bucket=bucket,
            projection=project_custom(bucket, portfolio.couple, disbursement_age, withdrawal_period, interest_rate),
        )
        for bucket in portfolio.buckets
    ]
    return CustomCalculationResult(
        disbursement_age=disbursement_age,
        withdrawal_period=withdrawal_period,
        interest_rate=interest_rate,
        projections=projections,
    )
