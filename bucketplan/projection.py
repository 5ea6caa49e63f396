"""Per-bucket value and payout projections."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from .annuity import amortized_payment, contribution_future_value
from .schema import Bucket, Couple

# Milestone projections always amortize over this horizon.
WITHDRAWAL_YEARS = 20

FIXED_MILESTONES: tuple[tuple[str, float], ...] = (
    ("age_70", 70.0),
    ("age_75", 75.0),
    ("age_80", 80.0),
)

OWNERS = ("person1", "person2", "joint")


@dataclass(frozen=True, slots=True)
class ProjectionPoint:
    age: float
    years_from_now: float
    account_value: float
    monthly_payment: float
    annual_payment: float
    penalty_applied: bool
    penalty_rate: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class BucketResult:
    bucket: Bucket
    calculations: dict[str, ProjectionPoint]

    def to_dict(self) -> dict[str, Any]:
        return {
            "bucket_info": self.bucket.to_dict(),
            "calculations": {label: point.to_dict() for label, point in self.calculations.items()},
        }


@dataclass(frozen=True, slots=True)
class CustomProjection:
    point: ProjectionPoint
    withdrawal_period: float
    interest_rate_used: float

    @property
    def disbursement_age(self) -> float:
        return self.point.age

    @property
    def years_to_disbursement(self) -> float:
        return self.point.years_from_now

    def to_dict(self) -> dict[str, Any]:
        return {
            "disbursement_age": self.disbursement_age,
            "years_to_disbursement": self.years_to_disbursement,
            "account_value": self.point.account_value,
            "monthly_payment": self.point.monthly_payment,
            "annual_payment": self.point.annual_payment,
            "withdrawal_period": self.withdrawal_period,
            "interest_rate_used": self.interest_rate_used,
            "penalty_applied": self.point.penalty_applied,
            "penalty_rate": self.point.penalty_rate,
        }


@dataclass(frozen=True, slots=True)
class CustomBucketResult:
    bucket: Bucket
    projection: CustomProjection

    def to_dict(self) -> dict[str, Any]:
        return {"bucket_info": self.bucket.to_dict(), "projection": self.projection.to_dict()}


def resolve_owner_age(owner: str, couple: Couple) -> float:
    """Current age used as the growth baseline; joint accounts follow the younger person."""
    if owner == "person1":
        return couple.person1.age
    if owner == "person2":
        return couple.person2.age
    if owner == "joint":
        return couple.youngest_age
    raise ValueError(f"unknown bucket owner '{owner}'")


def milestone_ages(bucket: Bucket) -> list[tuple[str, float]]:
    return [("access_age", bucket.access_age), ("full_benefit_age", bucket.full_benefit_age), *FIXED_MILESTONES]


def _value_at(bucket: Bucket, owner_age: float, years: float, rate: float) -> float:
    value = bucket.current_value * (1 + rate) ** years
    if bucket.monthly_contribution > 0 and owner_age < bucket.contribution_end_age:
        contribution_years = min(years, bucket.contribution_end_age - owner_age)
        value += contribution_future_value(bucket.monthly_contribution * 12, rate, contribution_years)
    return value


def _apply_penalty(bucket: Bucket, target_age: float, monthly_payment: float) -> tuple[float, bool, float]:
    if target_age < bucket.full_benefit_age and bucket.early_penalty > 0:
        return monthly_payment * (100 - bucket.early_penalty) / 100, True, bucket.early_penalty
    return monthly_payment, False, 0.0


def _point(age: float, years: float, value: float, monthly: float, bucket: Bucket) -> ProjectionPoint:
    monthly, penalty_applied, penalty_rate = _apply_penalty(bucket, age, monthly)
    return ProjectionPoint(
        age=age,
        years_from_now=years,
        account_value=value,
        monthly_payment=monthly,
        annual_payment=monthly * 12,
        penalty_applied=penalty_applied,
        penalty_rate=penalty_rate,
    )


def project_bucket(bucket: Bucket, couple: Couple) -> BucketResult:
    """Project value and payout at each milestone age still ahead of the owner."""
    owner_age = resolve_owner_age(bucket.owner, couple)
    rate = bucket.real_rate / 100

    calculations: dict[str, ProjectionPoint] = {}
    for label, target_age in milestone_ages(bucket):
        if target_age <= owner_age:
            continue
        years = target_age - owner_age
        value = _value_at(bucket, owner_age, years, rate)
        # Annual compounding over the withdrawal horizon, reported per month.
        monthly = amortized_payment(value, rate, WITHDRAWAL_YEARS) / 12
        calculations[label] = _point(target_age, years, value, monthly, bucket)

    return BucketResult(bucket=bucket, calculations=calculations)


def project_custom(
    bucket: Bucket,
    couple: Couple,
    disbursement_age: float,
    withdrawal_period_years: float,
    custom_rate_pct: float,
) -> CustomProjection:
    """Project a single payout starting at ``disbursement_age`` over a chosen period and rate.

    A disbursement age at or before the owner's current age is clamped to the
    current age, i.e. payouts start immediately.
    """
    owner_age = resolve_owner_age(bucket.owner, couple)
    if disbursement_age <= owner_age:
        disbursement_age = owner_age
    years = disbursement_age - owner_age
    rate = custom_rate_pct / 100

    value = _value_at(bucket, owner_age, years, rate)
    # Monthly compounding; a zero rate reduces to value / months.
    monthly = amortized_payment(value, rate / 12, withdrawal_period_years * 12)

    return CustomProjection(
        point=_point(disbursement_age, years, value, monthly, bucket),
        withdrawal_period=withdrawal_period_years,
        interest_rate_used=custom_rate_pct,
    )
