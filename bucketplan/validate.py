"""Semantic validation for portfolios and custom projection parameters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .projection import OWNERS, resolve_owner_age
from .schema import Portfolio

CATEGORIES = {"private", "public"}
CURRENCIES = {"USD", "EUR", "GBP", "INR"}

MIN_PERSON_AGE = 18
MAX_PERSON_AGE = 100
MIN_BENEFIT_AGE = 50
MAX_BENEFIT_AGE = 100

MIN_WITHDRAWAL_PERIOD = 1
MAX_WITHDRAWAL_PERIOD = 50
MIN_CUSTOM_RATE = 0.0
MAX_CUSTOM_RATE = 15.0
MAX_DISBURSEMENT_AGE = 100

# Growth factors (1 + rate/100) must stay positive.
MIN_REAL_RATE = -100.0


@dataclass(slots=True)
class ValidationResult:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _check_enum(result: ValidationResult, path: str, value: str, allowed: Iterable[str]) -> None:
    allowed_set = set(allowed)
    if value not in allowed_set:
        expected = ", ".join(sorted(allowed_set))
        result.errors.append(f"{path}: '{value}' is not valid; expected one of [{expected}]")


def _check_min(result: ValidationResult, path: str, value: float, minimum: float) -> None:
    if value < minimum:
        result.errors.append(f"{path}: must be >= {minimum:g}")


def _check_max(result: ValidationResult, path: str, value: float, maximum: float) -> None:
    if value > maximum:
        result.errors.append(f"{path}: must be <= {maximum:g}")


def _check_rate(result: ValidationResult, path: str, value: float) -> None:
    if value <= MIN_REAL_RATE:
        result.errors.append(f"{path}: must be greater than {MIN_REAL_RATE:g}")


def validate_portfolio(portfolio: Portfolio) -> ValidationResult:
    result = ValidationResult()

    for key in ("person1", "person2"):
        person = getattr(portfolio.couple, key)
        base = f"couple.{key}"
        if not person.name.strip():
            result.errors.append(f"{base}.name: name is required")
        if not MIN_PERSON_AGE <= person.age <= MAX_PERSON_AGE:
            result.errors.append(f"{base}.age: must be between {MIN_PERSON_AGE} and {MAX_PERSON_AGE}")

    financial = portfolio.financial
    if financial.monthly_expenses <= 0:
        result.errors.append("financial.monthly_expenses: must be greater than 0")
    _check_rate(result, "financial.default_real_rate", financial.default_real_rate)
    if financial.currency not in CURRENCIES:
        result.warnings.append(f"financial.currency: '{financial.currency}' is not a standard option; used as a label only")

    if not portfolio.buckets:
        result.warnings.append("buckets: no named buckets; projections will be empty")

    bucket_ids: set[str] = set()
    for idx, bucket in enumerate(portfolio.buckets):
        base = f"buckets[{idx}]"
        if bucket.id in bucket_ids:
            result.errors.append(f"{base}.id: duplicate bucket id '{bucket.id}'")
        bucket_ids.add(bucket.id)

        _check_enum(result, f"{base}.type", bucket.category, CATEGORIES)
        _check_enum(result, f"{base}.owner", bucket.owner, OWNERS)
        _check_min(result, f"{base}.current_value", bucket.current_value, 0)
        _check_rate(result, f"{base}.real_rate", bucket.real_rate)
        _check_min(result, f"{base}.monthly_contribution", bucket.monthly_contribution, 0)
        _check_min(result, f"{base}.early_penalty", bucket.early_penalty, 0)
        _check_max(result, f"{base}.early_penalty", bucket.early_penalty, 100)

        for name in ("access_age", "full_benefit_age"):
            age = getattr(bucket, name)
            if not MIN_BENEFIT_AGE <= age <= MAX_BENEFIT_AGE:
                result.warnings.append(
                    f"{base}.{name}: {age:g} is outside the usual {MIN_BENEFIT_AGE}-{MAX_BENEFIT_AGE} range"
                )
        if bucket.full_benefit_age < bucket.access_age:
            result.warnings.append(
                f"{base}.full_benefit_age: {bucket.full_benefit_age:g} is below access_age {bucket.access_age:g}; "
                "the early penalty never applies from access onward"
            )

    return result


def validate_custom_parameters(
    portfolio: Portfolio,
    disbursement_age: float,
    withdrawal_period: float,
    interest_rate: float,
) -> ValidationResult:
    result = ValidationResult()

    if not MIN_WITHDRAWAL_PERIOD <= withdrawal_period <= MAX_WITHDRAWAL_PERIOD:
        result.errors.append(
            f"withdrawal_period: must be between {MIN_WITHDRAWAL_PERIOD} and {MAX_WITHDRAWAL_PERIOD} years"
        )
    if not MIN_CUSTOM_RATE <= interest_rate <= MAX_CUSTOM_RATE:
        result.errors.append(f"interest_rate: must be between {MIN_CUSTOM_RATE:g} and {MAX_CUSTOM_RATE:g} percent")
    _check_max(result, "disbursement_age", disbursement_age, MAX_DISBURSEMENT_AGE)

    for idx, bucket in enumerate(portfolio.buckets):
        if bucket.owner not in OWNERS:
            continue
        owner_age = resolve_owner_age(bucket.owner, portfolio.couple)
        if disbursement_age < owner_age:
            result.warnings.append(
                f"buckets[{idx}]: disbursement_age {disbursement_age:g} is before the owner's current age "
                f"{owner_age:g}; payouts start immediately"
            )

    return result
