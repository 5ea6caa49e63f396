"""Portfolio schema dataclasses and JSON loading."""

from __future__ import annotations

from dataclasses import dataclass
import json
import math
from pathlib import Path
from typing import Any

DEFAULT_CURRENCY = "USD"
DEFAULT_REAL_RATE = 2.0
DEFAULT_INFLATION = 2.5

DEFAULT_CATEGORY = "private"
DEFAULT_OWNER = "person1"
DEFAULT_ACCESS_AGE = 65.0
DEFAULT_FULL_BENEFIT_AGE = 67.0
DEFAULT_CONTRIBUTION_END_AGE = 65.0


class SchemaError(ValueError):
    """Raised when raw JSON cannot be parsed into schema objects."""


def _expect_dict(value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaError(f"{path}: expected object")
    return value


def _expect_list(value: Any, path: str) -> list[Any]:
    if not isinstance(value, list):
        raise SchemaError(f"{path}: expected array")
    return value


def _require(data: dict[str, Any], key: str, path: str) -> Any:
    if key not in data:
        raise SchemaError(f"{path}.{key}: missing required field")
    return data[key]


def _optional(data: dict[str, Any], key: str, default: Any = None) -> Any:
    value = data.get(key)
    # Blank form fields arrive as "" and mean "use the default".
    if value is None or value == "":
        return default
    return value


def _number(value: Any, path: str) -> float:
    if isinstance(value, bool):
        raise SchemaError(f"{path}: expected number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise SchemaError(f"{path}: expected number") from None
    if not math.isfinite(number):
        raise SchemaError(f"{path}: expected finite number")
    return number


def _text(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True, slots=True)
class Person:
    name: str
    age: float

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "Person":
        return cls(
            name=_text(_require(data, "name", path)),
            age=_number(_require(data, "age", path), f"{path}.age"),
        )


@dataclass(frozen=True, slots=True)
class Couple:
    person1: Person
    person2: Person

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str = "couple") -> "Couple":
        person1 = Person.from_dict(_expect_dict(_require(data, "person1", path), f"{path}.person1"), f"{path}.person1")
        person2 = Person.from_dict(_expect_dict(_require(data, "person2", path), f"{path}.person2"), f"{path}.person2")
        return cls(person1=person1, person2=person2)

    @property
    def youngest_age(self) -> float:
        return min(self.person1.age, self.person2.age)

    @property
    def oldest_age(self) -> float:
        return max(self.person1.age, self.person2.age)


@dataclass(frozen=True, slots=True)
class Financial:
    monthly_expenses: float = 0.0
    currency: str = DEFAULT_CURRENCY
    default_real_rate: float = DEFAULT_REAL_RATE
    inflation_assumption: float = DEFAULT_INFLATION

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str = "financial") -> "Financial":
        return cls(
            monthly_expenses=_number(_optional(data, "monthly_expenses", 0.0), f"{path}.monthly_expenses"),
            currency=_text(_optional(data, "currency", DEFAULT_CURRENCY)),
            default_real_rate=_number(_optional(data, "default_real_rate", DEFAULT_REAL_RATE), f"{path}.default_real_rate"),
            inflation_assumption=_number(
                _optional(data, "inflation_assumption", DEFAULT_INFLATION), f"{path}.inflation_assumption"
            ),
        )


@dataclass(frozen=True, slots=True)
class Bucket:
    id: str
    name: str
    category: str
    location: str
    owner: str
    current_value: float
    real_rate: float
    access_age: float
    full_benefit_age: float
    monthly_contribution: float
    contribution_end_age: float
    early_penalty: float
    notes: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str, default_id: str, default_real_rate: float) -> "Bucket":
        def num(key: str, default: float) -> float:
            return _number(_optional(data, key, default), f"{path}.{key}")

        return cls(
            id=_text(_optional(data, "id", default_id)),
            name=_text(_require(data, "name", path)),
            category=_text(_optional(data, "type", DEFAULT_CATEGORY)),
            location=_text(_optional(data, "location", "")),
            owner=_text(_optional(data, "owner", DEFAULT_OWNER)),
            current_value=num("current_value", 0.0),
            real_rate=num("real_rate", default_real_rate),
            access_age=num("access_age", DEFAULT_ACCESS_AGE),
            full_benefit_age=num("full_benefit_age", DEFAULT_FULL_BENEFIT_AGE),
            monthly_contribution=num("monthly_contribution", 0.0),
            contribution_end_age=num("contribution_end_age", DEFAULT_CONTRIBUTION_END_AGE),
            early_penalty=num("early_penalty", 0.0),
            notes=_text(_optional(data, "notes", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.category,
            "location": self.location,
            "owner": self.owner,
            "current_value": self.current_value,
            "real_rate": self.real_rate,
            "access_age": self.access_age,
            "full_benefit_age": self.full_benefit_age,
            "monthly_contribution": self.monthly_contribution,
            "contribution_end_age": self.contribution_end_age,
            "early_penalty": self.early_penalty,
            "notes": self.notes,
        }


@dataclass(frozen=True, slots=True)
class Portfolio:
    couple: Couple
    financial: Financial
    buckets: tuple[Bucket, ...]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Portfolio":
        couple = Couple.from_dict(_expect_dict(_require(data, "couple", "portfolio"), "couple"))
        financial = Financial.from_dict(_expect_dict(_optional(data, "financial", {}), "financial"))
        buckets: list[Bucket] = []
        for idx, item in enumerate(_expect_list(_optional(data, "buckets", []), "buckets")):
            path = f"buckets[{idx}]"
            raw = _expect_dict(item, path)
            if not _optional(raw, "name"):
                continue
            buckets.append(Bucket.from_dict(raw, path, str(idx + 1), financial.default_real_rate))
        return cls(couple=couple, financial=financial, buckets=tuple(buckets))


def load_portfolio(path: str | Path) -> Portfolio:
    """Load portfolio JSON into strongly-typed dataclasses."""
    source = Path(path)
    raw = json.loads(source.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise SchemaError("portfolio: root must be a JSON object")
    return Portfolio.from_dict(raw)
