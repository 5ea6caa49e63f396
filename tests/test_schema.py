import pytest

from tests.helpers import SAMPLE_PORTFOLIO, clone_portfolio, write_portfolio
from bucketplan.schema import (
    DEFAULT_ACCESS_AGE,
    DEFAULT_CONTRIBUTION_END_AGE,
    DEFAULT_FULL_BENEFIT_AGE,
    SchemaError,
    load_portfolio,
)


def test_sample_portfolio_loads():
    portfolio = load_portfolio(SAMPLE_PORTFOLIO)

    assert portfolio.couple.person1.name == "Alice"
    assert portfolio.couple.person2.age == 60
    assert portfolio.financial.monthly_expenses == 5000
    assert [bucket.name for bucket in portfolio.buckets] == ["401k Account", "Social Security", "Joint Brokerage"]
    assert portfolio.buckets[0].id == "1"
    assert portfolio.buckets[1].category == "public"


def test_blank_real_rate_uses_portfolio_default():
    portfolio = load_portfolio(SAMPLE_PORTFOLIO)
    assert portfolio.buckets[2].real_rate == 3.0


def test_missing_bucket_fields_take_defaults(tmp_path, sample_portfolio_dict):
    data = clone_portfolio(sample_portfolio_dict)
    data["buckets"] = [{"name": "Pension"}]
    portfolio = load_portfolio(write_portfolio(tmp_path, data))

    bucket = portfolio.buckets[0]
    assert bucket.id == "1"
    assert bucket.category == "private"
    assert bucket.owner == "person1"
    assert bucket.current_value == 0
    assert bucket.real_rate == data["financial"]["default_real_rate"]
    assert bucket.access_age == DEFAULT_ACCESS_AGE
    assert bucket.full_benefit_age == DEFAULT_FULL_BENEFIT_AGE
    assert bucket.contribution_end_age == DEFAULT_CONTRIBUTION_END_AGE
    assert bucket.monthly_contribution == 0
    assert bucket.early_penalty == 0
    assert bucket.notes == ""


def test_explicit_zero_rate_is_kept(tmp_path, sample_portfolio_dict):
    data = clone_portfolio(sample_portfolio_dict)
    data["buckets"][0]["real_rate"] = 0
    portfolio = load_portfolio(write_portfolio(tmp_path, data))
    assert portfolio.buckets[0].real_rate == 0


def test_missing_financial_section_uses_defaults(tmp_path, sample_portfolio_dict):
    data = clone_portfolio(sample_portfolio_dict)
    del data["financial"]
    portfolio = load_portfolio(write_portfolio(tmp_path, data))

    assert portfolio.financial.currency == "USD"
    assert portfolio.financial.default_real_rate == 2.0
    assert portfolio.financial.inflation_assumption == 2.5
    assert portfolio.financial.monthly_expenses == 0


def test_unnamed_buckets_are_dropped(tmp_path, sample_portfolio_dict):
    data = clone_portfolio(sample_portfolio_dict)
    data["buckets"][1]["name"] = ""
    del data["buckets"][2]["name"]
    portfolio = load_portfolio(write_portfolio(tmp_path, data))

    assert [bucket.name for bucket in portfolio.buckets] == ["401k Account"]


def test_numeric_strings_are_coerced(tmp_path, sample_portfolio_dict):
    data = clone_portfolio(sample_portfolio_dict)
    data["couple"]["person1"]["age"] = "58"
    data["buckets"][0]["current_value"] = "1250.50"
    portfolio = load_portfolio(write_portfolio(tmp_path, data))

    assert portfolio.couple.person1.age == 58.0
    assert portfolio.buckets[0].current_value == 1250.5


def test_load_portfolio_rejects_non_object_root(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(SchemaError, match="portfolio: root must be a JSON object"):
        load_portfolio(path)


def test_load_portfolio_requires_couple(tmp_path, sample_portfolio_dict):
    data = clone_portfolio(sample_portfolio_dict)
    del data["couple"]

    with pytest.raises(SchemaError, match=r"portfolio\.couple: missing required field"):
        load_portfolio(write_portfolio(tmp_path, data))


def test_load_portfolio_requires_person_age(tmp_path, sample_portfolio_dict):
    data = clone_portfolio(sample_portfolio_dict)
    del data["couple"]["person2"]["age"]

    with pytest.raises(SchemaError, match=r"couple\.person2\.age: missing required field"):
        load_portfolio(write_portfolio(tmp_path, data))


def test_load_portfolio_rejects_non_numeric_value(tmp_path, sample_portfolio_dict):
    data = clone_portfolio(sample_portfolio_dict)
    data["buckets"][0]["current_value"] = "lots"

    with pytest.raises(SchemaError, match=r"buckets\[0\]\.current_value: expected number"):
        load_portfolio(write_portfolio(tmp_path, data))


@pytest.mark.parametrize("raw", ["nan", "inf", "-inf", "Infinity"])
def test_load_portfolio_rejects_non_finite_value(tmp_path, sample_portfolio_dict, raw):
    data = clone_portfolio(sample_portfolio_dict)
    data["buckets"][0]["current_value"] = raw

    with pytest.raises(SchemaError, match=r"buckets\[0\]\.current_value: expected finite number"):
        load_portfolio(write_portfolio(tmp_path, data))


def test_load_portfolio_rejects_bare_nan_literal(tmp_path):
    path = tmp_path / "portfolio.json"
    path.write_text(
        '{"couple": {"person1": {"name": "A", "age": 60}, "person2": {"name": "B", "age": NaN}}}',
        encoding="utf-8",
    )

    with pytest.raises(SchemaError, match=r"couple\.person2\.age: expected finite number"):
        load_portfolio(path)


def test_load_portfolio_rejects_wrong_collection_types(tmp_path, sample_portfolio_dict):
    data = clone_portfolio(sample_portfolio_dict)
    data["buckets"] = {}

    with pytest.raises(SchemaError, match=r"buckets: expected array"):
        load_portfolio(write_portfolio(tmp_path, data))


def test_load_portfolio_rejects_invalid_nested_object_type(tmp_path, sample_portfolio_dict):
    data = clone_portfolio(sample_portfolio_dict)
    data["couple"]["person1"] = "bad"

    with pytest.raises(SchemaError, match=r"couple\.person1: expected object"):
        load_portfolio(write_portfolio(tmp_path, data))


def test_bucket_to_dict_uses_form_field_names():
    bucket = load_portfolio(SAMPLE_PORTFOLIO).buckets[0]
    data = bucket.to_dict()

    assert data["type"] == "private"
    assert "category" not in data
    assert data["access_age"] == 59.5
