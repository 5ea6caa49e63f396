import json

import pytest

from tests.helpers import SAMPLE_PORTFOLIO, clone_portfolio, write_portfolio
from bucketplan.engine import calculate, calculate_custom
from bucketplan.projection import project_bucket, project_custom
from bucketplan.schema import load_portfolio


def test_calculate_projects_every_bucket_in_order():
    portfolio = load_portfolio(SAMPLE_PORTFOLIO)
    result = calculate(portfolio)

    assert [item.bucket.name for item in result.bucket_calculations] == [b.name for b in portfolio.buckets]
    for bucket, item in zip(portfolio.buckets, result.bucket_calculations):
        assert item == project_bucket(bucket, portfolio.couple)


def test_reserved_sections_are_empty():
    result = calculate(load_portfolio(SAMPLE_PORTFOLIO))

    assert result.scenarios == []
    assert result.breakeven_analysis == []
    assert result.recommendations == []


def test_joint_bucket_in_sample_skips_past_milestones():
    result = calculate(load_portfolio(SAMPLE_PORTFOLIO))
    joint = result.bucket_calculations[2]

    assert list(joint.calculations) == ["age_70", "age_75", "age_80"]
    assert joint.calculations["age_70"].years_from_now == pytest.approx(12)


def test_to_dict_is_json_serializable():
    payload = calculate(load_portfolio(SAMPLE_PORTFOLIO)).to_dict()
    decoded = json.loads(json.dumps(payload))

    assert set(decoded) == {"bucket_calculations", "scenarios", "breakeven_analysis", "recommendations"}
    first = decoded["bucket_calculations"][0]
    assert first["bucket_info"]["name"] == "401k Account"
    assert set(first["calculations"]["access_age"]) == {
        "age",
        "years_from_now",
        "account_value",
        "monthly_payment",
        "annual_payment",
        "penalty_applied",
        "penalty_rate",
    }


def test_empty_portfolio_yields_empty_result(tmp_path, sample_portfolio_dict):
    data = clone_portfolio(sample_portfolio_dict)
    data["buckets"] = []
    result = calculate(load_portfolio(write_portfolio(tmp_path, data)))
    assert result.bucket_calculations == []


def test_calculate_custom_defaults_to_older_age_and_default_rate():
    portfolio = load_portfolio(SAMPLE_PORTFOLIO)
    custom = calculate_custom(portfolio)

    assert custom.disbursement_age == 60
    assert custom.withdrawal_period == 20
    assert custom.interest_rate == 3.0
    years = [item.projection.years_to_disbursement for item in custom.projections]
    assert years == [pytest.approx(2), 0, pytest.approx(2)]


def test_calculate_custom_clamps_each_bucket_independently():
    portfolio = load_portfolio(SAMPLE_PORTFOLIO)
    custom = calculate_custom(portfolio, disbursement_age=59, withdrawal_period=25, interest_rate=4.0)

    ages = [item.projection.disbursement_age for item in custom.projections]
    # Person 2 is already 60, so only that bucket is clamped.
    assert ages == [59, 60, 59]
    for bucket, item in zip(portfolio.buckets, custom.projections):
        assert item.projection == project_custom(bucket, portfolio.couple, 59, 25, 4.0)


def test_custom_result_to_dict():
    payload = calculate_custom(load_portfolio(SAMPLE_PORTFOLIO), 67, 30, 2.0).to_dict()
    decoded = json.loads(json.dumps(payload))

    assert decoded["parameters"] == {"disbursement_age": 67, "withdrawal_period": 30, "interest_rate": 2.0}
    assert len(decoded["projections"]) == 3
    assert decoded["projections"][1]["projection"]["interest_rate_used"] == 2.0
