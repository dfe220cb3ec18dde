from datetime import date

import pytest

from proptrack.analysis.appreciation import (
    calculate_inflation_adjusted_price,
    calculate_real_appreciation_metrics,
    calculate_true_roi,
    purchase_year_of,
)
from proptrack.domain.inflation import InflationTable

NO_INFLATION = InflationTable.from_pairs([], default_rate=0.0)


def test_purchase_year_accepts_strings_and_dates():
    assert purchase_year_of("2015-07-04") == 2015
    assert purchase_year_of("2015-07-04T00:00:00Z") == 2015
    assert purchase_year_of(date(2016, 1, 1)) == 2016


def test_zero_inflation_makes_real_equal_nominal():
    m = calculate_real_appreciation_metrics(
        10_000_000, 20_000_000, "2014-06-01", current_year=2024, table=NO_INFLATION
    )
    assert m.inflation_factor == 1.0
    assert m.total_inflation == 0.0
    assert m.inflation_adjusted_price == 10_000_000
    assert m.nominal_roi == pytest.approx(100.0)
    assert m.real_roi == pytest.approx(m.nominal_roi)
    # 2x over 10 years
    assert m.real_appreciation_rate == pytest.approx(7.18, abs=0.005)


def test_zero_inflation_single_year_rate_equals_nominal_roi():
    m = calculate_real_appreciation_metrics(
        10_000_000, 10_500_000, "2023-03-01", current_year=2024, table=NO_INFLATION
    )
    assert m.nominal_roi == pytest.approx(5.0)
    assert m.real_appreciation_rate == pytest.approx(m.nominal_roi)
    assert m.real_roi == pytest.approx(m.nominal_roi)


def test_real_metrics_use_historical_inflation():
    m = calculate_real_appreciation_metrics(10_000_000, 10_320_000, "2023-02-01", current_year=2024)
    assert m.inflation_factor == pytest.approx(1.032)
    assert m.inflation_adjusted_price == 10_320_000
    assert m.nominal_roi == pytest.approx(3.2)
    assert m.real_roi == pytest.approx(0.0, abs=0.01)
    assert m.real_appreciation_rate == pytest.approx(0.0, abs=0.01)


def test_rounding_boundaries():
    m = calculate_real_appreciation_metrics(10_000_000, 13_333_333, "2010-01-01", current_year=2024)
    assert m.nominal_roi == round(m.nominal_roi, 2)
    assert m.inflation_factor == round(m.inflation_factor, 3)
    assert isinstance(m.inflation_adjusted_price, int)


def test_same_year_purchase_is_all_zero():
    m = calculate_real_appreciation_metrics(10_000_000, 12_000_000, "2024-03-01", current_year=2024)
    assert m.nominal_roi == 0.0
    assert m.real_roi == 0.0
    assert m.real_appreciation_rate == 0.0
    assert m.total_inflation == 0.0
    assert m.inflation_factor == 1.0
    assert m.inflation_adjusted_price == 10_000_000


def test_future_purchase_and_zero_price_are_all_zero():
    assert calculate_real_appreciation_metrics(10_000_000, 12_000_000, "2030-01-01", 2024).real_roi == 0.0
    assert calculate_real_appreciation_metrics(0, 12_000_000, "2010-01-01", 2024).nominal_roi == 0.0
    assert calculate_true_roi(0, 12_000_000, 100, 0, 0, "2010-01-01", 2024).total_roi == 0.0
    assert calculate_true_roi(10_000, 12_000, 100, 0, 0, "2024-01-01", 2024).annualized_roi == 0.0


def test_true_roi_adds_cash_flow():
    r = calculate_true_roi(
        purchase_price=10_000_000,
        current_value=15_000_000,
        monthly_rent=150_000,
        monthly_expenses=50_000,
        monthly_mortgage=60_000,
        purchase_date="2014-06-01",
        current_year=2024,
    )
    # 400/mo for 10 years
    assert r.total_cash_flow == 4_800_000
    assert r.appreciation_return == pytest.approx(50.0)
    assert r.cash_flow_return == pytest.approx(48.0)
    assert r.total_roi == pytest.approx(98.0)
    assert r.annualized_roi == pytest.approx(7.07, abs=0.01)


def test_true_roi_total_loss_is_minus_100():
    r = calculate_true_roi(10_000_000, 0, 0, 0, 0, "2014-06-01", current_year=2024)
    assert r.total_roi == pytest.approx(-100.0)
    assert r.annualized_roi == pytest.approx(-100.0)


def test_inflation_adjusted_price():
    assert calculate_inflation_adjusted_price(10_000_000, "2023-05-05", 2024) == 10_320_000
    assert calculate_inflation_adjusted_price(10_000_000, "2024-05-05", 2024) == 10_000_000
