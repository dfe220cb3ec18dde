from datetime import date

import pytest

from proptrack.analysis.portfolio import (
    aggregate_portfolio,
    entry_from_record,
    star_rating,
    summarize_records,
)
from proptrack.domain.metrics import PortfolioEntry
from fixtures.properties import owner_home, rental_condo


def test_empty_portfolio_has_defined_defaults():
    m = aggregate_portfolio([])
    assert m.n_properties == 0
    assert m.real_roi_all == 0.0
    assert m.real_roi_rent_generating == 0.0
    assert m.total_cash_at_hand == 0
    assert m.efficiency == 0.0
    assert m.overall_rating == 1.0
    assert summarize_records([]).overall_rating == 1.0


@pytest.mark.parametrize(
    "rate, stars",
    [
        (-5.0, 1),
        (0.0, 1),
        (1.5, 1),
        (2.0, 1),
        (2.01, 2),
        (5.0, 3),
        (7.9, 4),
        (9.0, 5),
        (40.0, 5),
        (float("nan"), 1),
        (float("inf"), 5),
        (float("-inf"), 1),
    ],
)
def test_star_banding(rate, stars):
    assert star_rating(rate) == stars


def test_aggregate_mixed_portfolio():
    entries = [
        PortfolioEntry(real_roi=6.0, monthly_rent=200_000, monthly_expenses=50_000, market_value=20_000_000),
        # no rent: counts toward the all-properties mean only
        PortfolioEntry(real_roi=10.0, monthly_rent=0, monthly_expenses=10_000, market_value=30_000_000),
        # undefined (zero) real ROI is skipped in the means
        PortfolioEntry(real_roi=0.0, monthly_rent=100_000, monthly_expenses=40_000, market_value=10_000_000),
    ]
    m = aggregate_portfolio(entries)

    assert m.n_properties == 3
    assert m.n_rent_generating == 2
    assert m.real_roi_all == pytest.approx(8.0)
    assert m.real_roi_rent_generating == pytest.approx(6.0)
    assert m.total_cash_at_hand == (150_000 + 60_000) * 12
    assert m.efficiency == pytest.approx(8.4)
    assert m.roi_stars == 3
    assert m.efficiency_stars == 5
    assert m.overall_rating == pytest.approx(4.0)


def test_portfolio_without_rent_generating_properties():
    m = aggregate_portfolio(
        [PortfolioEntry(real_roi=3.0, monthly_rent=0, monthly_expenses=10_000, market_value=1_000_000)]
    )
    assert m.real_roi_all == pytest.approx(3.0)
    assert m.real_roi_rent_generating == 0.0
    assert m.efficiency == 0.0
    assert m.overall_rating == 1.0


def test_entry_from_record_uses_true_annualized_roi():
    entry = entry_from_record(rental_condo(), current_year=2024)
    assert entry.real_roi == pytest.approx(7.07, abs=0.01)
    assert entry.is_rent_generating
    assert entry.efficiency == pytest.approx((150_000 - 50_000) * 12 / 15_000_000 * 100)


def test_owner_occupied_home_is_not_rent_generating():
    entry = entry_from_record(owner_home(), current_year=2024)
    assert entry.monthly_rent == 0
    assert not entry.is_rent_generating


def test_summarize_records():
    m = summarize_records(
        [rental_condo(), owner_home(), rental_condo(purchase_date=date(2024, 1, 1))],
        current_year=2024,
    )
    assert m.n_properties == 3
    assert m.n_rent_generating == 2
    assert 1.0 <= m.overall_rating <= 5.0
