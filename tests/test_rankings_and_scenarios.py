import pytest

from proptrack.analysis.amortization import monthly_payment
from proptrack.analysis.rankings import rank_properties, rank_property
from proptrack.analysis.scenarios import create_investment_scenarios, scenario_display_name
from fixtures.properties import owner_home, rental_condo


def test_rank_property_metrics():
    record = rental_condo()
    r = rank_property(record, current_year=2024)

    assert r.monthly_cash_flow == 40_000
    assert r.cap_rate == pytest.approx(40_000 * 12 / 15_000_000 * 100, abs=0.01)
    assert r.monthly_net_yield == pytest.approx(40_000 / 15_000_000 * 100, abs=0.01)
    assert r.real_roi == pytest.approx(7.07, abs=0.01)
    assert r.score == pytest.approx(0.3 * r.real_roi + 0.3 * r.cap_rate + 0.4 * r.monthly_net_yield, abs=0.02)


def test_rank_properties_best_first():
    strong = rental_condo(name="strong", monthly_rent=300_000)
    weak = rental_condo(name="weak", monthly_rent=100_000)
    ranked = rank_properties([weak, strong, owner_home()], current_year=2024)

    assert [r.property.name for r in ranked][0] == "strong"
    assert ranked[0].score >= ranked[1].score >= ranked[2].score


def test_rank_properties_sort_keys():
    records = [rental_condo(name="a"), owner_home(name="b")]
    by_appreciation = rank_properties(records, sort_by="real_appreciation", current_year=2024)
    rates = [r.real_appreciation_rate for r in by_appreciation]
    assert rates == sorted(rates, reverse=True)

    with pytest.raises(ValueError):
        rank_properties(records, sort_by="nope")


def test_scenarios_cover_current_max_debt_and_all_cash():
    record = rental_condo(interest_rate=6.0)
    scenarios = dict(create_investment_scenarios(record))

    assert scenarios["current"] is record

    max_debt = scenarios["max_debt"]
    assert max_debt.outstanding_balance == 12_000_000
    assert max_debt.down_payment == 3_000_000
    assert max_debt.elapsed_term_months == 0
    assert max_debt.monthly_mortgage == round(monthly_payment(12_000_000, 6.0, 360))
    assert max_debt.current_net_equity == 3_000_000

    zero = scenarios["zero_debt"]
    assert zero.monthly_mortgage == 0
    assert zero.outstanding_balance == 0
    assert zero.current_net_equity == record.current_value


def test_scenario_display_name():
    assert scenario_display_name("Condo", "max_debt") == "Condo (Max Debt)"
