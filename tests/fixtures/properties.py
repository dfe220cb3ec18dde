# tests/fixtures/properties.py

from datetime import date

from proptrack.domain.property import PropertyRecord
from proptrack.domain.settings import CountrySettings


def rental_condo(**overrides) -> PropertyRecord:
    """
    $100k condo bought mid-2014, worth $150k, renting for $1,500 with $500
    expenses and a $600 mortgage. All amounts in cents.
    """
    fields = dict(
        name="Rental Condo",
        purchase_price=10_000_000,
        current_value=15_000_000,
        purchase_date=date(2014, 6, 1),
        monthly_rent=150_000,
        monthly_expenses=50_000,
        monthly_mortgage=60_000,
        interest_rate=4.0,
        loan_term_months=360,
        elapsed_term_months=120,
        outstanding_balance=6_500_000,
        down_payment=2_000_000,
    )
    fields.update(overrides)
    return PropertyRecord(**fields)


def owner_home(**overrides) -> PropertyRecord:
    """Owner-occupied, no rent, paid off."""
    fields = dict(
        name="Family Home",
        purchase_price=30_000_000,
        current_value=45_000_000,
        purchase_date=date(2010, 3, 15),
        monthly_expenses=40_000,
        is_investment_property=False,
        monthly_rent_potential=250_000,
    )
    fields.update(overrides)
    return PropertyRecord(**fields)


def million_dollar_rental(**overrides) -> PropertyRecord:
    """current_value of 1,000,000 with no debt."""
    fields = dict(
        name="Big Rental",
        purchase_price=800_000,
        current_value=1_000_000,
        purchase_date=date(2018, 1, 1),
        monthly_rent=5_000,
        monthly_expenses=1_000,
    )
    fields.update(overrides)
    return PropertyRecord(**fields)


def flat_settings(**overrides) -> CountrySettings:
    fields = dict(
        appreciation_rate=3.5,
        inflation_rate=2.5,
        selling_costs=6.0,
        capital_gains_tax=25.0,
    )
    fields.update(overrides)
    return CountrySettings(**fields)
