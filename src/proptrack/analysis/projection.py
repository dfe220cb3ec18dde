# src/proptrack/analysis/projection.py
from __future__ import annotations

from dataclasses import asdict
from typing import Iterable, List, Sequence

import pandas as pd

from proptrack.analysis.amortization import interest_paid_between
from proptrack.domain.metrics import ProjectionRow
from proptrack.domain.property import PropertyRecord
from proptrack.domain.settings import CountrySettings

DEFAULT_HORIZON_YEARS = (0, 1, 2, 3, 4, 5, 10, 15, 25, 30)

# Rent growth tracks this share of property appreciation.
RENT_GROWTH_SHARE = 0.7
EXPENSE_GROWTH_RATE = 0.02

# Residential depreciation: 80% of the price is building, written off over 27.5 years.
BUILDING_RATIO = 0.8
DEPRECIATION_YEARS = 27.5


def _normalize_years(years: Iterable[int]) -> List[int]:
    out = sorted(int(y) for y in years)
    if any(y < 0 for y in out):
        raise ValueError("projection years must be non-negative")
    if len(set(out)) != len(out):
        raise ValueError("projection years must be unique")
    return out


def _mortgage_months_in_year(record: PropertyRecord, year: int) -> int:
    # No loan terms on file: assume the mortgage keeps being paid.
    if record.loan_term_months == 0:
        return 12 if record.monthly_mortgage > 0 else 0
    left = record.remaining_term_months - 12 * year
    return min(max(left, 0), 12)


def _interest_in_year(record: PropertyRecord, year: int) -> float:
    """Interest on the current balance, re-amortized over the remaining term."""
    remaining = record.remaining_term_months
    if record.outstanding_balance <= 0 or remaining <= 0:
        return 0.0
    return interest_paid_between(
        principal=record.outstanding_balance,
        annual_rate_pct=record.interest_rate,
        term_months=remaining,
        start_month=12 * year,
        end_month=12 * year + 12,
    )


def project_year(
    record: PropertyRecord,
    settings: CountrySettings,
    year: int,
    inflation_adjusted: bool = False,
) -> ProjectionRow:
    """
    One projected year for a property. Money is in cents, like the record.

    Nominal formulas:
      market value   = current value * (1 + appreciation)^y
      monthly rent   = rent * (1 + 0.7 * appreciation)^y
      expenses       = expenses * 1.02^y
      net equity     = market value - (current value - current net equity)
    In inflation-adjusted mode every money figure is divided by
    (1 + inflation)^y. Cap rate is always nominal.
    """
    appreciation = settings.appreciation_rate / 100
    rent_growth = appreciation * RENT_GROWTH_SHARE

    market_value = record.current_value * (1 + appreciation) ** year
    monthly_rent = record.monthly_rent * (1 + rent_growth) ** year
    annual_rent = monthly_rent * 12
    annual_expenses = record.monthly_expenses * 12 * (1 + EXPENSE_GROWTH_RATE) ** year
    net_yield = annual_rent - annual_expenses

    # Debt already paid down is reflected in current net equity; no further amortization.
    net_equity = market_value - (record.current_value - record.current_net_equity)

    selling_costs = market_value * settings.selling_costs / 100
    capital_gains_tax = max(0.0, market_value - record.purchase_price) * settings.capital_gains_tax / 100
    after_tax_net_equity = net_equity - selling_costs - capital_gains_tax

    annual_mortgage = record.monthly_mortgage * _mortgage_months_in_year(record, year)
    cash_at_hand = net_yield - annual_mortgage

    depreciation = record.purchase_price * BUILDING_RATIO / DEPRECIATION_YEARS
    tax_benefits = depreciation + _interest_in_year(record, year)

    cap_rate = annual_rent / market_value * 100 if market_value > 0 else 0.0
    net_yield_pct = net_yield / market_value * 100 if market_value > 0 else 0.0
    cash_on_cash = cash_at_hand / record.down_payment * 100 if record.down_payment > 0 else 0.0

    deflator = 1.0
    if inflation_adjusted:
        deflator = (1 + settings.inflation_rate / 100) ** (-year)

    def money(x: float) -> int:
        return round(x * deflator)

    return ProjectionRow(
        year=year,
        market_value=money(market_value),
        monthly_rent=money(monthly_rent),
        annual_rent=money(annual_rent),
        annual_expenses=money(annual_expenses),
        net_yield=money(net_yield),
        net_yield_pct=round(net_yield_pct, 2),
        annual_mortgage=money(annual_mortgage),
        cash_at_hand=money(cash_at_hand),
        net_equity=money(net_equity),
        selling_costs=money(selling_costs),
        capital_gains_tax=money(capital_gains_tax),
        after_tax_net_equity=money(after_tax_net_equity),
        tax_benefits=money(tax_benefits),
        cap_rate=round(cap_rate, 2),
        cash_on_cash=round(cash_on_cash, 2),
        inflation_adjusted=inflation_adjusted,
    )


def generate_projection(
    record: PropertyRecord,
    settings: CountrySettings,
    years: Sequence[int] = DEFAULT_HORIZON_YEARS,
    inflation_adjusted: bool = False,
) -> List[ProjectionRow]:
    """Rows for each requested horizon year, ascending."""
    return [project_year(record, settings, y, inflation_adjusted) for y in _normalize_years(years)]


def projection_frame(rows: Sequence[ProjectionRow]) -> pd.DataFrame:
    """Tabular view of a projection, indexed by year."""
    if not rows:
        return pd.DataFrame(columns=list(ProjectionRow.__dataclass_fields__)).set_index("year")
    return pd.DataFrame([asdict(r) for r in rows]).set_index("year")
