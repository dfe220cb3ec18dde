# src/proptrack/analysis/timeseries.py
from __future__ import annotations

from dataclasses import asdict
from typing import List, Sequence, Tuple

import pandas as pd

from proptrack.adapters.logging_utils import get_logger
from proptrack.analysis.projection import EXPENSE_GROWTH_RATE, RENT_GROWTH_SHARE
from proptrack.domain.metrics import TimeseriesRow
from proptrack.domain.property import PropertyRecord
from proptrack.domain.settings import CountrySettings

logger = get_logger(__name__)


def _pay_down_year(balance: float, payment: float, monthly_rate: float) -> Tuple[float, float]:
    """
    Apply twelve monthly payments to `balance`.

    Returns (balance after the year, principal retired). A payment smaller
    than the interest due retires nothing; the balance never goes negative.
    """
    retired = 0.0
    for _ in range(12):
        if balance <= 0:
            break
        principal = min(max(payment - balance * monthly_rate, 0.0), balance)
        balance -= principal
        retired += principal
    return balance, retired


def generate_timeseries(
    record: PropertyRecord,
    settings: CountrySettings,
    target_year: int,
) -> List[TimeseriesRow]:
    """
    Year-by-year hold-and-sell view for years 0..target_year.

    The loan is paid down month by month with the record's actual monthly
    mortgage, so the balance reaches zero and mortgage outflows stop. Per year:

      net equity     = value - balance - selling costs - capital gains tax
      net gain (PV)  = net equity today + sum(net yield PV) - sum(mortgage PV)

    Net gain is 0 in year 0. A year's mortgage is charged in full when the
    loan is still open at the start of that year.
    """
    if target_year < 0:
        raise ValueError("target_year must be non-negative")

    appreciation = settings.appreciation_rate / 100
    inflation = settings.inflation_rate / 100
    rent_growth = appreciation * RENT_GROWTH_SHARE
    monthly_rate = record.interest_rate / 100 / 12
    payment = float(record.monthly_mortgage)

    balance = float(record.outstanding_balance)
    principal_paid = 0.0
    cumulative_yield_pv = 0.0
    cumulative_mortgage_pv = 0.0
    payoff_year = None

    rows: List[TimeseriesRow] = []
    for year in range(target_year + 1):
        deflator = (1 + inflation) ** (-year)

        annual_mortgage = 0.0
        if year > 0:
            if balance > 0:
                annual_mortgage = payment * 12
            balance, retired = _pay_down_year(balance, payment, monthly_rate)
            principal_paid += retired
            if balance <= 0 and payoff_year is None and record.outstanding_balance > 0:
                payoff_year = year

        market_value = record.current_value * (1 + appreciation) ** year
        monthly_rent = record.monthly_rent * (1 + rent_growth) ** year
        monthly_expenses = record.monthly_expenses * (1 + EXPENSE_GROWTH_RATE) ** year
        annual_net_yield = (monthly_rent - monthly_expenses) * 12

        if year > 0:
            cumulative_yield_pv += annual_net_yield * deflator
            cumulative_mortgage_pv += annual_mortgage * deflator

        selling_costs = market_value * settings.selling_costs / 100
        capital_gains_tax = max(0.0, market_value - record.purchase_price) * settings.capital_gains_tax / 100
        net_equity = market_value - balance - selling_costs - capital_gains_tax
        net_equity_today = net_equity * deflator

        net_gain = 0.0
        if year > 0:
            net_gain = net_equity_today + cumulative_yield_pv - cumulative_mortgage_pv

        elapsed = 0
        if record.loan_term_months > 0:
            elapsed = min(record.elapsed_term_months + 12 * year, record.loan_term_months)

        rows.append(
            TimeseriesRow(
                year=year,
                market_value=round(market_value),
                market_value_today=round(market_value * deflator),
                elapsed_term_months=elapsed,
                remaining_term_months=max(record.loan_term_months - elapsed, 0),
                outstanding_balance=round(balance),
                cumulative_principal_paid=round(principal_paid),
                selling_costs=round(selling_costs),
                capital_gains_tax=round(capital_gains_tax),
                capital_gains_tax_today=round(capital_gains_tax * deflator),
                net_equity_nominal=round(net_equity),
                net_equity_today=round(net_equity_today),
                annual_net_yield=round(annual_net_yield),
                cumulative_net_yield_pv=round(cumulative_yield_pv),
                annual_mortgage=round(annual_mortgage),
                annual_mortgage_pv=round(annual_mortgage * deflator),
                cumulative_mortgage_pv=round(cumulative_mortgage_pv),
                net_gain=round(net_gain),
            )
        )

    logger.debug(
        "time series generated",
        extra={"context": {"name": record.name, "target_year": target_year, "payoff_year": payoff_year}},
    )
    return rows


def net_gain_pv(record: PropertyRecord, settings: CountrySettings, year: int) -> int:
    """Net gain in today's money after holding `year` more years."""
    if year == 0:
        return 0
    return generate_timeseries(record, settings, year)[-1].net_gain


def timeseries_frame(rows: Sequence[TimeseriesRow]) -> pd.DataFrame:
    if not rows:
        return pd.DataFrame(columns=list(TimeseriesRow.__dataclass_fields__)).set_index("year")
    return pd.DataFrame([asdict(r) for r in rows]).set_index("year")
