# src/proptrack/analysis/appreciation.py
from __future__ import annotations

from datetime import date, datetime
from typing import Union

from proptrack.adapters.logging_utils import get_logger
from proptrack.domain.inflation import DEFAULT_CURRENT_YEAR, HISTORICAL_INFLATION, InflationTable
from proptrack.domain.metrics import RealAppreciationMetrics, TrueROIMetrics

logger = get_logger(__name__)

DateLike = Union[date, datetime, str]


def purchase_year_of(purchase_date: DateLike) -> int:
    if isinstance(purchase_date, (date, datetime)):
        return purchase_date.year
    return date.fromisoformat(str(purchase_date).strip()[:10]).year


def _annualized_pct(ratio: float, years: int) -> float:
    # A total loss (ratio <= 0) has no real root; report it as -100%.
    if ratio <= 0:
        return -100.0
    return (ratio ** (1 / years) - 1) * 100


def calculate_inflation_adjusted_price(
    purchase_price: int,
    purchase_date: DateLike,
    current_year: int = DEFAULT_CURRENT_YEAR,
    table: InflationTable = HISTORICAL_INFLATION,
) -> int:
    """Purchase price restated in current-year money, cents."""
    factor = table.cumulative_factor(purchase_year_of(purchase_date), current_year)
    return round(purchase_price * factor)


def calculate_real_appreciation_metrics(
    purchase_price: int,
    current_value: int,
    purchase_date: DateLike,
    current_year: int = DEFAULT_CURRENT_YEAR,
    table: InflationTable = HISTORICAL_INFLATION,
) -> RealAppreciationMetrics:
    """
    Appreciation-only return, nominal and net of inflation.

    Amounts are in cents. Future-dated purchases, same-year purchases and
    non-positive prices produce an all-zero result.
    """
    purchase_year = purchase_year_of(purchase_date)
    years_held = current_year - purchase_year

    if years_held <= 0 or purchase_price <= 0:
        logger.debug(
            "degenerate appreciation input",
            extra={"context": {"years_held": years_held, "purchase_price": purchase_price}},
        )
        return RealAppreciationMetrics.zero(purchase_price)

    nominal_roi = (current_value - purchase_price) / purchase_price * 100

    inflation_factor = table.cumulative_factor(purchase_year, current_year)
    adjusted_price = purchase_price * inflation_factor
    total_inflation = (inflation_factor - 1) * 100

    real_total = (current_value - adjusted_price) / adjusted_price * 100
    real_rate = _annualized_pct(current_value / adjusted_price, years_held)

    return RealAppreciationMetrics(
        nominal_roi=round(nominal_roi, 2),
        inflation_adjusted_price=round(adjusted_price),
        real_roi=round(real_total, 2),
        real_appreciation_rate=round(real_rate, 2),
        inflation_factor=round(inflation_factor, 3),
        total_inflation=round(total_inflation, 2),
    )


def calculate_true_roi(
    purchase_price: int,
    current_value: int,
    monthly_rent: int,
    monthly_expenses: int,
    monthly_mortgage: int,
    purchase_date: DateLike,
    current_year: int = DEFAULT_CURRENT_YEAR,
) -> TrueROIMetrics:
    """
    Total return including both appreciation and the cash flow collected
    over the holding period. Amounts are in cents.
    """
    years_held = current_year - purchase_year_of(purchase_date)

    if years_held <= 0 or purchase_price <= 0:
        logger.debug(
            "degenerate ROI input",
            extra={"context": {"years_held": years_held, "purchase_price": purchase_price}},
        )
        return TrueROIMetrics.zero()

    monthly_cash_flow = monthly_rent - monthly_expenses - monthly_mortgage
    total_cash_flow = monthly_cash_flow * 12 * years_held

    appreciation_gain = current_value - purchase_price
    total_return = appreciation_gain + total_cash_flow

    total_roi = total_return / purchase_price * 100
    annualized_roi = _annualized_pct((total_return + purchase_price) / purchase_price, years_held)

    return TrueROIMetrics(
        total_roi=round(total_roi, 2),
        annualized_roi=round(annualized_roi, 2),
        total_cash_flow=round(total_cash_flow),
        appreciation_return=round(appreciation_gain / purchase_price * 100, 2),
        cash_flow_return=round(total_cash_flow / purchase_price * 100, 2),
    )
