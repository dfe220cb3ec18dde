# src/proptrack/analysis/mirr.py
from __future__ import annotations

import math
from datetime import date
from typing import Dict, Optional, Sequence

from proptrack.adapters.logging_utils import get_logger
from proptrack.domain.metrics import MIRRResult
from proptrack.domain.property import PropertyRecord

logger = get_logger(__name__)

AVG_DAYS_PER_MONTH = 30.44

DEFAULT_FINANCE_RATE = 4.0     # annual %, cost of capital for outflows
DEFAULT_REINVEST_RATE = 5.0    # annual %, return earned on inflows
DEFAULT_HORIZONS = (10, 20, 30, 40)


def _invalid(cash_flows: tuple[float, ...], pv: float = 0.0, fv: float = 0.0) -> MIRRResult:
    return MIRRResult(
        mirr_monthly=0.0,
        mirr_annual=0.0,
        pv_negative=pv,
        fv_positive=fv,
        cash_flows=cash_flows,
        is_valid=False,
    )


def calculate_mirr(
    cash_flows: Sequence[float],
    finance_rate_monthly: float = 0.04 / 12,
    reinvest_rate_monthly: float = 0.05 / 12,
) -> MIRRResult:
    """
    Modified Internal Rate of Return over a monthly cash-flow series.

    Rates here are monthly *fractions* (0.04 / 12), and the returned MIRR
    values are fractions too. Outflows are discounted to t=0 at the finance
    rate, inflows compounded to t=n at the reinvestment rate.

    Degenerate shapes (fewer than two periods, no outflows, no inflows),
    rates at or below -100% and overflowing growth factors come back with
    is_valid=False and zeroed rates instead of raising or returning NaN/inf.
    """
    flows = tuple(float(cf) for cf in cash_flows)
    n = len(flows) - 1

    if n <= 0:
        return _invalid(flows)

    # A rate of -100% or below has no discount or growth factor.
    if finance_rate_monthly <= -1 or reinvest_rate_monthly <= -1:
        return _invalid(flows)

    pv_negative = 0.0
    fv_positive = 0.0
    try:
        for t, cf in enumerate(flows):
            if cf < 0:
                pv_negative += cf / (1 + finance_rate_monthly) ** t
            elif cf > 0:
                fv_positive += cf * (1 + reinvest_rate_monthly) ** (n - t)
    except (OverflowError, ZeroDivisionError):
        return _invalid(flows)

    if pv_negative == 0 or fv_positive == 0:
        logger.debug(
            "mirr undefined for cash-flow shape",
            extra={"context": {"periods": n, "pv_negative": pv_negative, "fv_positive": fv_positive}},
        )
        return _invalid(flows, pv_negative, fv_positive)

    try:
        mirr_monthly = abs(fv_positive / pv_negative) ** (1 / n) - 1
        mirr_annual = (1 + mirr_monthly) ** 12 - 1
    except OverflowError:
        return _invalid(flows, pv_negative, fv_positive)

    if not (math.isfinite(mirr_monthly) and math.isfinite(mirr_annual)):
        return _invalid(flows, pv_negative, fv_positive)

    return MIRRResult(
        mirr_monthly=mirr_monthly,
        mirr_annual=mirr_annual,
        pv_negative=pv_negative,
        fv_positive=fv_positive,
        cash_flows=flows,
        is_valid=True,
    )


def months_held(purchase_date: date, as_of: date) -> int:
    days = (as_of - purchase_date).days
    return max(1, math.floor(days / AVG_DAYS_PER_MONTH))


def generate_historical_cash_flows(record: PropertyRecord, as_of: Optional[date] = None) -> list[float]:
    """
    Monthly flows from purchase to `as_of` (today by default), in cents:
    -purchase_price, then the monthly cash flow each month, with the current
    value added to the last month as if sold.
    """
    as_of = as_of or date.today()
    n_months = months_held(record.purchase_date, as_of)
    monthly = float(record.monthly_cash_flow)

    flows = [-float(record.purchase_price)]
    flows.extend([monthly] * n_months)
    flows[-1] += float(record.current_value)
    return flows


def generate_projected_cash_flows(
    record: PropertyRecord,
    projection_years: int,
    appreciation_rate: float = 3.5,
    rent_growth_rate: float = 3.0,
) -> list[float]:
    """
    Monthly flows for holding the property another `projection_years`,
    starting from its current value (treated as re-bought today).

    Rates are annual percentages, applied with monthly compounding.
    """
    n_months = max(int(projection_years), 0) * 12
    flows = [-float(record.current_value)]
    if n_months == 0:
        return flows

    # -100% or below wipes the value out rather than going complex
    monthly_growth = max(1 + rent_growth_rate / 100, 0.0) ** (1 / 12) - 1
    monthly_appreciation = max(1 + appreciation_rate / 100, 0.0) ** (1 / 12) - 1
    base = float(record.monthly_cash_flow)

    for month in range(1, n_months + 1):
        flows.append(base * (1 + monthly_growth) ** month)

    future_value = record.current_value * (1 + monthly_appreciation) ** n_months
    flows[-1] += future_value
    return flows


def calculate_property_mirrs(
    record: PropertyRecord,
    as_of: Optional[date] = None,
    *,
    finance_rate: float = DEFAULT_FINANCE_RATE,
    reinvest_rate: float = DEFAULT_REINVEST_RATE,
    horizons: Sequence[int] = DEFAULT_HORIZONS,
    appreciation_rate: float = 3.5,
    rent_growth_rate: float = 3.0,
) -> Dict[str, MIRRResult]:
    """
    MIRR from purchase to today plus one projected MIRR per horizon.

    Keys: "purchase_to_today", "today_plus_10y", ...
    """
    finance_monthly = finance_rate / 100 / 12
    reinvest_monthly = reinvest_rate / 100 / 12

    out: Dict[str, MIRRResult] = {
        "purchase_to_today": calculate_mirr(
            generate_historical_cash_flows(record, as_of), finance_monthly, reinvest_monthly
        )
    }
    for years in horizons:
        out[f"today_plus_{years}y"] = calculate_mirr(
            generate_projected_cash_flows(record, years, appreciation_rate, rent_growth_rate),
            finance_monthly,
            reinvest_monthly,
        )
    return out
