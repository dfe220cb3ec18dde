# src/proptrack/analysis/portfolio.py
from __future__ import annotations

import math
from typing import Iterable, Sequence

import numpy as np

from proptrack.analysis.appreciation import calculate_true_roi
from proptrack.domain.inflation import DEFAULT_CURRENT_YEAR
from proptrack.domain.metrics import PortfolioEntry, PortfolioMetrics
from proptrack.domain.property import PropertyRecord

MIN_STARS = 1
MAX_STARS = 5


def star_rating(rate_pct: float) -> int:
    """
    Fixed banding: up to 2% -> 1 star, (2, 4] -> 2, ... above 8% -> 5.
    """
    if math.isnan(rate_pct):
        return MIN_STARS
    # clamp first so +-inf never reaches ceil()
    bounded = min(max(rate_pct, 0.0), 2.0 * MAX_STARS)
    return int(min(max(math.ceil(bounded / 2), MIN_STARS), MAX_STARS))


def _mean_nonzero(values: np.ndarray) -> float:
    defined = values[values != 0.0]
    if defined.size == 0:
        return 0.0
    return float(np.mean(defined))


def aggregate_portfolio(entries: Sequence[PortfolioEntry]) -> PortfolioMetrics:
    """
    Reduction step: per-property real ROI / rent / value collapsed into the
    portfolio score.

    Real ROI means only include properties with a defined (nonzero) rate.
    Cash at hand and efficiency only count rent-generating properties.
    """
    if not entries:
        return PortfolioMetrics.empty()

    roi = np.asarray([e.real_roi for e in entries], dtype=float)
    rent = np.asarray([e.monthly_rent for e in entries], dtype=float)
    expenses = np.asarray([e.monthly_expenses for e in entries], dtype=float)
    value = np.asarray([e.market_value for e in entries], dtype=float)

    renting = rent > 0

    real_roi_all = _mean_nonzero(roi)
    real_roi_renting = _mean_nonzero(roi[renting])

    total_cash = float(np.sum((rent[renting] - expenses[renting]) * 12.0))
    renting_value = float(np.sum(value[renting]))
    efficiency = total_cash / renting_value * 100 if renting_value > 0 else 0.0

    roi_stars = star_rating(real_roi_renting)
    efficiency_stars = star_rating(efficiency)

    return PortfolioMetrics(
        n_properties=len(entries),
        n_rent_generating=int(renting.sum()),
        real_roi_all=round(real_roi_all, 2),
        real_roi_rent_generating=round(real_roi_renting, 2),
        total_cash_at_hand=round(total_cash),
        efficiency=round(efficiency, 2),
        roi_stars=roi_stars,
        efficiency_stars=efficiency_stars,
        overall_rating=(roi_stars + efficiency_stars) / 2,
    )


def entry_from_record(record: PropertyRecord, current_year: int = DEFAULT_CURRENT_YEAR) -> PortfolioEntry:
    roi = calculate_true_roi(
        record.purchase_price,
        record.current_value,
        record.monthly_rent,
        record.monthly_expenses,
        record.monthly_mortgage,
        record.purchase_date,
        current_year,
    )
    return PortfolioEntry(
        real_roi=roi.annualized_roi,
        monthly_rent=record.actual_monthly_rent,
        monthly_expenses=record.monthly_expenses,
        market_value=record.current_value,
    )


def summarize_records(
    records: Iterable[PropertyRecord],
    current_year: int = DEFAULT_CURRENT_YEAR,
) -> PortfolioMetrics:
    return aggregate_portfolio([entry_from_record(r, current_year) for r in records])
