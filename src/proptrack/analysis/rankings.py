# src/proptrack/analysis/rankings.py
from __future__ import annotations

from typing import Iterable, List

from proptrack.analysis.appreciation import calculate_real_appreciation_metrics, calculate_true_roi
from proptrack.domain.inflation import DEFAULT_CURRENT_YEAR, HISTORICAL_INFLATION, InflationTable
from proptrack.domain.metrics import PropertyRanking, RankingSort
from proptrack.domain.property import PropertyRecord

# Weights of the overall ranking score
W_ROI = 0.3
W_CAP_RATE = 0.3
W_NET_YIELD = 0.4


def rank_property(
    record: PropertyRecord,
    current_year: int = DEFAULT_CURRENT_YEAR,
    table: InflationTable = HISTORICAL_INFLATION,
) -> PropertyRanking:
    real = calculate_real_appreciation_metrics(
        record.purchase_price,
        record.current_value,
        record.purchase_date,
        current_year,
        table,
    )
    true_roi = calculate_true_roi(
        record.purchase_price,
        record.current_value,
        record.monthly_rent,
        record.monthly_expenses,
        record.monthly_mortgage,
        record.purchase_date,
        current_year,
    )

    cash_flow = record.monthly_cash_flow
    cap_rate = 0.0
    net_yield = 0.0
    if record.current_value > 0:
        cap_rate = cash_flow * 12 / record.current_value * 100
        net_yield = cash_flow / record.current_value * 100

    score = true_roi.annualized_roi * W_ROI + cap_rate * W_CAP_RATE + net_yield * W_NET_YIELD

    return PropertyRanking(
        property=record,
        real_roi=true_roi.annualized_roi,
        real_appreciation_rate=real.real_appreciation_rate,
        cap_rate=round(cap_rate, 2),
        monthly_net_yield=round(net_yield, 2),
        monthly_cash_flow=cash_flow,
        score=round(score, 2),
    )


_SORT_KEYS = {
    "overall": lambda r: r.score,
    "real_roi": lambda r: r.real_roi,
    "cap_rate": lambda r: r.cap_rate,
    "monthly_net_yield": lambda r: r.monthly_net_yield,
    "real_appreciation": lambda r: r.real_appreciation_rate,
}


def rank_properties(
    records: Iterable[PropertyRecord],
    sort_by: RankingSort = "overall",
    current_year: int = DEFAULT_CURRENT_YEAR,
    table: InflationTable = HISTORICAL_INFLATION,
) -> List[PropertyRanking]:
    """Best first. Ties keep input order."""
    try:
        key = _SORT_KEYS[sort_by]
    except KeyError:
        raise ValueError(f"unknown sort key: {sort_by}") from None
    ranked = [rank_property(r, current_year, table) for r in records]
    return sorted(ranked, key=key, reverse=True)
