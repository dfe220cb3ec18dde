from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from proptrack.domain.property import PropertyRecord


@dataclass(frozen=True)
class AmortizationResult:
    monthly_payment: float
    outstanding_balance: float
    elapsed_months: int
    remaining_months: int


@dataclass(frozen=True)
class RealAppreciationMetrics:
    """
    Appreciation-only return, nominal and inflation adjusted.

    `real_roi` here ignores cash flow entirely; see TrueROIMetrics for the
    figure that includes rent.
    """
    nominal_roi: float              # %, 2dp
    inflation_adjusted_price: int   # cents
    real_roi: float                 # %, total over the holding period
    real_appreciation_rate: float   # %, annualized
    inflation_factor: float         # 3dp
    total_inflation: float          # %

    @classmethod
    def zero(cls, purchase_price: int) -> "RealAppreciationMetrics":
        return cls(
            nominal_roi=0.0,
            inflation_adjusted_price=purchase_price,
            real_roi=0.0,
            real_appreciation_rate=0.0,
            inflation_factor=1.0,
            total_inflation=0.0,
        )


@dataclass(frozen=True)
class TrueROIMetrics:
    total_roi: float            # %
    annualized_roi: float       # %
    total_cash_flow: int        # cents
    appreciation_return: float  # % of purchase price from appreciation
    cash_flow_return: float     # % of purchase price from cash flow

    @classmethod
    def zero(cls) -> "TrueROIMetrics":
        return cls(
            total_roi=0.0,
            annualized_roi=0.0,
            total_cash_flow=0,
            appreciation_return=0.0,
            cash_flow_return=0.0,
        )


@dataclass(frozen=True)
class MIRRResult:
    mirr_monthly: float
    mirr_annual: float
    pv_negative: float
    fv_positive: float
    cash_flows: tuple[float, ...]
    is_valid: bool


@dataclass(frozen=True)
class ProjectionRow:
    year: int
    market_value: int
    monthly_rent: int
    annual_rent: int
    annual_expenses: int
    net_yield: int               # annual rent - annual expenses
    net_yield_pct: float         # net yield / market value, %
    annual_mortgage: int
    cash_at_hand: int            # net yield - annual mortgage
    net_equity: int
    selling_costs: int
    capital_gains_tax: int
    after_tax_net_equity: int
    tax_benefits: int
    cap_rate: float              # never inflation adjusted
    cash_on_cash: float
    inflation_adjusted: bool = False

    def __post_init__(self) -> None:
        if self.year < 0:
            raise ValueError("projection year must be non-negative")


@dataclass(frozen=True)
class TimeseriesRow:
    """
    One year of a hold-and-sell time series. Money in cents; `_today` and
    `_pv` figures are deflated to today's money.
    """
    year: int
    market_value: int
    market_value_today: int
    elapsed_term_months: int
    remaining_term_months: int
    outstanding_balance: int         # after this year's payments
    cumulative_principal_paid: int
    selling_costs: int
    capital_gains_tax: int
    capital_gains_tax_today: int
    net_equity_nominal: int          # value - balance - selling costs - CGT
    net_equity_today: int
    annual_net_yield: int
    cumulative_net_yield_pv: int
    annual_mortgage: int
    annual_mortgage_pv: int
    cumulative_mortgage_pv: int      # plateaus once the loan is paid off
    net_gain: int                    # 0 in year 0

    def __post_init__(self) -> None:
        if self.year < 0:
            raise ValueError("time series year must be non-negative")


@dataclass(frozen=True)
class PortfolioEntry:
    """One property reduced to what the portfolio score needs."""
    real_roi: float          # %, annualized
    monthly_rent: int        # cents
    monthly_expenses: int    # cents
    market_value: int        # cents

    @property
    def is_rent_generating(self) -> bool:
        return self.monthly_rent > 0

    @property
    def efficiency(self) -> float:
        if self.market_value <= 0:
            return 0.0
        return (self.monthly_rent - self.monthly_expenses) * 12 / self.market_value * 100


@dataclass(frozen=True)
class PortfolioMetrics:
    n_properties: int
    n_rent_generating: int
    real_roi_all: float
    real_roi_rent_generating: float
    total_cash_at_hand: int
    efficiency: float
    roi_stars: int
    efficiency_stars: int
    overall_rating: float

    @classmethod
    def empty(cls) -> "PortfolioMetrics":
        return cls(
            n_properties=0,
            n_rent_generating=0,
            real_roi_all=0.0,
            real_roi_rent_generating=0.0,
            total_cash_at_hand=0,
            efficiency=0.0,
            roi_stars=1,
            efficiency_stars=1,
            overall_rating=1.0,
        )


RankingSort = Literal["overall", "real_roi", "cap_rate", "monthly_net_yield", "real_appreciation"]


@dataclass(frozen=True)
class PropertyRanking:
    property: PropertyRecord
    real_roi: float
    real_appreciation_rate: float
    cap_rate: float
    monthly_net_yield: float
    monthly_cash_flow: int
    score: float
