# src/proptrack/api/schemas.py
from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from proptrack.domain.metrics import RankingSort
from proptrack.domain.property import PropertyRecord
from proptrack.domain.settings import CountrySettings


# --------------------------------------------
# ROI / appreciation
# --------------------------------------------


class RealROIRequest(BaseModel):
    """Amounts in cents."""
    model_config = ConfigDict(extra="allow")

    purchase_price: int
    current_value: int
    purchase_date: date
    current_year: int | None = None


class TrueROIRequest(RealROIRequest):
    monthly_rent: int = 0
    monthly_expenses: int = 0
    monthly_mortgage: int = 0


# --------------------------------------------
# MIRR
# --------------------------------------------


class MIRRRequest(BaseModel):
    """
    Raw cash-flow MIRR. Rates are monthly fractions, e.g. 0.04 / 12.
    """
    model_config = ConfigDict(extra="allow")

    cash_flows: list[float]
    finance_rate_monthly: float = Field(0.04 / 12, gt=-1)
    reinvest_rate_monthly: float = Field(0.05 / 12, gt=-1)


class PropertyMIRRRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    property: PropertyRecord
    as_of: date | None = None
    horizons: list[int] = Field(default_factory=lambda: [10, 20, 30, 40])
    finance_rate: float | None = Field(None, description="Annual %, defaults to config")
    reinvest_rate: float | None = Field(None, description="Annual %, defaults to config")
    country: str | None = None


class MIRRResponse(BaseModel):
    mirr_monthly: float
    mirr_annual: float
    pv_negative: float
    fv_positive: float
    is_valid: bool
    mirr_annual_display: str
    periods: int


# --------------------------------------------
# Projection
# --------------------------------------------


class ProjectionRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    property: PropertyRecord
    country: str | None = None
    settings: CountrySettings | None = Field(None, description="Overrides the country bundle")
    years: list[int] | None = None
    inflation_adjusted: bool = False


class TimeseriesRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    property: PropertyRecord
    country: str | None = None
    settings: CountrySettings | None = Field(None, description="Overrides the country bundle")
    target_year: int = Field(30, ge=0, le=100)


# --------------------------------------------
# Portfolio / rankings
# --------------------------------------------


class PortfolioRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    properties: list[PropertyRecord] = Field(default_factory=list)
    current_year: int | None = None


class RankingsRequest(PortfolioRequest):
    sort_by: RankingSort = "overall"


class RankingItem(BaseModel):
    name: str
    real_roi: float
    real_appreciation_rate: float
    cap_rate: float
    monthly_net_yield: float
    monthly_cash_flow: int
    score: float


# --------------------------------------------
# Amortization
# --------------------------------------------


class AmortizationRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    principal: float = Field(..., ge=0)
    annual_rate: float = Field(..., ge=0, description="Percent, e.g. 6.5")
    term_months: int = Field(..., ge=0)
    elapsed_months: int = Field(0, ge=0)

    @model_validator(mode="after")
    def _elapsed_within_term(self) -> "AmortizationRequest":
        if self.elapsed_months > self.term_months:
            raise ValueError("elapsed_months cannot exceed term_months")
        return self


class InflationResponse(BaseModel):
    year: int
    rate: float | None
    is_default: bool
    effective_rate: float


class DictionaryItem(BaseModel):
    term: str
    type: str
    formula: str
    description: str


def dump(obj: Any) -> dict[str, Any]:
    """Dataclass results -> plain dicts for JSON responses."""
    if is_dataclass(obj):
        return asdict(obj)
    raise TypeError(f"cannot serialize {type(obj).__name__}")
