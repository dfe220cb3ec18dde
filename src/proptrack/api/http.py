# src/proptrack/api/http.py
from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException, Query

from proptrack.adapters.config import config
from proptrack.adapters.logging_utils import get_logger
from proptrack.analysis.amortization import amortize
from proptrack.analysis.appreciation import calculate_real_appreciation_metrics, calculate_true_roi
from proptrack.analysis.formatting import format_mirr
from proptrack.analysis.mirr import calculate_mirr, calculate_property_mirrs
from proptrack.analysis.portfolio import summarize_records
from proptrack.analysis.projection import RENT_GROWTH_SHARE, generate_projection
from proptrack.analysis.rankings import rank_properties
from proptrack.analysis.timeseries import generate_timeseries
from proptrack.domain.dictionary import FINANCIAL_DICTIONARY, search
from proptrack.domain.inflation import HISTORICAL_INFLATION
from proptrack.domain.metrics import MIRRResult
from proptrack.domain.settings import CountrySettings, GlobalSettings

from .schemas import (
    AmortizationRequest,
    DictionaryItem,
    InflationResponse,
    MIRRRequest,
    MIRRResponse,
    PortfolioRequest,
    PropertyMIRRRequest,
    ProjectionRequest,
    RankingItem,
    RankingsRequest,
    RealROIRequest,
    TimeseriesRequest,
    TrueROIRequest,
    dump,
)

logger = get_logger(__name__)

app = FastAPI(title="proptrack")

_settings = GlobalSettings(selected_country=config.DEFAULT_COUNTRY)


def _country(name: str | None) -> CountrySettings:
    try:
        return _settings.for_country(name or _settings.selected_country)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


def _year(year: int | None) -> int:
    return year if year is not None else config.CURRENT_YEAR


def _mirr_response(result: MIRRResult) -> MIRRResponse:
    return MIRRResponse(
        mirr_monthly=result.mirr_monthly,
        mirr_annual=result.mirr_annual,
        pv_negative=result.pv_negative,
        fv_positive=result.fv_positive,
        is_valid=result.is_valid,
        mirr_annual_display=format_mirr(result.mirr_annual) if result.is_valid else "N/A",
        periods=max(len(result.cash_flows) - 1, 0),
    )


# -----------------------------
# ROI
# -----------------------------
@app.post("/roi/real")
def real_roi(body: RealROIRequest) -> dict[str, Any]:
    metrics = calculate_real_appreciation_metrics(
        body.purchase_price,
        body.current_value,
        body.purchase_date,
        _year(body.current_year),
        HISTORICAL_INFLATION,
    )
    return dump(metrics)


@app.post("/roi/true")
def true_roi(body: TrueROIRequest) -> dict[str, Any]:
    metrics = calculate_true_roi(
        body.purchase_price,
        body.current_value,
        body.monthly_rent,
        body.monthly_expenses,
        body.monthly_mortgage,
        body.purchase_date,
        _year(body.current_year),
    )
    return dump(metrics)


# -----------------------------
# MIRR
# -----------------------------
@app.post("/mirr", response_model=MIRRResponse)
def mirr(body: MIRRRequest) -> MIRRResponse:
    result = calculate_mirr(body.cash_flows, body.finance_rate_monthly, body.reinvest_rate_monthly)
    return _mirr_response(result)


@app.post("/properties/mirr", response_model=dict[str, MIRRResponse])
def property_mirrs(body: PropertyMIRRRequest) -> dict[str, MIRRResponse]:
    settings = _country(body.country)
    results = calculate_property_mirrs(
        body.property,
        body.as_of,
        finance_rate=body.finance_rate if body.finance_rate is not None else config.MIRR_FINANCE_RATE,
        reinvest_rate=body.reinvest_rate if body.reinvest_rate is not None else config.MIRR_REINVEST_RATE,
        horizons=body.horizons,
        appreciation_rate=settings.appreciation_rate,
        rent_growth_rate=settings.appreciation_rate * RENT_GROWTH_SHARE,
    )
    return {k: _mirr_response(v) for k, v in results.items()}


# -----------------------------
# Projection
# -----------------------------
@app.post("/projection")
def projection(body: ProjectionRequest) -> list[dict[str, Any]]:
    settings = body.settings or _country(body.country)
    years = body.years if body.years is not None else config.HORIZON_YEARS
    try:
        rows = generate_projection(body.property, settings, years, body.inflation_adjusted)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return [dump(r) for r in rows]


@app.post("/projection/timeseries")
def timeseries(body: TimeseriesRequest) -> list[dict[str, Any]]:
    settings = body.settings or _country(body.country)
    rows = generate_timeseries(body.property, settings, body.target_year)
    return [dump(r) for r in rows]


# -----------------------------
# Portfolio
# -----------------------------
@app.post("/portfolio")
def portfolio(body: PortfolioRequest) -> dict[str, Any]:
    metrics = summarize_records(body.properties, _year(body.current_year))
    logger.info(
        "portfolio summarized",
        extra={"context": {"n_properties": metrics.n_properties, "rating": metrics.overall_rating}},
    )
    return dump(metrics)


@app.post("/rankings", response_model=list[RankingItem])
def rankings(body: RankingsRequest) -> list[RankingItem]:
    ranked = rank_properties(body.properties, body.sort_by, _year(body.current_year))
    return [
        RankingItem(
            name=r.property.name,
            real_roi=r.real_roi,
            real_appreciation_rate=r.real_appreciation_rate,
            cap_rate=r.cap_rate,
            monthly_net_yield=r.monthly_net_yield,
            monthly_cash_flow=r.monthly_cash_flow,
            score=r.score,
        )
        for r in ranked
    ]


# -----------------------------
# Reference data
# -----------------------------
@app.post("/amortization")
def amortization(body: AmortizationRequest) -> dict[str, Any]:
    return dump(amortize(body.principal, body.annual_rate, body.term_months, body.elapsed_months))


@app.get("/inflation/{year}", response_model=InflationResponse)
def inflation(year: int) -> InflationResponse:
    rate = HISTORICAL_INFLATION.rate_for(year)
    return InflationResponse(
        year=year,
        rate=rate,
        is_default=rate is None,
        effective_rate=HISTORICAL_INFLATION.rate_or_default(year),
    )


@app.get("/dictionary", response_model=list[DictionaryItem])
def dictionary(q: str | None = Query(None, description="Substring filter")) -> list[DictionaryItem]:
    entries = search(q) if q else list(FINANCIAL_DICTIONARY)
    return [DictionaryItem(**e.model_dump()) for e in entries]


@app.get("/settings/countries", response_model=dict[str, CountrySettings])
def countries() -> dict[str, CountrySettings]:
    return dict(_settings.countries)
