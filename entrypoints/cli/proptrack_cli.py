from __future__ import annotations

import json
from dataclasses import asdict
from datetime import date
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import find_dotenv, load_dotenv
from loguru import logger

load_dotenv(find_dotenv())

from proptrack.adapters.config import config  # noqa: E402
from proptrack.analysis.appreciation import (  # noqa: E402
    calculate_real_appreciation_metrics,
    calculate_true_roi,
)
from proptrack.analysis.formatting import format_currency, format_mirr  # noqa: E402
from proptrack.analysis.mirr import calculate_property_mirrs  # noqa: E402
from proptrack.analysis.portfolio import summarize_records  # noqa: E402
from proptrack.analysis.projection import generate_projection, projection_frame  # noqa: E402
from proptrack.analysis.timeseries import generate_timeseries, timeseries_frame  # noqa: E402
from proptrack.domain.inflation import HISTORICAL_INFLATION  # noqa: E402
from proptrack.domain.property import PropertyRecord  # noqa: E402
from proptrack.domain.settings import GlobalSettings  # noqa: E402

app = typer.Typer(help="Property performance calculators (ROI, MIRR, projections).")


def _load_records(path: Path) -> list[PropertyRecord]:
    raw = json.loads(path.read_text(encoding="utf-8"))
    items = raw if isinstance(raw, list) else [raw]
    return [PropertyRecord.model_validate(item) for item in items]


def _load_one(path: Path) -> PropertyRecord:
    records = _load_records(path)
    if len(records) != 1:
        raise typer.BadParameter(f"{path} must contain exactly one property")
    return records[0]


@app.command("project")
def project_cmd(
    path: Path = typer.Argument(..., exists=True, help="Property JSON file"),
    country: Optional[str] = typer.Option(None, help="Country bundle; defaults to config"),
    year: List[int] = typer.Option(None, "--year", help="Horizon year(s); repeatable"),
    real: bool = typer.Option(False, "--real", help="Inflation-adjusted (today's money)"),
) -> None:
    """
    Print the multi-year projection table for one property.
    """
    record = _load_one(path)
    settings = GlobalSettings(selected_country=country or config.DEFAULT_COUNTRY).active()
    years = year or config.HORIZON_YEARS

    logger.info("Projecting property", name=record.name, years=list(years), real=real)
    rows = generate_projection(record, settings, years, inflation_adjusted=real)
    typer.echo(projection_frame(rows).to_string())


@app.command("timeseries")
def timeseries_cmd(
    path: Path = typer.Argument(..., exists=True, help="Property JSON file"),
    country: Optional[str] = typer.Option(None, help="Country bundle; defaults to config"),
    target_year: int = typer.Option(30, min=0, max=100, help="Last year of the series"),
) -> None:
    """
    Year-by-year loan payoff, net equity and net gain in today's money.
    """
    record = _load_one(path)
    settings = GlobalSettings(selected_country=country or config.DEFAULT_COUNTRY).active()

    logger.info("Building time series", name=record.name, target_year=target_year)
    rows = generate_timeseries(record, settings, target_year)
    typer.echo(timeseries_frame(rows).to_string())


@app.command("roi")
def roi_cmd(
    path: Path = typer.Argument(..., exists=True, help="Property JSON file"),
    current_year: Optional[int] = typer.Option(None, help="Evaluation year; defaults to config"),
) -> None:
    """
    Appreciation-only and cash-flow-inclusive ROI for one property.
    """
    record = _load_one(path)
    year = current_year or config.CURRENT_YEAR

    real = calculate_real_appreciation_metrics(
        record.purchase_price, record.current_value, record.purchase_date, year, HISTORICAL_INFLATION
    )
    true = calculate_true_roi(
        record.purchase_price,
        record.current_value,
        record.monthly_rent,
        record.monthly_expenses,
        record.monthly_mortgage,
        record.purchase_date,
        year,
    )
    typer.echo(json.dumps({"appreciation": asdict(real), "true_roi": asdict(true)}, indent=2))


@app.command("mirr")
def mirr_cmd(
    path: Path = typer.Argument(..., exists=True, help="Property JSON file"),
    as_of: Optional[str] = typer.Option(None, help="ISO date for purchase-to-today MIRR"),
) -> None:
    """
    Historical and projected MIRR for one property.
    """
    record = _load_one(path)
    when = date.fromisoformat(as_of) if as_of else None
    results = calculate_property_mirrs(
        record,
        when,
        finance_rate=config.MIRR_FINANCE_RATE,
        reinvest_rate=config.MIRR_REINVEST_RATE,
    )
    for name, result in results.items():
        shown = format_mirr(result.mirr_annual) if result.is_valid else "N/A"
        typer.echo(f"{name:<20} {shown}")


@app.command("portfolio")
def portfolio_cmd(
    path: Path = typer.Argument(..., exists=True, help="JSON list of properties"),
    current_year: Optional[int] = typer.Option(None),
) -> None:
    """
    Portfolio real ROI, efficiency and star rating.
    """
    records = _load_records(path)
    metrics = summarize_records(records, current_year or config.CURRENT_YEAR)
    logger.info("Portfolio summarized", n_properties=metrics.n_properties)

    typer.echo(f"Properties:        {metrics.n_properties}")
    typer.echo(f"Real ROI (all):    {metrics.real_roi_all:.2f}%")
    typer.echo(f"Real ROI (rented): {metrics.real_roi_rent_generating:.2f}%")
    typer.echo(f"Cash at hand:      {format_currency(metrics.total_cash_at_hand)}")
    typer.echo(f"Efficiency:        {metrics.efficiency:.2f}%")
    typer.echo(f"Rating:            {metrics.overall_rating:.1f} / 5")


@app.command("inflation")
def inflation_cmd(
    purchase_year: int = typer.Argument(...),
    current_year: Optional[int] = typer.Option(None),
) -> None:
    """
    Cumulative inflation factor since a purchase year.
    """
    year = current_year or config.CURRENT_YEAR
    factor = HISTORICAL_INFLATION.cumulative_factor(purchase_year, year)
    typer.echo(f"{purchase_year} -> {year}: x{factor:.3f} ({(factor - 1) * 100:.2f}% cumulative)")


if __name__ == "__main__":
    app()
