# src/proptrack/domain/settings.py
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _percent_like(v: Any) -> Any:
    if isinstance(v, str):
        v = v.strip().replace("%", "")
    return v


class CountrySettings(BaseModel):
    """
    Macro assumptions for one jurisdiction. All values are percentages
    (3.5 means 3.5%).
    """
    model_config = ConfigDict(frozen=True)

    appreciation_rate: float = Field(..., gt=-100, description="Annual real-estate appreciation, %")
    inflation_rate: float = Field(..., gt=-100, description="Annual CPI inflation, %")
    selling_costs: float = Field(..., ge=0, description="Selling costs as % of market value")
    capital_gains_tax: float = Field(..., ge=0, description="Capital gains tax, %")
    mortgage_rate: float = Field(0.0, ge=0, description="Prevailing mortgage APR, %")
    income_tax_rate: float = Field(0.0, ge=0, description="Marginal income tax, %")

    @field_validator(
        "appreciation_rate",
        "inflation_rate",
        "selling_costs",
        "capital_gains_tax",
        "mortgage_rate",
        "income_tax_rate",
        mode="before",
    )
    @classmethod
    def _strip_percent(cls, v: Any) -> Any:
        return _percent_like(v)


DEFAULT_COUNTRY_SETTINGS: dict[str, CountrySettings] = {
    "USA": CountrySettings(
        appreciation_rate=3.5,
        inflation_rate=2.5,
        selling_costs=6.0,
        capital_gains_tax=25.0,
        mortgage_rate=7.0,
        income_tax_rate=22.0,
    ),
    "Turkey": CountrySettings(
        appreciation_rate=12.0,
        inflation_rate=15.0,
        selling_costs=5.0,
        capital_gains_tax=20.0,
        mortgage_rate=30.0,
        income_tax_rate=20.0,
    ),
    "Canada": CountrySettings(
        appreciation_rate=4.0,
        inflation_rate=2.0,
        selling_costs=6.0,
        capital_gains_tax=25.0,
        mortgage_rate=5.5,
        income_tax_rate=26.0,
    ),
    "UK": CountrySettings(
        appreciation_rate=3.0,
        inflation_rate=2.5,
        selling_costs=3.0,
        capital_gains_tax=28.0,
        mortgage_rate=5.0,
        income_tax_rate=20.0,
    ),
}


class GlobalSettings(BaseModel):
    """
    Selected jurisdiction plus every known country bundle.

    Read-only during a calculation pass; changes go through `with_country`
    / `with_override`, which return new objects.
    """
    model_config = ConfigDict(frozen=True)

    selected_country: str = "USA"
    countries: dict[str, CountrySettings] = Field(
        default_factory=lambda: dict(DEFAULT_COUNTRY_SETTINGS)
    )

    def active(self) -> CountrySettings:
        try:
            return self.countries[self.selected_country]
        except KeyError:
            raise KeyError(f"unknown country: {self.selected_country}") from None

    def for_country(self, name: str) -> CountrySettings:
        try:
            return self.countries[name]
        except KeyError:
            raise KeyError(f"unknown country: {name}") from None

    def with_country(self, name: str) -> "GlobalSettings":
        self.for_country(name)
        return self.model_copy(update={"selected_country": name})

    def with_override(self, name: str, **changes: Any) -> "GlobalSettings":
        current = self.for_country(name)
        updated = CountrySettings(**(current.model_dump() | changes))
        countries = dict(self.countries)
        countries[name] = updated
        return self.model_copy(update={"countries": countries})
