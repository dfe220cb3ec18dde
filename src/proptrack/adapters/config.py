# src/proptrack/adapters/config.py
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # App & logging
    LOG_LEVEL: str = Field(default="INFO")

    # Evaluation year used by ranking / portfolio views
    CURRENT_YEAR: int = Field(default=2025)

    # Country bundle selected when a caller does not name one
    DEFAULT_COUNTRY: str = Field(default="USA")

    # -----------------------------
    # MIRR defaults (annual, percent)
    # -----------------------------
    MIRR_FINANCE_RATE: float = Field(default=4.0)
    MIRR_REINVEST_RATE: float = Field(default=5.0)

    # -----------------------------
    # Projection defaults
    # -----------------------------
    HORIZON_YEARS: list[int] = Field(default=[0, 1, 2, 3, 4, 5, 10, 15, 25, 30])

    model_config = SettingsConfigDict(
        env_prefix="PROPTRACK_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("MIRR_FINANCE_RATE", "MIRR_REINVEST_RATE", mode="before")
    @classmethod
    def _to_non_negative_percent(cls, v: Any) -> Any:
        if v is None:
            return v
        if isinstance(v, str):
            v = v.strip().replace("%", "")
        try:
            f = float(v)
        except Exception as err:
            raise ValueError("rate must be numeric or percent-like") from err
        if f < 0:
            raise ValueError("rate must be non-negative")
        return f

    @field_validator("HORIZON_YEARS")
    @classmethod
    def _sorted_unique_years(cls, v: list[int]) -> list[int]:
        if any(y < 0 for y in v):
            raise ValueError("HORIZON_YEARS must be non-negative")
        return sorted(set(v))


config = AppConfig()
