from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PropertyRecord(BaseModel):
    """
    Immutable facts about one property.

    Every monetary field is an integer number of cents.
    """
    model_config = ConfigDict(frozen=True)

    name: str = ""

    purchase_price: int = Field(..., ge=0, description="Price paid, cents")
    current_value: int = Field(..., ge=0, description="Estimated market value today, cents")
    purchase_date: date

    monthly_rent: int = Field(0, ge=0)
    monthly_expenses: int = Field(0, ge=0, description="Operating expenses, excluding mortgage")
    monthly_mortgage: int = Field(0, ge=0)

    # Loan terms
    interest_rate: float = Field(0.0, ge=0, description="Annual rate in percent, e.g. 6.5")
    loan_term_months: int = Field(0, ge=0)
    elapsed_term_months: int = Field(0, ge=0)
    outstanding_balance: int = Field(0, ge=0)

    net_equity: int | None = Field(None, description="Overrides current_value - outstanding_balance")
    down_payment: int = Field(0, ge=0)

    # Owner-occupied homes only carry a *potential* rent
    is_investment_property: bool = True
    monthly_rent_potential: int = Field(0, ge=0)

    @field_validator("interest_rate", mode="before")
    @classmethod
    def _percent_string(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().replace("%", "")
        return v

    @model_validator(mode="after")
    def _elapsed_within_term(self) -> "PropertyRecord":
        if self.elapsed_term_months > self.loan_term_months:
            raise ValueError("elapsed_term_months cannot exceed loan_term_months")
        return self

    @property
    def current_net_equity(self) -> int:
        if self.net_equity is not None:
            return self.net_equity
        return self.current_value - self.outstanding_balance

    @property
    def remaining_term_months(self) -> int:
        return self.loan_term_months - self.elapsed_term_months

    @property
    def monthly_cash_flow(self) -> int:
        """Rent minus operating expenses minus mortgage."""
        return self.monthly_rent - self.monthly_expenses - self.monthly_mortgage

    @property
    def actual_monthly_rent(self) -> int:
        # Non-investment properties contribute nothing to real income totals.
        return self.monthly_rent if self.is_investment_property else 0

    @property
    def effective_monthly_rent(self) -> int:
        """Actual rent for investments, rent potential for owner-occupied scenarios."""
        if self.is_investment_property:
            return self.monthly_rent
        return self.monthly_rent_potential
