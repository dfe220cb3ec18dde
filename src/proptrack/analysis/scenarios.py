# src/proptrack/analysis/scenarios.py
from __future__ import annotations

from typing import List, Literal, Tuple

from proptrack.analysis.amortization import monthly_payment
from proptrack.domain.property import PropertyRecord

ScenarioType = Literal["current", "max_debt", "zero_debt"]

MAX_DEBT_LTV = 0.80

SCENARIO_LABELS = {
    "current": "Current",
    "max_debt": "Max Debt",
    "zero_debt": "0 Debt",
}


def create_investment_scenarios(record: PropertyRecord) -> List[Tuple[ScenarioType, PropertyRecord]]:
    """
    The property as held today, refinanced to 80% LTV of its current value
    on a fresh loan, and owned outright.

    The max-debt loan keeps the record's rate and term; with no term on file
    it falls back to 30 years.
    """
    term = record.loan_term_months or 360

    loan = round(record.current_value * MAX_DEBT_LTV)
    max_debt = record.model_copy(
        update={
            "outstanding_balance": loan,
            "down_payment": record.current_value - loan,
            "monthly_mortgage": round(monthly_payment(loan, record.interest_rate, term)),
            "loan_term_months": term,
            "elapsed_term_months": 0,
            "net_equity": record.current_value - loan,
        }
    )

    zero_debt = record.model_copy(
        update={
            "outstanding_balance": 0,
            "down_payment": record.current_value,
            "monthly_mortgage": 0,
            "interest_rate": 0.0,
            "loan_term_months": 0,
            "elapsed_term_months": 0,
            "net_equity": record.current_value,
        }
    )

    return [("current", record), ("max_debt", max_debt), ("zero_debt", zero_debt)]


def scenario_display_name(property_name: str, scenario: ScenarioType) -> str:
    return f"{property_name} ({SCENARIO_LABELS[scenario]})"
