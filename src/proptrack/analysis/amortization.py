# src/proptrack/analysis/amortization.py
from __future__ import annotations

import math

import numpy as np
import pandas as pd

from proptrack.domain.metrics import AmortizationResult


def monthly_payment(principal: float, annual_rate_pct: float, term_months: int) -> float:
    """
    Standard fixed-rate amortization formula:
    M = P * [ r(1+r)^n / ((1+r)^n - 1) ]
    P = loan principal
    r = monthly interest rate (annual % / 100 / 12)
    n = number of payments (months)
    """
    if term_months <= 0 or principal <= 0:
        return 0.0

    r = annual_rate_pct / 100.0 / 12.0
    n = term_months

    if r == 0:
        return principal / n

    # expm1/log1p: (1+r)^n - 1 stays nonzero for tiny r
    growth_minus_one = math.expm1(n * math.log1p(r))
    return principal * r * (growth_minus_one + 1) / growth_minus_one


def remaining_balance(
    principal: float,
    annual_rate_pct: float,
    term_months: int,
    elapsed_months: int,
) -> float:
    """
    Outstanding balance after `elapsed_months` payments, computed as the
    present value of the payments still owed.
    """
    if term_months <= 0 or principal <= 0:
        return 0.0

    elapsed = max(elapsed_months, 0)
    if elapsed >= term_months:
        return 0.0

    remaining = term_months - elapsed
    r = annual_rate_pct / 100.0 / 12.0
    if r == 0:
        return principal * remaining / term_months

    payment = monthly_payment(principal, annual_rate_pct, term_months)
    return payment * -math.expm1(-remaining * math.log1p(r)) / r


def amortize(
    principal: float,
    annual_rate_pct: float,
    term_months: int,
    elapsed_months: int = 0,
) -> AmortizationResult:
    elapsed = min(max(elapsed_months, 0), max(term_months, 0))
    return AmortizationResult(
        monthly_payment=monthly_payment(principal, annual_rate_pct, term_months),
        outstanding_balance=remaining_balance(principal, annual_rate_pct, term_months, elapsed),
        elapsed_months=elapsed,
        remaining_months=max(term_months - elapsed, 0),
    )


def interest_paid_between(
    principal: float,
    annual_rate_pct: float,
    term_months: int,
    start_month: int,
    end_month: int,
) -> float:
    """
    Interest portion of payments start_month+1 .. end_month.

    Payments made minus principal retired over the window; zero once the loan
    is paid off.
    """
    start = min(max(start_month, 0), max(term_months, 0))
    end = min(max(end_month, start), max(term_months, 0))
    if end <= start:
        return 0.0

    payment = monthly_payment(principal, annual_rate_pct, term_months)
    principal_paid = remaining_balance(principal, annual_rate_pct, term_months, start) - remaining_balance(
        principal, annual_rate_pct, term_months, end
    )
    return max(payment * (end - start) - principal_paid, 0.0)


def amortization_schedule(principal: float, annual_rate_pct: float, term_months: int) -> pd.DataFrame:
    """
    Month-by-month schedule as a DataFrame.

    Columns: month, payment, interest, principal, balance. Row k is the state
    after the k-th payment.
    """
    columns = ["month", "payment", "interest", "principal", "balance"]
    if term_months <= 0 or principal <= 0:
        return pd.DataFrame(columns=columns)

    months = np.arange(1, term_months + 1)
    payment = monthly_payment(principal, annual_rate_pct, term_months)
    r = annual_rate_pct / 100.0 / 12.0

    if r == 0:
        balance = principal * (term_months - months) / term_months
    else:
        balance = payment * (1 - (1 + r) ** (-(term_months - months).astype(float))) / r
    balance[-1] = 0.0

    opening = np.concatenate(([principal], balance[:-1]))
    interest = opening * r
    principal_part = opening - balance

    return pd.DataFrame(
        {
            "month": months,
            "payment": np.full(term_months, payment),
            "interest": interest,
            "principal": principal_part,
            "balance": balance,
        },
        columns=columns,
    )
