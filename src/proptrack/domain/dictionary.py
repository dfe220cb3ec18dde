# src/proptrack/domain/dictionary.py
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

EntryType = Literal["USD", "Measure", "Process"]


class DictionaryEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    term: str
    type: EntryType
    formula: str
    description: str


FINANCIAL_DICTIONARY: tuple[DictionaryEntry, ...] = (
    DictionaryEntry(
        term="After-Tax Net Equity",
        type="USD",
        formula="Market Value - Loan Balance - (Sales Cost + Capital Gains Tax)",
        description="Net equity remaining after selling the property and paying all costs and taxes",
    ),
    DictionaryEntry(
        term="Net Yield",
        type="USD",
        formula="Rent - Expenses",
        description="Annual rental income after operating expenses, before debt service",
    ),
    DictionaryEntry(
        term="Market Value",
        type="USD",
        formula="Estimated Sales Value of the Property",
        description="Appreciates with the country specific appreciation rate",
    ),
    DictionaryEntry(
        term="% Net Yield of Market Value",
        type="Measure",
        formula="(Net Yield ÷ Market Value) × 100",
        description="Annual rental yield as a percentage of current property value",
    ),
    DictionaryEntry(
        term="Cash at Hand",
        type="USD",
        formula="Net Yield - Mortgage Payment",
        description="Annual cash flow available after mortgage payments",
    ),
    DictionaryEntry(
        term="Sales Cost",
        type="USD",
        formula="Market Value × Sales Cost % per Country",
        description="Realtor fees, closing costs and other costs of selling",
    ),
    DictionaryEntry(
        term="Capital Gains Tax",
        type="USD",
        formula="max(0, Market Value - Purchase Price) × Capital Gains Tax % per Country",
        description="Tax on the profit from selling the property",
    ),
    DictionaryEntry(
        term="Appreciation",
        type="USD",
        formula="Market Value × Real Estate Appreciation Rate % per Country",
        description="Annual increase in property value",
    ),
    DictionaryEntry(
        term="Cost Basis",
        type="USD",
        formula="Purchase Price × Building Ratio (80%)",
        description="Depreciable value of the property for tax purposes",
    ),
    DictionaryEntry(
        term="Annual Depreciation",
        type="USD",
        formula="Cost Basis ÷ 27.5 years (residential)",
        description="Annual tax deduction for property depreciation",
    ),
    DictionaryEntry(
        term="Mortgage Interest Deduction",
        type="USD",
        formula="Annual Mortgage Interest Payments",
        description="Tax-deductible mortgage interest paid during the year",
    ),
    DictionaryEntry(
        term="Total Tax Benefits",
        type="USD",
        formula="Annual Depreciation + Mortgage Interest Deduction",
        description="Annual tax deductions available from the property",
    ),
    DictionaryEntry(
        term="Cap Rate",
        type="Measure",
        formula="(Annual Net Operating Income ÷ Market Value) × 100",
        description="Income return of the property independent of financing",
    ),
    DictionaryEntry(
        term="Cash-on-Cash Return",
        type="Measure",
        formula="(Annual Cash Flow ÷ Down Payment) × 100",
        description="Return on the cash actually invested",
    ),
    DictionaryEntry(
        term="Real ROI",
        type="Measure",
        formula="((Value + Cash Flow) ÷ Inflation-Adjusted Price)^(1/years) - 1",
        description="Return adjusted for cumulative inflation since purchase",
    ),
    DictionaryEntry(
        term="MIRR",
        type="Measure",
        formula="(FV(inflows at reinvest rate) ÷ |PV(outflows at finance rate)|)^(1/n) - 1",
        description="Modified internal rate of return with separate finance and reinvestment rates",
    ),
    DictionaryEntry(
        term="1031 Exchange",
        type="Process",
        formula="Like-Kind Property Exchange",
        description="Tax-deferred reinvestment of sale proceeds into a similar property",
    ),
)


def lookup(term: str) -> Optional[DictionaryEntry]:
    key = term.strip().lower()
    for entry in FINANCIAL_DICTIONARY:
        if entry.term.lower() == key:
            return entry
    return None


def search(query: str) -> list[DictionaryEntry]:
    """Case-insensitive substring match over term, formula and description."""
    q = query.strip().lower()
    if not q:
        return list(FINANCIAL_DICTIONARY)
    return [
        e
        for e in FINANCIAL_DICTIONARY
        if q in e.term.lower() or q in e.formula.lower() or q in e.description.lower()
    ]
