# src/proptrack/domain/inflation.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from proptrack.adapters.logging_utils import get_logger

logger = get_logger(__name__)

# Used for any year the table does not cover.
DEFAULT_INFLATION_RATE = 2.5

# Last year of the historical table; the evaluation-time default "now".
DEFAULT_CURRENT_YEAR = 2024


@dataclass(frozen=True)
class InflationDataPoint:
    year: int
    rate: float  # annual CPI change, percent


class InflationTable:
    """
    Read-only, year-unique lookup of annual inflation rates.

    Passed explicitly into the ROI calculators so tests can supply their own
    (e.g. an all-zero table).
    """

    def __init__(
        self,
        points: Iterable[InflationDataPoint],
        default_rate: float = DEFAULT_INFLATION_RATE,
    ) -> None:
        ordered = sorted(points, key=lambda p: p.year)
        by_year: dict[int, float] = {}
        for p in ordered:
            if p.year in by_year:
                raise ValueError(f"duplicate inflation year: {p.year}")
            by_year[p.year] = float(p.rate)
        self._points = tuple(ordered)
        self._by_year = by_year
        self.default_rate = float(default_rate)

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[tuple[int, float]],
        default_rate: float = DEFAULT_INFLATION_RATE,
    ) -> "InflationTable":
        return cls((InflationDataPoint(int(y), float(r)) for y, r in pairs), default_rate)

    def __iter__(self) -> Iterator[InflationDataPoint]:
        return iter(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __contains__(self, year: object) -> bool:
        return year in self._by_year

    def rate_for(self, year: int) -> Optional[float]:
        return self._by_year.get(year)

    def rate_or_default(self, year: int) -> float:
        rate = self._by_year.get(year)
        if rate is None:
            logger.debug(
                "inflation year missing, using default",
                extra={"context": {"year": year, "default_rate": self.default_rate}},
            )
            return self.default_rate
        return rate

    def cumulative_factor(self, purchase_year: int, current_year: int) -> float:
        """
        Product of (1 + rate/100) for every year after the purchase year up to
        and including current_year. 1.0 when nothing has elapsed.
        """
        if purchase_year >= current_year:
            return 1.0

        factor = 1.0
        for year in range(purchase_year + 1, current_year + 1):
            factor *= 1 + self.rate_or_default(year) / 100
        return factor


# US CPI, annual average change
HISTORICAL_INFLATION = InflationTable.from_pairs(
    [
        (1950, 1.3),
        (1951, 7.9),
        (1952, 1.9),
        (1953, 0.8),
        (1954, 0.7),
        (1955, -0.4),
        (1956, 1.5),
        (1957, 3.3),
        (1958, 2.8),
        (1959, 0.7),
        (1960, 1.7),
        (1961, 1.0),
        (1962, 1.0),
        (1963, 1.3),
        (1964, 1.3),
        (1965, 1.6),
        (1966, 2.9),
        (1967, 3.1),
        (1968, 4.2),
        (1969, 5.5),
        (1970, 5.7),
        (1971, 4.4),
        (1972, 3.2),
        (1973, 6.2),
        (1974, 11.0),
        (1975, 9.2),
        (1976, 5.8),
        (1977, 6.5),
        (1978, 7.6),
        (1979, 11.3),
        (1980, 13.5),
        (1981, 10.3),
        (1982, 6.2),
        (1983, 3.2),
        (1984, 4.3),
        (1985, 3.6),
        (1986, 1.9),
        (1987, 3.6),
        (1988, 4.1),
        (1989, 4.8),
        (1990, 5.4),
        (1991, 4.2),
        (1992, 3.0),
        (1993, 3.0),
        (1994, 2.6),
        (1995, 2.8),
        (1996, 3.0),
        (1997, 2.3),
        (1998, 1.6),
        (1999, 2.2),
        (2000, 3.4),
        (2001, 2.8),
        (2002, 1.6),
        (2003, 2.3),
        (2004, 2.7),
        (2005, 3.4),
        (2006, 3.2),
        (2007, 2.8),
        (2008, 3.8),
        (2009, -0.4),
        (2010, 1.6),
        (2011, 3.1),
        (2012, 2.1),
        (2013, 1.5),
        (2014, 0.1),
        (2015, 0.1),
        (2016, 1.3),
        (2017, 2.1),
        (2018, 2.4),
        (2019, 1.8),
        (2020, 1.2),
        (2021, 4.7),
        (2022, 8.0),
        (2023, 4.1),
        (2024, 3.2),
    ]
)


def get_inflation_for_year(year: int, table: InflationTable = HISTORICAL_INFLATION) -> Optional[float]:
    return table.rate_for(year)


def calculate_cumulative_inflation(
    purchase_year: int,
    current_year: int = DEFAULT_CURRENT_YEAR,
    table: InflationTable = HISTORICAL_INFLATION,
) -> float:
    return table.cumulative_factor(purchase_year, current_year)
