import pytest

from proptrack.domain.inflation import (
    DEFAULT_INFLATION_RATE,
    HISTORICAL_INFLATION,
    InflationDataPoint,
    InflationTable,
    calculate_cumulative_inflation,
    get_inflation_for_year,
)


def test_historical_table_is_year_unique_and_ordered():
    years = [p.year for p in HISTORICAL_INFLATION]
    assert years == sorted(set(years))
    assert years[0] == 1950
    assert years[-1] == 2024
    assert get_inflation_for_year(2022) == pytest.approx(8.0)
    assert get_inflation_for_year(1949) is None


def test_duplicate_years_are_rejected():
    with pytest.raises(ValueError):
        InflationTable([InflationDataPoint(2000, 3.4), InflationDataPoint(2000, 2.0)])


def test_single_year_factor():
    assert calculate_cumulative_inflation(2023, 2024) == pytest.approx(1.032)


def test_factor_is_one_when_nothing_elapsed():
    assert HISTORICAL_INFLATION.cumulative_factor(2024, 2024) == 1.0
    assert HISTORICAL_INFLATION.cumulative_factor(2030, 2024) == 1.0


def test_missing_years_fall_back_to_default_rate():
    assert DEFAULT_INFLATION_RATE == 2.5
    assert HISTORICAL_INFLATION.rate_or_default(2031) == 2.5
    # 2025 and 2026 are not in the table
    assert HISTORICAL_INFLATION.cumulative_factor(2024, 2026) == pytest.approx(1.025 ** 2)


def test_custom_table_and_default():
    table = InflationTable.from_pairs([(2001, 10.0)], default_rate=0.0)
    assert table.cumulative_factor(2000, 2003) == pytest.approx(1.10)
    assert 2001 in table
    assert len(table) == 1
