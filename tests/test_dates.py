import pytest

from smartsaver.dates import (MonthYear, Parsed, Unparseable, days_in_month, expand_year,
                              first_month_year, month_year_of, parse_label, parse_month_year_name)


def test_day_first_and_month_first_agree():
    assert parse_label("15-03-2024") == Parsed(day=15, month=3, year=2024)
    assert parse_label("03/15/2024") == Parsed(day=15, month=3, year=2024)


@pytest.mark.parametrize("label", ["15.03.2024", "15/03/2024", "15-03-24"])
def test_separators(label):
    assert month_year_of(label) == MonthYear(2024, 3)


def test_second_part_wins_when_both_could_be_months():
    # 04/05/2024 reads as day 4 of May
    assert parse_label("04/05/2024") == Parsed(day=4, month=5, year=2024)


def test_year_first_labels():
    assert parse_label("2024-03-15") == Parsed(day=15, month=3, year=2024)
    assert isinstance(parse_label("2024-13-15"), Unparseable)


def test_trailing_time_is_ignored():
    assert parse_label("15-03-2024 10:00") == Parsed(day=15, month=3, year=2024)


@pytest.mark.parametrize("label", ["", "March 2024", "15-03", "31-31-2024", "aa-bb-cc", None])
def test_unparseable(label):
    result = parse_label(label)
    assert isinstance(result, Unparseable)
    assert result.reason


def test_two_digit_year_pivot():
    assert expand_year(24) == 2024
    assert expand_year(68) == 2068
    assert expand_year(69) == 1969
    assert expand_year(2025) == 2025


def test_first_month_year_skips_bad_labels():
    assert first_month_year(["total", "01/02/2023"]) == MonthYear(2023, 2)
    assert first_month_year([]) is None


def test_month_year_name_round_trip():
    my = MonthYear(2024, 2)
    assert my.name == "February 2024"
    assert parse_month_year_name(my.name) == my
    with pytest.raises(ValueError):
        parse_month_year_name("Febuary 2024")


def test_month_year_ordering():
    assert sorted([MonthYear(2024, 1), MonthYear(2023, 12)]) == [MonthYear(2023, 12), MonthYear(2024, 1)]


def test_days_in_month():
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2023, 2) == 28
