from smartsaver.models import Series
from smartsaver.usage_calendar import month_grid, usage_by_day, usage_level


def test_usage_level_steps():
    assert usage_level(0, 100) == "No Data"
    assert usage_level(None, 100) == "No Data"
    assert usage_level(20, 100) == "Very Low Usage"
    assert usage_level(40, 100) == "Low Usage"
    assert usage_level(60, 100) == "Medium Usage"
    assert usage_level(80, 100) == "High Usage"
    assert usage_level(81, 100) == "Very High Usage"


def test_usage_by_day(water_dataset):
    assert usage_by_day(water_dataset.analysis.chart_data) == {1: 100, 2: 250, 3: 0, 4: 150}
    assert usage_by_day(None) == {}


def test_month_grid_march_2024(water_dataset):
    title, weeks = month_grid(water_dataset.analysis.chart_data)
    assert title == "March 2024"
    # 1 March 2024 is a Friday; weeks start on Sunday
    first_week = weeks[0]
    assert [c.day for c in first_week[:5]] == [None] * 5
    assert first_week[5].day == 1
    assert first_week[5].level == "Low Usage"
    assert first_week[6].level == "Very High Usage"
    days = [c.day for week in weeks for c in week if c.day is not None]
    assert days == list(range(1, 32))


def test_month_grid_without_dates():
    assert month_grid(Series(labels=["a"], datasets=[[1]])) == ("", [])
    assert month_grid(None) == ("", [])
