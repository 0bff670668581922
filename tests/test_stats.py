import pytest

from smartsaver.models import AnalysisBundle, Dataset, Series
from smartsaver.profiles import ELECTRICITY_PROFILE, WATER_PROFILE
from smartsaver.stats import (NA, all_datasets_stats, average, category_shares, chart_kind,
                              daily_totals, forecast_next, mean, peak_day, peak_value, std_dev,
                              summarize, top_days, total, usage_pattern, zero_days)


def test_empty_series_helpers():
    empty = Series(labels=[], datasets=[[]])
    assert average(empty) == 0
    assert total(None) == 0
    assert peak_day(empty) == NA
    assert peak_value(None) == 0


def test_peak_day_is_first_maximum():
    s = Series(labels=["a", "b", "c"], datasets=[[1, 5, 5]])
    assert peak_day(s) == "b"
    assert peak_value(s) == 5


def test_non_numeric_values_count_as_zero():
    s = Series.from_json({"labels": ["a", "b", "c"], "datasets": [{"data": ["3", None, "x"]}]})
    assert s.values == [3.0, 0.0, 0.0]
    assert average(s) == 1.0


def test_std_dev_is_population():
    assert std_dev([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.0)
    assert std_dev([]) == 0


def test_summarize_water(water_dataset):
    summary = summarize(water_dataset.analysis, WATER_PROFILE)
    assert summary.total == 500
    assert summary.average == 125
    assert summary.peak_day == "02-03-2024"
    shower = summary.appliance("shower")
    assert shower.total == 220
    assert shower.peak_day == "02-03-2024"
    assert shower.peak_value == 120
    assert summary.most_intensive().name == "Shower"


def test_summarize_missing_series():
    summary = summarize(AnalysisBundle.from_json({}), ELECTRICITY_PROFILE)
    assert summary.total == 0
    assert summary.peak_day == NA
    assert all(a.total == 0 for a in summary.appliances)


def test_most_intensive_tie_keeps_later():
    summary = summarize(AnalysisBundle.from_json({}), ELECTRICITY_PROFILE)
    assert summary.most_intensive().name == "Lights"


def test_all_datasets_stats(water_datasets):
    stats = all_datasets_stats(water_datasets, WATER_PROFILE)
    assert stats.dataset_count == 3
    assert stats.total_average == pytest.approx((500 + 800 + 100) / 3)
    assert stats.daily_average == pytest.approx((125 + 400 + 50) / 3)
    assert stats.total_std_dev > 0
    assert stats.appliance_averages["shower"] == pytest.approx(220)


def test_all_datasets_stats_empty():
    stats = all_datasets_stats([], WATER_PROFILE)
    assert stats.dataset_count == 0
    assert stats.total_average == 0


def test_daily_totals_and_days(water_dataset):
    daily = daily_totals(water_dataset.analysis.chart_data)
    assert daily["total"].tolist() == [100, 250, 0, 150]
    assert top_days(daily, 2)["date"].tolist() == ["02-03-2024", "04-03-2024"]
    assert top_days(daily, 2, highest=False)["date"].tolist() == ["03-03-2024", "01-03-2024"]
    assert zero_days(daily) == ["03-03-2024"]


def test_usage_pattern(water_dataset):
    pattern = usage_pattern(daily_totals(water_dataset.analysis.chart_data))
    assert pattern["trend"] == "Moderately Variable"
    assert pattern["zero_days"] == 1


def test_category_shares_without_usage():
    assert category_shares({"Fan": 0.0}, 0) == {"Fan": 0.0}


def test_chart_kind():
    assert chart_kind([0, 150]) == "bar"
    assert chart_kind([0, 50]) == "line"
    assert chart_kind([1, 2]) == "point"


def test_forecast_next(water_datasets):
    assert forecast_next(water_datasets) == pytest.approx((500 + 800 + 100) / 3)
    assert forecast_next([]) is None


def test_mean_and_std_dev_accept_any_iterable():
    assert mean((1, 2, 3)) == 2.0
    assert mean([]) == 0.0
    assert std_dev([5, 5, 5]) == 0.0


def test_daily_totals_sums_every_dataset():
    s = Series(labels=["a", "b", "c"], datasets=[[1, 2, 3], [10, 20]])
    daily = daily_totals(s)
    assert daily["date"].tolist() == ["a", "b", "c"]
    # missing trailing value in the second dataset counts as 0
    assert daily["total"].tolist() == [11.0, 22.0, 3.0]


def test_daily_totals_ignores_values_past_the_labels():
    s = Series(labels=["a"], datasets=[[4, 99]])
    assert daily_totals(s)["total"].tolist() == [4.0]
    assert daily_totals(Series(labels=["a", "b"], datasets=[]))["total"].tolist() == [0.0, 0.0]
    assert daily_totals(None).empty


def test_usage_pattern_on_flat_usage():
    daily = daily_totals(Series(labels=["a", "b", "c"], datasets=[[5, 5, 0]]))
    pattern = usage_pattern(daily)
    assert pattern["trend"] == "Stable"
    assert pattern["average"] == 5.0
    assert pattern["std_dev"] == 0.0
    assert pattern["zero_days"] == 1


def test_all_datasets_stats_counts_datasets_without_chart(water_datasets):
    bare = Dataset.from_json({"_id": "w4", "type": "water", "analysis": {}})
    stats = all_datasets_stats(water_datasets + [bare], WATER_PROFILE)
    # counted, but left out of the means
    assert stats.dataset_count == 4
    assert stats.total_average == pytest.approx((500 + 800 + 100) / 3)
    assert stats.daily_average == pytest.approx((125 + 400 + 50) / 3)
