"""
Unit Tests - Metrics Aggregation
"""
import math
from datetime import date

import pytest

from agency_dashboard.core.aggregation import (
    aggregate,
    aggregate_by_shop,
    compare_periods,
    daily_series,
    percentage_change,
    roi_percentage,
)
from agency_dashboard.core.models import AggregatedMetrics, MetricRecord, TimeWindow


def make_record(record_id, shop_id, day, revenue=0.0, orders=0, cost=0.0, profit=None, roi=0.0):
    return MetricRecord(
        id=record_id,
        shop_id=shop_id,
        date=day,
        revenue=revenue,
        orders=orders,
        cost=cost,
        profit=revenue - cost if profit is None else profit,
        roi=roi,
    )


@pytest.fixture
def records():
    return [
        make_record(1, 1, date(2024, 3, 9), revenue=400, orders=8, cost=250, roi=60),
        make_record(2, 1, date(2024, 3, 10), revenue=600, orders=12, cost=350, roi=71.43),
        make_record(3, 2, date(2024, 3, 10), revenue=500, orders=10, cost=500, roi=0),
        make_record(4, 2, date(2024, 2, 1), revenue=90, orders=1, cost=30, roi=200),
    ]


class TestAggregate:
    """Tests for aggregate"""

    def test_empty_set_is_all_zero(self):
        """Test no records yields zeros, never NaN"""
        result = aggregate([])

        assert result == AggregatedMetrics()
        for value in (result.revenue, result.orders, result.cost, result.profit, result.roi):
            assert value == 0
            assert not math.isnan(value)

    def test_window_with_no_matches_is_all_zero(self, records):
        """Test an empty window yields zeros"""
        window = TimeWindow(start=date(2023, 1, 1), end=date(2023, 1, 31))

        assert aggregate(records, window=window) == AggregatedMetrics()

    def test_sums_across_shops(self, records):
        """Test totals over a window spanning shops"""
        window = TimeWindow(start=date(2024, 3, 1), end=date(2024, 3, 10))
        result = aggregate(records, window=window)

        assert result.revenue == 1500
        assert result.orders == 30
        assert result.cost == 1100
        assert result.profit == 400
        assert result.record_count == 3

    def test_roi_from_sums(self, records):
        """Test ROI is recomputed from summed profit and cost"""
        result = aggregate(records, shop_id=1)

        assert result.roi == pytest.approx(400 / 600 * 100)

    def test_filters_by_shop(self, records):
        """Test shop filter"""
        result = aggregate(records, shop_id=2)

        assert result.revenue == 590
        assert result.record_count == 2

    def test_window_bounds_inclusive(self, records):
        """Test records on both window edges are included"""
        window = TimeWindow(start=date(2024, 3, 9), end=date(2024, 3, 10))

        assert aggregate(records, shop_id=1, window=window).record_count == 2

    def test_duplicate_day_records_are_summed(self):
        """Test two records for one shop and day both count"""
        dup = [
            make_record(1, 1, date(2024, 3, 10), revenue=100, orders=2, cost=40),
            make_record(2, 1, date(2024, 3, 10), revenue=100, orders=2, cost=40),
        ]
        result = aggregate(dup, shop_id=1)

        assert result.revenue == 200
        assert result.orders == 4
        assert result.record_count == 2

    def test_zero_cost_roi_is_zero(self):
        """Test division by zero cost is guarded"""
        result = aggregate([make_record(1, 1, date(2024, 3, 10), revenue=100, cost=0)])

        assert result.roi == 0


class TestAggregateByShop:
    """Tests for aggregate_by_shop"""

    def test_groups_by_shop(self, records):
        """Test one aggregate per shop with records in the window"""
        window = TimeWindow(start=date(2024, 3, 1), end=date(2024, 3, 31))
        result = aggregate_by_shop(records, window=window)

        assert set(result) == {1, 2}
        assert result[1].revenue == 1000
        assert result[2].revenue == 500


class TestDailySeries:
    """Tests for daily_series"""

    def test_oldest_first(self, records):
        """Test per-day totals ordered by date"""
        series = daily_series(records)

        assert [point.date for point in series] == [date(2024, 2, 1), date(2024, 3, 9), date(2024, 3, 10)]
        assert series[-1].revenue == 1100
        assert series[-1].orders == 22

    def test_newest_first(self, records):
        """Test reverse ordering"""
        series = daily_series(records, newest_first=True)

        assert series[0].date == date(2024, 3, 10)

    def test_empty(self):
        """Test no records gives an empty series"""
        assert daily_series([]) == []


class TestPercentageChange:
    """Tests for percentage_change and roi_percentage"""

    def test_regular_change(self):
        assert percentage_change(150, 100) == pytest.approx(50.0)
        assert percentage_change(50, 100) == pytest.approx(-50.0)

    @pytest.mark.parametrize("current", [0, 10, -10, 1e9])
    def test_zero_previous_is_zero(self, current):
        """Test previous of zero yields 0, never inf or NaN"""
        result = percentage_change(current, 0)

        assert result == 0
        assert math.isfinite(result)

    def test_roi_guard(self):
        assert roi_percentage(50, 0) == 0
        assert roi_percentage(50, 100) == pytest.approx(50.0)

    def test_compare_periods(self):
        """Test KPI deltas use the guarded helper"""
        current = AggregatedMetrics(revenue=200, orders=4, cost=100, profit=100, roi=100)
        previous = AggregatedMetrics(revenue=100, orders=0, cost=100, profit=50, roi=50)
        changes = compare_periods(current, previous)

        assert changes.revenue == pytest.approx(100.0)
        assert changes.orders == 0
        assert changes.cost == 0
        assert changes.profit == pytest.approx(100.0)
        assert changes.roi == pytest.approx(100.0)
