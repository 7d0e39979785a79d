"""
Unit Tests - Sheet Row Normalization
"""
import math
from datetime import date

import pytest

from agency_dashboard.ingestion.normalizer import canonical_header, normalize_rows


class TestCanonicalHeader:
    """Tests for header aliasing"""

    @pytest.mark.parametrize(
        "header, expected",
        [
            ("Date", "date"),
            ("Revenue", "revenue"),
            ("Total Purchase", "cost"),
            ("total_purchase", "cost"),
            ("ROI (%)", "roi"),
            ("  Shop   ID ", "shop_id"),
            ("Notes", None),
        ],
    )
    def test_aliases(self, header, expected):
        assert canonical_header(header) == expected


class TestNormalizeRows:
    """Tests for normalize_rows"""

    def test_empty_input(self):
        result = normalize_rows([], shop_id=1)

        assert result.records == []
        assert result.total_rows == 0

    def test_currency_and_thousands_stripped(self):
        """Test '$1,234.50' becomes 1234.5"""
        rows = [{"Date": "2024-03-10", "Revenue": "$1,234.50", "Orders": "7", "Cost": "€200", "ROI": "15%"}]

        record = normalize_rows(rows, shop_id=3).records[0]

        assert record.shop_id == 3
        assert record.revenue == pytest.approx(1234.5)
        assert record.orders == 7
        assert record.cost == pytest.approx(200)
        assert record.roi == pytest.approx(15)

    def test_unparseable_numbers_become_zero(self):
        """Test garbage or missing numeric cells coerce to 0"""
        rows = [{"Date": "2024-03-10", "Revenue": "n/a", "Orders": "", "Cost": None}]

        record = normalize_rows(rows, shop_id=1).records[0]

        assert record.revenue == 0
        assert record.orders == 0
        assert record.cost == 0

    @pytest.mark.parametrize(
        "raw",
        ["2024-03-10", "2024-03-10T08:15:00Z", "03/10/2024", "10.03.2024", "Mar 10, 2024", "10 Mar 2024"],
    )
    def test_date_formats(self, raw):
        record = normalize_rows([{"Date": raw, "Revenue": "1"}], shop_id=1).records[0]

        assert record.date == date(2024, 3, 10)

    def test_profit_and_roi_derived_when_absent(self):
        """Test profit = revenue - cost and ROI from those"""
        rows = [{"Date": "2024-03-10", "Revenue": "300", "Total Purchase": "200"}]

        record = normalize_rows(rows, shop_id=1).records[0]

        assert record.profit == pytest.approx(100)
        assert record.roi == pytest.approx(50)

    def test_sheet_profit_kept_when_present(self):
        rows = [{"Date": "2024-03-10", "Revenue": "300", "Cost": "200", "Profit": "90", "ROI": "45"}]

        record = normalize_rows(rows, shop_id=1).records[0]

        assert record.profit == pytest.approx(90)
        assert record.roi == pytest.approx(45)

    def test_rows_without_date_dropped(self):
        rows = [
            {"Date": "2024-03-10", "Revenue": "10"},
            {"Date": "not a date", "Revenue": "20"},
            {"Revenue": "30"},
        ]

        result = normalize_rows(rows, shop_id=1)

        assert len(result.records) == 1
        assert result.total_rows == 3
        assert result.dropped_rows == 2

    def test_shop_id_column_used_without_owner(self):
        """Test rows carry their own shop id, rows without one are dropped"""
        rows = [
            {"Date": "2024-03-10", "Shop ID": "2", "Revenue": "10"},
            {"Date": "2024-03-10", "Shop ID": "", "Revenue": "20"},
        ]

        result = normalize_rows(rows)

        assert [r.shop_id for r in result.records] == [2]
        assert result.dropped_rows == 1

    def test_negative_orders_clipped(self):
        record = normalize_rows([{"Date": "2024-03-10", "Orders": "-3"}], shop_id=1).records[0]

        assert record.orders == 0

    def test_negative_revenue_and_cost_clipped(self):
        """Test sheet revenue and cost never go below 0"""
        rows = [{"Date": "2024-03-11", "Revenue": "-500", "Cost": "-10"}]

        record = normalize_rows(rows, shop_id=1).records[0]

        assert record.revenue == 0
        assert record.cost == 0
        assert record.profit == 0
        assert record.roi == 0

    @pytest.mark.parametrize("raw", ["inf", "-inf", "Infinity", "nan", "NaN"])
    def test_non_finite_values_become_zero(self, raw):
        """Test infinite or NaN cells never reach the records"""
        rows = [{"Date": "2024-03-10", "Revenue": raw, "Cost": raw, "Profit": raw, "ROI": raw}]

        record = normalize_rows(rows, shop_id=1).records[0]

        for value in (record.revenue, record.cost, record.profit, record.roi):
            assert value == 0
            assert math.isfinite(value)
