"""Dashboard KPI ve trend üretimi unit testleri."""

from itertools import cycle

import pytest

from profit_dashboard.analytics.aggregator import TREND_POINTS, aggregate, generate_trend, top_product_by_profit
from profit_dashboard.analytics.metrics import calculate, calculate_all
from profit_dashboard.models.product import DashboardKPIs, ProductRecord


def _fixed(*values):
    it = cycle(values)
    return lambda: next(it)


def _records():
    return calculate_all([
        ProductRecord(1, "Organic Milk", 2.50, 4.50, 100, "Dairy", "Farm Fresh Inc.", 50),
        ProductRecord(2, "Artisan Bread", 1.80, 3.99, 80, "Bakery", "Local Breads Co.", 40),
        ProductRecord(3, "Gourmet Coffee", 8.00, 15.00, 50, "Pantry", "Global Beans", 60),
    ])


class TestGenerateTrend:
    """Sentetik 7 noktalı trend serisi."""

    def test_length_and_last_point(self):
        trend = generate_trend(1000.0, _fixed(0.3))
        assert len(trend) == TREND_POINTS
        assert trend[-1] == 1000.0

    def test_zero_value(self):
        assert generate_trend(0, _fixed(0.9)) == [0.0] * 7

    def test_points_not_compounding(self):
        """Her geçmiş nokta orijinal değerden türetilir."""
        trend = generate_trend(100.0, _fixed(1.0))
        # delta = (1.0 - 0.45) * 0.15 * 100 = 8.25
        assert trend[:-1] == pytest.approx([91.75] * 6)

    def test_neutral_random(self):
        trend = generate_trend(100.0, _fixed(0.45))
        assert trend == pytest.approx([100.0] * 7)

    def test_low_random_raises_history(self):
        trend = generate_trend(100.0, _fixed(0.0))
        # delta = -0.45 * 0.15 * 100 = -6.75
        assert trend[0] == pytest.approx(106.75)

    def test_points_within_bounds(self):
        for r in (0.0, 0.2, 0.5, 0.99):
            trend = generate_trend(500.0, _fixed(r))
            for point in trend[:-1]:
                assert 500.0 * (1 - 0.0825) - 1e-9 <= point <= 500.0 * (1 + 0.0675) + 1e-9

    def test_negative_value_clamped(self):
        trend = generate_trend(-10.0, _fixed(0.0))
        assert trend[:-1] == [0.0] * 6
        assert trend[-1] == -10.0

    def test_default_random_source(self):
        trend = generate_trend(50.0)
        assert len(trend) == 7
        assert trend[-1] == 50.0
        assert all(point >= 0 for point in trend)


class TestTopProduct:
    """En kârlı ürün seçimi."""

    def test_top_product(self):
        assert top_product_by_profit(_records()).name == "Gourmet Coffee"

    def test_tie_keeps_first(self):
        records = calculate_all([
            ProductRecord(1, "A", 1.0, 2.0, 10),
            ProductRecord(2, "B", 1.0, 2.0, 10),
        ])
        assert top_product_by_profit(records).id == 1

    def test_tie_returns_first_of_equal_highest(self):
        """Kâr 10, 20, 20 iken ilk en yüksek (index 1) seçilir."""
        records = calculate_all([
            ProductRecord(1, "A", 1.0, 2.0, 10),
            ProductRecord(2, "B", 1.0, 2.0, 20),
            ProductRecord(3, "C", 1.0, 2.0, 20),
        ])
        assert [p.weekly_profit for p in records] == [10.0, 20.0, 20.0]
        assert top_product_by_profit(records) is records[1]

    def test_empty(self):
        assert top_product_by_profit([]) is None


class TestAggregate:
    """KPI toplama."""

    def test_empty_input(self):
        kpis = aggregate([])
        assert kpis == DashboardKPIs()
        assert kpis.top_product_by_profit is None
        assert kpis.profit_trend == []
        assert kpis.margin_trend == []

    def test_totals(self):
        kpis = aggregate(_records(), _fixed(0.45))
        assert kpis.total_weekly_profit == pytest.approx(200.0 + 175.2 + 350.0)
        assert kpis.total_weekly_revenue == pytest.approx(450.0 + 319.2 + 750.0)

    def test_average_margin_unweighted(self):
        records = _records()
        kpis = aggregate(records, _fixed(0.45))
        assert kpis.average_margin == pytest.approx(sum(p.margin for p in records) / 3)

    def test_trends_end_with_current_values(self):
        kpis = aggregate(_records(), _fixed(0.1, 0.8))
        assert kpis.profit_trend[-1] == kpis.total_weekly_profit
        assert kpis.margin_trend[-1] == kpis.average_margin
        assert len(kpis.profit_trend) == len(kpis.margin_trend) == 7

    def test_single_product_scenario(self):
        """Tek ürünlük uçtan uca senaryo."""
        record = calculate(ProductRecord(1, "Milk", 2.0, 4.0, 10, stock_level=5))
        assert record.margin == 50.0
        assert record.weekly_profit == 20.0
        assert record.weekly_revenue == 40.0
        assert record.inventory_turnover == 2.0
        assert record.sell_through_rate == pytest.approx(66.67, abs=1e-2)

        kpis = aggregate([record], _fixed(0.45))
        assert kpis.total_weekly_profit == 20.0
        assert kpis.total_weekly_revenue == 40.0
        assert kpis.average_margin == 50.0
        assert kpis.top_product_by_profit == record

    def test_to_dict(self):
        data = aggregate(_records(), _fixed(0.45)).to_dict()
        assert data["top_product_by_profit"]["name"] == "Gourmet Coffee"
        assert len(data["profit_trend"]) == 7
