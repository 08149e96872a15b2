"""Canlı özet akışı unit testleri."""

from unittest.mock import MagicMock

from profit_dashboard.analytics.aggregator import aggregate
from profit_dashboard.analytics.metrics import calculate_all
from profit_dashboard.models.product import DashboardKPIs, ProductRecord
from profit_dashboard.services.bedrock_client import AIServiceError
from profit_dashboard.services.overview import EMPTY_HINT, FAILURE_TEXT, OverviewFeed


def _products():
    return calculate_all([ProductRecord(1, "Milk", 2.0, 4.0, 10, "Dairy", None, 5)])


def _create_feed(chunks=None, error=None) -> OverviewFeed:
    service = MagicMock()
    if error:
        service.stream.side_effect = error
    else:
        service.stream.return_value = iter(chunks or [])
    return OverviewFeed(service)


class TestOverviewFeed:
    """Eski isteklerin bastırılması."""

    def test_streams_chunks(self):
        feed = _create_feed(["All ", "good."])
        products = _products()
        assert list(feed.stream(aggregate(products), products)) == ["All ", "good."]

    def test_empty_products_hint(self):
        feed = _create_feed(["unused"])
        assert list(feed.stream(DashboardKPIs(), [])) == [EMPTY_HINT]
        feed.service.stream.assert_not_called()

    def test_error_yields_failure_text(self):
        feed = _create_feed(error=AIServiceError("down"))
        products = _products()
        assert list(feed.stream(aggregate(products), products)) == [FAILURE_TEXT]

    def test_superseded_stream_stops(self):
        feed = _create_feed(["first ", "second ", "third"])
        products = _products()
        gen = feed.stream(aggregate(products), products)
        assert next(gen) == "first "
        feed.begin()
        assert list(gen) == []

    def test_superseded_error_suppressed(self):
        feed = _create_feed(error=AIServiceError("down"))
        products = _products()
        token = feed.begin()
        feed.begin()
        assert list(feed.stream(aggregate(products), products, token=token)) == []

    def test_tokens_increase(self):
        feed = _create_feed()
        first = feed.begin()
        second = feed.begin()
        assert second > first
        assert feed.is_current(second)
        assert not feed.is_current(first)
