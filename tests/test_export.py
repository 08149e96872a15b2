"""CSV dışa aktarma unit testleri."""

import csv
from datetime import date
from io import StringIO

import pytest

from profit_dashboard.analytics.metrics import calculate_all
from profit_dashboard.export import EXPORT_COLUMNS, EmptyExportError, export_csv, export_filename, export_rows
from profit_dashboard.models.product import ProductRecord


def _products():
    return calculate_all([
        ProductRecord(1, "Milk", 2.0, 4.0, 10, "Dairy", "Farm", 5),
        ProductRecord(2, "Tea", 1.0, 3.0, 7),
    ])


class TestExport:
    """Filtrelenmiş görünümün CSV çıktısı."""

    def test_rows_rounded(self):
        rows = export_rows(_products())
        assert rows[0]["sellThroughRate"] == 66.67
        assert rows[1]["margin"] == 66.67

    def test_missing_optional_fields(self):
        row = export_rows(_products())[1]
        assert row["stockLevel"] == 0
        assert row["category"] == ""
        assert row["supplier"] == ""

    def test_csv_header_and_rows(self):
        reader = csv.DictReader(StringIO(export_csv(_products())))
        assert reader.fieldnames == EXPORT_COLUMNS
        rows = list(reader)
        assert len(rows) == 2
        assert rows[0]["name"] == "Milk"
        assert rows[0]["weeklyProfit"] == "20.0"

    def test_empty_raises(self):
        with pytest.raises(EmptyExportError):
            export_csv([])

    def test_filename(self):
        assert export_filename(date(2024, 3, 9)) == "product_data_export_2024-03-09.csv"
