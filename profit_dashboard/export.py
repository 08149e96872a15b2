"""Filtrelenmiş ürün görünümünü CSV olarak dışa aktarma."""

from __future__ import annotations

import csv
from datetime import date
from io import StringIO
from typing import Optional, Sequence

from profit_dashboard.models.product import CalculatedProduct

EXPORT_COLUMNS = [
    "id",
    "name",
    "category",
    "supplier",
    "purchasePrice",
    "sellingPrice",
    "unitsSoldWeek",
    "stockLevel",
    "margin",
    "weeklyProfit",
    "weeklyRevenue",
    "inventoryTurnover",
    "sellThroughRate",
]


class EmptyExportError(ValueError):
    """Dışa aktarılacak veri yok."""
    pass


def export_rows(products: Sequence[CalculatedProduct]) -> list[dict]:
    """Metrikler 2 ondalığa yuvarlanır; eksik stok 0 yazılır."""
    return [
        {
            "id": p.id,
            "name": p.name,
            "category": p.category or "",
            "supplier": p.supplier or "",
            "purchasePrice": p.purchase_price,
            "sellingPrice": p.selling_price,
            "unitsSoldWeek": p.units_sold_week,
            "stockLevel": p.stock_level or 0,
            "margin": round(p.margin, 2),
            "weeklyProfit": round(p.weekly_profit, 2),
            "weeklyRevenue": round(p.weekly_revenue, 2),
            "inventoryTurnover": round(p.inventory_turnover, 2),
            "sellThroughRate": round(p.sell_through_rate, 2),
        }
        for p in products
    ]


def export_csv(products: Sequence[CalculatedProduct]) -> str:
    if not products:
        raise EmptyExportError("Dışa aktarılacak veri yok.")

    buffer = StringIO()
    writer = csv.DictWriter(buffer, fieldnames=EXPORT_COLUMNS, lineterminator="\n")
    writer.writeheader()
    writer.writerows(export_rows(products))
    return buffer.getvalue()


def export_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"product_data_export_{today.isoformat()}.csv"
