"""Kategori bazlı ciro ve ortalama marj özetleri."""

from __future__ import annotations

from typing import Sequence

from profit_dashboard.models.product import CalculatedProduct, CategoryBreakdown


def _sorted_desc(values: dict[str, float]) -> dict[str, float]:
    # Kararlı sıralama: eşit değerlerde ilk görülen kategori önde kalır
    return dict(sorted(values.items(), key=lambda item: item[1], reverse=True))


def revenue_by_category(records: Sequence[CalculatedProduct]) -> dict[str, float]:
    """Kategori bazında haftalık ciro toplamı.

    Haftalık cirosu 0 olan ürünler hiçbir şey eklemez; kategorinin tek ürünü
    buysa kategori anahtarı da oluşmaz (marj özetinde ise sayılır).
    """
    totals: dict[str, float] = {}
    for record in records:
        if record.category and record.weekly_revenue:
            totals[record.category] = totals.get(record.category, 0.0) + record.weekly_revenue
    return _sorted_desc(totals)


def average_margin_by_category(records: Sequence[CalculatedProduct]) -> dict[str, float]:
    """Kategori bazında ağırlıksız ortalama marj; kategorisi olan her ürün sayılır."""
    sums: dict[str, tuple[float, int]] = {}
    for record in records:
        if record.category:
            total, count = sums.get(record.category, (0.0, 0))
            sums[record.category] = (total + record.margin, count + 1)
    return _sorted_desc({name: total / count for name, (total, count) in sums.items()})


def by_category(records: Sequence[CalculatedProduct]) -> CategoryBreakdown:
    """Kategorisiz ürünler her iki özetin de dışında kalır."""
    return CategoryBreakdown(
        revenue=revenue_by_category(records),
        avg_margin=average_margin_by_category(records),
    )


def revenue_share(breakdown: CategoryBreakdown) -> dict[str, float]:
    """Her kategorinin toplam ciro içindeki payı (%)."""
    total = sum(breakdown.revenue.values())
    if total == 0:
        return {name: 0.0 for name in breakdown.revenue}
    return {name: value / total * 100 for name, value in breakdown.revenue.items()}
