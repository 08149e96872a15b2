"""Ürün bazlı türetilmiş metrikler.

Her ham ürün kaydından bağımsız olarak hesaplanır:
- Kâr marjı (%), haftalık kâr ve haftalık ciro
- Stok devir hızı ve satış oranı (sell-through, %)

Yuvarlama yapılmaz; yuvarlama sunum katmanının işidir.
"""

from __future__ import annotations

from typing import Iterable, Optional

from profit_dashboard.models.product import CalculatedProduct, ProductRecord


def calculate_margin(purchase_price: float, selling_price: float) -> float:
    """Satış fiyatının kâr olarak kalan yüzdesi; fiyat <= 0 ise 0."""
    if selling_price <= 0:
        return 0.0
    return (selling_price - purchase_price) / selling_price * 100


def calculate_inventory_turnover(units_sold_week: int, stock_level: Optional[int]) -> float:
    if stock_level and stock_level > 0:
        return units_sold_week / stock_level
    return 0.0


def calculate_sell_through_rate(units_sold_week: int, stock_level: Optional[int]) -> float:
    """Satılan birimlerin (satılan + stoktaki) birimlere oranı (%)."""
    units_in_stock = stock_level or 0
    beginning_inventory = units_sold_week + units_in_stock
    if beginning_inventory <= 0:
        return 0.0
    return units_sold_week / beginning_inventory * 100


def calculate(record: ProductRecord) -> CalculatedProduct:
    """Tek bir ürün kaydı için türetilmiş metrikleri hesaplar."""
    unit_profit = record.selling_price - record.purchase_price
    return CalculatedProduct(
        **record.to_dict(),
        margin=calculate_margin(record.purchase_price, record.selling_price),
        weekly_profit=unit_profit * record.units_sold_week,
        weekly_revenue=record.selling_price * record.units_sold_week,
        inventory_turnover=calculate_inventory_turnover(record.units_sold_week, record.stock_level),
        sell_through_rate=calculate_sell_through_rate(record.units_sold_week, record.stock_level),
    )


def calculate_all(records: Iterable[ProductRecord]) -> list[CalculatedProduct]:
    """Koleksiyondaki her kayıt için metrikleri bağımsız olarak hesaplar."""
    return [calculate(record) for record in records]
