"""Dashboard KPI hesaplama - toplamlar, ortalama marj, en kârlı ürün ve trend serileri."""

from __future__ import annotations

import random
from typing import Callable, Optional, Sequence

from profit_dashboard.models.product import CalculatedProduct, DashboardKPIs

TREND_POINTS = 7
# Rastgele sapma: (r - 0.45) * 0.15 * değer
TREND_BIAS = 0.45
TREND_SPREAD = 0.15

RandomSource = Callable[[], float]


def generate_trend(value: float, rng: Optional[RandomSource] = None) -> list[float]:
    """Mevcut değerle biten 7 noktalı sentetik geçmiş serisi üretir.

    Her geçmiş nokta her zaman orijinal değerden türetilir, önceki noktadan
    değil; seri birikimli bir random walk değildir. Seri yalnızca
    görselleştirme amaçlıdır, ölçülmüş geçmiş değildir.
    """
    if value == 0:
        return [0.0] * TREND_POINTS

    rng = rng or random.random
    trend = [value]
    for _ in range(TREND_POINTS - 1):
        delta = (rng() - TREND_BIAS) * TREND_SPREAD * value
        trend.insert(0, max(0.0, value - delta))
    return trend


def top_product_by_profit(records: Sequence[CalculatedProduct]) -> Optional[CalculatedProduct]:
    """Haftalık kârı en yüksek ürünü döndürür; eşitlikte ilk gelen kazanır."""
    if not records:
        return None
    # sorted() kararlıdır, reverse=True eşit elemanların sırasını korur
    return sorted(records, key=lambda p: p.weekly_profit, reverse=True)[0]


def aggregate(
    records: Sequence[CalculatedProduct], rng: Optional[RandomSource] = None
) -> DashboardKPIs:
    """Filtrelenmiş ürün listesinden dashboard KPI'larını hesaplar.

    Ortalama marj ciro veya hacim ile ağırlıklandırılmaz; her ürün eşit sayılır.
    """
    if not records:
        return DashboardKPIs()

    total_weekly_profit = sum(p.weekly_profit for p in records)
    total_weekly_revenue = sum(p.weekly_revenue for p in records)
    average_margin = sum(p.margin for p in records) / len(records)

    return DashboardKPIs(
        total_weekly_profit=total_weekly_profit,
        total_weekly_revenue=total_weekly_revenue,
        average_margin=average_margin,
        top_product_by_profit=top_product_by_profit(records),
        profit_trend=generate_trend(total_weekly_profit, rng),
        margin_trend=generate_trend(average_margin, rng),
    )
