"""Planlama yardımcıları - kampanya simülasyonu, kâr hedefi takibi ve yeniden sipariş önerisi."""

from __future__ import annotations

import math
from typing import Optional

from profit_dashboard.models.product import CalculatedProduct, GoalProgress, PromotionSimulation

DEFAULT_PROFIT_GOAL = 1500.0
# Stok, tahmini satışın bu katını aşarsa fazla stok sayılır
OVERSTOCK_FACTOR = 2


def simulate_promotion(
    product: CalculatedProduct, discount_pct: float, lift_pct: float
) -> PromotionSimulation:
    """İndirim ve beklenen satış artışına göre yeni haftalık kârı hesaplar."""
    new_price = product.selling_price * (1 - discount_pct / 100)
    new_units = product.units_sold_week * (1 + lift_pct / 100)
    new_profit = (new_price - product.purchase_price) * new_units
    return PromotionSimulation(
        product_id=product.id,
        new_price=new_price,
        new_units=new_units,
        new_profit=new_profit,
        profit_change=new_profit - product.weekly_profit,
    )


def goal_progress(current_profit: float, goal: float) -> GoalProgress:
    """Haftalık kâr hedefine ulaşma yüzdesi (en fazla 100)."""
    progress = min(current_profit / goal * 100, 100.0) if goal > 0 else 0.0
    return GoalProgress(
        current_profit=current_profit,
        goal=goal,
        progress_pct=progress,
        is_met=progress >= 100,
    )


def reorder_suggestion(forecasted_sales: float, stock_level: Optional[int]) -> str:
    stock = stock_level or 0
    reorder_amount = max(0, forecasted_sales - stock)
    suggestion = f"Reorder {math.ceil(reorder_amount)}"
    if reorder_amount == 0:
        suggestion = "Sufficient Stock"
    if stock > forecasted_sales * OVERSTOCK_FACTOR:
        suggestion = "Potentially Overstocked"
    return suggestion
