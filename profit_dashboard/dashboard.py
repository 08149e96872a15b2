"""Dashboard durumu ve yeniden hesaplama hattı.

Ham ürün listesi, arama terimi veya seçili kategori değiştiğinde tüm
türetilmiş görünümler baştan hesaplanır:

    ürünler -> metrikler -> filtre -> KPI'lar
                         -> kategori özetleri (tüm ürünler üzerinden)
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from profit_dashboard.analytics.aggregator import RandomSource, aggregate
from profit_dashboard.analytics.categories import by_category
from profit_dashboard.analytics.layout import config_to_dict, default_widget_config, resolve
from profit_dashboard.analytics.metrics import calculate_all
from profit_dashboard.analytics.planning import DEFAULT_PROFIT_GOAL, goal_progress
from profit_dashboard.analytics.search import filter_products, suggest_names
from profit_dashboard.catalog import ProductCatalog
from profit_dashboard.knowledge_base import KnowledgeBase
from profit_dashboard.models.product import (
    CalculatedProduct,
    CategoryBreakdown,
    DashboardKPIs,
    GoalProgress,
    WidgetConfig,
    WidgetSlot,
)
from profit_dashboard.storage import (
    DEFAULT_THEME,
    PROFIT_GOAL_KEY,
    THEME_KEY,
    WIDGET_CONFIG_KEY,
    SnapshotStore,
    load_products,
    load_profit_goal,
    load_theme,
    load_widget_config,
    save_products,
)

logger = logging.getLogger(__name__)


class Dashboard:
    """Tek kullanıcılı dashboard durumu."""

    def __init__(
        self,
        catalog: Optional[ProductCatalog] = None,
        profit_goal: float = DEFAULT_PROFIT_GOAL,
        theme: str = DEFAULT_THEME,
        widget_config: Optional[WidgetConfig] = None,
    ) -> None:
        self.catalog = catalog or ProductCatalog()
        self.search_term = ""
        self.selected_category: Optional[str] = None
        self.profit_goal = DEFAULT_PROFIT_GOAL
        self.set_profit_goal(profit_goal)
        self.theme = theme
        self.widget_config = widget_config or default_widget_config()
        self.knowledge_base = KnowledgeBase()

    # --- Türetilmiş görünümler ---

    @property
    def calculated_products(self) -> list[CalculatedProduct]:
        return calculate_all(self.catalog.products)

    @property
    def filtered_products(self) -> list[CalculatedProduct]:
        return filter_products(self.calculated_products, self.search_term, self.selected_category)

    def categories(self) -> list[str]:
        """Filtre seçenekleri: ilk görülme sırasıyla tekil kategoriler."""
        seen: dict[str, None] = {}
        for product in self.catalog.products:
            if product.category:
                seen.setdefault(product.category, None)
        return list(seen)

    def metrics(self, rng: Optional[RandomSource] = None) -> DashboardKPIs:
        """Filtrelenmiş görünümün KPI'ları."""
        return aggregate(self.filtered_products, rng)

    def category_breakdown(self) -> CategoryBreakdown:
        # Grafikler filtreden bağımsız olarak tüm ürünleri gösterir
        return by_category(self.calculated_products)

    def suggestions(self) -> list[str]:
        return suggest_names(self.calculated_products, self.search_term)

    def goal(self) -> GoalProgress:
        return goal_progress(self.metrics().total_weekly_profit, self.profit_goal)

    def layout(self, slots: Sequence[WidgetSlot]) -> list[WidgetSlot]:
        return resolve(self.widget_config, slots)

    # --- Durum değişiklikleri ---

    def set_profit_goal(self, goal: float) -> None:
        if goal <= 0:
            raise ValueError("Kâr hedefi pozitif olmalı.")
        self.profit_goal = float(goal)

    def toggle_theme(self) -> str:
        self.theme = "dark" if self.theme == "light" else "light"
        return self.theme

    # --- Kalıcılık ---

    def save(self, store: SnapshotStore) -> None:
        save_products(store, self.catalog.products)
        store.persist(PROFIT_GOAL_KEY, self.profit_goal)
        store.persist(THEME_KEY, self.theme)
        store.persist(WIDGET_CONFIG_KEY, config_to_dict(self.widget_config))
        logger.info("Dashboard kaydedildi (%d ürün)", len(self.catalog))

    @classmethod
    def from_store(cls, store: SnapshotStore) -> "Dashboard":
        products = load_products(store)
        dashboard = cls(
            catalog=ProductCatalog(products),
            profit_goal=load_profit_goal(store),
            theme=load_theme(store),
            widget_config=load_widget_config(store),
        )
        logger.info("Dashboard yüklendi (%d ürün)", len(products))
        return dashboard
