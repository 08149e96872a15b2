"""Ürün, metrik ve dashboard veri modelleri."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


class WidgetId(str, Enum):
    AI_OVERVIEW = "aiOverview"
    COMPLIANCE_CHECKLIST = "complianceChecklist"
    SALES_FORECAST = "salesForecast"
    PROFITABILITY_CHARTS = "profitabilityCharts"
    GEMINI_INSIGHTS = "geminiInsights"
    MARKETING_SIMULATOR = "marketingSimulator"
    AI_KNOWLEDGE_BASE = "aiKnowledgeBase"
    DATA_INPUT = "dataInput"
    GOAL_TRACKER = "goalTracker"


class InsightType(str, Enum):
    GENERAL = "General Insight"
    MARKETING = "Marketing Advice"


@dataclass
class ProductRecord:
    id: int
    name: str
    purchase_price: float
    selling_price: float
    units_sold_week: int
    category: Optional[str] = None
    supplier: Optional[str] = None
    stock_level: Optional[int] = None

    def to_dict(self) -> dict:
        """Snapshot için sadece ham ürün alanlarını döndürür."""
        return {f.name: getattr(self, f.name) for f in fields(ProductRecord)}

    @classmethod
    def from_dict(cls, data: dict) -> "ProductRecord":
        """Snapshot sözlüğünden kayıt oluşturur, bilinmeyen alanları yok sayar."""
        known = {f.name for f in fields(ProductRecord)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class CalculatedProduct(ProductRecord):
    margin: float = 0.0
    weekly_profit: float = 0.0
    weekly_revenue: float = 0.0
    inventory_turnover: float = 0.0
    sell_through_rate: float = 0.0


@dataclass
class ForecastedProduct(CalculatedProduct):
    forecasted_sales: float = 0.0
    reorder_suggestion: str = ""


@dataclass
class DashboardKPIs:
    total_weekly_profit: float = 0.0
    total_weekly_revenue: float = 0.0
    average_margin: float = 0.0
    top_product_by_profit: Optional[CalculatedProduct] = None
    profit_trend: list[float] = field(default_factory=list)
    margin_trend: list[float] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class CategoryBreakdown:
    # Sözlük sırası görüntüleme sırasıdır (değere göre azalan)
    revenue: dict[str, float] = field(default_factory=dict)
    avg_margin: dict[str, float] = field(default_factory=dict)


@dataclass
class WidgetState:
    order: int
    visible: bool


WidgetConfig = dict[WidgetId, WidgetState]


@dataclass
class WidgetSlot:
    id: WidgetId
    content: Any = None


@dataclass
class PromotionSimulation:
    product_id: int
    new_price: float
    new_units: float
    new_profit: float
    profit_change: float


@dataclass
class GoalProgress:
    current_profit: float
    goal: float
    progress_pct: float
    is_met: bool


@dataclass
class ComplianceTask:
    task: str
    details: str


@dataclass
class AIInsight:
    id: int
    type: InsightType
    title: str
    content: str
    related_product: Optional[str] = None
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
