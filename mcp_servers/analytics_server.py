"""
Profit Analytics MCP Server

Dashboard analitik çekirdeğini agent'lara tool olarak açar: ürün metrikleri,
KPI'lar, arama/filtreleme, kategori özetleri, kampanya simülasyonu ve widget
yerleşimi. Ürünler argümanlarda sözlük listesi olarak gelir; sunucu durum
tutmaz.

Çalıştırma: python -m mcp_servers.analytics_server
"""

from __future__ import annotations

import dataclasses
import json
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.types import TextContent, Tool

from profit_dashboard.analytics.aggregator import aggregate
from profit_dashboard.analytics.categories import by_category, revenue_share
from profit_dashboard.analytics.layout import merge_widget_config, resolve
from profit_dashboard.analytics.metrics import calculate_all
from profit_dashboard.analytics.planning import simulate_promotion as _simulate
from profit_dashboard.analytics.search import filter_products as _filter
from profit_dashboard.models.product import CalculatedProduct, ProductRecord, WidgetId, WidgetSlot


app = Server("profit-analytics")

_PRODUCT_LIST = {
    "type": "array",
    "description": "Ürün kayıtları: id, name, purchase_price, selling_price, units_sold_week, "
                   "opsiyonel category, supplier, stock_level",
    "items": {"type": "object"},
}


def _result(data):
    return [TextContent(type="text", text=json.dumps(data, indent=2, ensure_ascii=False))]


def _records(raw: List[Dict]) -> List[CalculatedProduct]:
    return calculate_all(ProductRecord.from_dict(item) for item in raw)


def _product_dict(product: CalculatedProduct) -> Dict:
    return dataclasses.asdict(product)


@app.list_tools()
async def list_tools() -> List[Tool]:
    return [
        Tool(name="calculate_metrics", description="Calculate margin, weekly profit/revenue, turnover and sell-through per product",
             inputSchema={"type": "object", "properties": {"products": _PRODUCT_LIST}, "required": ["products"]}),
        Tool(name="dashboard_kpis", description="Totals, average margin, top product and 7-point trend series",
             inputSchema={"type": "object", "properties": {
                 "products": _PRODUCT_LIST,
                 "search_term": {"type": "string", "description": "Optional: filter before aggregating"},
                 "category": {"type": "string", "description": "Optional: filter before aggregating"},
             }, "required": ["products"]}),
        Tool(name="filter_products", description="Fuzzy search over name, category and supplier (all tokens must match)",
             inputSchema={"type": "object", "properties": {
                 "products": _PRODUCT_LIST,
                 "search_term": {"type": "string", "default": ""},
                 "category": {"type": "string", "description": "Optional exact category"},
             }, "required": ["products"]}),
        Tool(name="category_breakdown", description="Weekly revenue and average margin per category, sorted descending",
             inputSchema={"type": "object", "properties": {"products": _PRODUCT_LIST}, "required": ["products"]}),
        Tool(name="simulate_promotion", description="Simulate weekly profit for a discount and expected sales lift",
             inputSchema={"type": "object", "properties": {
                 "products": _PRODUCT_LIST,
                 "product_id": {"type": "integer"},
                 "discount_pct": {"type": "number", "default": 10},
                 "lift_pct": {"type": "number", "default": 20},
             }, "required": ["products", "product_id"]}),
        Tool(name="resolve_layout", description="Visible widgets in display order for a saved widget configuration",
             inputSchema={"type": "object", "properties": {
                 "widget_ids": {"type": "array", "items": {"type": "string"}},
                 "widget_config": {"type": "object", "description": "Optional: {widgetId: {order, visible}}"},
             }, "required": ["widget_ids"]}),
    ]


@app.call_tool()
async def call_tool(name: str, arguments: dict) -> List[TextContent]:
    handlers = {
        "calculate_metrics": lambda a: calculate_metrics(a["products"]),
        "dashboard_kpis": lambda a: dashboard_kpis(a["products"], a.get("search_term", ""), a.get("category")),
        "filter_products": lambda a: filter_products(a["products"], a.get("search_term", ""), a.get("category")),
        "category_breakdown": lambda a: category_breakdown(a["products"]),
        "simulate_promotion": lambda a: simulate_promotion(a["products"], a["product_id"], a.get("discount_pct", 10), a.get("lift_pct", 20)),
        "resolve_layout": lambda a: resolve_layout(a["widget_ids"], a.get("widget_config")),
    }
    handler = handlers.get(name)
    if not handler:
        raise ValueError(f"Unknown tool: {name}")
    return _result(handler(arguments))


# --- Implementation ---

def calculate_metrics(products: List[Dict]) -> Dict:
    try:
        calculated = _records(products)
        return {"success": True, "count": len(calculated), "data": [_product_dict(p) for p in calculated]}
    except (TypeError, ValueError) as e:
        return {"success": False, "error": str(e), "data": []}


def dashboard_kpis(products: List[Dict], search_term: str = "", category: Optional[str] = None) -> Dict:
    try:
        filtered = _filter(_records(products), search_term, category)
        kpis = aggregate(filtered)
        return {"success": True, "product_count": len(filtered), "data": kpis.to_dict()}
    except (TypeError, ValueError) as e:
        return {"success": False, "error": str(e), "data": None}


def filter_products(products: List[Dict], search_term: str = "", category: Optional[str] = None) -> Dict:
    try:
        filtered = _filter(_records(products), search_term, category)
        return {"success": True, "count": len(filtered), "data": [_product_dict(p) for p in filtered]}
    except (TypeError, ValueError) as e:
        return {"success": False, "error": str(e), "data": []}


def category_breakdown(products: List[Dict]) -> Dict:
    try:
        breakdown = by_category(_records(products))
        return {"success": True, "revenue": breakdown.revenue, "avg_margin": breakdown.avg_margin,
                "revenue_share": revenue_share(breakdown)}
    except (TypeError, ValueError) as e:
        return {"success": False, "error": str(e)}


def simulate_promotion(products: List[Dict], product_id: int, discount_pct: float = 10, lift_pct: float = 20) -> Dict:
    try:
        records = _records(products)
    except (TypeError, ValueError) as e:
        return {"success": False, "error": str(e)}

    product = next((p for p in records if p.id == product_id), None)
    if product is None:
        return {"success": False, "error": f"Product not found: {product_id}"}

    sim = _simulate(product, discount_pct, lift_pct)
    return {"success": True, "product": product.name, "current_profit": round(product.weekly_profit, 2),
            "new_price": round(sim.new_price, 2), "new_units": round(sim.new_units, 2),
            "new_profit": round(sim.new_profit, 2), "profit_change": round(sim.profit_change, 2)}


def resolve_layout(widget_ids: List[str], widget_config: Optional[Dict[str, Any]] = None) -> Dict:
    known = {w.value for w in WidgetId}
    unknown = [w for w in widget_ids if w not in known]
    slots = [WidgetSlot(id=WidgetId(w)) for w in widget_ids if w in known]
    ordered = resolve(merge_widget_config(widget_config), slots)
    return {"success": True, "visible": [slot.id.value for slot in ordered], "ignored": unknown}


if __name__ == "__main__":
    import asyncio
    from mcp.server.stdio import stdio_server

    from profit_dashboard.config import configure_logging, load_settings

    configure_logging(load_settings())

    async def run():
        async with stdio_server() as (read, write):
            await app.run(read, write, app.create_initialization_options())

    asyncio.run(run())
