"""
Profit Dashboard Demo Script'i.

Analitik çekirdeği varsayılan ürünlerle çalıştırır; --ai verilirse gerçek
AWS Bedrock ile içgörü ve canlı özet üretir.

Kullanım:
    python demo.py
    python demo.py --ai          # AWS credential'ları gerekir
"""

import random
import sys

from profit_dashboard.analytics.categories import revenue_share
from profit_dashboard.analytics.layout import WIDGET_GROUPS, move_widget
from profit_dashboard.analytics.planning import simulate_promotion
from profit_dashboard.catalog import ProductCatalog, ProductValidationError, seed_products
from profit_dashboard.config import configure_logging, load_settings
from profit_dashboard.dashboard import Dashboard
from profit_dashboard.export import export_csv, export_filename
from profit_dashboard.models.product import WidgetSlot
from profit_dashboard.services.bedrock_client import AIServiceError
from profit_dashboard.storage import SnapshotStore


def show_kpis(dashboard: Dashboard):
    print("\n--- KPI'lar ---")
    kpis = dashboard.metrics(rng=random.Random(42).random)
    print(f"   Haftalık kâr:  ${kpis.total_weekly_profit:,.2f}")
    print(f"   Haftalık ciro: ${kpis.total_weekly_revenue:,.2f}")
    print(f"   Ortalama marj: {kpis.average_margin:.1f}%")
    if kpis.top_product_by_profit:
        top = kpis.top_product_by_profit
        print(f"   🏆 En kârlı ürün: {top.name} (${top.weekly_profit:,.2f})")
    print(f"   Kâr trendi: {[round(v, 2) for v in kpis.profit_trend]}")

    goal = dashboard.goal()
    print(f"   Hedef: ${goal.goal:,.0f} -> %{goal.progress_pct:.1f} {'✅' if goal.is_met else ''}")


def show_search(dashboard: Dashboard):
    print("\n--- Arama ---")
    for term in ["org milk", "frsh", "local bread"]:
        dashboard.search_term = term
        names = [p.name for p in dashboard.filtered_products]
        print(f"   '{term}': {names}")
    dashboard.search_term = "org"
    print(f"   Öneriler ('org'): {dashboard.suggestions()}")
    dashboard.search_term = ""

    dashboard.selected_category = "Dairy"
    print(f"   Kategori 'Dairy': {len(dashboard.filtered_products)} ürün")
    dashboard.selected_category = None


def show_categories(dashboard: Dashboard):
    print("\n--- Kategori Özeti (tüm ürünler) ---")
    breakdown = dashboard.category_breakdown()
    shares = revenue_share(breakdown)
    for name, revenue in breakdown.revenue.items():
        print(f"   {name:<10} ciro=${revenue:>9,.2f}  pay=%{shares[name]:.1f}  marj=%{breakdown.avg_margin[name]:.1f}")


def show_layout(dashboard: Dashboard):
    print("\n--- Widget Yerleşimi ---")
    group = WIDGET_GROUPS["aiAnalysisTab"]
    slots = [WidgetSlot(id=w) for w in group]
    print(f"   Varsayılan: {[s.id.value for s in dashboard.layout(slots)]}")
    dashboard.widget_config = move_widget(dashboard.widget_config, group, 2, "up")
    print(f"   Bilgi bankası yukarı: {[s.id.value for s in dashboard.layout(slots)]}")


def show_catalog(dashboard: Dashboard):
    print("\n--- Ürün Ekleme ---")
    try:
        dashboard.catalog.add_product("Cold Brew", "5.00", "3.00", "10")
    except ProductValidationError as e:
        print(f"   ❌ Reddedildi: {e}")
    product = dashboard.catalog.add_product("Cold Brew", "2.00", "4.50", "40", "Drinks", "Fizz Pop Beverages", "60")
    print(f"   ✅ Eklendi: {product.name} (id={product.id})")

    calculated = next(p for p in dashboard.calculated_products if p.id == product.id)
    sim = simulate_promotion(calculated, discount_pct=10, lift_pct=30)
    print(f"   Kampanya (%10 indirim, %30 artış): kâr ${calculated.weekly_profit:.2f} -> ${sim.new_profit:.2f}")


def show_ai(dashboard: Dashboard, settings):
    print("\n--- AI İçgörüleri (Bedrock) ---")
    from profit_dashboard.services.insights import InsightService
    from profit_dashboard.services.overview import OverviewFeed

    service = InsightService(model_id=settings.model_id, region_name=settings.region_name)
    products = dashboard.calculated_products
    try:
        print(service.get_ai_insight(products, "Which products should I promote this week?"))
        forecast = service.get_sales_forecast(products[:5])
        for p in forecast:
            print(f"   {p.name}: tahmin={p.forecasted_sales:.0f} -> {p.reorder_suggestion}")
    except AIServiceError as e:
        print(f"❌ AI hatası: {e}")

    print("\n   Canlı özet:")
    feed = OverviewFeed(service)
    for chunk in feed.stream(dashboard.metrics(), products):
        print(chunk, end="", flush=True)
    print()


if __name__ == "__main__":
    settings = load_settings()
    configure_logging(settings)

    print("📊 Profit Dashboard - Demo")
    print("=" * 60)

    dashboard = Dashboard(catalog=ProductCatalog(seed_products()))
    show_kpis(dashboard)
    show_search(dashboard)
    show_categories(dashboard)
    show_layout(dashboard)
    show_catalog(dashboard)

    print("\n--- CSV ---")
    csv_text = export_csv(dashboard.filtered_products)
    print(f"   {export_filename()}: {len(csv_text.splitlines()) - 1} satır")

    store = SnapshotStore(settings.data_dir)
    dashboard.save(store)
    restored = Dashboard.from_store(store)
    print(f"   Snapshot: {len(restored.catalog)} ürün, hedef={restored.profit_goal}, tema={restored.theme}")

    if "--ai" in sys.argv:
        show_ai(dashboard, settings)

    print("\n" + "=" * 60)
    print("🎉 Demo tamamlandı!")
