"""AI destekli içgörü servisi.

- Ürün verisinden doğal dil içgörüleri ve pazarlama tavsiyesi
- İşletme tipi ve konuma göre uyum (compliance) kontrol listesi
- Yapılandırılmamış dosya içeriğinden ürün kaydı çıkarma
- Yönetici raporu içeriği ve 7 günlük satış tahmini

Prompt'lar hesaplanmış metrikleri metin/JSON olarak modele iletir; model
sonuçları deterministik değildir.
"""

from __future__ import annotations

import dataclasses
import json
import logging
import time
from typing import Any, Optional, Sequence

from profit_dashboard.analytics.aggregator import top_product_by_profit
from profit_dashboard.analytics.planning import reorder_suggestion
from profit_dashboard.catalog import ProductValidationError, validate_product_input
from profit_dashboard.models.product import (
    AIInsight,
    CalculatedProduct,
    ComplianceTask,
    DashboardKPIs,
    ForecastedProduct,
    InsightType,
    ProductRecord,
)
from profit_dashboard.services.bedrock_client import (
    AIResponseFormatError,
    AIServiceError,
    BedrockClient,
)

logger = logging.getLogger(__name__)

# Rapor prompt'una gönderilen en fazla ürün sayısı
REPORT_PRODUCT_LIMIT = 20

REPORT_SECTIONS = [
    "executiveSummary",
    "kpiAnalysis",
    "performanceHighlights",
    "areasForImprovement",
    "strategicRecommendations",
]

# Dosyadan çıkarılan alanlar -> ProductRecord alanları
EXTRACTED_FIELDS = {
    "name": "name",
    "purchasePrice": "purchase_price",
    "sellingPrice": "selling_price",
    "unitsSoldWeek": "units_sold_week",
    "category": "category",
    "supplier": "supplier",
    "stockLevel": "stock_level",
}


class DataExtractionError(AIServiceError):
    """Yapılandırılmamış veriden ürün çıkarılamadı."""
    pass


def format_product_data_for_prompt(products: Sequence[CalculatedProduct]) -> str:
    lines = [
        "ProductID, Name, Purchase Price, Selling Price, Units Sold/Week, "
        "Profit Margin (%), Weekly Profit ($), Category, Stock Level, Supplier"
    ]
    for p in products:
        lines.append(
            f"{p.id}, {p.name}, {p.purchase_price:.2f}, {p.selling_price:.2f}, "
            f"{p.units_sold_week}, {p.margin:.1f}%, {p.weekly_profit:.2f}, "
            f"{p.category or 'N/A'}, {p.stock_level or 'N/A'}, {p.supplier or 'N/A'}"
        )
    return "\n".join(lines) + "\n"


def format_kpis_for_prompt(kpis: DashboardKPIs) -> str:
    top = kpis.top_product_by_profit
    top_line = f"{top.name} (${top.weekly_profit:.2f} profit)" if top else "N/A"
    return (
        f"Total Weekly Profit: ${kpis.total_weekly_profit:.2f}\n"
        f"Total Weekly Revenue: ${kpis.total_weekly_revenue:.2f}\n"
        f"Top Product by Profit: {top_line}\n"
        f"Average Profit Margin: {kpis.average_margin:.1f}%"
    )


class InsightService(BedrockClient):
    """Dashboard verisini AI servisine ileten ve yanıtları çözümleyen servis."""

    # --- Doğal dil içgörüleri ---

    def get_ai_insight(self, products: Sequence[CalculatedProduct], question: str) -> str:
        """Mağaza sahibinin sorusunu ürün verisiyle birlikte modele sorar."""
        prompt = (
            "Act as a senior retail business analyst for a small store owner. "
            "Your goal is to provide clear, actionable insights to maximize profit.\n\n"
            "Based on the following product performance data:\n"
            f"--- DATA ---\n{format_product_data_for_prompt(products)}--- END DATA ---\n\n"
            f'The store owner asks: "{question}"\n\n'
            "Please structure your response as follows, using simple Markdown for formatting:\n"
            "1. **Key Takeaway:** A single, bolded sentence summarizing the most critical insight.\n"
            "2. **Actionable Recommendations:** A bulleted list of practical steps the owner can take "
            "based on the data and the question."
        )
        logger.info("AI içgörüsü isteniyor: %s", question[:80])
        return self.invoke(prompt, max_tokens=1000, temperature=0.7)

    def ask(self, products: Sequence[CalculatedProduct], question: str) -> AIInsight:
        """Soruyu yanıtlar ve bilgi bankası için AIInsight olarak döndürür."""
        content = self.get_ai_insight(products, question)
        return AIInsight(
            id=int(time.time() * 1000),
            type=InsightType.GENERAL,
            title=question,
            content=content,
        )

    def get_marketing_advice(
        self,
        product: ProductRecord,
        discount: float,
        lift: float,
        new_price: float,
        simulated_profit: float,
    ) -> AIInsight:
        """Kampanya simülasyonu için pazarlama tavsiyesi üretir."""
        current_profit = (product.selling_price - product.purchase_price) * product.units_sold_week
        prompt = (
            "Act as a marketing strategist for a small retail business.\n"
            "The owner is considering the following promotion:\n"
            f"- Product: {product.name}\n"
            f"- Current Price: ${product.selling_price:.2f}\n"
            f"- Current Weekly Profit from this product: ${current_profit:.2f}\n"
            f"- Proposed Discount: {discount}%\n"
            f"- New Price: ${new_price:.2f}\n"
            f"- Estimated Weekly Sales Increase: {lift}%\n"
            f"- Simulated Weekly Profit: ${simulated_profit:.2f}\n\n"
            "Based on this simulation, provide brief, expert advice using simple Markdown.\n"
            "1. **Potential Pros:** What are the upsides?\n"
            "2. **Potential Cons/Risks:** What should the owner be cautious about? "
            "Quantify the break-even sales lift for this discount if possible.\n"
            "3. **Alternative Idea:** Suggest one alternative marketing idea for this product.\n"
            '4. **Recommendation:** Conclude with "**Recommendation:** Go" or '
            '"**Recommendation:** No-Go" and a one-sentence justification.'
        )
        content = self.invoke(prompt, max_tokens=1000, temperature=0.7)
        return AIInsight(
            id=int(time.time() * 1000),
            type=InsightType.MARKETING,
            title=f"Promotion: {product.name} ({discount}% off)",
            content=content,
            related_product=product.name,
        )

    # --- Uyum kontrol listesi ---

    def generate_compliance_checklist(self, location: str, business_type: str) -> list[ComplianceTask]:
        prompt = (
            f'Generate a general business compliance checklist for a small "{business_type}" '
            f'located in "{location}".\n'
            "Do not provide legal advice, but a general checklist of common requirements.\n"
            "Focus on categories like licenses/permits, tax, employee relations, and "
            "health/safety specific to that business type.\n"
            'Respond ONLY with JSON: {"checklist": [{"task": "...", "details": "one sentence"}]}'
        )
        parsed = self.invoke_json(prompt)
        checklist = parsed.get("checklist") if isinstance(parsed, dict) else None
        if not isinstance(checklist, list):
            raise AIResponseFormatError("AI kontrol listesini beklenen formatta döndürmedi.")
        return [
            ComplianceTask(task=str(item["task"]), details=str(item["details"]))
            for item in checklist
            if isinstance(item, dict) and "task" in item and "details" in item
        ]

    # --- Yapılandırılmamış veriden ürün çıkarma ---

    def parse_unstructured_data(self, file_content: str) -> list[dict]:
        """Dosya içeriğinden ürün taslakları çıkarır (id içermez).

        Zorunlu alanları eksik veya geçersiz olan satırlar atlanır.
        """
        if not file_content.strip():
            raise DataExtractionError("Dosya boş veya okunamadı.")

        prompt = (
            "Act as an intelligent data extraction engine. Analyze the following unstructured "
            "text data from a file and convert it into a structured JSON array of products.\n\n"
            "The data could be CSV, JSON, TXT with different delimiters, or copy-pasted text.\n"
            "Be smart about mapping column headers. For example:\n"
            "- 'Product Name', 'Item', 'title' map to 'name'.\n"
            "- 'Cost', 'Purchase Price', 'Buy Price', 'costPrice' map to 'purchasePrice'.\n"
            "- 'Price', 'Selling Price', 'Retail Price', 'sellPrice' map to 'sellingPrice'.\n"
            "- 'Units Sold', 'Weekly Sales', 'Qty Sold', 'unitsSoldWeek' map to 'unitsSoldWeek' (integer).\n"
            "Optional fields: 'category', 'supplier', 'stockLevel'.\n\n"
            "Ignore currency symbols, thousands separators and extra whitespace in numbers.\n"
            "Skip header or malformed rows. Only return entries that have all the required data.\n\n"
            f"--- DATA ---\n{file_content}\n--- END DATA ---\n\n"
            'Return ONLY JSON: {"products": [{"name": "...", "purchasePrice": 0, '
            '"sellingPrice": 0, "unitsSoldWeek": 0}]}'
        )

        try:
            parsed = self.invoke_json(prompt, max_tokens=4000, temperature=0.1)
        except AIResponseFormatError as e:
            raise DataExtractionError(
                "AI geçerli JSON döndürmedi. Dosya çok karmaşık veya metin tabanlı olmayabilir."
            ) from e
        except AIServiceError as e:
            raise DataExtractionError(
                "AI modeli dosyayı çözümleyemedi. Dosya içeriğini kontrol edip tekrar deneyin."
            ) from e

        items = parsed.get("products") if isinstance(parsed, dict) else None
        if not isinstance(items, list):
            raise DataExtractionError("AI veriyi beklenmeyen bir formatta döndürdü.")

        drafts = [draft for draft in (_to_draft(item) for item in items) if draft]
        if not drafts:
            raise DataExtractionError("AI dosyada geçerli ürün verisi bulamadı.")

        logger.info("Dosyadan %d/%d ürün çıkarıldı", len(drafts), len(items))
        return drafts

    # --- Rapor içeriği ---

    def generate_report_content(
        self, kpis: DashboardKPIs, products: Sequence[CalculatedProduct]
    ) -> dict:
        """Yönetici raporu için yapılandırılmış analiz içeriği üretir."""
        data_str = format_product_data_for_prompt(products[:REPORT_PRODUCT_LIMIT])
        prompt = (
            "Act as a professional senior business analyst creating an executive report.\n"
            "You will be given KPIs and a product list for the current period. Generate a "
            "structured JSON object with an insightful, narrative-driven analysis.\n\n"
            f"--- KPIs ---\n{format_kpis_for_prompt(kpis)}\n--- END KPIs ---\n\n"
            f"--- DETAILED PRODUCT DATA (Sample) ---\n{data_str}--- END DETAILED PRODUCT DATA ---\n\n"
            "Return ONLY JSON with these keys:\n"
            '- "executiveSummary": one paragraph summarizing the week\'s performance\n'
            '- "kpiAnalysis": short paragraph expanding on the KPIs\n'
            '- "performanceHighlights": 2-3 strings\n'
            '- "areasForImprovement": 2-3 strings\n'
            '- "strategicRecommendations": 2-3 objects with "recommendation", "impact" '
            '(quantified estimate) and "risk"'
        )
        parsed = self.invoke_json(prompt, max_tokens=3000, temperature=0.4)
        missing = [key for key in REPORT_SECTIONS if not isinstance(parsed, dict) or key not in parsed]
        if missing:
            raise AIResponseFormatError(f"Rapor içeriğinde eksik bölümler: {', '.join(missing)}")
        return parsed

    # --- Satış tahmini ---

    def get_sales_forecast(self, products: Sequence[CalculatedProduct]) -> list[ForecastedProduct]:
        """Önümüzdeki 7 gün için satış tahmini ve yeniden sipariş önerisi.

        Model bir ürün için tahmin döndürmezse mevcut haftalık satış kullanılır.
        """
        product_data = [
            {
                "id": p.id,
                "name": p.name,
                "category": p.category or "N/A",
                "sellingPrice": p.selling_price,
                "unitsSoldWeek": p.units_sold_week,
                "stockLevel": p.stock_level or 0,
            }
            for p in products
        ]
        prompt = (
            "Act as an expert supply chain analyst for a small retail store.\n"
            "Based on the following product data (recent weekly sales), provide a sales "
            "forecast for the next 7 days for each product.\n\n"
            f"--- DATA ---\n{json.dumps(product_data, indent=2)}\n--- END DATA ---\n\n"
            "Consider potential simple trends but do not over-complicate. The forecast should "
            'be a single integer. Return ONLY JSON: {"forecasts": [{"id": 0, "forecastedSales": 0}]}'
        )
        parsed = self.invoke_json(prompt, max_tokens=2000, temperature=0.3)

        forecast_map: dict[int, float] = {}
        forecasts = parsed.get("forecasts") if isinstance(parsed, dict) else None
        for item in forecasts or []:
            try:
                forecast_map[int(item["id"])] = float(item["forecastedSales"])
            except (KeyError, TypeError, ValueError):
                logger.warning("Geçersiz tahmin kaydı atlandı: %s", item)

        result = []
        for p in products:
            forecasted = forecast_map.get(p.id, float(p.units_sold_week))
            result.append(
                ForecastedProduct(
                    **dataclasses.asdict(p),
                    forecasted_sales=forecasted,
                    reorder_suggestion=reorder_suggestion(forecasted, p.stock_level),
                )
            )
        return result


def business_overview_prompt(kpis: DashboardKPIs, products: Sequence[CalculatedProduct]) -> str:
    """Canlı işletme özeti için prompt; en kârlı ve en az kârlı ürünü içerir."""
    top = top_product_by_profit(products)
    bottom: Optional[CalculatedProduct] = (
        sorted(products, key=lambda p: p.weekly_profit)[0] if products else None
    )

    def describe(p: Optional[CalculatedProduct], with_sales: bool) -> str:
        if p is None:
            return "N/A"
        text = f"{p.name} (${p.weekly_profit:.2f} profit, {p.stock_level or 0} in stock"
        if with_sales:
            text += f", {p.units_sold_week} sold/wk"
        return text + ")"

    return (
        "Act as a live business operations AI for a small retail store owner.\n"
        "Provide a very brief summary of the current business situation and highlight any "
        "CRITICAL alerts. Use simple markdown. Start with a 1-2 sentence summary, then list "
        "alerts if any. An alert should be for something that requires immediate attention, "
        "like a potential stockout of a key item.\n\n"
        "--- DATA ---\n"
        f"Total Weekly Profit: ${kpis.total_weekly_profit:.2f}\n"
        f"Top Product: {describe(top, with_sales=True)}\n"
        f"Lowest Profit Product: {describe(bottom, with_sales=False)}\n"
        "--- END DATA ---\n\n"
        "Generate the summary and alerts now."
    )


def _to_draft(item: Any) -> Optional[dict]:
    if not isinstance(item, dict):
        return None
    raw = {EXTRACTED_FIELDS[k]: v for k, v in item.items() if k in EXTRACTED_FIELDS}
    try:
        name, pp, sp, usw, stock = validate_product_input(
            raw.get("name"),
            raw.get("purchase_price"),
            raw.get("selling_price"),
            raw.get("units_sold_week"),
            raw.get("stock_level"),
        )
    except ProductValidationError as e:
        logger.warning("Geçersiz ürün satırı atlandı (%s): %s", e, item)
        return None
    return {
        "name": name,
        "purchase_price": pp,
        "selling_price": sp,
        "units_sold_week": usw,
        "category": raw.get("category") or None,
        "supplier": raw.get("supplier") or None,
        "stock_level": stock,
    }
