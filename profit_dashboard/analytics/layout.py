"""Widget yerleşimi - görünürlük, sıralama ve kullanıcı özelleştirmesi.

Kayıtlı konfigürasyon yüklenirken bir kez varsayılanlarla birleştirilir
(merge_widget_config); resolve() her widget için eksiksiz konfigürasyon
bekler.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Optional, Sequence

from profit_dashboard.models.product import WidgetConfig, WidgetId, WidgetSlot, WidgetState

logger = logging.getLogger(__name__)

DEFAULT_WIDGET_CONFIG: WidgetConfig = {
    WidgetId.AI_OVERVIEW: WidgetState(order=1, visible=True),
    WidgetId.COMPLIANCE_CHECKLIST: WidgetState(order=2, visible=True),
    WidgetId.SALES_FORECAST: WidgetState(order=3, visible=True),
    WidgetId.PROFITABILITY_CHARTS: WidgetState(order=1, visible=True),
    WidgetId.GEMINI_INSIGHTS: WidgetState(order=1, visible=True),
    WidgetId.MARKETING_SIMULATOR: WidgetState(order=2, visible=True),
    WidgetId.AI_KNOWLEDGE_BASE: WidgetState(order=3, visible=True),
    WidgetId.DATA_INPUT: WidgetState(order=1, visible=True),
    WidgetId.GOAL_TRACKER: WidgetState(order=1, visible=True),
}

# Özelleştirme ekranındaki gruplar; sıralama değişikliği grup içinde yapılır
WIDGET_GROUPS: dict[str, list[WidgetId]] = {
    "leftColumn": [WidgetId.DATA_INPUT],
    "main": [WidgetId.COMPLIANCE_CHECKLIST],
    "dashboardTab": [WidgetId.PROFITABILITY_CHARTS],
    "aiAnalysisTab": [
        WidgetId.GEMINI_INSIGHTS,
        WidgetId.MARKETING_SIMULATOR,
        WidgetId.AI_KNOWLEDGE_BASE,
    ],
}


def default_widget_config() -> WidgetConfig:
    return copy.deepcopy(DEFAULT_WIDGET_CONFIG)


def merge_widget_config(raw: Optional[dict[str, Any]]) -> WidgetConfig:
    """Kayıtlı snapshot'ı varsayılan konfigürasyonla birleştirir.

    Yazılım güncellemesiyle eklenen widget'lar snapshot'ta olmasa da
    varsayılan değerleriyle gelir. Bilinmeyen anahtarlar yok sayılır.
    """
    merged = default_widget_config()
    if not raw:
        return merged

    for widget_id, state in merged.items():
        saved = raw.get(widget_id.value)
        if not isinstance(saved, dict):
            continue
        if "order" in saved:
            try:
                state.order = int(saved["order"])
            except (TypeError, ValueError, OverflowError):
                logger.warning("Geçersiz widget sırası yok sayıldı: %s=%r", widget_id.value, saved["order"])
        # "false" gibi metinler bool() ile True olur; sadece gerçek bool kabul edilir
        if isinstance(saved.get("visible"), bool):
            state.visible = saved["visible"]
        elif "visible" in saved:
            logger.warning("Geçersiz widget görünürlüğü yok sayıldı: %s=%r", widget_id.value, saved["visible"])

    unknown = set(raw) - {w.value for w in WidgetId}
    if unknown:
        logger.debug("Bilinmeyen widget anahtarları yok sayıldı: %s", sorted(unknown))
    return merged


def config_to_dict(config: WidgetConfig) -> dict[str, dict[str, Any]]:
    """Konfigürasyonu JSON'a yazılabilir sözlüğe çevirir."""
    return {
        widget_id.value: {"order": state.order, "visible": state.visible}
        for widget_id, state in config.items()
    }


def resolve(config: WidgetConfig, slots: Sequence[WidgetSlot]) -> list[WidgetSlot]:
    """Görünür widget'ları order değerine göre (kararlı) sıralı döndürür.

    Konfigürasyonda olmayan bir widget görünmez kabul edilir.
    """
    visible = [slot for slot in slots if slot.id in config and config[slot.id].visible]
    return sorted(visible, key=lambda slot: config[slot.id].order)


def toggle_visibility(config: WidgetConfig, widget_id: WidgetId) -> WidgetConfig:
    updated = copy.deepcopy(config)
    state = updated[widget_id]
    state.visible = not state.visible
    return updated


def move_widget(
    config: WidgetConfig, group: Sequence[WidgetId], index: int, direction: str
) -> WidgetConfig:
    """Grup içindeki widget'ı komşusuyla order değerini değiştirerek taşır.

    direction "up" veya "down" olmalı. Grup sınırı dışına taşıma etkisizdir.
    """
    if direction not in ("up", "down"):
        raise ValueError(f"Geçersiz yön: {direction}")

    new_index = index - 1 if direction == "up" else index + 1
    if index < 0 or index >= len(group) or new_index < 0 or new_index >= len(group):
        return copy.deepcopy(config)

    updated = copy.deepcopy(config)
    moving, swapping = updated[group[index]], updated[group[new_index]]
    moving.order, swapping.order = swapping.order, moving.order
    return updated
