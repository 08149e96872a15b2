"""AI bilgi bankası - kaydedilen içgörüler, arama/tür filtresi ve kaldırma."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from profit_dashboard.models.product import AIInsight, InsightType

logger = logging.getLogger(__name__)


def filter_insights(
    insights: Sequence[AIInsight],
    term: str = "",
    insight_type: Optional[InsightType] = None,
) -> list[AIInsight]:
    """Türe ve başlık/içerikte geçen metne göre içgörüleri süzer.

    insight_type None ise tüm türler gelir. Arama büyük/küçük harf duyarsız
    düz alt dize eşleşmesidir; boş terim her şeyle eşleşir. Sıra korunur.
    """
    needle = (term or "").lower()
    return [
        insight
        for insight in insights
        if (insight_type is None or insight.type == insight_type)
        and (not needle or needle in insight.title.lower() or needle in insight.content.lower())
    ]


class KnowledgeBase:
    """Oturum boyunca biriken içgörüler; en yeni kayıt başta tutulur."""

    def __init__(self, insights: Optional[Iterable[AIInsight]] = None) -> None:
        self._insights: list[AIInsight] = list(insights or [])

    @property
    def insights(self) -> list[AIInsight]:
        return list(self._insights)

    def __len__(self) -> int:
        return len(self._insights)

    def add(self, insight: AIInsight) -> AIInsight:
        self._insights.insert(0, insight)
        logger.info("İçgörü bilgi bankasına eklendi: %s (id=%d)", insight.title, insight.id)
        return insight

    def dismiss(self, insight_id: int) -> bool:
        """İçgörüyü kaldırır; bulunamazsa hiçbir şey yapmaz ve False döner."""
        before = len(self._insights)
        self._insights = [i for i in self._insights if i.id != insight_id]
        removed = len(self._insights) < before
        if removed:
            logger.info("İçgörü kaldırıldı: id=%d", insight_id)
        return removed

    def filter(self, term: str = "", insight_type: Optional[InsightType] = None) -> list[AIInsight]:
        return filter_insights(self._insights, term, insight_type)
