"""Canlı işletme özeti akışı.

Ürün listesi her değiştiğinde yeni bir özet istenir. Önceki isteğin geç
gelen parçaları yeni özetin üzerine yazılmamalıdır; bu yüzden her istek
bir nesil (generation) numarası alır ve yalnızca güncel nesil çıktı üretir.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterator, Optional, Sequence

from profit_dashboard.models.product import CalculatedProduct, DashboardKPIs
from profit_dashboard.services.bedrock_client import AIServiceError
from profit_dashboard.services.insights import InsightService, business_overview_prompt

logger = logging.getLogger(__name__)

EMPTY_HINT = "Add some products to get started with AI analysis."
FAILURE_TEXT = "Could not load AI overview."


class OverviewFeed:
    """Eski isteklerin çıktısını bastıran özet akışı."""

    def __init__(self, service: InsightService) -> None:
        self.service = service
        self._generation = 0
        self._lock = threading.Lock()

    def begin(self) -> int:
        """Yeni bir istek başlatır; önceki tüm token'lar geçersiz olur."""
        with self._lock:
            self._generation += 1
            return self._generation

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._generation

    def stream(
        self,
        kpis: DashboardKPIs,
        products: Sequence[CalculatedProduct],
        token: Optional[int] = None,
    ) -> Iterator[str]:
        """Özet parçalarını üretir; daha yeni bir istek başlarsa sessizce durur."""
        if token is None:
            token = self.begin()

        if not products:
            if self.is_current(token):
                yield EMPTY_HINT
            return

        prompt = business_overview_prompt(kpis, products)
        try:
            for chunk in self.service.stream(prompt):
                if not self.is_current(token):
                    logger.debug("Eski özet isteği bırakıldı (token=%d)", token)
                    return
                yield chunk
        except AIServiceError as e:
            if self.is_current(token):
                logger.error("AI özet akışı hatası: %s", e)
                yield FAILURE_TEXT
