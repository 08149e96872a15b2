"""Snapshot tabanlı anahtar/değer kalıcılığı.

Her anahtar veri dizininde <anahtar>.json dosyası olarak tutulur; ürün
listesi, kâr hedefi, tema ve widget konfigürasyonu bütün olarak yazılır.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from profit_dashboard.analytics.layout import merge_widget_config
from profit_dashboard.analytics.planning import DEFAULT_PROFIT_GOAL
from profit_dashboard.catalog import seed_products
from profit_dashboard.models.product import ProductRecord, WidgetConfig

logger = logging.getLogger(__name__)

PRODUCTS_KEY = "products"
PROFIT_GOAL_KEY = "profitGoal"
THEME_KEY = "theme"
WIDGET_CONFIG_KEY = "widgetConfig"

THEMES = ("light", "dark")
DEFAULT_THEME = "light"


class SnapshotStore:
    """JSON dosyalarıyla basit anahtar/değer deposu."""

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def persist(self, key: str, value: Any) -> None:
        """Değeri atomik olarak yazar (geçici dosya + os.replace)."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.data_dir, prefix=f".{key}-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self._path(key))
        except Exception:
            Path(tmp_path).unlink(missing_ok=True)
            raise
        logger.debug("Snapshot yazıldı: %s", key)

    def load(self, key: str) -> Optional[Any]:
        """Kayıtlı değeri döndürür; yoksa veya bozuksa None."""
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Snapshot okunamadı [%s]: %s", key, e)
            return None


def save_products(store: SnapshotStore, products: list[ProductRecord]) -> None:
    store.persist(PRODUCTS_KEY, [p.to_dict() for p in products])


def load_products(store: SnapshotStore) -> list[ProductRecord]:
    """Kayıtlı ürünleri yükler; kayıt yoksa, boşsa veya bozuksa varsayılan listeyi döndürür."""
    raw = store.load(PRODUCTS_KEY)
    if not raw or not isinstance(raw, list):
        return seed_products()
    try:
        return [ProductRecord.from_dict(item) for item in raw]
    except (TypeError, AttributeError) as e:
        logger.error("Ürün snapshot'ı çözümlenemedi: %s", e)
        return seed_products()


def load_profit_goal(store: SnapshotStore) -> float:
    """Kayıtlı hedef yoksa, sayı değilse veya pozitif değilse varsayılan."""
    raw = store.load(PROFIT_GOAL_KEY)
    try:
        goal = float(raw) if raw is not None else DEFAULT_PROFIT_GOAL
    except (TypeError, ValueError):
        return DEFAULT_PROFIT_GOAL
    return goal if goal > 0 else DEFAULT_PROFIT_GOAL


def load_theme(store: SnapshotStore) -> str:
    raw = store.load(THEME_KEY)
    return raw if raw in THEMES else DEFAULT_THEME


def load_widget_config(store: SnapshotStore) -> WidgetConfig:
    raw = store.load(WIDGET_CONFIG_KEY)
    return merge_widget_config(raw if isinstance(raw, dict) else None)
