"""Snapshot kalıcılığı unit testleri."""

from profit_dashboard.analytics.layout import config_to_dict, default_widget_config, toggle_visibility
from profit_dashboard.analytics.planning import DEFAULT_PROFIT_GOAL
from profit_dashboard.catalog import seed_products
from profit_dashboard.models.product import ProductRecord, WidgetId
from profit_dashboard.storage import (
    PRODUCTS_KEY,
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


class TestSnapshotStore:
    """Anahtar/değer deposu."""

    def test_persist_and_load(self, tmp_path):
        store = SnapshotStore(tmp_path)
        store.persist("theme", "dark")
        assert store.load("theme") == "dark"
        assert (tmp_path / "theme.json").exists()

    def test_missing_key(self, tmp_path):
        assert SnapshotStore(tmp_path).load("nothing") is None

    def test_corrupt_file_treated_as_missing(self, tmp_path):
        (tmp_path / "products.json").write_text("{not json", encoding="utf-8")
        assert SnapshotStore(tmp_path).load("products") is None

    def test_creates_data_dir(self, tmp_path):
        store = SnapshotStore(tmp_path / "nested" / "dir")
        store.persist("profitGoal", 2000)
        assert store.load("profitGoal") == 2000

    def test_no_temp_files_left(self, tmp_path):
        store = SnapshotStore(tmp_path)
        store.persist("a", [1, 2, 3])
        store.persist("a", [4])
        assert [p.name for p in tmp_path.iterdir()] == ["a.json"]


class TestProductSnapshot:
    """Ürün listesi kaydı."""

    def test_round_trip(self, tmp_path):
        store = SnapshotStore(tmp_path)
        products = [ProductRecord(1, "Tea", 1.0, 2.0, 3), ProductRecord(2, "Cake", 2.0, 5.0, 1, "Bakery", "Home", 4)]
        save_products(store, products)
        assert load_products(store) == products

    def test_fallback_to_seed(self, tmp_path):
        assert load_products(SnapshotStore(tmp_path)) == seed_products()

    def test_empty_list_falls_back_to_seed(self, tmp_path):
        store = SnapshotStore(tmp_path)
        store.persist(PRODUCTS_KEY, [])
        assert len(load_products(store)) == 20

    def test_malformed_records_fall_back_to_seed(self, tmp_path):
        store = SnapshotStore(tmp_path)
        store.persist(PRODUCTS_KEY, [{"name": "missing fields"}])
        assert len(load_products(store)) == 20

    def test_unknown_keys_ignored(self, tmp_path):
        store = SnapshotStore(tmp_path)
        store.persist(PRODUCTS_KEY, [{"id": 1, "name": "Tea", "purchase_price": 1, "selling_price": 2,
                                      "units_sold_week": 3, "margin": 50}])
        assert load_products(store) == [ProductRecord(1, "Tea", 1, 2, 3)]


class TestSettingsSnapshot:
    """Hedef, tema ve widget konfigürasyonu."""

    def test_profit_goal(self, tmp_path):
        store = SnapshotStore(tmp_path)
        assert load_profit_goal(store) == DEFAULT_PROFIT_GOAL
        store.persist(PROFIT_GOAL_KEY, 2500)
        assert load_profit_goal(store) == 2500.0

    def test_invalid_profit_goal(self, tmp_path):
        store = SnapshotStore(tmp_path)
        store.persist(PROFIT_GOAL_KEY, "lots")
        assert load_profit_goal(store) == DEFAULT_PROFIT_GOAL
        store.persist(PROFIT_GOAL_KEY, -10)
        assert load_profit_goal(store) == DEFAULT_PROFIT_GOAL

    def test_theme(self, tmp_path):
        store = SnapshotStore(tmp_path)
        assert load_theme(store) == "light"
        store.persist(THEME_KEY, "dark")
        assert load_theme(store) == "dark"
        store.persist(THEME_KEY, "neon")
        assert load_theme(store) == "light"

    def test_widget_config(self, tmp_path):
        store = SnapshotStore(tmp_path)
        assert load_widget_config(store) == default_widget_config()
        config = toggle_visibility(default_widget_config(), WidgetId.COMPLIANCE_CHECKLIST)
        store.persist(WIDGET_CONFIG_KEY, config_to_dict(config))
        assert load_widget_config(store)[WidgetId.COMPLIANCE_CHECKLIST].visible is False
