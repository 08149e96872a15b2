"""Ürün kataloğu - ürün ekleme, toplu yükleme, düzenleme ve silme.

Ham kullanıcı girdisinin doğrulanması burada yapılır; analitik çekirdek
kayıtların geçerli olduğunu varsayar ve tekrar doğrulamaz.
"""

from __future__ import annotations

import dataclasses
import logging
import math
import time
from typing import Any, Iterable, Optional

from profit_dashboard.models.product import ProductRecord

logger = logging.getLogger(__name__)


class ProductValidationError(ValueError):
    """Ürün girdisi doğrulama hatası."""
    pass


class ProductNotFoundError(KeyError):
    """Katalogda bulunmayan ürün."""
    pass


INITIAL_PRODUCTS: list[ProductRecord] = [
    ProductRecord(1, "Organic Milk", 2.50, 4.50, 100, "Dairy", "Farm Fresh Inc.", 50),
    ProductRecord(2, "Artisan Bread", 1.80, 3.99, 80, "Bakery", "Local Breads Co.", 40),
    ProductRecord(3, "Gourmet Coffee", 8.00, 15.00, 50, "Pantry", "Global Beans", 60),
    ProductRecord(4, "Imported Cheese", 5.50, 9.75, 40, "Dairy", "Cheese Masters", 25),
    ProductRecord(5, "Craft Soda", 1.00, 2.25, 150, "Drinks", "Fizz Pop Beverages", 120),
    ProductRecord(6, "Hass Avocados", 0.90, 1.99, 200, "Produce", "Green Valley Farms", 150),
    ProductRecord(7, "Organic Chicken Breast", 6.50, 11.99, 60, "Meat", "Ethical Meats Co.", 30),
    ProductRecord(8, "Ginger Kombucha", 2.00, 4.25, 90, "Drinks", "Healthy Brews", 70),
    ProductRecord(9, "Sourdough Loaf", 2.50, 5.50, 75, "Bakery", "Local Breads Co.", 35),
    ProductRecord(10, "Greek Yogurt 500g", 3.00, 5.49, 110, "Dairy", "Farm Fresh Inc.", 80),
    ProductRecord(11, "Organic Quinoa", 4.00, 7.99, 45, "Pantry", "Global Beans", 55),
    ProductRecord(12, "Margherita Frozen Pizza", 3.50, 6.99, 85, "Frozen", "Quick Meals LLC", 100),
    ProductRecord(13, "Cabernet Sauvignon", 12.00, 22.50, 30, "Alcohol", "Vintage Estates", 40),
    ProductRecord(14, "Extra Virgin Olive Oil", 7.00, 13.50, 55, "Pantry", "Mediterranean Gold", 65),
    ProductRecord(15, "Dark Chocolate 70%", 1.50, 3.49, 120, "Snacks", "Sweet Treats Inc.", 100),
    ProductRecord(16, "Unsweetened Almond Milk", 2.20, 3.99, 95, "Dairy", "Nutty Beverages", 70),
    ProductRecord(17, "Fresh Fettuccine", 3.00, 5.99, 50, "Deli", "Pasta Masters", 20),
    ProductRecord(18, "Cage-Free Organic Eggs", 3.50, 5.99, 130, "Dairy", "Happy Hen Farms", 90),
    ProductRecord(19, "Wildflower Local Honey", 6.00, 11.25, 40, "Pantry", "Local B Hive", 50),
    ProductRecord(20, "Plant-Based Burger Patties", 4.50, 8.49, 65, "Frozen", "Green Cuisine", 75),
]


def seed_products() -> list[ProductRecord]:
    """Varsayılan ürün listesinin kopyasını döndürür."""
    return [dataclasses.replace(p) for p in INITIAL_PRODUCTS]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_product_input(
    name: Any,
    purchase_price: Any,
    selling_price: Any,
    units_sold_week: Any,
    stock_level: Any = None,
) -> tuple[str, float, float, int, Optional[int]]:
    """Form girdisini doğrular ve normalize edilmiş değerleri döndürür.

    Kurallar: tüm alanlar zorunlu, fiyatlar pozitif, satılan birim negatif
    olamaz, satış fiyatı alış fiyatından düşük olamaz. Stok opsiyoneldir.
    """
    if _is_blank(name) or any(_is_blank(v) for v in (purchase_price, selling_price, units_sold_week)):
        raise ProductValidationError("Tüm alanlar zorunludur.")

    try:
        pp = float(purchase_price)
        sp = float(selling_price)
        usw_raw = float(units_sold_week)
        stock_raw = None if _is_blank(stock_level) else float(stock_level)
    except (TypeError, ValueError) as e:
        raise ProductValidationError("Fiyatlar ve birimler için geçerli sayılar girin.") from e

    # "nan" / "inf" float() ile okunur ama sayı değildir
    numbers = [pp, sp, usw_raw] + ([] if stock_raw is None else [stock_raw])
    if not all(math.isfinite(v) for v in numbers):
        raise ProductValidationError("Fiyatlar ve birimler için geçerli sayılar girin.")

    usw = int(usw_raw)
    stock = None if stock_raw is None else int(stock_raw)

    if pp <= 0 or sp <= 0 or usw < 0:
        raise ProductValidationError("Fiyatlar pozitif, satılan birim negatif olmayan bir sayı olmalı.")

    if sp < pp:
        raise ProductValidationError("Satış fiyatı alış fiyatından düşük olamaz.")

    if stock is not None and stock < 0:
        raise ProductValidationError("Stok seviyesi negatif olamaz.")

    return str(name).strip(), pp, sp, usw, stock


class ProductCatalog:
    """Ham ürün kayıtlarının sahibi; sıralama ekleme sırasıdır."""

    def __init__(self, products: Optional[Iterable[ProductRecord]] = None) -> None:
        self._products: list[ProductRecord] = list(products or [])
        self._last_id = max((p.id for p in self._products), default=0)

    @property
    def products(self) -> list[ProductRecord]:
        return list(self._products)

    def __len__(self) -> int:
        return len(self._products)

    def _next_id(self) -> int:
        """Zaman tabanlı (ms) ve kesin artan id üretir."""
        candidate = int(time.time() * 1000)
        self._last_id = max(candidate, self._last_id + 1)
        return self._last_id

    def get_product(self, product_id: int) -> Optional[ProductRecord]:
        return next((p for p in self._products if p.id == product_id), None)

    def add_product(
        self,
        name: Any,
        purchase_price: Any,
        selling_price: Any,
        units_sold_week: Any,
        category: Optional[str] = None,
        supplier: Optional[str] = None,
        stock_level: Any = None,
    ) -> ProductRecord:
        """Formdan gelen ürünü doğrular ve yeni id ile listeye ekler."""
        name, pp, sp, usw, stock = validate_product_input(
            name, purchase_price, selling_price, units_sold_week, stock_level
        )
        product = ProductRecord(
            id=self._next_id(),
            name=name,
            purchase_price=pp,
            selling_price=sp,
            units_sold_week=usw,
            category=category or None,
            supplier=supplier or None,
            stock_level=stock,
        )
        self._products.append(product)
        logger.info("Ürün eklendi: %s (id=%d)", product.name, product.id)
        return product

    def load_products(self, drafts: Iterable[dict]) -> list[ProductRecord]:
        """Tüm listeyi içe aktarılan kayıtlarla değiştirir.

        Taslaklar (ör. AI ile dosyadan çıkarılan ürünler) id içermez;
        id'ler ortak bir zaman tabanı + sıra numarası ile atanır.
        """
        base = self._next_id()
        loaded = []
        for index, draft in enumerate(drafts):
            fields = {k: v for k, v in draft.items() if k != "id"}
            loaded.append(ProductRecord.from_dict({**fields, "id": base + index}))
        self._products = loaded
        self._last_id = max(self._last_id, base + len(loaded) - 1)
        logger.info("%d ürün yüklendi (önceki liste değiştirildi)", len(loaded))
        return list(loaded)

    def update_product(self, updated: ProductRecord) -> ProductRecord:
        """Aynı id'ye sahip kaydı alan bazında değiştirir.

        Düzenlenen alanlar eklemeyle aynı kurallarla doğrulanır; geçersiz
        düzenleme kataloğu değiştirmeden ProductValidationError fırlatır.
        """
        name, pp, sp, usw, stock = validate_product_input(
            updated.name,
            updated.purchase_price,
            updated.selling_price,
            updated.units_sold_week,
            updated.stock_level,
        )
        for index, product in enumerate(self._products):
            if product.id == updated.id:
                record = ProductRecord(
                    id=updated.id,
                    name=name,
                    purchase_price=pp,
                    selling_price=sp,
                    units_sold_week=usw,
                    category=updated.category or None,
                    supplier=updated.supplier or None,
                    stock_level=stock,
                )
                self._products[index] = record
                logger.info("Ürün güncellendi: %s (id=%d)", record.name, record.id)
                return record
        raise ProductNotFoundError(updated.id)

    def remove_product(self, product_id: int) -> bool:
        """Ürünü siler; bulunamazsa hiçbir şey yapmaz ve False döner."""
        before = len(self._products)
        self._products = [p for p in self._products if p.id != product_id]
        removed = len(self._products) < before
        if removed:
            logger.info("Ürün silindi: id=%d", product_id)
        return removed
