"""Ürün arama ve filtreleme.

"Fuzzy" eşleşme burada edit-distance değil, aralıklı alt dizi (subsequence)
kontrolüdür: aranan karakterler hedefte aynı sırada, bitişik olmak zorunda
olmadan geçmelidir. Yazım hatası toleransı yoktur.
"""

from __future__ import annotations

from typing import Optional, Sequence

from profit_dashboard.models.product import CalculatedProduct

DEFAULT_SUGGESTION_LIMIT = 5


def fuzzy_search(needle: str, haystack: str) -> bool:
    """needle, haystack içinde sırası korunarak geçiyorsa True döndürür."""
    if not needle:
        return True
    if not haystack or len(needle) > len(haystack):
        return False
    if len(needle) == len(haystack):
        return needle == haystack

    needle_idx = 0
    for char in haystack:
        if char == needle[needle_idx]:
            needle_idx += 1
            if needle_idx == len(needle):
                return True
    return False


def searchable_text(record: CalculatedProduct) -> str:
    """Ad, kategori ve tedarikçiyi (boş olanları atlayarak) küçük harfle birleştirir."""
    parts = [record.name, record.category, record.supplier]
    return " ".join(part for part in parts if part).lower()


def tokenize(search_term: str) -> list[str]:
    return search_term.strip().lower().split()


def matches_search(record: CalculatedProduct, tokens: Sequence[str]) -> bool:
    """Tüm token'lar eşleşmeli (AND)."""
    if not tokens:
        return True
    text = searchable_text(record)
    return all(fuzzy_search(token, text) for token in tokens)


def filter_products(
    records: Sequence[CalculatedProduct],
    search_term: str = "",
    category: Optional[str] = None,
) -> list[CalculatedProduct]:
    """Arama terimi ve kategoriye göre filtreler; giriş sırası korunur."""
    tokens = tokenize(search_term or "")
    return [
        record
        for record in records
        if (category is None or record.category == category)
        and matches_search(record, tokens)
    ]


def suggest_names(
    records: Sequence[CalculatedProduct],
    term: str,
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> list[str]:
    """Arama kutusu için ürün adı önerileri.

    Adında terimi (büyük/küçük harf duyarsız) içeren ürünler önerilir,
    terimle birebir aynı olan ad önerilmez.
    """
    if not term.strip():
        return []

    needle = term.lower()
    suggestions = [
        record.name
        for record in records
        if needle in record.name.lower() and record.name.lower() != needle
    ]
    return suggestions[:limit]
