from profit_dashboard.analytics.aggregator import aggregate, generate_trend
from profit_dashboard.analytics.categories import by_category
from profit_dashboard.analytics.layout import merge_widget_config, resolve
from profit_dashboard.analytics.metrics import calculate, calculate_all
from profit_dashboard.analytics.search import filter_products, fuzzy_search

__all__ = [
    "aggregate",
    "by_category",
    "calculate",
    "calculate_all",
    "filter_products",
    "fuzzy_search",
    "generate_trend",
    "merge_widget_config",
    "resolve",
]
