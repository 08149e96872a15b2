from profit_dashboard.services.bedrock_client import (
    AIResponseFormatError,
    AIServiceError,
    BedrockClient,
)
from profit_dashboard.services.insights import DataExtractionError, InsightService
from profit_dashboard.services.overview import OverviewFeed

__all__ = [
    "AIResponseFormatError",
    "AIServiceError",
    "BedrockClient",
    "DataExtractionError",
    "InsightService",
    "OverviewFeed",
]
