"""Grocery receipt and label text analysis for BiteCure."""

from .analyzer import AnalysisBackend, create_backend
from .analyzer.mock import mock_analyze
from .barcode import ProductInfo, lookup_product
from .config import (
    AnalyzerConfig,
    BiteCureConfig,
    CameraConfig,
    OCRConfig,
    load_config,
)
from .errors import (
    AnalyzerError,
    BackendUnavailableError,
    DecodingError,
    InvalidResponseError,
    InvalidURLError,
    NetworkError,
)
from .grocery_list import GroceryItem, to_grocery_items
from .models import DetectedItem, GroceryAnalysis, NutritionFacts, ScanResult
from .pipeline import AnalysisOutcome, AnalysisPipeline, analyze

__all__ = [
    "AnalysisPipeline",
    "AnalysisOutcome",
    "analyze",
    "mock_analyze",
    "AnalysisBackend",
    "create_backend",
    "ScanResult",
    "DetectedItem",
    "NutritionFacts",
    "GroceryAnalysis",
    "AnalyzerError",
    "BackendUnavailableError",
    "InvalidURLError",
    "InvalidResponseError",
    "NetworkError",
    "DecodingError",
    "GroceryItem",
    "to_grocery_items",
    "ProductInfo",
    "lookup_product",
    "BiteCureConfig",
    "AnalyzerConfig",
    "CameraConfig",
    "OCRConfig",
    "load_config",
]
