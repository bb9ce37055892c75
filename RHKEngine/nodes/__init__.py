"""
RHK Engine processing nodes.
"""

from .analysis_node import (
    AnalysisRequest,
    AnalyzerFailure,
    AnalyzerRequestError,
    ImageAnalysisNode,
    QuotaExhaustedError,
    ServiceOverloadedError,
    UnauthorizedError,
    image_byte_size,
    normalize_image_data_url,
)
from .base_node import BaseNode

__all__ = [
    "BaseNode",
    "AnalysisRequest",
    "AnalyzerFailure",
    "AnalyzerRequestError",
    "ImageAnalysisNode",
    "QuotaExhaustedError",
    "ServiceOverloadedError",
    "UnauthorizedError",
    "image_byte_size",
    "normalize_image_data_url",
]
