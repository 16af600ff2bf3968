"""
Irrigation agent package
"""

from .agent import IrrigationAgent
from .models import RecommendationRequest, RecommendationResult, IrrigationResponse
from .policy import build_recommendation

__all__ = [
    "IrrigationAgent",
    "RecommendationRequest",
    "RecommendationResult",
    "IrrigationResponse",
    "build_recommendation",
]
