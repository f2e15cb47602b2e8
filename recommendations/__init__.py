"""
Meal-plan recommendation service.

Builds a family meal-plan prompt, calls an OpenAI-compatible completion
endpoint and recovers the plan from the (often truncated) JSON reply.
"""

__version__ = "1.0.0"

from .config import RecommendationsConfig
from .models import RecommendationRequest, RecommendationResponse
from .service import RecommendationService

__all__ = [
    "__version__",
    "RecommendationsConfig",
    "RecommendationRequest",
    "RecommendationResponse",
    "RecommendationService",
]
