"""Job recommendation ranking module."""

from .recommendation_cache import RecommendationCache
from .recommendation_ranker import RecommendationRanker, clamp_limit

__all__ = [
    "RecommendationCache",
    "RecommendationRanker",
    "clamp_limit",
]
