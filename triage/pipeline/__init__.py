from .recommendation_builder import RecommendationBuilder

__all__ = ["RecommendationBuilder"]
