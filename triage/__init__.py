"""Triage - risk stratification and exercise recommendation

Flow:
1. Risk classification (red flags, pain level, symptoms, duration)
2. Post-op protocol phase resolution with safety gates
3. Curated routine matching, falling back to individual exercise scoring
4. Dosage, safety notes and next steps
"""

__version__ = "1.0.0"

from triage.pipeline import RecommendationBuilder
from triage.models import AssessmentResult, Recommendation

__all__ = [
    "RecommendationBuilder",
    "AssessmentResult",
    "Recommendation",
]
