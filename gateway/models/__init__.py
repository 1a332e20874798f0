"""Gateway Models - app-facing API models"""

from .app import (
    AppAssessmentRequest,
    AppAssessmentResponse,
    AppOutcomeRequest,
    AppOutcomeResponse,
    AppOutcomeSummaryResponse,
    AppPostOpBlock,
    AppQuestionnaireResponse,
    AppRecommendation,
)

__all__ = [
    "AppAssessmentRequest",
    "AppAssessmentResponse",
    "AppOutcomeRequest",
    "AppOutcomeResponse",
    "AppOutcomeSummaryResponse",
    "AppPostOpBlock",
    "AppQuestionnaireResponse",
    "AppRecommendation",
]
