"""Risk stratification"""

import logging

from langsmith import traceable

from shared.models import AssessmentRecord, RiskLevel

logger = logging.getLogger(__name__)

# pain >= 8 with any of these is high risk
CONCERNING_SYMPTOMS = (
    "numbness or tingling",
    "muscle weakness",
    "weakness in both legs",
)

HIGH_PAIN_THRESHOLD = 8
MODERATE_PAIN_THRESHOLD = 6


class RiskClassifier:
    """Rule-based risk tiering

    Rules are evaluated top-down and the first match wins:
    1. critical: any red flag
    2. high: pain >= 8 and a concerning symptom
    3. moderate: pain >= 6 or a month-scale duration
    4. low
    """

    @staticmethod
    def has_concerning_symptom(assessment: AssessmentRecord) -> bool:
        return any(
            concerning in symptom.lower()
            for symptom in assessment.additional_symptoms
            for concerning in CONCERNING_SYMPTOMS
        )

    @traceable(name="risk_classification")
    def classify(self, assessment: AssessmentRecord) -> RiskLevel:
        """
        Classify an assessment

        Args:
            assessment: patient assessment

        Returns:
            RiskLevel
        """
        if assessment.red_flags:
            risk = RiskLevel.CRITICAL
        elif (
            assessment.pain_level >= HIGH_PAIN_THRESHOLD
            and self.has_concerning_symptom(assessment)
        ):
            risk = RiskLevel.HIGH
        elif (
            assessment.pain_level >= MODERATE_PAIN_THRESHOLD
            or "month" in assessment.pain_duration.lower()
        ):
            risk = RiskLevel.MODERATE
        else:
            risk = RiskLevel.LOW

        logger.info(
            f"Risk classified: {risk.value} "
            f"(pain={assessment.pain_level}, red_flags={len(assessment.red_flags)})"
        )
        return risk
