"""Next step generation"""

from typing import List, Optional

from shared.models import AssessmentRecord, RiskLevel
from triage.models import PhaseResolution

CRITICAL_STEPS = [
    "Seek immediate medical attention",
    "Contact emergency services if symptoms worsen",
    "Visit emergency room or urgent care",
]

POST_OP_CRITICAL_STEPS = [
    "Contact your surgeon's office immediately",
    "If you cannot reach your surgeon, go to the emergency room or urgent care",
    "Do not continue your rehabilitation exercises until you have been cleared",
]

HIGH_STEPS = [
    "Schedule appointment with healthcare provider within 24-48 hours",
    "Avoid strenuous activities until evaluated",
    "Apply ice for acute injuries, heat for muscle tension",
]

MODERATE_STEPS = [
    "Follow recommended exercises below",
    "Track your progress daily",
    "Consider seeing a healthcare provider if no improvement in 1-2 weeks",
]

LOW_STEPS = [
    "Start with recommended beginner exercises",
    "Monitor your symptoms and progress",
    "Gradually increase activity as tolerated",
    "Contact healthcare provider if symptoms worsen",
]

HIGH_TEXAS_STEP = "Consider booking a virtual consultation with one of our Texas clinicians"
MODERATE_TEXAS_STEP = "Book a virtual consultation for a personalized plan"

POST_OP_STEP = "Follow your surgeon's protocol and keep your scheduled follow-up visits"
POST_OP_CLAMPED_STEP = (
    "Your program starts at an earlier phase for safety. "
    "Discuss progression with your surgeon or physical therapist"
)


class NextStepPlanner:
    """Next steps by risk tier, with post-op additions"""

    @staticmethod
    def in_texas(assessment: AssessmentRecord) -> bool:
        return "texas" in assessment.location.lower()

    def plan(
        self,
        assessment: AssessmentRecord,
        risk: RiskLevel,
        phase: Optional[PhaseResolution] = None,
    ) -> List[str]:
        """
        Args:
            assessment: patient assessment
            risk: classified risk tier
            phase: resolved phase (post-op only)

        Returns:
            Ordered next steps
        """
        if risk == RiskLevel.CRITICAL:
            if assessment.is_post_op:
                return list(POST_OP_CRITICAL_STEPS)
            return list(CRITICAL_STEPS)

        if risk == RiskLevel.HIGH:
            steps = list(HIGH_STEPS)
            if self.in_texas(assessment):
                steps.append(HIGH_TEXAS_STEP)
        elif risk == RiskLevel.MODERATE:
            steps = list(MODERATE_STEPS)
            if self.in_texas(assessment):
                steps.append(MODERATE_TEXAS_STEP)
        else:
            steps = list(LOW_STEPS)

        if assessment.is_post_op:
            steps.append(POST_OP_STEP)
            if phase is not None and phase.was_clamped:
                steps.append(POST_OP_CLAMPED_STEP)

        return steps
