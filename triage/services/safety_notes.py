"""Deterministic safety note assembly"""

from typing import Iterable, List, Optional

from shared.models import AssessmentRecord, ExerciseRecord

CLOSING_REMINDER = (
    "Consult with a healthcare provider if symptoms worsen or do not improve within 2 weeks."
)

HIGH_PAIN_NOTE = "Start very gently and reduce intensity if pain increases above baseline."
MODERATE_PAIN_NOTE = "Perform within pain-free range. Stop if pain significantly worsens."
CHRONIC_NOTE = (
    "For chronic conditions, consistency is key. Start with lower intensity and progress slowly."
)
ACUTE_NOTE = (
    "For acute pain, rest may be beneficial. If pain worsens with exercise, pause and reassess."
)
NUMBNESS_NOTE = "If numbness or tingling increases during the exercise, stop immediately."
WEAKNESS_NOTE = (
    "Start with supported positions and progress to unsupported as strength improves."
)
NON_WEIGHT_BEARING_NOTE = (
    "Do not put weight through the operated leg. Perform exercises seated or lying down."
)
PARTIAL_WEIGHT_BEARING_NOTE = (
    "Use your walker or crutches as instructed and only put partial weight through the operated leg."
)
SURGEON_PRECAUTIONS_NOTE = (
    "Follow your surgeon's specific precautions. They take priority over these instructions."
)
UNSURE_PRECAUTIONS_NOTE = (
    "Check with your surgeon about movement restrictions before starting these exercises."
)


def is_non_weight_bearing(status: Optional[str]) -> bool:
    """Matches e.g. Non-weight-bearing (NWB) and non weight bearing"""
    if not status:
        return False
    return "non-weight-bearing" in status.lower().replace(" ", "-")


class SafetyNoteComposer:
    """
    Builds the ordered safety notes for one exercise

    Order (rendered top to bottom):
    1. phase / routine notes
    2. catalog safety notes
    3. pain level, duration and symptom guidance
    4. weight-bearing and surgeon precautions (post-op only)
    5. contraindications
    6. closing reminder
    """

    def pain_guidance(self, assessment: AssessmentRecord) -> List[str]:
        notes = []

        if assessment.pain_level >= 7:
            notes.append(HIGH_PAIN_NOTE)
        elif assessment.pain_level >= 5:
            notes.append(MODERATE_PAIN_NOTE)

        if "more than 6 months" in assessment.pain_duration.lower():
            notes.append(CHRONIC_NOTE)
        elif "less than 1 week" in assessment.pain_duration.lower():
            notes.append(ACUTE_NOTE)

        symptoms = [s.lower() for s in assessment.additional_symptoms]
        if any("numbness or tingling" in s for s in symptoms):
            notes.append(NUMBNESS_NOTE)
        if any("muscle weakness" in s for s in symptoms):
            notes.append(WEAKNESS_NOTE)

        return notes

    def post_op_guidance(self, assessment: AssessmentRecord) -> List[str]:
        if not assessment.is_post_op:
            return []

        post_op = assessment.post_op
        notes = []

        status = (post_op.weight_bearing_status or "").lower()
        if is_non_weight_bearing(status):
            notes.append(NON_WEIGHT_BEARING_NOTE)
        elif "partial" in status:
            notes.append(PARTIAL_WEIGHT_BEARING_NOTE)

        if post_op.surgeon_precautions == "yes":
            notes.append(SURGEON_PRECAUTIONS_NOTE)
        elif post_op.surgeon_precautions == "not_sure":
            notes.append(UNSURE_PRECAUTIONS_NOTE)

        return notes

    def compose(
        self,
        assessment: AssessmentRecord,
        exercise: ExerciseRecord,
        leading_notes: Iterable[Optional[str]] = (),
    ) -> List[str]:
        """
        Assemble safety notes for one exercise

        Args:
            assessment: patient assessment
            exercise: catalog exercise
            leading_notes: phase / routine notes (blank entries skipped)

        Returns:
            Ordered safety notes, always ending with the closing reminder
        """
        notes = [n for n in leading_notes if n]
        notes.extend(exercise.safety_notes)
        notes.extend(self.pain_guidance(assessment))
        notes.extend(self.post_op_guidance(assessment))

        if exercise.contraindications:
            notes.append(
                f"Avoid this exercise if you have: {', '.join(exercise.contraindications)}."
            )

        notes.append(CLOSING_REMINDER)
        return notes
