"""Post-operative protocol phase resolution"""

import logging
import re
from typing import Optional

from langsmith import traceable

from shared.models import AssessmentRecord, PostOpRecord
from triage.models import PhaseResolution
from triage.services.safety_notes import is_non_weight_bearing

logger = logging.getLogger(__name__)

WEEKS_TO_PHASE = {
    "0-2 weeks": 1,
    "2-6 weeks": 2,
    "6-12 weeks": 3,
    "12+ weeks": 4,
}
DEFAULT_PHASE = 1

# only this surgery type has graded protocols
GRADED_SURGERY_TYPE = "rotator_cuff_repair"
GRADE_PATTERN = re.compile(r"grade\s*([123])", re.IGNORECASE)

SEVERE_SYMPTOMS = (
    "swelling",
    "numbness or tingling",
    "numbness",
    "tingling",
    "muscle weakness",
)

PAIN_GATE_LEVEL = 7
PAIN_GATE_MAX_PHASE = 1
SYMPTOM_GATE_MAX_PHASE = 2
WEIGHT_BEARING_GATE_MAX_PHASE = 2


def _slug(value: str) -> str:
    return re.sub(r"[\s/]+", "_", value.strip().lower())


class ProtocolPhaseResolver:
    """Derives protocol key and safety-gated phase for post-op patients"""

    @staticmethod
    def protocol_key(post_op: PostOpRecord) -> Optional[str]:
        """
        {region}_{surgery_type}[_grade{n}]

        e.g. ("Foot/Ankle", "ankle_fracture_orif") -> foot_ankle_ankle_fracture_orif
        """
        if not post_op.post_op_region or not post_op.surgery_type:
            return None

        key = f"{_slug(post_op.post_op_region)}_{_slug(post_op.surgery_type)}"

        if _slug(post_op.surgery_type) == GRADED_SURGERY_TYPE and post_op.procedure_modifier:
            grade = GRADE_PATTERN.search(post_op.procedure_modifier)
            if grade:
                key += f"_grade{grade.group(1)}"

        return key

    @staticmethod
    def nominal_phase(weeks_since_surgery: Optional[str]) -> int:
        if not weeks_since_surgery:
            return DEFAULT_PHASE
        return WEEKS_TO_PHASE.get(weeks_since_surgery.strip().lower(), DEFAULT_PHASE)

    @staticmethod
    def has_severe_symptom(assessment: AssessmentRecord) -> bool:
        return any(
            severe in symptom.lower()
            for symptom in assessment.additional_symptoms
            for severe in SEVERE_SYMPTOMS
        )

    @traceable(name="protocol_phase_resolution")
    def resolve(self, assessment: AssessmentRecord) -> PhaseResolution:
        """
        Resolve protocol key and phase

        Gates only ever lower the phase:
        1. pain >= 7 -> phase <= 1
        2. severe symptom -> phase <= 2
        3. non-weight-bearing -> phase <= 2

        Args:
            assessment: post-operative assessment

        Returns:
            PhaseResolution

        Raises:
            ValueError: assessment is not post-operative
        """
        if not assessment.is_post_op:
            raise ValueError("Phase resolution requires a post-operative assessment")

        post_op = assessment.post_op
        nominal = self.nominal_phase(post_op.weeks_since_surgery)
        phase = nominal
        gates = []

        if assessment.pain_level >= PAIN_GATE_LEVEL and phase > PAIN_GATE_MAX_PHASE:
            phase = PAIN_GATE_MAX_PHASE
            gates.append("pain")

        if self.has_severe_symptom(assessment) and phase > SYMPTOM_GATE_MAX_PHASE:
            phase = SYMPTOM_GATE_MAX_PHASE
            gates.append("severe_symptom")

        if (
            is_non_weight_bearing(post_op.weight_bearing_status)
            and phase > WEIGHT_BEARING_GATE_MAX_PHASE
        ):
            phase = WEIGHT_BEARING_GATE_MAX_PHASE
            gates.append("non_weight_bearing")

        resolution = PhaseResolution(
            protocol_key=self.protocol_key(post_op),
            nominal_phase=nominal,
            phase_number=phase,
            applied_gates=gates,
        )

        if gates:
            logger.info(
                f"Phase clamped {nominal} -> {phase} by {', '.join(gates)} "
                f"(protocol={resolution.protocol_key})"
            )
        return resolution
