"""Shared fixtures: a small in-memory catalog and assessment factories"""

from datetime import datetime, timedelta, timezone

import pytest

from shared.catalog import InMemoryCatalog
from shared.models import (
    AssessmentRecord,
    ExerciseRecord,
    PhaseExercise,
    PostOpRecord,
    ProtocolPhase,
    ProtocolRecord,
    Questionnaire,
    QuestionnaireItem,
    RoutineItem,
    RoutineRecord,
)
from shared.storage import InMemoryResultSink
from outcomes.models import OutcomeAssessment


DISCLAIMER = (
    "These exercises are educational and not a substitute for medical advice."
)


# =============================================================================
# Exercises
# =============================================================================

PRONE_EXTENSION = ExerciseRecord(
    id="lb_prone_extension",
    title="McKenzie Prone Lumbar Extension",
    body_parts=["lower back", "lumbar spine"],
    conditions=["mechanical low back pain", "lumbar stiffness"],
    keywords=["mckenzie", "prone extension", "stiffness"],
    difficulty="Beginner",
    reps=5,
    hold_seconds=60,
    frequency="Multiple times daily",
    contraindications=["spinal stenosis", "spondylolisthesis"],
    safety_notes=["Stop if pain increases or travels into legs"],
    progression_tips=["Progress from elbows to full prone press-ups"],
    is_featured=True,
    display_order=1,
)

CAT_CAMEL = ExerciseRecord(
    id="lb_cat_camel",
    title="Cat-Camel Spinal Mobility",
    body_parts=["lower back", "thoracic spine"],
    conditions=["spinal stiffness", "morning stiffness"],
    keywords=["cat camel", "spinal mobility"],
    difficulty="Beginner",
    hold_seconds=120,
    frequency="Multiple times daily",
    safety_notes=["Move slowly and rhythmically"],
    is_featured=True,
    display_order=2,
)

BIRD_DOG = ExerciseRecord(
    id="lb_bird_dog",
    title="Quadruped Bird Dog Exercise",
    body_parts=["lower back", "core"],
    conditions=["core instability", "motor control deficit"],
    keywords=["bird dog", "core stability"],
    difficulty="Intermediate",
    sets=2,
    reps=10,
    hold_seconds=3,
    contraindications=["severe lumbar pain"],
    display_order=6,
)

STEP_UPS = ExerciseRecord(
    id="kn_step_ups",
    title="Step Ups",
    body_parts=["knee", "hip"],
    conditions=["knee weakness", "stair difficulty"],
    keywords=["step up", "stairs"],
    difficulty="Beginner",
    sets=3,
    reps=10,
    display_order=33,
)

TERMINAL_KNEE_EXTENSION = ExerciseRecord(
    id="kn_terminal_knee_extension",
    title="Terminal Knee Extension",
    body_parts=["knee"],
    conditions=["patellofemoral syndrome", "vmo weakness"],
    keywords=["tke", "quad"],
    difficulty="Beginner",
    sets=3,
    reps=15,
    display_order=32,
)

SPLIT_SQUAT = ExerciseRecord(
    id="kn_bulgarian_split_squat",
    title="Bulgarian Split Squat",
    body_parts=["knee", "hip"],
    conditions=["quad weakness", "athletic performance"],
    keywords=["split squat", "single leg"],
    difficulty="Advanced",
    sets=3,
    reps=10,
    display_order=31,
)

ROTATOR_CUFF_ISOMETRICS = ExerciseRecord(
    id="sh_rotator_cuff_isometrics",
    title="Rotator Cuff Isometrics",
    body_parts=["shoulder"],
    conditions=["rotator cuff injury", "shoulder pain"],
    keywords=["isometric", "rotator cuff"],
    difficulty="Beginner",
    sets=3,
    hold_seconds=10,
    display_order=75,
)

SCAPTION = ExerciseRecord(
    id="sh_dumbbell_scaption",
    title="Dumbbell Scaption",
    body_parts=["shoulder"],
    conditions=["shoulder weakness", "shoulder impingement"],
    keywords=["scaption", "deltoid"],
    difficulty="Beginner",
    sets=3,
    reps=10,
    display_order=76,
)

TKA_PHASE_1 = ExerciseRecord(
    id="tka_phase_1",
    title="Total Knee Replacement - Phase 1 Exercises",
    body_parts=["knee"],
    conditions=["total knee replacement"],
    difficulty="Beginner",
    sets=1,
    reps=5,
    contraindications=["Active infection", "DVT symptoms"],
    safety_notes=["Ice after exercises for 15-20 minutes"],
    red_flag_warnings=["Calf that is red, hot or swollen"],
    display_order=91,
)

TKA_PHASE_2 = ExerciseRecord(
    id="tka_phase_2",
    title="Total Knee Replacement - Phase 2 Exercises",
    body_parts=["knee"],
    conditions=["total knee replacement"],
    difficulty="Beginner",
    reps=10,
    hold_seconds=5,
    frequency="2x daily",
    display_order=92,
)

CATALOG_EXERCISES = [
    PRONE_EXTENSION,
    CAT_CAMEL,
    BIRD_DOG,
    STEP_UPS,
    TERMINAL_KNEE_EXTENSION,
    SPLIT_SQUAT,
    ROTATOR_CUFF_ISOMETRICS,
    SCAPTION,
]


# =============================================================================
# Routines
# =============================================================================

LOWER_BACK_ROUTINE = RoutineRecord(
    id="lower-back-pain-relief",
    name="Lower Back Pain Relief Routine",
    description=(
        "Designed for mechanical lower back pain characterized by stiffness "
        "and dull aching discomfort, exacerbated by prolonged sitting."
    ),
    target_symptoms=[
        "Dull, aching pain in the lower back",
        "Stiffness, especially in the morning or after sitting",
        "Pain that builds gradually over days or weeks",
        "Symptoms that wax and wane",
        "Pain worsened by prolonged sitting, standing, or bending",
        "Temporary relief with position changes",
        "Feeling tight, locked, or weak in the lower back",
        "Achy discomfort into buttocks and upper thighs",
    ],
    exclusion_criteria=[
        "Specific traumatic event",
        "Progressive neurological symptoms",
        "Bowel or bladder changes",
        "Constant night pain unrelated to movement",
    ],
    disclaimer=DISCLAIMER,
)

KNEE_ROUTINE = RoutineRecord(
    id="anterior-knee-pain-relief",
    name="Anterior Knee Pain Relief Routine",
    description="Exercise sequence for anterior knee pain and patellofemoral syndrome.",
    target_symptoms=[
        "Pain around or behind the kneecap",
        "Pain going up or down stairs",
        "Pain with squatting or kneeling",
        "Knee stiffness",
        "Swelling around the knee",
        "Knee pain",
    ],
    exclusion_criteria=[
        "Recent knee surgery (within 6 weeks)",
        "Locked knee unable to bend or straighten",
        "Severe trauma to the knee",
    ],
    disclaimer=DISCLAIMER,
)

SHOULDER_ROUTINE = RoutineRecord(
    id="rotator-cuff-pain-relief",
    name="Rotator Cuff Pain Relief Routine",
    description="Progressive sequence for shoulder pain and rotator cuff issues.",
    target_symptoms=[
        "Pain in the shoulder",
        "Pain with overhead reaching",
        "Shoulder stiffness",
        "Pain at night",
        "Shoulder pain",
    ],
    exclusion_criteria=[
        "Recent shoulder surgery (within 6 weeks)",
        "Severe trauma to the shoulder",
    ],
)

ROUTINE_ITEMS = {
    LOWER_BACK_ROUTINE.id: [
        RoutineItem(
            exercise=PRONE_EXTENSION,
            sequence_order=1,
            phase="Symptom Relief",
            phase_notes="Begin with these exercises to reduce pain and stiffness.",
        ),
        RoutineItem(
            exercise=BIRD_DOG,
            sequence_order=6,
            phase="Strengthening",
            sets_override=3,
            is_optional=True,
        ),
        RoutineItem(
            exercise=CAT_CAMEL,
            sequence_order=2,
            phase="Symptom Relief",
            transition_notes="Perform immediately following lumbar extension",
        ),
    ],
    KNEE_ROUTINE.id: [
        RoutineItem(exercise=TERMINAL_KNEE_EXTENSION, sequence_order=1, phase="Mobility"),
        RoutineItem(exercise=STEP_UPS, sequence_order=2, phase="Strengthening"),
    ],
    SHOULDER_ROUTINE.id: [
        RoutineItem(exercise=ROTATOR_CUFF_ISOMETRICS, sequence_order=1, phase="Activation"),
        RoutineItem(exercise=SCAPTION, sequence_order=2, phase="Strengthening"),
    ],
}


# =============================================================================
# Protocols
# =============================================================================

TKA_PROTOCOL = ProtocolRecord(
    id="proto_knee_tka",
    protocol_key="knee_total_knee_arthroplasty",
    region="Knee",
    surgery_name="Total Knee Arthroplasty",
    phases=[
        ProtocolPhase(phase_number=1, phase_name="Pain Control and Early Mobility"),
        ProtocolPhase(phase_number=2, phase_name="Range of Motion and Strength"),
        ProtocolPhase(phase_number=3, phase_name="Functional Strength and Gait"),
        ProtocolPhase(phase_number=4, phase_name="Advanced Function"),
    ],
)

PHASE_EXERCISES = {
    TKA_PROTOCOL.id: [
        PhaseExercise(
            exercise=TKA_PHASE_1,
            phase_number=1,
            display_order=1,
            phase_sets=2,
            phase_reps=10,
            phase_hold_seconds=5,
            phase_frequency="3x daily",
            phase_notes="Focus on reducing swelling and restoring quad activation.",
        ),
        PhaseExercise(
            exercise=TKA_PHASE_2,
            phase_number=2,
            display_order=1,
            phase_sets=3,
        ),
    ],
}


# =============================================================================
# Questionnaires
# =============================================================================

def _questionnaire(key, scoring_type, mcid, response_type, item_count, body_region="general"):
    questionnaire = Questionnaire(
        id=f"q_{key}",
        key=key,
        display_name=key.upper(),
        body_region=body_region,
        scoring_type=scoring_type,
        mcid=mcid,
    )
    # listed in reverse so display_order sorting is exercised
    items = [
        QuestionnaireItem(
            id=f"{key}_q{n}",
            questionnaire_id=questionnaire.id,
            item_key=f"{key.upper()}_Q{n}",
            response_type=response_type,
            display_order=n,
        )
        for n in range(item_count, 0, -1)
    ]
    return questionnaire, items


QUESTIONNAIRE_DEFINITIONS = [
    _questionnaire("odi", "odi", 10, "likert_0_5", 10, "back"),
    _questionnaire("koos", "koos", 8, "likert_0_4", 4, "knee"),
    _questionnaire("quickdash", "quickdash", 8, "likert_1_5", 3, "shoulder"),
    _questionnaire("nprs", "nprs", 2, "nprs_0_10", 1),
    _questionnaire("groc", "groc", 2, "groc_-7_7", 1),
]


def build_catalog(routines=True, protocols=True, exercises=True) -> InMemoryCatalog:
    """Fresh in-memory catalog; sections can be left empty"""
    return InMemoryCatalog(
        exercises=CATALOG_EXERCISES if exercises else [],
        routines=[LOWER_BACK_ROUTINE, KNEE_ROUTINE, SHOULDER_ROUTINE] if routines else [],
        routine_items=ROUTINE_ITEMS if routines else {},
        protocols=[TKA_PROTOCOL] if protocols else [],
        phase_exercises=PHASE_EXERCISES if protocols else {},
        questionnaires=[q for q, _ in QUESTIONNAIRE_DEFINITIONS],
        questionnaire_items={q.id: items for q, items in QUESTIONNAIRE_DEFINITIONS},
    )


@pytest.fixture
def catalog():
    return build_catalog()


@pytest.fixture
def sink():
    return InMemoryResultSink()


# =============================================================================
# Factories
# =============================================================================

def make_assessment(**overrides) -> AssessmentRecord:
    """Low-risk lower back assessment unless overridden"""
    data = {
        "pain_level": 4,
        "pain_location": "Lower Back",
        "pain_duration": "1-4 weeks",
        "pain_type": "Dull/Aching",
        "additional_symptoms": ["Stiffness in the morning"],
        "red_flags": [],
    }
    data.update(overrides)
    return AssessmentRecord(**data)


def make_post_op_assessment(
    weeks="2-6 weeks",
    region="Knee",
    surgery_type="total_knee_arthroplasty",
    weight_bearing=None,
    precautions=None,
    modifier=None,
    **overrides,
) -> AssessmentRecord:
    data = {
        "pain_level": 3,
        "pain_location": region,
        "pain_duration": "1-4 weeks",
        "pain_type": "Dull/Aching",
        "additional_symptoms": [],
        "post_op": PostOpRecord(
            surgery_status="post_op",
            post_op_region=region,
            surgery_type=surgery_type,
            procedure_modifier=modifier,
            weeks_since_surgery=weeks,
            weight_bearing_status=weight_bearing,
            surgeon_precautions=precautions,
        ),
    }
    data.update(overrides)
    return AssessmentRecord(**data)


BASE_TIME = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def make_outcome(
    key,
    context,
    normalized,
    days=0,
    condition="back",
) -> OutcomeAssessment:
    return OutcomeAssessment(
        questionnaire_id=f"q_{key}",
        questionnaire_key=key,
        scoring_type=key,
        context_type=context,
        condition_tag=condition,
        total_score=normalized,
        normalized_score=normalized,
        interpretation="test",
        created_at=BASE_TIME + timedelta(days=days),
    )
