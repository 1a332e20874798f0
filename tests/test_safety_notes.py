"""SafetyNoteComposer and NextStepPlanner tests"""

import pytest

from shared.models import ExerciseRecord, RiskLevel
from triage.models import PhaseResolution
from triage.services import NextStepPlanner, SafetyNoteComposer
from triage.services import next_steps as steps
from triage.services import safety_notes as notes
from triage.services.safety_notes import is_non_weight_bearing

from conftest import make_assessment, make_post_op_assessment


EXERCISE = ExerciseRecord(
    id="ex",
    title="Exercise",
    safety_notes=["Move slowly"],
    contraindications=["spinal stenosis", "recent fracture"],
)


@pytest.fixture
def composer():
    return SafetyNoteComposer()


class TestCompose:
    def test_fixed_order(self, composer):
        assessment = make_post_op_assessment(
            pain_level=7,
            pain_duration="More than 6 months",
            additional_symptoms=["Numbness or tingling", "Muscle weakness"],
            weight_bearing="Non-weight-bearing (NWB)",
            precautions="yes",
        )
        result = composer.compose(assessment, EXERCISE, ["Phase note", None, ""])

        assert result == [
            "Phase note",
            "Move slowly",
            notes.HIGH_PAIN_NOTE,
            notes.CHRONIC_NOTE,
            notes.NUMBNESS_NOTE,
            notes.WEAKNESS_NOTE,
            notes.NON_WEIGHT_BEARING_NOTE,
            notes.SURGEON_PRECAUTIONS_NOTE,
            "Avoid this exercise if you have: spinal stenosis, recent fracture.",
            notes.CLOSING_REMINDER,
        ]

    def test_minimal_notes_end_with_reminder(self, composer):
        exercise = ExerciseRecord(id="bare", title="Bare")
        result = composer.compose(make_assessment(pain_level=2), exercise)
        assert result == [notes.CLOSING_REMINDER]

    def test_moderate_pain_and_acute_duration(self, composer):
        assessment = make_assessment(pain_level=5, pain_duration="Less than 1 week")
        assert composer.pain_guidance(assessment) == [notes.MODERATE_PAIN_NOTE, notes.ACUTE_NOTE]

    def test_post_op_guidance_only_for_post_op(self, composer):
        assert composer.post_op_guidance(make_assessment()) == []

    def test_partial_weight_bearing_and_unsure_precautions(self, composer):
        assessment = make_post_op_assessment(
            weight_bearing="Partial weight-bearing", precautions="not_sure"
        )
        assert composer.post_op_guidance(assessment) == [
            notes.PARTIAL_WEIGHT_BEARING_NOTE,
            notes.UNSURE_PRECAUTIONS_NOTE,
        ]


@pytest.mark.parametrize(
    "status,expected",
    [
        ("Non-weight-bearing (NWB)", True),
        ("non weight bearing", True),
        ("Weight-bearing as tolerated (WBAT)", False),
        (None, False),
    ],
)
def test_is_non_weight_bearing(status, expected):
    assert is_non_weight_bearing(status) is expected


class TestNextSteps:
    @pytest.fixture
    def planner(self):
        return NextStepPlanner()

    def test_critical(self, planner):
        assert planner.plan(make_assessment(), RiskLevel.CRITICAL) == steps.CRITICAL_STEPS

    def test_post_op_critical_contacts_surgeon(self, planner):
        result = planner.plan(make_post_op_assessment(), RiskLevel.CRITICAL)
        assert result == steps.POST_OP_CRITICAL_STEPS
        assert result != steps.CRITICAL_STEPS

    def test_texas_hint_for_high_and_moderate(self, planner):
        texan = make_assessment(location="Austin, Texas")

        assert planner.plan(texan, RiskLevel.HIGH)[-1] == steps.HIGH_TEXAS_STEP
        assert planner.plan(texan, RiskLevel.MODERATE)[-1] == steps.MODERATE_TEXAS_STEP
        assert planner.plan(texan, RiskLevel.LOW) == steps.LOW_STEPS

    def test_no_texas_hint_elsewhere(self, planner):
        result = planner.plan(make_assessment(location="Denver, CO"), RiskLevel.HIGH)
        assert result == steps.HIGH_STEPS

    def test_post_op_steps_and_clamp_notice(self, planner):
        clamped = PhaseResolution(nominal_phase=4, phase_number=1, applied_gates=["pain"])
        result = planner.plan(make_post_op_assessment(), RiskLevel.MODERATE, clamped)

        assert result[:3] == steps.MODERATE_STEPS
        assert result[-2:] == [steps.POST_OP_STEP, steps.POST_OP_CLAMPED_STEP]

    def test_steps_are_copies(self, planner):
        result = planner.plan(make_assessment(), RiskLevel.LOW)
        result.append("extra")
        assert "extra" not in steps.LOW_STEPS
