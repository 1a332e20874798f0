"""LLM safety note phrasing (advisory only)

The deterministic notes from SafetyNoteComposer are always present; this
assistant may add a few plain-language reminders on top. Any client
failure yields no advisory notes.
"""

import json
import logging
from typing import List, Optional, Sequence

from openai import OpenAI, OpenAIError
from langsmith import traceable

from shared.models import AssessmentRecord, RiskLevel
from triage.config import settings
from triage.models import Recommendation

logger = logging.getLogger(__name__)

MAX_ADVISORY_NOTES = 3


class SafetyNoteAssistant:
    """Asks the LLM for short advisory safety reminders"""

    def __init__(
        self,
        openai_client: Optional[OpenAI] = None,
        model: Optional[str] = None,
    ):
        """
        Args:
            openai_client: OpenAI client (created on first use if omitted)
            model: chat model name
        """
        self._openai = openai_client
        self._model = model or settings.openai_model

    def _get_client(self) -> OpenAI:
        if self._openai is None:
            self._openai = OpenAI(api_key=settings.openai_api_key or None)
        return self._openai

    def _build_prompt(
        self,
        assessment: AssessmentRecord,
        risk: RiskLevel,
        recommendations: Sequence[Recommendation],
    ) -> str:
        # mechanism, medications and residence are never sent
        exercises = "\n".join(f"- {r.exercise.title}" for r in recommendations)
        symptoms = ", ".join(assessment.additional_symptoms) or "none"
        return f"""Patient summary:
- Pain location: {assessment.pain_location or 'unspecified'}
- Pain level: {assessment.pain_level}/10
- Pain type: {assessment.pain_type or 'unspecified'}
- Symptoms: {symptoms}
- Risk tier: {risk.value}
- Post-operative: {'yes' if assessment.is_post_op else 'no'}

Planned exercises:
{exercises}

Write at most {MAX_ADVISORY_NOTES} short, plain-language safety reminders for this
patient. Do not diagnose and do not change the exercise plan.
Respond as JSON: {{"notes": ["..."]}}"""

    @traceable(run_type="llm", name="llm_safety_notes")
    def suggest(
        self,
        assessment: AssessmentRecord,
        risk: RiskLevel,
        recommendations: Sequence[Recommendation],
    ) -> List[str]:
        """
        Advisory safety reminders

        Returns:
            Up to MAX_ADVISORY_NOTES notes, or [] when the LLM is unreachable
            or replies with something unusable
        """
        if not recommendations:
            return []

        try:
            response = self._get_client().chat.completions.create(
                model=self._model,
                messages=[
                    {
                        "role": "system",
                        "content": (
                            "You are a physical therapy safety assistant. "
                            "You only add cautious, general reminders. "
                            "Always respond in JSON."
                        ),
                    },
                    {
                        "role": "user",
                        "content": self._build_prompt(assessment, risk, recommendations),
                    },
                ],
                response_format={"type": "json_object"},
                temperature=0.2,
            )
            result = json.loads(response.choices[0].message.content)
        except (OpenAIError, json.JSONDecodeError, TypeError, IndexError) as e:
            logger.warning(f"Safety note assistant unavailable: {type(e).__name__}")
            return []

        notes = result.get("notes", []) if isinstance(result, dict) else []
        return [n.strip() for n in notes if isinstance(n, str) and n.strip()][
            :MAX_ADVISORY_NOTES
        ]
