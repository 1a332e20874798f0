"""Condition tags and their function questionnaires"""

CONDITION_QUESTIONNAIRES = {
    "back": "odi",
    "knee": "koos",
    "shoulder": "quickdash",
}
PAIN_QUESTIONNAIRE = "nprs"
CHANGE_QUESTIONNAIRE = "groc"


def map_pain_location_to_condition(pain_location: str) -> str:
    """
    Condition tag for a free-text pain location

    "Lower Back" -> back, "Right knee" -> knee, "Rotator cuff" -> shoulder,
    anything else -> its first word.
    """
    location = pain_location.strip().lower()

    if "back" in location or "lumbar" in location or "spine" in location:
        return "back"
    if "knee" in location or "patella" in location:
        return "knee"
    if "shoulder" in location or "rotator" in location:
        return "shoulder"

    return location.split(" ")[0] if location else ""


def questionnaire_key_for_condition(condition_tag: str) -> str:
    """Function questionnaire for a condition (NPRS when none is specific)"""
    return CONDITION_QUESTIONNAIRES.get(condition_tag, PAIN_QUESTIONNAIRE)
