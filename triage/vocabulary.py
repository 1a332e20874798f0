"""Symptom vocabulary

Synonym tables used to expand an assessment into search terms and to
decide whether two symptom phrases mean the same thing. Each table maps a
group key to the phrases that belong to it; bump VOCABULARY_VERSION when a
table changes.
"""

from typing import Dict, FrozenSet, List, Mapping

from shared.models import AssessmentRecord


VOCABULARY_VERSION = "2024.3"


def _groups(table: Mapping[str, List[str]]) -> Dict[str, FrozenSet[str]]:
    return {key: frozenset(p.lower() for p in phrases) for key, phrases in table.items()}


# body region -> aliases
REGION_SYNONYMS: Dict[str, FrozenSet[str]] = _groups({
    "lower back": ["lower back", "lumbar", "low back", "lumbosacral", "back pain"],
    "upper back": ["upper back", "thoracic", "mid back", "middle back"],
    "neck": ["neck", "cervical", "cervicothoracic"],
    "shoulder": ["shoulder", "rotator cuff", "deltoid"],
    "elbow": ["elbow", "forearm"],
    "wrist": ["wrist", "hand", "carpal"],
    "hip": ["hip", "pelvis", "groin"],
    "knee": ["knee", "patella", "patellar", "kneecap"],
    "ankle": ["ankle", "foot", "achilles"],
})

# pain type stem -> phrases; the stem is matched by containment
PAIN_TYPE_SYNONYMS: Dict[str, FrozenSet[str]] = _groups({
    "ach": ["aching", "dull pain", "achy"],
    "dull": ["dull pain", "aching"],
    "sharp": ["sharp pain", "stabbing"],
    "burn": ["burning"],
    "stiff": ["stiffness", "tight"],
    "throb": ["throbbing"],
    "shoot": ["shooting pain"],
})

# duration stem -> onset phrases
DURATION_PHRASES: Dict[str, FrozenSet[str]] = _groups({
    "gradual": ["builds gradually", "wax and wane"],
    "week": ["builds gradually", "wax and wane"],
    "month": ["builds gradually", "wax and wane", "chronic"],
})

# group key -> phrases considered equivalent when matching symptoms
SYMPTOM_SYNONYM_GROUPS: Dict[str, FrozenSet[str]] = _groups({
    "stiffness": ["stiffness", "stiff", "tight", "limited mobility", "restricted", "locked"],
    "aching": ["aching", "achy", "dull", "ache"],
    "sitting": ["sitting", "prolonged sitting", "desk"],
    "bending": ["bending", "flexion", "lifting"],
    "weakness": ["weakness", "weak", "giving way", "instability"],
    "swelling": ["swelling", "swollen", "puffy", "effusion"],
    "stairs": ["stairs", "steps", "climbing"],
    "overhead": ["overhead", "reaching up", "raising arm"],
    "night pain": ["night", "sleep", "lying on"],
    "clicking": ["clicking", "popping", "grinding", "crunching"],
})

# leading filler words skipped when an exclusion phrase is matched by its first word
EXCLUSION_STOP_WORDS: FrozenSet[str] = frozenset({
    "a", "an", "the", "no", "not", "any", "of", "or", "and", "with", "in",
})


def region_aliases(pain_location: str) -> List[str]:
    """Aliases for every region the location mentions"""
    location = pain_location.lower()
    aliases: List[str] = []
    for region, phrases in REGION_SYNONYMS.items():
        if region in location or any(p in location for p in phrases):
            aliases.extend(sorted(phrases))
    return aliases


def build_search_terms(assessment: AssessmentRecord) -> List[str]:
    """
    Expand an assessment into lowercase search terms

    Order is stable: location and region aliases, pain type tags and
    synonyms, additional symptoms, duration phrases. Duplicates are dropped.

    Args:
        assessment: patient assessment

    Returns:
        Ordered, de-duplicated search terms
    """
    terms: List[str] = []

    def add(term: str) -> None:
        term = term.strip().lower()
        if term and term not in terms:
            terms.append(term)

    location = assessment.pain_location.lower()
    add(location)
    for alias in region_aliases(location):
        add(alias)

    for tag in assessment.pain_type_tags:
        add(tag)
        for stem, phrases in PAIN_TYPE_SYNONYMS.items():
            if stem in tag:
                for phrase in sorted(phrases):
                    add(phrase)

    for symptom in assessment.additional_symptoms:
        add(symptom)

    duration = assessment.pain_duration.lower()
    for stem, phrases in DURATION_PHRASES.items():
        if stem in duration:
            for phrase in sorted(phrases):
                add(phrase)

    return terms


def synonym_groups_for(term: str) -> FrozenSet[str]:
    """Group keys whose phrases (or the key itself) occur in the term"""
    term = term.lower()
    return frozenset(
        key
        for key, phrases in SYMPTOM_SYNONYM_GROUPS.items()
        if key in term or any(p in term for p in phrases)
    )


def symptoms_match(a: str, b: str) -> bool:
    """
    True when two symptom phrases are equivalent

    Either phrase contains the other, or both fall under a shared synonym
    group (e.g. "stiffness in the morning" and "feeling tight").
    """
    a, b = a.strip().lower(), b.strip().lower()
    if not a or not b:
        return False
    if a in b or b in a:
        return True
    return bool(synonym_groups_for(a) & synonym_groups_for(b))
