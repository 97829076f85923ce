import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .nlp_utils import word_tokens


class Intent(str, Enum):
    OFFICE_HOURS = "office_hours"
    CONTACT_INFO = "contact_info"
    OFFICE_LOCATION = "office_location"
    DEPARTMENT = "department"
    WHO_IS = "who_is"
    ADMISSION = "admission"
    REGISTRAR = "registrar"
    DEAN = "dean"
    QUESTION = "question"


@dataclass(frozen=True)
class IntentResult:
    intent: Intent
    entity: str
    confidence: float
    original_query: str = ""


PATTERN_CONFIDENCE = 0.8
QUESTION_CONFIDENCE = 0.6

QUESTION_WORDS = ("what", "who", "where", "when", "how")

# Evaluated top to bottom; the first row whose pattern matches decides the
# intent. Broad catch-alls ("(.+) office") sit last within their intent but
# still shadow every later intent.
INTENT_PATTERNS = tuple((intent, re.compile(pattern)) for intent, pattern in (
    (Intent.OFFICE_HOURS, r'(?:what are?|when are?|tell me about).*(office hours?|hours?|schedule).*(of|for)\s+(.+)'),
    (Intent.OFFICE_HOURS, r'(?:office hours?|hours?|schedule).*(of|for)\s+(.+)'),
    (Intent.OFFICE_HOURS, r'when (?:is|does|can i (?:find|see|meet))\s+(.+)\s*(?:available|in office|at office)?'),
    (Intent.OFFICE_HOURS, r'(.+)\s+(?:office hours?|hours?|schedule)'),

    (Intent.CONTACT_INFO, r'(?:what is?|give me|tell me).*(email|contact|phone).*(of|for)\s+(.+)'),
    (Intent.CONTACT_INFO, r'(?:email|contact|phone).*(of|for)\s+(.+)'),
    (Intent.CONTACT_INFO, r'how (?:can i|do i) (?:contact|reach|email)\s+(.+)'),
    (Intent.CONTACT_INFO, r'(.+)\s+(?:email|contact|phone)'),

    (Intent.OFFICE_LOCATION, r'(?:where is?|what is?).*(office|room|location).*(of|for)\s+(.+)'),
    (Intent.OFFICE_LOCATION, r'(?:office|room|location).*(of|for)\s+(.+)'),
    (Intent.OFFICE_LOCATION, r'where (?:can i find|is)\s+(.+)(?:\s+located|\s+office)?'),
    (Intent.OFFICE_LOCATION, r'(.+)\s+(?:office|room|location)'),

    (Intent.DEPARTMENT, r'(?:what|which)\s+(?:department|school|faculty).*(is|does)\s+(.+)\s+(?:in|work|belong|teach)'),
    (Intent.DEPARTMENT, r'(.+)\s+(?:department|school|faculty)'),
    (Intent.DEPARTMENT, r'(?:department|school|faculty).*(of|for)\s+(.+)'),

    (Intent.WHO_IS, r'who is\s+(.+)'),
    (Intent.WHO_IS, r'tell me about\s+(.+)'),
    (Intent.WHO_IS, r'(?:what|who)\s+(?:is|are)\s+(.+)'),

    (Intent.ADMISSION, r'(?:who is?|where is?|what is?).*(admission|admissions?|enrollment).*(office|department|contact)?'),
    (Intent.ADMISSION, r'(?:admission|admissions?|enrollment).*(office|department|contact|info|information)'),
    (Intent.ADMISSION, r'how (?:can i|do i).*(apply|enroll|admit|admission)'),

    (Intent.REGISTRAR, r'(?:who is?|where is?|what is?).*(registrar|registration|academic records?).*(office|department|contact)?'),
    (Intent.REGISTRAR, r'(?:registrar|registration|academic records?).*(office|department|contact|info)'),

    (Intent.DEAN, r'(?:who is?).*(dean|head).*(of|for)?\s*(.+)?'),
    (Intent.DEAN, r'(.+)\s+(?:dean|head)'),
))

_ENTITY_PUNCTUATION = re.compile(r'[?.,!]')
_LEADING_QUESTION = re.compile(r'^(what|who|where|when|how)\s+(is|are|can|do|does)\s*')


def question_words(user_tokens: set) -> dict:
    return {f"is_{word}_query": word in user_tokens for word in QUESTION_WORDS}


def _extract_entity(match: re.Match) -> str:
    groups = match.groups()
    if not groups:
        return ""
    entity = next((g for g in reversed(groups) if g), None) or groups[0] or ""
    return _ENTITY_PUNCTUATION.sub('', entity).strip()


def parse_intent(query) -> Optional[IntentResult]:
    """Map a free-text question to an (intent, entity) pair.

    Returns None when the query does not look like a question at all, in which
    case callers fall back to plain ranked search.
    """
    original = "" if query is None else str(query)
    normalized_query = original.lower().strip()
    if not normalized_query:
        return None

    for intent, pattern in INTENT_PATTERNS:
        match = pattern.search(normalized_query)
        if match:
            return IntentResult(
                intent=intent,
                entity=_extract_entity(match),
                confidence=PATTERN_CONFIDENCE,
                original_query=original,
            )

    detectors = question_words(word_tokens(normalized_query))
    if any(detectors.values()):
        return IntentResult(
            intent=Intent.QUESTION,
            entity=_LEADING_QUESTION.sub('', normalized_query),
            confidence=QUESTION_CONFIDENCE,
            original_query=original,
        )
    return None
