import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .config import DEFAULT_MAX_RESULTS
from .data_store import Snapshot
from .nlp_utils import normalize
from .records import Club, Person, ScoredMatch
from .similarity import levenshtein_ratio, name_similarity

MIN_QUERY_LENGTH = 2
SUGGESTION_THRESHOLD = 0.6
MAX_SUGGESTIONS = 3


# --------------------------
# --- Weight tables --------
# --------------------------
@dataclass(frozen=True)
class FieldWeight:
    attr: str
    tag: str
    exact: int
    contains: int


@dataclass(frozen=True)
class ScoreWeights:
    """Fixed score contributions for one collection.

    The name tiers are mutually exclusive; field weights add on top. The fuzzy
    ceiling stays below every exact/prefix tier so a fuzzy hit never outranks a
    literal one.
    """

    exact_name: int
    name_start: int
    tokens_prefix: int
    name_contains: int
    fuzzy_ceiling: int
    fuzzy_threshold: float
    fields: Tuple[FieldWeight, ...]


# Contains-only fields carry an exact weight equal to the contains weight,
# since an exact hit is also a containment hit.
PEOPLE_WEIGHTS = ScoreWeights(
    exact_name=350,
    name_start=220,
    tokens_prefix=200,
    name_contains=90,
    fuzzy_ceiling=80,
    fuzzy_threshold=0.70,
    fields=(
        FieldWeight("department", "department", exact=100, contains=60),
        FieldWeight("office", "office", exact=80, contains=30),
        FieldWeight("school", "school", exact=25, contains=25),
        FieldWeight("email", "email", exact=10, contains=10),
    ),
)

CLUB_WEIGHTS = ScoreWeights(
    exact_name=300,
    name_start=180,
    tokens_prefix=160,
    name_contains=80,
    fuzzy_ceiling=70,
    fuzzy_threshold=0.70,
    fields=(
        FieldWeight("category", "type", exact=80, contains=50),
        FieldWeight("description", "description", exact=30, contains=30),
    ),
)

COMMON_DEPARTMENT_ALIASES = {
    "computer": "Computer Science",
    "cs": "Computer Science",
    "it": "Information Technology",
    "eng": "Engineering",
    "bus": "Business",
    "admin": "Administration",
}

COMMON_CLUB_TERMS = {
    "tech": "Technology Club",
    "programming": "Programming Club",
    "coding": "Programming Club",
    "volunteer": "Volunteer team",
    "sports": "Sports Club",
    "art": "Art Club",
    "music": "Music Club",
    "drama": "Drama team",
    "debate": "Debate Club",
    "chess": "Chess Club",
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# --------------------------
# --- Scoring --------------
# --------------------------
def _score_name(norm_name: str, norm_query: str, query_tokens: List[str], weights: ScoreWeights):
    if not norm_name:
        return 0, None
    name_tokens = norm_name.split(' ')

    if norm_name == norm_query:
        return weights.exact_name, "exact_name"
    if norm_name.startswith(norm_query) or name_tokens[0].startswith(query_tokens[0]):
        return weights.name_start, "name_start"
    if len(query_tokens) <= len(name_tokens) and all(
        name_tokens[i].startswith(token) for i, token in enumerate(query_tokens)
    ):
        return weights.tokens_prefix, "tokens_prefix"
    if norm_query in norm_name:
        return weights.name_contains, "name_contains"

    combined = name_similarity(norm_name, norm_query)
    if combined > weights.fuzzy_threshold:
        return _round_half_up(weights.fuzzy_ceiling * combined), "fuzzy_name"
    return 0, None


def _prepare_query(query: str):
    search_term = (query or "").strip().lower()
    norm_query = normalize(search_term)
    return search_term, norm_query, norm_query.split(' ') if norm_query else []


def score_record(record, query: str, weights: ScoreWeights) -> Optional[ScoredMatch]:
    """Score one record against a query. Returns None when nothing matched."""
    return _score_prepared(record, _prepare_query(query), weights)


def _score_prepared(record, prepared, weights: ScoreWeights) -> Optional[ScoredMatch]:
    search_term, norm_query, query_tokens = prepared
    if not norm_query:
        return None

    key = record.canonical_key
    score, tag = _score_name(key, norm_query, query_tokens, weights)
    matched_fields = [tag] if tag else []

    for fw in weights.fields:
        value = (getattr(record, fw.attr, "") or "").strip().lower()
        if not value:
            continue
        if value == search_term:
            score += fw.exact
            matched_fields.append(f"exact_{fw.tag}")
        elif search_term in value:
            score += fw.contains
            matched_fields.append(fw.tag)

    if score <= 0:
        return None
    return ScoredMatch(record=record, score=score, matched_fields=matched_fields, key=key)


def rank_matches(records: Iterable, query: str, weights: ScoreWeights,
                 limit: Optional[int] = None) -> List[ScoredMatch]:
    if not query or len(query.strip()) < MIN_QUERY_LENGTH:
        return []
    prepared = _prepare_query(query)
    if not prepared[1]:
        return []

    best_by_key = {}
    for record in records:
        match = _score_prepared(record, prepared, weights)
        if match is None:
            continue
        previous = best_by_key.get(match.key)
        if previous is None or match.score > previous.score:
            best_by_key[match.key] = match

    # sorted() is stable: equal scores keep discovery order
    ranked = sorted(best_by_key.values(), key=lambda m: m.score, reverse=True)
    if limit is not None:
        ranked = ranked[:limit]
    return ranked


def rank(records: Iterable, query: str, weights: ScoreWeights, limit: Optional[int] = None) -> list:
    return [m.record for m in rank_matches(records, query, weights, limit)]


# --------------------------
# --- Collection searches --
# --------------------------
def search_people(snapshot: Snapshot, query: str, limit: Optional[int] = DEFAULT_MAX_RESULTS) -> List[Person]:
    return rank(snapshot.people, query, PEOPLE_WEIGHTS, limit)


def search_clubs(snapshot: Snapshot, query: str, limit: Optional[int] = DEFAULT_MAX_RESULTS) -> List[Club]:
    return rank(snapshot.clubs, query, CLUB_WEIGHTS, limit)


def search_by_department(snapshot: Snapshot, department: str) -> List[Person]:
    needle = (department or "").lower()
    return [p for p in snapshot.people if p.department and needle in p.department.lower()]


def get_all_clubs(snapshot: Snapshot) -> List[Club]:
    return sorted(snapshot.clubs, key=lambda c: c.name)


# --------------------------
# --- Suggestions ----------
# --------------------------
def _suggest(query: str, candidates: Iterable[str], aliases: dict) -> List[str]:
    lowered = (query or "").lower()
    suggestions = []
    for candidate in candidates:
        if candidate and levenshtein_ratio(candidate.lower(), lowered) > SUGGESTION_THRESHOLD:
            suggestions.append(candidate)
    for term, correction in aliases.items():
        if lowered and term in lowered:
            suggestions.append(correction)
    return list(dict.fromkeys(suggestions))[:MAX_SUGGESTIONS]


def suggest_people(snapshot: Snapshot, query: str) -> List[str]:
    candidates = list(snapshot.departments) + [p.name for p in snapshot.people]
    return _suggest(query, candidates, COMMON_DEPARTMENT_ALIASES)


def suggest_clubs(snapshot: Snapshot, query: str) -> List[str]:
    types = list(dict.fromkeys(c.category for c in snapshot.clubs))
    candidates = [c.name for c in snapshot.clubs] + types
    return _suggest(query, candidates, COMMON_CLUB_TERMS)
