"""
String similarity scorers used by ranked search.

All scorers return a float in [0, 1]. ``levenshtein_ratio`` and
``jaro_winkler`` work on the strings as given; ``token_similarity`` normalizes
its inputs first and compares word by word, which holds up when middle names
are missing or words are reordered.
"""
from nltk.metrics.distance import edit_distance

from .nlp_utils import tokenize

# Winkler prefix bonus: scale per shared leading character, and the cap.
PREFIX_SCALE = 0.1
MAX_PREFIX = 4


def levenshtein_ratio(a: str, b: str) -> float:
    a = a or ""
    b = b or ""
    if not a:
        return 1.0 if not b else 0.0
    if not b:
        return 0.0
    max_len = max(len(a), len(b))
    return (max_len - edit_distance(a, b)) / max_len


def jaro_winkler(a: str, b: str) -> float:
    if not a or not b:
        return 0.0

    len_a, len_b = len(a), len(b)
    window = max(0, max(len_a, len_b) // 2 - 1)
    a_matched = [False] * len_a
    b_matched = [False] * len_b
    matches = 0

    for i, ch in enumerate(a):
        start = max(0, i - window)
        end = min(i + window + 1, len_b)
        for j in range(start, end):
            if b_matched[j] or b[j] != ch:
                continue
            a_matched[i] = True
            b_matched[j] = True
            matches += 1
            break

    if matches == 0:
        return 0.0

    transpositions = 0
    k = 0
    for i, ch in enumerate(a):
        if not a_matched[i]:
            continue
        while not b_matched[k]:
            k += 1
        if ch != b[k]:
            transpositions += 1
        k += 1
    transpositions /= 2

    jaro = (matches / len_a + matches / len_b + (matches - transpositions) / matches) / 3

    prefix = 0
    for i in range(min(MAX_PREFIX, len_a, len_b)):
        if a[i] != b[i]:
            break
        prefix += 1
    return jaro + prefix * PREFIX_SCALE * (1 - jaro)


def token_similarity(a, b) -> float:
    tokens_a = tokenize(a)
    tokens_b = tokenize(b)
    if not tokens_a or not tokens_b:
        return 0.0

    total = 0.0
    for token_a in tokens_a:
        total += max(jaro_winkler(token_a, token_b) for token_b in tokens_b)
    return total / len(tokens_a)


def name_similarity(a: str, b: str) -> float:
    # Fuzzy fallback used by the name cascade: the better of the two views.
    return max(token_similarity(a, b), levenshtein_ratio(a, b))
