import re
import unicodedata

from nltk.tokenize import RegexpTokenizer, WhitespaceTokenizer

regexp_word_tokenizer = RegexpTokenizer(r'\w+')
whitespace_tokenizer = WhitespaceTokenizer()

_WHITESPACE_RUN = re.compile(r'\s+')


# --------------------------
# --- Normalization -------
# --------------------------
def _strip_marks(text: str) -> str:
    decomposed = unicodedata.normalize('NFD', text)
    return ''.join(ch for ch in decomposed if unicodedata.category(ch) != 'Mn')


def _punctuation_to_space(text: str) -> str:
    return ''.join(' ' if unicodedata.category(ch).startswith('P') else ch for ch in text)


def normalize(text) -> str:
    """Fold text to its comparable form: lowercase, no diacritics, no punctuation,
    single spaces. ``None`` becomes an empty string."""
    if text is None:
        return ""
    text = str(text).lower().strip()
    if not text:
        return ""
    text = _strip_marks(text)
    text = _punctuation_to_space(text)
    return _WHITESPACE_RUN.sub(' ', text).strip()


# --------------------------
# --- Tokenization --------
# --------------------------
def tokenize(text) -> list:
    normalized = normalize(text)
    if not normalized:
        return []
    return whitespace_tokenizer.tokenize(normalized)


def word_tokens(text) -> set:
    if not text:
        return set()
    return set(regexp_word_tokenizer.tokenize(str(text).lower()))
