"""Derive retailer search queries from free-text ingredient lines."""

import re

from recipe_cart.app.services.url_parsing.constants import FALLBACK_QUERY, STOPWORDS
from recipe_cart.app.services.url_parsing.models import SearchTerm

# Applied in order to the lowercased line; later patterns assume the earlier
# ones already ran.
_NORMALIZATION_STEPS = (
    (re.compile(r"^\s*[\d\s./\-½⅓⅔¼¾⅛]+"), " "),  # leading quantity
    (re.compile(r"\d+\s*/\s*\d+"), " "),  # fractions
    (re.compile(r"\([^)]*\)"), " "),  # parenthetical asides
    (re.compile(r"\*+"), ""),
    (re.compile(r"[)\]}]"), " "),
    (re.compile(r",.*$"), ""),  # trailing descriptors
)

# Unicode letters count as letters; digits and underscores do not.
_NON_LETTERS_RE = re.compile(r"[\W\d_]")
_EDGE_PUNCT_RE = re.compile(r"^[\W\d_]+|[\W\d_]+$")
_TOKEN_DISALLOWED_RE = re.compile(r"[^\w'\-]|[\d_]")


def _normalize_line(line: str) -> str:
    text = (line or "").lower()
    for pattern, replacement in _NORMALIZATION_STEPS:
        text = pattern.sub(replacement, text)
    return text


def _keep_word(word: str) -> str:
    """The searchable form of ``word``, or "" when it should be dropped."""
    if word.isdigit():
        return ""
    letters = _NON_LETTERS_RE.sub("", word)
    if len(letters) <= 2 or letters in STOPWORDS:
        return ""
    return _EDGE_PUNCT_RE.sub("", _TOKEN_DISALLOWED_RE.sub("", word))


def build_query(ingredient_line: str) -> str:
    """Turn an ingredient line into a retailer search query.

    Never fails and never returns an empty string.

    >>> build_query("2 cups chopped fresh garlic, minced")
    'garlic'
    """
    words = (_keep_word(word) for word in _normalize_line(ingredient_line).split())
    return " ".join(word for word in words if word) or FALLBACK_QUERY


def build_search_term(ingredient_line: str) -> SearchTerm:
    query = build_query(ingredient_line)
    return SearchTerm(
        raw_line=ingredient_line,
        query=query,
        significant_words=frozenset(word for word in query.split() if len(word) > 2),
    )
