"""General parsing utilities for recipe and product extraction."""

import re
from decimal import Decimal, InvalidOperation
from typing import Callable, Iterable, List, Mapping, Optional, Sequence, TypeVar

from bs4 import BeautifulSoup

T = TypeVar("T")

Strategy = Callable[[], Sequence[T]]


def clean_text(text: str) -> str:
    """Normalize whitespace in text."""
    return re.sub(r"\s+", " ", text or "").strip()


def first_non_empty(strategies: Iterable[Strategy]) -> List[T]:
    """Run strategies in priority order and return the first non-empty result.

    Later strategies are never evaluated once one produces something, and
    results are never merged across strategies.
    """
    for strategy in strategies:
        result = strategy()
        if result:
            return list(result)
    return []


def select_texts(soup: BeautifulSoup, selector: str) -> List[str]:
    """Text content of every element matching ``selector``, in document order."""
    return [clean_text(el.get_text(" ", strip=True)) for el in soup.select(selector)]


def selector_ladder(soup: BeautifulSoup, selectors: Sequence[str]) -> List[Strategy]:
    """Build one strategy per selector, preserving the given priority."""

    def make(selector: str) -> Strategy:
        return lambda: select_texts(soup, selector)

    return [make(selector) for selector in selectors]


def _image_from_string(value: str) -> Optional[str]:
    return value.strip() or None


def _image_from_list(value: list) -> Optional[str]:
    if not value:
        return None
    return extract_image(value[0])


def _image_from_mapping(value: Mapping) -> Optional[str]:
    url = value.get("url")
    if not isinstance(url, str):
        return None
    return url.strip() or None


def extract_image(value) -> Optional[str]:
    """Extract an image URL from a schema.org image value.

    The value is absent, a URL string, a list (element 0 is used) or an
    ImageObject carrying ``url``.
    """
    if isinstance(value, str):
        return _image_from_string(value)
    if isinstance(value, list):
        return _image_from_list(value)
    if isinstance(value, Mapping):
        return _image_from_mapping(value)
    return None


def extract_instruction_text(instructions) -> List[str]:
    """Extract step text from a recipeInstructions value.

    Steps may be bare strings or step objects (``HowToStep`` or untagged)
    carrying ``text``. Anything else contributes nothing.
    """
    if isinstance(instructions, str):
        cleaned = clean_text(instructions)
        return [cleaned] if cleaned else []
    if not isinstance(instructions, list):
        return []

    steps: List[str] = []
    for entry in instructions:
        text = ""
        if isinstance(entry, str):
            text = entry
        elif isinstance(entry, Mapping) and isinstance(entry.get("text"), str):
            text = entry["text"]
        cleaned = clean_text(text)
        if cleaned:
            steps.append(cleaned)
    return steps


def extract_ingredient_lines(value) -> List[str]:
    """Normalize a recipeIngredient value to a list of non-empty strings."""
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    lines = []
    for item in value:
        if isinstance(item, str):
            cleaned = clean_text(item)
            if cleaned:
                lines.append(cleaned)
    return lines


def parse_price(text: Optional[str]) -> Optional[Decimal]:
    """Parse a displayed price such as ``"$4.99/lb"`` into a positive Decimal."""
    if not text:
        return None
    digits = re.sub(r"[^\d.]", "", text)
    match = re.match(r"\d*\.?\d+", digits)
    if not match:
        return None
    try:
        value = Decimal(match.group())
    except InvalidOperation:
        return None
    return value if value > 0 else None
