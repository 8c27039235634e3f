"""Cleanup of scraped ingredient and instruction lines."""

import re
from typing import Iterable, List, Optional

from recipe_cart.app.services.url_parsing.parsing_utils import clean_text

MAX_INGREDIENTS = 12
MIN_INGREDIENT_LENGTH = 3
MIN_INSTRUCTION_LENGTH = 6

# Step numbers may carry a trailing "." or ")" ("1.", "2)").
_LEADING_NOISE_RE = re.compile(r"^(?:[\d\s\-•]|(?<=\d)[.)])+")


def strip_leading_noise(line: str) -> str:
    """Remove a leading run of digits, whitespace, hyphens and bullets."""
    return _LEADING_NOISE_RE.sub("", clean_text(line)).strip()


def clean_ingredient(line: str) -> str:
    """Clean one ingredient line; returns "" when the line should be dropped."""
    cleaned = strip_leading_noise(line)
    return cleaned if len(cleaned) >= MIN_INGREDIENT_LENGTH else ""


def clean_instruction(line: str) -> str:
    """Clean one instruction line; returns "" when the line should be dropped."""
    cleaned = strip_leading_noise(line)
    return cleaned if len(cleaned) >= MIN_INSTRUCTION_LENGTH else ""


def clean_ingredients(lines: Iterable[str], limit: Optional[int] = MAX_INGREDIENTS) -> List[str]:
    cleaned = [c for c in (clean_ingredient(line) for line in lines if line) if c]
    return cleaned[:limit] if limit is not None else cleaned


def clean_instructions(lines: Iterable[str]) -> List[str]:
    return [c for c in (clean_instruction(line) for line in lines if line) if c]
