"""Markup-based recipe extraction for pages without usable JSON-LD."""

import logging
from typing import List

from bs4 import BeautifulSoup

from recipe_cart.app.services.url_parsing.constants import (
    INGREDIENT_SELECTORS,
    INSTRUCTION_SELECTORS,
)
from recipe_cart.app.services.url_parsing.models import RecipeRecord
from recipe_cart.app.services.url_parsing.parsing_utils import (
    clean_text,
    first_non_empty,
    selector_ladder,
)

logger = logging.getLogger(__name__)


def find_title(soup: BeautifulSoup) -> str:
    title_tag = soup.find("h1")
    return clean_text(title_tag.get_text()) if title_tag else ""


def find_ingredient_items(soup: BeautifulSoup) -> List[str]:
    """Ingredient lines from the first selector in the ladder that matches."""
    return [item for item in first_non_empty(selector_ladder(soup, INGREDIENT_SELECTORS)) if item]


def find_instruction_items(soup: BeautifulSoup) -> List[str]:
    """Instruction lines from the first selector in the ladder that matches."""
    return [item for item in first_non_empty(selector_ladder(soup, INSTRUCTION_SELECTORS)) if item]


def extract_recipe_heuristic(
    soup: BeautifulSoup,
    have_name: bool = False,
    have_ingredients: bool = False,
    have_instructions: bool = False,
) -> RecipeRecord:
    """Fill only the fields the caller does not have yet."""
    record = RecipeRecord()
    if not have_name:
        record.name = find_title(soup)
    if not have_ingredients:
        record.ingredients = find_ingredient_items(soup)
    if not have_instructions:
        record.instructions = find_instruction_items(soup)
    logger.debug(
        "Markup fallback: name=%s, ingredients=%d, instructions=%d",
        bool(record.name),
        len(record.ingredients),
        len(record.instructions),
    )
    return record
