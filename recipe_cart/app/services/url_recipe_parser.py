"""Fetch a recipe page and assemble a cleaned recipe from it."""

import logging

from recipe_cart.app.core.config import get_settings
from recipe_cart.app.services.url_parsing import (
    RecipeRecord,
    clean_ingredients,
    clean_instructions,
    extract_recipe_from_schema_org,
    extract_recipe_heuristic,
    fetch_html,
    parse_document,
)

logger = logging.getLogger(__name__)


class ExtractionError(Exception):
    """Raised when a page yields no usable ingredient list."""


def assemble_recipe(html: str) -> RecipeRecord:
    """Build a cleaned recipe from a page, falling back field by field.

    JSON-LD is consulted first; any of name, ingredients or instructions it
    leaves empty is then looked up with markup selectors. The image never
    falls back.
    """
    settings = get_settings()
    soup = parse_document(html)

    record = extract_recipe_from_schema_org(soup)
    if not (record.name and record.ingredients and record.instructions):
        fallback = extract_recipe_heuristic(
            soup,
            have_name=bool(record.name),
            have_ingredients=bool(record.ingredients),
            have_instructions=bool(record.instructions),
        )
        record.name = record.name or fallback.name
        record.ingredients = record.ingredients or fallback.ingredients
        record.instructions = record.instructions or fallback.instructions

    record.ingredients = clean_ingredients(record.ingredients, limit=settings.max_ingredients)
    record.instructions = clean_instructions(record.instructions)

    if not record.ingredients:
        raise ExtractionError("No ingredients found; page does not look like a recipe")
    return record


async def extract_recipe(url: str) -> RecipeRecord:
    """Fetch ``url`` and assemble its recipe. FetchError propagates unchanged."""
    html = await fetch_html(url)
    record = assemble_recipe(html)
    logger.info(
        "Found: %s, %d ingredients, %d instructions",
        record.name,
        len(record.ingredients),
        len(record.instructions),
    )
    return record
